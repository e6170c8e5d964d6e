"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the application and
the test-suite run without any environment at all (in-memory storage,
no simulated latency).
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "NexusHR")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Key used to sign session tokens.  Tokens issued with one key are
    # rejected once the key changes.
    secret_key: str = os.getenv("SECRET_KEY", "change_me")

    # Which key-value backend to use: ``memory``, ``json`` or ``sqlite``.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")

    # Directory holding one JSON file per collection for the ``json``
    # backend.  Relative paths are resolved against the working directory.
    storage_dir: str = os.getenv("STORAGE_DIR", "nexushr_data")

    # Path of the SQLite database file for the ``sqlite`` backend.
    database_url: str = os.getenv("DATABASE_URL", "nexushr.db")

    # Prefix applied to every physical collection key.
    storage_key_prefix: str = os.getenv("STORAGE_KEY_PREFIX", "nexushr_")

    # Artificial delay applied before every collection read, emulating a
    # remote API.  Zero disables it.
    simulated_latency_ms: int = int(os.getenv("SIMULATED_LATENCY_MS", "0"))

    # Number of audit entries shown on the dashboard.
    dashboard_recent_logs: int = int(os.getenv("DASHBOARD_RECENT_LOGS", "5"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
