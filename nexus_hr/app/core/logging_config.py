"""
Logging setup for NexusHR.

Everything the data layer logs goes through loggers below the
``nexus_hr`` package logger (``nexus_hr.app.services.auth_service`` and
so on), so that is the logger configured here; the root logger and the
loggers of uvicorn or other libraries are left alone.  Level and log
file come from ``Settings``.  ``DEBUG=true`` forces the ``DEBUG`` level,
which also shows the per-collection store traffic.
"""

import logging
from pathlib import Path

from .config import Settings, settings


PACKAGE_LOGGER = "nexus_hr"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(config: Settings) -> int:
    """Numeric level for ``config``; unknown names fall back to ``INFO``."""
    if config.debug:
        return logging.DEBUG
    level = logging.getLevelName(config.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: Settings = settings) -> logging.Logger:
    """Configure the ``nexus_hr`` logger from ``config`` and return it.

    The level is applied on every call.  Handlers (console, plus a file
    handler when ``config.log_file`` is set) are attached only once, so
    repeated ``create_app`` calls do not duplicate output.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(config))
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file:
        log_path = Path(config.log_file).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(
        "Logging configured for %s %s (storage backend: %s)",
        config.project_name,
        config.api_version,
        config.storage_backend,
    )
    return logger
