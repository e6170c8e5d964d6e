"""Identifier and timestamp helpers shared by the services."""

import uuid
from datetime import datetime, timezone


def generate_id() -> str:
    """Return a new opaque identifier."""
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    """Current UTC time as an ISO‑8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
