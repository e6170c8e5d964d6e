"""
Typed failures raised by the service layer.

Services raise these; the HTTP endpoints translate them into
``HTTPException`` responses.  Every failure is local to one call and
can be retried with corrected input.
"""


class NexusHRError(Exception):
    """Base class for all domain errors."""


class DuplicateUserError(NexusHRError):
    """Registration attempted with an email that is already taken."""

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists")
        self.email = email


class InvalidCredentialsError(NexusHRError):
    """No user matches the supplied email and password."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class NotFoundError(NexusHRError, ValueError):
    """An update targeted a record that does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id
