"""
Pydantic models and action taxonomy for the audit log.

``user_name`` is copied from the acting user when the entry is written
and is never refreshed afterwards.
"""

import enum

from .base import CamelModel


class AuditAction(str, enum.Enum):
    """Closed set of actions recorded in the audit log."""

    REGISTER = "REGISTER"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    CREATE_EMPLOYEE = "CREATE_EMPLOYEE"
    UPDATE_EMPLOYEE = "UPDATE_EMPLOYEE"
    DELETE_EMPLOYEE = "DELETE_EMPLOYEE"
    CREATE_TEAM = "CREATE_TEAM"
    UPDATE_TEAM = "UPDATE_TEAM"
    DELETE_TEAM = "DELETE_TEAM"
    ASSIGN_TEAMS = "ASSIGN_TEAMS"

    @property
    def category(self) -> str:
        """Coarse grouping used when presenting the log: auth, create, update or delete."""
        if self.value.startswith("DELETE"):
            return "delete"
        if self.value.startswith("CREATE"):
            return "create"
        if self.value.startswith(("UPDATE", "ASSIGN")):
            return "update"
        return "auth"


class AuditLogEntry(CamelModel):
    id: str
    org_id: str
    user_id: str
    user_name: str
    action: AuditAction
    details: str
    timestamp: str

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
