"""Read-only aggregate returned by the dashboard query."""

from typing import List

from .audit import AuditLogEntry
from .base import CamelModel


class TeamMemberCount(CamelModel):
    team_id: str
    name: str
    count: int


class DashboardSummary(CamelModel):
    employee_count: int
    team_count: int
    per_team_member_counts: List[TeamMemberCount]
    recent_log_entries: List[AuditLogEntry]
