"""
Read-side joins over employees, teams and memberships.

All queries are read-only and scoped to one organization.  Memberships
whose employee or team cannot be found (for example after a racing
delete) are skipped, never reported as errors.
"""

import logging
from typing import Optional, List

from nexus_hr.app.core.config import settings
from nexus_hr.app.core.storage import Collection, KeyValueStore
from nexus_hr.app.schemas.dashboard import DashboardSummary, TeamMemberCount
from nexus_hr.app.schemas.employee import Employee
from nexus_hr.app.schemas.team import Team
from nexus_hr.app.schemas.views import EmployeeWithTeams, TeamWithMembers
from nexus_hr.app.services.audit_service import AuditService
from nexus_hr.app.services.employee_service import matches_search
from nexus_hr.app.services.membership_service import employee_ids_for, team_ids_for


logger = logging.getLogger(__name__)


class QueryService:
    """Joined views for listing pages and the dashboard."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.audit = AuditService(store)

    async def employees_with_teams(self, org_id: str, search: Optional[str] = None) -> List[EmployeeWithTeams]:
        """Every employee of the organization with the teams it belongs to.

        Teams are listed in team storage order.  ``search`` keeps only
        employees whose name or job title contains the term.
        """
        employees = await self.store.load(Collection.EMPLOYEES)
        teams = await self.store.load(Collection.TEAMS)
        memberships = await self.store.load(Collection.TEAM_MEMBERS)

        result = []
        for row in employees:
            if row.get("orgId") != org_id:
                continue
            employee = Employee.model_validate(row)
            if search and not matches_search(employee, search):
                continue
            wanted = set(team_ids_for(memberships, employee.id))
            joined = [Team.model_validate(t) for t in teams if t.get("id") in wanted]
            result.append(EmployeeWithTeams(**employee.model_dump(), teams=joined))
        return result

    async def teams_with_members(self, org_id: str) -> List[TeamWithMembers]:
        """Every team of the organization with its member employees."""
        teams = await self.store.load(Collection.TEAMS)
        employees = await self.store.load(Collection.EMPLOYEES)
        memberships = await self.store.load(Collection.TEAM_MEMBERS)

        result = []
        for row in teams:
            if row.get("orgId") != org_id:
                continue
            team = Team.model_validate(row)
            wanted = set(employee_ids_for(memberships, team.id))
            joined = [Employee.model_validate(e) for e in employees if e.get("id") in wanted]
            result.append(TeamWithMembers(**team.model_dump(), members=joined))
        return result

    async def dashboard_summary(self, org_id: str, recent_limit: Optional[int] = None) -> DashboardSummary:
        """Counts, members per team and the most recent audit entries."""
        limit = settings.dashboard_recent_logs if recent_limit is None else recent_limit
        employees = await self.employees_with_teams(org_id)
        teams = await self.teams_with_members(org_id)
        logs = await self.audit.list(org_id)
        logger.debug("Dashboard for org %s: %d employees, %d teams", org_id, len(employees), len(teams))
        return DashboardSummary(
            employee_count=len(employees),
            team_count=len(teams),
            per_team_member_counts=[
                TeamMemberCount(team_id=t.id, name=t.name, count=len(t.members)) for t in teams
            ],
            recent_log_entries=logs[:max(limit, 0)],
        )
