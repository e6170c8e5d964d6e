"""
Many-to-many Employee<->Team association.

Memberships live in the ``team_members`` collection as bare
``{employeeId, teamId}`` pairs.  The only mutation is ``assign``, which
replaces the complete team set of one employee.  The module level
helpers are pure functions over a membership list and are shared with
the cascade deletes of the entity services.
"""

import logging
from typing import Iterable, List, Sequence

from nexus_hr.app.core.storage import Collection, KeyValueStore, Record
from nexus_hr.app.schemas.audit import AuditAction
from nexus_hr.app.schemas.team import Membership, Team
from nexus_hr.app.schemas.user import User
from nexus_hr.app.services.audit_service import AuditService


logger = logging.getLogger(__name__)


def remove_for_employee(memberships: Iterable[Record], employee_id: str) -> List[Record]:
    return [m for m in memberships if m.get("employeeId") != employee_id]


def remove_for_team(memberships: Iterable[Record], team_id: str) -> List[Record]:
    return [m for m in memberships if m.get("teamId") != team_id]


def team_ids_for(memberships: Iterable[Record], employee_id: str) -> List[str]:
    return [m["teamId"] for m in memberships if m.get("employeeId") == employee_id]


def employee_ids_for(memberships: Iterable[Record], team_id: str) -> List[str]:
    return [m["employeeId"] for m in memberships if m.get("teamId") == team_id]


class MembershipService:
    """Wholesale replacement of an employee's team memberships."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.audit = AuditService(store)

    async def assign(self, actor: User, employee_id: str, team_ids: Sequence[str]) -> List[Team]:
        """Make ``team_ids`` the complete team set of ``employee_id``.

        Existing memberships of the employee are dropped first, then one
        membership is inserted per unique team id that resolves to a team
        of the actor's organization.  Unresolvable ids are ignored.  If
        the employee does not belong to the actor's organization, no
        membership is touched and only the audit entry is written.

        Returns the teams the employee belongs to afterwards.  Writes one
        ``ASSIGN_TEAMS`` audit entry listing their names.
        """
        employees = await self.store.load(Collection.EMPLOYEES)
        teams = await self.store.load(Collection.TEAMS)
        memberships = await self.store.load(Collection.TEAM_MEMBERS)

        employee = next(
            (e for e in employees if e.get("id") == employee_id and e.get("orgId") == actor.org_id),
            None,
        )
        org_teams = {t["id"]: t for t in teams if t.get("orgId") == actor.org_id}

        resolved: List[Team] = []
        if employee is None:
            logger.warning("Assignment for employee %s outside org %s ignored", employee_id, actor.org_id)
        else:
            seen = set()
            for team_id in team_ids:
                if team_id in seen or team_id not in org_teams:
                    continue
                seen.add(team_id)
                resolved.append(Team.model_validate(org_teams[team_id]))
            dropped = len(set(team_ids)) - len(resolved)
            if dropped:
                logger.debug("Dropped %d unresolvable team ids for employee %s", dropped, employee_id)

            memberships = remove_for_employee(memberships, employee_id)
            memberships.extend(
                Membership(employee_id=employee_id, team_id=team.id).to_record() for team in resolved
            )
            await self.store.save(Collection.TEAM_MEMBERS, memberships)

        label = employee["name"] if employee else employee_id
        names = ", ".join(team.name for team in resolved)
        await self.audit.append(
            actor.org_id,
            actor.id,
            AuditAction.ASSIGN_TEAMS,
            f"Updated assignments for employee {label}. Now in: [{names}]",
        )
        return resolved

