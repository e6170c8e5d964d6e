"""Business logic for teams."""

from nexus_hr.app.core.storage import Collection
from nexus_hr.app.schemas.audit import AuditAction
from nexus_hr.app.schemas.team import Team
from nexus_hr.app.services.entity_service import EntityService
from nexus_hr.app.services.membership_service import remove_for_team


class TeamService(EntityService[Team]):
    """CRUD over the ``teams`` collection."""

    collection = Collection.TEAMS
    model = Team
    kind = "Team"
    create_action = AuditAction.CREATE_TEAM
    update_action = AuditAction.UPDATE_TEAM
    delete_action = AuditAction.DELETE_TEAM
    detail_verbs = ("Created", "Updated", "Deleted")
    cascade = staticmethod(remove_for_team)
