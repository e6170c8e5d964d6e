"""Business logic for employees."""

from typing import List, Optional

from nexus_hr.app.core.storage import Collection
from nexus_hr.app.schemas.audit import AuditAction
from nexus_hr.app.schemas.employee import Employee
from nexus_hr.app.services.entity_service import EntityService
from nexus_hr.app.services.membership_service import remove_for_employee


def matches_search(employee: Employee, term: str) -> bool:
    """Case-insensitive substring match on name or job title."""
    needle = term.lower()
    return needle in employee.name.lower() or needle in employee.job_title.lower()


class EmployeeService(EntityService[Employee]):
    """CRUD over the ``employees`` collection."""

    collection = Collection.EMPLOYEES
    model = Employee
    kind = "Employee"
    create_action = AuditAction.CREATE_EMPLOYEE
    update_action = AuditAction.UPDATE_EMPLOYEE
    delete_action = AuditAction.DELETE_EMPLOYEE
    detail_verbs = ("Added", "Updated", "Deleted")
    cascade = staticmethod(remove_for_employee)

    async def list(self, org_id: str, search: Optional[str] = None) -> List[Employee]:
        employees = await super().list(org_id)
        if search:
            employees = [e for e in employees if matches_search(e, search)]
        return employees
