"""
Employee endpoints for API v1.

Listing returns each employee joined with its teams.  All routes are
scoped to the organization of the authenticated user.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from nexus_hr.app.core.exceptions import NotFoundError
from nexus_hr.app.core.security import get_current_user, get_store
from nexus_hr.app.core.storage import KeyValueStore
from nexus_hr.app.schemas.employee import Employee, EmployeeCreate, EmployeeUpdate, TeamAssignment
from nexus_hr.app.schemas.team import Team
from nexus_hr.app.schemas.user import User
from nexus_hr.app.schemas.views import EmployeeWithTeams
from nexus_hr.app.services.employee_service import EmployeeService
from nexus_hr.app.services.membership_service import MembershipService
from nexus_hr.app.services.query_service import QueryService

router = APIRouter()


@router.get("/", response_model=List[EmployeeWithTeams])
async def list_employees(
    search: Optional[str] = Query(None, description="Filter by name or job title (case-insensitive)"),
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> List[EmployeeWithTeams]:
    return await QueryService(store).employees_with_teams(current_user.org_id, search=search)


@router.post("/", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    data: EmployeeCreate,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> Employee:
    return await EmployeeService(store).create(current_user, data)


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> Employee:
    try:
        return await EmployeeService(store).get(current_user.org_id, employee_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.put("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: str,
    updates: EmployeeUpdate,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> Employee:
    """Update an existing employee.

    Partial updates are supported; any unspecified fields remain unchanged.
    """
    update_dict = updates.model_dump(exclude_unset=True, exclude_none=True)
    try:
        return await EmployeeService(store).update(current_user, employee_id, update_dict)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> None:
    """Delete an employee and its team memberships.

    Deleting an unknown id succeeds without changing anything.
    """
    await EmployeeService(store).delete(current_user, employee_id)
    return None


@router.put("/{employee_id}/teams", response_model=List[Team])
async def assign_teams(
    employee_id: str,
    assignment: TeamAssignment,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> List[Team]:
    """Replace the employee's teams with exactly ``teamIds``."""
    return await MembershipService(store).assign(current_user, employee_id, assignment.team_ids)
