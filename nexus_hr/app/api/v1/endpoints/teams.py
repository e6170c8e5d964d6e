"""Team endpoints for API v1."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from nexus_hr.app.core.exceptions import NotFoundError
from nexus_hr.app.core.security import get_current_user, get_store
from nexus_hr.app.core.storage import KeyValueStore
from nexus_hr.app.schemas.team import Team, TeamCreate, TeamUpdate
from nexus_hr.app.schemas.user import User
from nexus_hr.app.schemas.views import TeamWithMembers
from nexus_hr.app.services.query_service import QueryService
from nexus_hr.app.services.team_service import TeamService

router = APIRouter()


@router.get("/", response_model=List[TeamWithMembers])
async def list_teams(
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> List[TeamWithMembers]:
    return await QueryService(store).teams_with_members(current_user.org_id)


@router.post("/", response_model=Team, status_code=status.HTTP_201_CREATED)
async def create_team(
    data: TeamCreate,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> Team:
    return await TeamService(store).create(current_user, data)


@router.get("/{team_id}", response_model=Team)
async def get_team(
    team_id: str,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> Team:
    try:
        return await TeamService(store).get(current_user.org_id, team_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.put("/{team_id}", response_model=Team)
async def update_team(
    team_id: str,
    updates: TeamUpdate,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> Team:
    update_dict = updates.model_dump(exclude_unset=True, exclude_none=True)
    try:
        return await TeamService(store).update(current_user, team_id, update_dict)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(
    team_id: str,
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> None:
    await TeamService(store).delete(current_user, team_id)
    return None
