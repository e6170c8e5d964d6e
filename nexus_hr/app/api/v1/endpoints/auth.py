"""
Authentication endpoints for API v1.

Registration and login return the public user together with a session
token.  Clients send the token back as ``Authorization: Bearer <token>``
and keep it across reloads themselves.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from nexus_hr.app.core.exceptions import DuplicateUserError, InvalidCredentialsError
from nexus_hr.app.core.security import get_current_user, get_store
from nexus_hr.app.core.storage import KeyValueStore
from nexus_hr.app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, SessionInfo, User
from nexus_hr.app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    store: KeyValueStore = Depends(get_store),
) -> AuthResponse:
    """Create an organization and its first user.

    Returns 409 if the email is already registered.
    """
    try:
        return await AuthService(store).register(data.name, data.email, data.password, data.org_name)
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    store: KeyValueStore = Depends(get_store),
) -> AuthResponse:
    """Authenticate with email and password."""
    try:
        return await AuthService(store).login(data.email, data.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> None:
    await AuthService(store).logout(current_user.id, current_user.org_id)
    return None


@router.get("/me", response_model=SessionInfo)
async def me(
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> SessionInfo:
    """Return the session's user and organization.

    Returns 404 if the organization record is missing.
    """
    organization = await AuthService(store).get_organization(current_user.org_id)
    if organization is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    return SessionInfo(user=current_user, organization=organization)
