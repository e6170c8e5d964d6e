"""Dashboard endpoint for API v1."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from nexus_hr.app.core.security import get_current_user, get_store
from nexus_hr.app.core.storage import KeyValueStore
from nexus_hr.app.schemas.dashboard import DashboardSummary
from nexus_hr.app.schemas.user import User
from nexus_hr.app.services.query_service import QueryService

router = APIRouter()


@router.get("/", response_model=DashboardSummary)
async def get_dashboard(
    recent: Optional[int] = Query(None, ge=0, le=100, description="Number of recent audit entries"),
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> DashboardSummary:
    """Employee and team counts, members per team and recent activity."""
    return await QueryService(store).dashboard_summary(current_user.org_id, recent_limit=recent)
