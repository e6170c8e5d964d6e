"""
Audit log endpoints for API v1.

Any authenticated user may read the log of their own organization.
Entries are returned newest first; there is no pagination.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from nexus_hr.app.core.security import get_current_user, get_store
from nexus_hr.app.core.storage import KeyValueStore
from nexus_hr.app.schemas.audit import AuditAction, AuditLogEntry
from nexus_hr.app.schemas.user import User
from nexus_hr.app.services.audit_service import AuditService

router = APIRouter()


@router.get("/logs", response_model=List[AuditLogEntry])
async def list_audit_logs(
    action: Optional[AuditAction] = Query(None, description="Filter by action"),
    current_user: User = Depends(get_current_user),
    store: KeyValueStore = Depends(get_store),
) -> List[AuditLogEntry]:
    return await AuditService(store).list(current_user.org_id, action=action)
