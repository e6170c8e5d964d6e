"""
Audit service for recording and querying actions.

Every mutating operation of the other services appends exactly one
entry here.  Entries are inserted at the head of the ``logs``
collection so the stored order is already newest-first, and are never
changed or removed afterwards.  The acting user's display name is
copied into the entry at write time; renaming or deleting the user
later does not touch existing entries.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from nexus_hr.app.core.storage import Collection, KeyValueStore
from nexus_hr.app.core.utils import generate_id, utc_now_iso
from nexus_hr.app.schemas.audit import AuditAction, AuditLogEntry


logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Unknown"


class AuditService:
    """Service class for writing and retrieving audit logs."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def append(
        self,
        org_id: str,
        user_id: str,
        action: Union[AuditAction, str],
        details: str,
    ) -> AuditLogEntry:
        """Insert a new audit record at the head of the log.

        Parameters
        ----------
        org_id : str
            Organization the action happened in.
        user_id : str
            ID of the user performing the action.  Resolved to a display
            name now; ``"Unknown"`` if the user cannot be found.
        action : AuditAction
            One of the closed set of actions.  Strings are accepted and
            validated against the enum.
        details : str
            Human readable description of the action.
        """
        action = AuditAction(action)
        users = await self.store.load(Collection.USERS)
        user = next((u for u in users if u.get("id") == user_id), None)
        entry = AuditLogEntry(
            id=generate_id(),
            org_id=org_id,
            user_id=user_id,
            user_name=user.get("name") if user else UNKNOWN_USER_NAME,
            action=action,
            details=details,
            timestamp=utc_now_iso(),
        )
        logs = await self.store.load(Collection.LOGS)
        logs.insert(0, entry.to_record())
        await self.store.save(Collection.LOGS, logs)
        logger.info("Audit %s in org %s by %s: %s", action.value, org_id, entry.user_name, details)
        return entry

    async def list(
        self,
        org_id: str,
        action: Optional[Union[AuditAction, str]] = None,
    ) -> List[AuditLogEntry]:
        """Return the organization's entries, newest first.

        ``action`` narrows the result to one kind of action.
        """
        wanted = AuditAction(action).value if action else None
        logs = await self.store.load(Collection.LOGS)
        return [
            AuditLogEntry.model_validate(row)
            for row in logs
            if row.get("orgId") == org_id and (wanted is None or row.get("action") == wanted)
        ]
