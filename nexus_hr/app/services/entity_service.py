"""
Organization-scoped CRUD shared by the employee and team services.

Subclasses name their collection, record model, audit actions and the
membership cascade to run on delete.  Records of other organizations
are invisible to every operation here: ``update`` raises ``NotFoundError``
for them and ``delete`` treats them as already gone.
"""

import logging
from typing import Callable, ClassVar, Dict, Generic, Iterable, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from nexus_hr.app.core.exceptions import NotFoundError
from nexus_hr.app.core.storage import Collection, KeyValueStore, Record
from nexus_hr.app.core.utils import generate_id, utc_now_iso
from nexus_hr.app.schemas.audit import AuditAction
from nexus_hr.app.schemas.base import CamelModel
from nexus_hr.app.schemas.user import User
from nexus_hr.app.services.audit_service import AuditService


logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=CamelModel)

# Fields set at creation that an update may never overwrite.
IMMUTABLE_FIELDS = frozenset({"id", "orgId", "createdAt"})

UNKNOWN_NAME = "unknown"


class EntityService(Generic[EntityT]):
    """Base class for the employee and team repositories."""

    collection: ClassVar[Collection]
    model: ClassVar[Type[CamelModel]]
    kind: ClassVar[str]
    create_action: ClassVar[AuditAction]
    update_action: ClassVar[AuditAction]
    delete_action: ClassVar[AuditAction]
    # (verb used in audit details for create, update, delete)
    detail_verbs: ClassVar[Tuple[str, str, str]]
    # Removes the memberships referencing a deleted id.
    cascade: ClassVar[Callable[[Iterable[Record], str], List[Record]]]

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.audit = AuditService(store)

    async def list(self, org_id: str) -> List[EntityT]:
        """Return the organization's records in insertion order."""
        rows = await self.store.load(self.collection)
        return [self.model.model_validate(row) for row in rows if row.get("orgId") == org_id]

    async def get(self, org_id: str, record_id: str) -> EntityT:
        rows = await self.store.load(self.collection)
        _, row = self._find(rows, org_id, record_id)
        if row is None:
            raise NotFoundError(self.kind, record_id)
        return self.model.model_validate(row)

    async def create(self, actor: User, data: BaseModel) -> EntityT:
        """Append a new record owned by the actor's organization."""
        rows = await self.store.load(self.collection)
        entity = self.model(
            id=generate_id(),
            org_id=actor.org_id,
            created_at=utc_now_iso(),
            **data.model_dump(),
        )
        rows.append(entity.to_record())
        await self.store.save(self.collection, rows)
        await self.audit.append(
            actor.org_id, actor.id, self.create_action, f"{self.detail_verbs[0]} {self.kind.lower()}: {entity.name}"
        )
        logger.info("Created %s %s in org %s", self.kind.lower(), entity.id, actor.org_id)
        return entity

    async def update(self, actor: User, record_id: str, partial: Dict[str, object]) -> EntityT:
        """Merge ``partial`` onto an existing record.

        ``partial`` uses attribute or alias names; keys that are absent
        leave the stored value untouched.  Raises ``NotFoundError`` if the
        record does not exist in the actor's organization.
        """
        rows = await self.store.load(self.collection)
        index, row = self._find(rows, actor.org_id, record_id)
        if row is None:
            logger.warning("Update of missing %s %s", self.kind.lower(), record_id)
            raise NotFoundError(self.kind, record_id)

        changes = self.model.model_validate({**row, **self._aliased(partial)}).to_record()
        merged = {k: v for k, v in changes.items() if k not in IMMUTABLE_FIELDS}
        rows[index] = {**row, **merged}
        entity = self.model.model_validate(rows[index])
        await self.store.save(self.collection, rows)
        await self.audit.append(
            actor.org_id, actor.id, self.update_action, f"{self.detail_verbs[1]} {self.kind.lower()}: {entity.name}"
        )
        logger.info("Updated %s %s", self.kind.lower(), record_id)
        return entity

    async def delete(self, actor: User, record_id: str) -> None:
        """Remove a record and every membership referencing it.

        Deleting an id that does not exist is a no-op apart from the
        audit entry, which then names the record ``unknown``.
        """
        rows = await self.store.load(self.collection)
        memberships = await self.store.load(Collection.TEAM_MEMBERS)
        index, row = self._find(rows, actor.org_id, record_id)
        name = row.get("name", UNKNOWN_NAME) if row else UNKNOWN_NAME
        if row is not None:
            del rows[index]
            await self.store.save_many({
                self.collection: rows,
                Collection.TEAM_MEMBERS: type(self).cascade(memberships, record_id),
            })
            logger.info("Deleted %s %s", self.kind.lower(), record_id)
        else:
            logger.debug("Delete of missing %s %s ignored", self.kind.lower(), record_id)
        await self.audit.append(
            actor.org_id, actor.id, self.delete_action, f"{self.detail_verbs[2]} {self.kind.lower()}: {name}"
        )

    def _aliased(self, partial: Dict[str, object]) -> Dict[str, object]:
        """Translate attribute names to the stored camelCase keys."""
        fields = self.model.model_fields
        out = {}
        for key, value in partial.items():
            field = fields.get(key)
            out[field.alias if field and field.alias else key] = value
        return out

    @staticmethod
    def _find(rows: List[Record], org_id: str, record_id: str) -> Tuple[int, Optional[Record]]:
        for index, row in enumerate(rows):
            if row.get("id") == record_id and row.get("orgId") == org_id:
                return index, row
        return -1, None
