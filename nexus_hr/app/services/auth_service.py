"""
Identity and organization management.

Registration creates an organization together with its first user;
both collections are written in one ``save_many`` call so a failed
write never leaves an organization without its user.  Users are
immutable after registration.

Passwords are stored and compared in plain text.  Replace this with a
proper hashing scheme before using the layer for anything real.
"""

import logging
from typing import Optional

from nexus_hr.app.core.exceptions import DuplicateUserError, InvalidCredentialsError
from nexus_hr.app.core.security import create_session_token, passwords_match
from nexus_hr.app.core.storage import Collection, KeyValueStore
from nexus_hr.app.core.utils import generate_id
from nexus_hr.app.schemas.audit import AuditAction
from nexus_hr.app.schemas.user import AuthResponse, Organization, StoredUser, User
from nexus_hr.app.services.audit_service import AuditService


logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and logout."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.audit = AuditService(store)

    async def register(self, name: str, email: str, password: str, org_name: str) -> AuthResponse:
        """Create an organization and its first user.

        Raises ``DuplicateUserError`` if ``email`` is already registered.
        Writes one ``REGISTER`` audit entry attributed to the new user.
        """
        logger.info("Registering user %s for organization %s", email, org_name)
        users = await self.store.load(Collection.USERS)
        if any(u.get("email") == email for u in users):
            logger.warning("Registration rejected, email %s already exists", email)
            raise DuplicateUserError(email)
        orgs = await self.store.load(Collection.ORGS)

        org = Organization(id=generate_id(), name=org_name)
        stored = StoredUser(
            id=generate_id(),
            email=email,
            name=name,
            org_id=org.id,
            password_hash=password,
        )
        orgs.append(org.to_record())
        users.append(stored.to_record())
        await self.store.save_many({Collection.ORGS: orgs, Collection.USERS: users})

        await self.audit.append(org.id, stored.id, AuditAction.REGISTER, f"Organization '{org_name}' created")
        return AuthResponse(user=stored.public(), token=create_session_token(stored.id))

    async def login(self, email: str, password: str) -> AuthResponse:
        """Authenticate by exact email and password match.

        Raises ``InvalidCredentialsError`` on mismatch.  Failed attempts
        are not written to the audit log.
        """
        users = await self.store.load(Collection.USERS)
        row = next(
            (
                u for u in users
                if u.get("email") == email and passwords_match(password, u.get("passwordHash", ""))
            ),
            None,
        )
        if row is None:
            logger.warning("Failed login for %s", email)
            raise InvalidCredentialsError()
        user = StoredUser.model_validate(row).public()
        await self.audit.append(user.org_id, user.id, AuditAction.LOGIN, "User logged in")
        logger.info("User %s logged in", user.id)
        return AuthResponse(user=user, token=create_session_token(user.id))

    async def logout(self, user_id: str, org_id: str) -> None:
        """Record the logout.  The caller discards its own session."""
        await self.audit.append(org_id, user_id, AuditAction.LOGOUT, "User logged out")
        logger.info("User %s logged out", user_id)

    async def get_user(self, user_id: str) -> Optional[User]:
        """Return the public projection of a user, or ``None``."""
        users = await self.store.load(Collection.USERS)
        row = next((u for u in users if u.get("id") == user_id), None)
        return StoredUser.model_validate(row).public() if row else None

    async def get_organization(self, org_id: str) -> Optional[Organization]:
        orgs = await self.store.load(Collection.ORGS)
        row = next((o for o in orgs if o.get("id") == org_id), None)
        return Organization.model_validate(row) if row else None
