"""
Session tokens and request dependencies.

A session token is the base64url encoded user id followed by an
HMAC‑SHA256 signature of that id made with ``settings.secret_key``::

    <b64(user_id)>.<b64(signature)>

The same user always receives the same token, and a token cannot be
forged without the key.  No expiry is modelled; clients discard the
token on logout.

Passwords are stored and compared in plain text.  This layer simulates
a backend and makes no attempt at credential hardening.
"""

import base64
import hashlib
import hmac
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .storage import KeyValueStore
from ..schemas.user import User


logger = logging.getLogger(__name__)


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_session_token(user_id: str, secret: Optional[str] = None) -> str:
    """Return the session token bound to ``user_id``."""
    key = secret or settings.secret_key
    payload = user_id.encode("utf-8")
    return f"{_b64_url_encode(payload)}.{_b64_url_encode(_sign(payload, key))}"


def decode_session_token(token: str, secret: Optional[str] = None) -> Optional[str]:
    """Verify ``token`` and return the user id it was issued for.

    Returns ``None`` for malformed tokens and bad signatures.
    """
    key = secret or settings.secret_key
    parts = token.split('.')
    if len(parts) != 2:
        return None
    try:
        payload = _b64_url_decode(parts[0])
        actual_sig = _b64_url_decode(parts[1])
    except (ValueError, TypeError):
        return None
    # Constant‑time comparison to prevent timing attacks
    if not hmac.compare_digest(_sign(payload, key), actual_sig):
        return None
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        return None


def passwords_match(supplied: str, stored: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), stored.encode("utf-8"))


def get_store(request: Request) -> KeyValueStore:
    """Dependency returning the store attached to the application."""
    return request.app.state.store


security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: KeyValueStore = Depends(get_store),
) -> User:
    """Dependency that resolves the bearer token to the acting user.

    Raises HTTP 401 if the header is missing, the token is invalid, or
    the user it names no longer exists.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = decode_session_token(credentials.credentials)
    if not user_id:
        logger.warning("Rejected request with invalid session token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    from nexus_hr.app.services.auth_service import AuthService
    user = await AuthService(store).get_user(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
