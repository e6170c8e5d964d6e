"""
Pydantic models for organizations, users and authentication.

The credential secret lives only in ``StoredUser``; everything returned
to callers is a ``User`` which has no password field.
"""

from pydantic import BaseModel, Field

from .base import CamelModel


class Organization(CamelModel):
    id: str
    name: str


class User(CamelModel):
    """Public projection of a user."""

    id: str
    email: str = Field(..., examples=["ann@example.com"])
    name: str = Field(..., examples=["Ann Smith"])
    org_id: str


class StoredUser(User):
    """User record as persisted in the ``users`` collection."""

    password_hash: str

    def public(self) -> User:
        return User(id=self.id, email=self.email, name=self.name, org_id=self.org_id)


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["Ann Smith"])
    email: str = Field(..., min_length=3, examples=["ann@example.com"])
    password: str = Field(..., min_length=1, examples=["secret"])
    org_name: str = Field(..., min_length=1, alias="orgName", examples=["Acme"])

    model_config = {"populate_by_name": True}


class LoginRequest(BaseModel):
    email: str = Field(..., examples=["ann@example.com"])
    password: str = Field(..., examples=["secret"])


class AuthResponse(CamelModel):
    user: User
    token: str


class SessionInfo(CamelModel):
    """The authenticated user together with the organization it belongs to."""

    user: User
    organization: Organization
