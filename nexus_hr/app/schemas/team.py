"""Pydantic models for team data."""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class TeamBase(CamelModel):
    name: str = Field(..., examples=["Core"])
    description: str = Field("", examples=["Core platform team"])


class TeamCreate(TeamBase):
    """Schema for creating a team."""
    pass


class TeamUpdate(CamelModel):
    """Schema for updating a team; unspecified fields remain unchanged."""
    name: Optional[str] = None
    description: Optional[str] = None


class Team(TeamBase):
    id: str
    org_id: str
    created_at: str


class Membership(CamelModel):
    """Employee<->Team association.  Has no identity of its own."""

    employee_id: str
    team_id: str
