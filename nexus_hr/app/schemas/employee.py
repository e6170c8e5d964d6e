"""
Pydantic models for employee data.

``EmployeeBase`` carries the editable fields, ``EmployeeCreate`` is the
request body for new employees and ``Employee`` the stored record.
``EmployeeUpdate`` has every field optional; only the fields actually
sent are merged into the existing record.
"""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class EmployeeBase(CamelModel):
    name: str = Field(..., examples=["Bob Jones"])
    job_title: str = Field(..., examples=["Engineer"])
    email: str = Field(..., examples=["bob@example.com"])


class EmployeeCreate(EmployeeBase):
    """Schema for creating an employee."""
    pass


class EmployeeUpdate(CamelModel):
    """Schema for updating an employee.

    All fields are optional; only provided fields will be updated.
    """
    name: Optional[str] = None
    job_title: Optional[str] = None
    email: Optional[str] = None


class Employee(EmployeeBase):
    id: str
    org_id: str
    created_at: str


class TeamAssignment(CamelModel):
    """Complete desired set of teams for one employee."""

    team_ids: List[str] = Field(default_factory=list, examples=[["k3j9x0a1b"]])
