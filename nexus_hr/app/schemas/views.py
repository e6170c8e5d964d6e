"""
Joined read-side views.

These combine an entity with the records it is associated with through
the ``team_members`` collection.  They are computed on every read and
never persisted.
"""

from typing import List

from .employee import Employee
from .team import Team


class EmployeeWithTeams(Employee):
    teams: List[Team] = []


class TeamWithMembers(Team):
    members: List[Employee] = []
