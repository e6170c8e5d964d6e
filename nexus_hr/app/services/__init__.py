"""
Service layer abstraction.

Each service encapsulates the business logic for one domain and is
constructed with the ``KeyValueStore`` it reads and writes.  Services
never hold state of their own between calls; everything is loaded from
the store, changed in memory and written back.
"""

from .audit_service import AuditService
from .auth_service import AuthService
from .employee_service import EmployeeService
from .membership_service import MembershipService
from .query_service import QueryService
from .team_service import TeamService

__all__ = [
    "AuditService",
    "AuthService",
    "EmployeeService",
    "MembershipService",
    "QueryService",
    "TeamService",
]
