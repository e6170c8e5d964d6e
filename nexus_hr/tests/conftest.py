import pytest

from nexus_hr.app.core.storage import MemoryStore
from nexus_hr.app.schemas.employee import EmployeeCreate
from nexus_hr.app.schemas.team import TeamCreate
from nexus_hr.app.services import (
    AuditService,
    AuthService,
    EmployeeService,
    MembershipService,
    QueryService,
    TeamService,
)


@pytest.fixture
def store():
    """Empty in-memory store without simulated latency"""
    return MemoryStore(latency_ms=0)


@pytest.fixture
def auth(store):
    return AuthService(store)


@pytest.fixture
def employees(store):
    return EmployeeService(store)


@pytest.fixture
def teams(store):
    return TeamService(store)


@pytest.fixture
def memberships(store):
    return MembershipService(store)


@pytest.fixture
def queries(store):
    return QueryService(store)


@pytest.fixture
def audit(store):
    return AuditService(store)


@pytest.fixture
async def actor(auth):
    """User of a freshly registered organization"""
    response = await auth.register("Ann", "ann@x.com", "pw1", "Acme")
    return response.user


@pytest.fixture
async def other_actor(auth):
    """User of a second, unrelated organization"""
    response = await auth.register("Olga", "olga@y.com", "pw2", "Globex")
    return response.user


@pytest.fixture
def bob_data():
    return EmployeeCreate(name="Bob", email="bob@x.com", job_title="Engineer")


@pytest.fixture
def core_data():
    return TeamCreate(name="Core", description="Core team")
