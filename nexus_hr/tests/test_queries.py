import pytest

from nexus_hr.app.core.storage import Collection
from nexus_hr.app.schemas.audit import AuditAction
from nexus_hr.app.schemas.employee import EmployeeCreate
from nexus_hr.app.schemas.team import TeamCreate


class TestScenario:
    async def test_register_create_assign(self, auth, employees, teams, memberships, queries):
        registered = await auth.register("Ann", "ann@x.com", "pw1", "Acme")
        actor = registered.user
        assert actor.org_id

        bob = await employees.create(
            actor, EmployeeCreate(name="Bob", email="bob@x.com", job_title="Engineer")
        )
        joined = await queries.employees_with_teams(actor.org_id)
        assert len(joined) == 1
        assert joined[0].teams == []

        core = await teams.create(actor, TeamCreate(name="Core", description="Core team"))
        await memberships.assign(actor, bob.id, [core.id])

        joined = await queries.employees_with_teams(actor.org_id)
        assert joined[0].teams == [core]
        by_team = await queries.teams_with_members(actor.org_id)
        assert by_team[0].members == [bob]


class TestJoins:
    async def test_missing_team_skipped(self, employees, queries, store, actor, bob_data):
        bob = await employees.create(actor, bob_data)
        await store.save(Collection.TEAM_MEMBERS, [{"employeeId": bob.id, "teamId": "vanished"}])
        joined = await queries.employees_with_teams(actor.org_id)
        assert joined[0].teams == []

    async def test_missing_employee_skipped(self, teams, queries, store, actor, core_data):
        core = await teams.create(actor, core_data)
        await store.save(Collection.TEAM_MEMBERS, [{"employeeId": "vanished", "teamId": core.id}])
        joined = await queries.teams_with_members(actor.org_id)
        assert joined[0].members == []

    async def test_search_applies_to_join(self, employees, queries, actor):
        await employees.create(actor, EmployeeCreate(name="Alice", email="a@x.com", job_title="Engineer"))
        await employees.create(actor, EmployeeCreate(name="Bob", email="b@x.com", job_title="Designer"))
        joined = await queries.employees_with_teams(actor.org_id, search="design")
        assert [e.name for e in joined] == ["Bob"]

    async def test_other_org_excluded(self, employees, teams, queries, actor, other_actor, bob_data, core_data):
        await employees.create(other_actor, bob_data)
        await teams.create(other_actor, core_data)
        assert await queries.employees_with_teams(actor.org_id) == []
        assert await queries.teams_with_members(actor.org_id) == []

    async def test_reads_do_not_write_audit(self, queries, audit, actor):
        await queries.employees_with_teams(actor.org_id)
        await queries.teams_with_members(actor.org_id)
        await queries.dashboard_summary(actor.org_id)
        assert len(await audit.list(actor.org_id)) == 1


class TestDashboard:
    @pytest.fixture
    async def populated(self, employees, teams, memberships, actor):
        alice = await employees.create(actor, EmployeeCreate(name="Alice", email="a@x.com", job_title="Dev"))
        bob = await employees.create(actor, EmployeeCreate(name="Bob", email="b@x.com", job_title="Dev"))
        await employees.create(actor, EmployeeCreate(name="Carol", email="c@x.com", job_title="Dev"))
        core = await teams.create(actor, TeamCreate(name="Core"))
        ops = await teams.create(actor, TeamCreate(name="Ops"))
        await memberships.assign(actor, alice.id, [core.id, ops.id])
        await memberships.assign(actor, bob.id, [core.id])
        return core, ops

    async def test_counts(self, queries, actor, populated):
        summary = await queries.dashboard_summary(actor.org_id)
        assert summary.employee_count == 3
        assert summary.team_count == 2
        assert [(c.name, c.count) for c in summary.per_team_member_counts] == [("Core", 2), ("Ops", 1)]
        assert summary.per_team_member_counts[0].team_id == populated[0].id

    async def test_recent_entries_newest_first(self, queries, actor, populated):
        summary = await queries.dashboard_summary(actor.org_id)
        assert len(summary.recent_log_entries) == 5
        assert summary.recent_log_entries[0].action == AuditAction.ASSIGN_TEAMS
        assert summary.recent_log_entries[-1].action == AuditAction.CREATE_EMPLOYEE

    async def test_custom_limit(self, queries, actor, populated):
        summary = await queries.dashboard_summary(actor.org_id, recent_limit=2)
        assert len(summary.recent_log_entries) == 2

    async def test_empty_org(self, queries, actor):
        summary = await queries.dashboard_summary(actor.org_id)
        assert summary.employee_count == 0
        assert summary.per_team_member_counts == []
        assert [e.action for e in summary.recent_log_entries] == [AuditAction.REGISTER]
