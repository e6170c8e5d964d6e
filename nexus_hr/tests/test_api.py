import pytest
from fastapi.testclient import TestClient

from nexus_hr.app.core.storage import MemoryStore
from nexus_hr.app.main import create_app


@pytest.fixture
def client():
    return TestClient(create_app(store=MemoryStore()))


def register(client, email="ann@x.com", org="Acme"):
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Ann", "email": email, "password": "pw1", "orgName": org},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def session(client):
    body = register(client)
    return {"Authorization": f"Bearer {body['token']}"}, body["user"]


class TestAuthEndpoints:
    def test_register_returns_camel_case_user(self, client):
        body = register(client)
        assert set(body["user"]) == {"id", "email", "name", "orgId"}
        assert body["token"]

    def test_duplicate_register_conflict(self, client):
        register(client)
        response = client.post(
            "/api/v1/auth/register",
            json={"name": "X", "email": "ann@x.com", "password": "p", "orgName": "Other"},
        )
        assert response.status_code == 409

    def test_login_and_me(self, client, session):
        response = client.post("/api/v1/auth/login", json={"email": "ann@x.com", "password": "pw1"})
        assert response.status_code == 200
        headers = {"Authorization": f"Bearer {response.json()['token']}"}
        me = client.get("/api/v1/auth/me", headers=headers).json()
        assert me["user"] == session[1]
        assert me["organization"] == {"id": session[1]["orgId"], "name": "Acme"}

    def test_bad_login_unauthorized(self, client, session):
        response = client.post("/api/v1/auth/login", json={"email": "ann@x.com", "password": "wrong"})
        assert response.status_code == 401
        logs = client.get("/api/v1/audit/logs", headers=session[0]).json()
        assert [entry["action"] for entry in logs] == ["REGISTER"]

    def test_missing_token(self, client):
        assert client.get("/api/v1/employees/").status_code == 401

    def test_forged_token(self, client):
        response = client.get("/api/v1/employees/", headers={"Authorization": "Bearer abc.def"})
        assert response.status_code == 401

    def test_logout(self, client, session):
        assert client.post("/api/v1/auth/logout", headers=session[0]).status_code == 204
        logs = client.get("/api/v1/audit/logs", headers=session[0]).json()
        assert logs[0]["action"] == "LOGOUT"
        assert logs[0]["userName"] == "Ann"


class TestEmployeeEndpoints:
    def test_crud_and_assignment(self, client, session):
        headers, _ = session
        created = client.post(
            "/api/v1/employees/",
            json={"name": "Bob", "email": "bob@x.com", "jobTitle": "Engineer"},
            headers=headers,
        )
        assert created.status_code == 201
        bob = created.json()
        assert bob["jobTitle"] == "Engineer"

        core = client.post(
            "/api/v1/teams/", json={"name": "Core", "description": "Core team"}, headers=headers
        ).json()

        assigned = client.put(
            f"/api/v1/employees/{bob['id']}/teams",
            json={"teamIds": [core["id"], "ghost"]},
            headers=headers,
        )
        assert [t["name"] for t in assigned.json()] == ["Core"]

        listing = client.get("/api/v1/employees/", headers=headers).json()
        assert [t["id"] for t in listing[0]["teams"]] == [core["id"]]
        members = client.get("/api/v1/teams/", headers=headers).json()[0]["members"]
        assert [m["name"] for m in members] == ["Bob"]

        updated = client.put(f"/api/v1/employees/{bob['id']}", json={"jobTitle": "Lead"}, headers=headers)
        assert updated.json()["jobTitle"] == "Lead"
        assert updated.json()["name"] == "Bob"

        assert client.delete(f"/api/v1/employees/{bob['id']}", headers=headers).status_code == 204
        assert client.delete(f"/api/v1/employees/{bob['id']}", headers=headers).status_code == 204
        assert client.get("/api/v1/teams/", headers=headers).json()[0]["members"] == []

    def test_update_missing_not_found(self, client, session):
        response = client.put("/api/v1/employees/missing", json={"name": "X"}, headers=session[0])
        assert response.status_code == 404

    def test_get_missing_not_found(self, client, session):
        assert client.get("/api/v1/employees/missing", headers=session[0]).status_code == 404

    def test_search(self, client, session):
        headers, _ = session
        for name, title in [("Alice", "Engineer"), ("Bob", "Designer")]:
            client.post("/api/v1/employees/", json={"name": name, "email": "e@x.com", "jobTitle": title}, headers=headers)
        found = client.get("/api/v1/employees/", params={"search": "eng"}, headers=headers).json()
        assert [e["name"] for e in found] == ["Alice"]

    def test_tenant_isolation(self, client, session):
        headers, _ = session
        other = register(client, email="olga@y.com", org="Globex")
        other_headers = {"Authorization": f"Bearer {other['token']}"}
        client.post("/api/v1/employees/", json={"name": "Bob", "email": "b@x.com", "jobTitle": "Dev"}, headers=headers)
        assert client.get("/api/v1/employees/", headers=other_headers).json() == []


class TestTeamEndpoints:
    def test_update_and_delete(self, client, session):
        headers, _ = session
        team = client.post("/api/v1/teams/", json={"name": "Core"}, headers=headers).json()
        assert team["description"] == ""
        updated = client.put(f"/api/v1/teams/{team['id']}", json={"description": "Platform"}, headers=headers)
        assert updated.json()["description"] == "Platform"
        assert client.get(f"/api/v1/teams/{team['id']}", headers=headers).json()["name"] == "Core"
        assert client.delete(f"/api/v1/teams/{team['id']}", headers=headers).status_code == 204
        assert client.get("/api/v1/teams/", headers=headers).json() == []

    def test_update_missing_not_found(self, client, session):
        assert client.put("/api/v1/teams/missing", json={"name": "X"}, headers=session[0]).status_code == 404


class TestReadEndpoints:
    def test_audit_filter(self, client, session):
        headers, _ = session
        client.post("/api/v1/teams/", json={"name": "Core"}, headers=headers)
        logs = client.get("/api/v1/audit/logs", params={"action": "CREATE_TEAM"}, headers=headers).json()
        assert [entry["details"] for entry in logs] == ["Created team: Core"]

    def test_audit_filter_rejects_unknown_action(self, client, session):
        response = client.get("/api/v1/audit/logs", params={"action": "NOPE"}, headers=session[0])
        assert response.status_code == 422

    def test_dashboard(self, client, session):
        headers, _ = session
        client.post("/api/v1/teams/", json={"name": "Core"}, headers=headers)
        summary = client.get("/api/v1/dashboard/", headers=headers).json()
        assert summary["employeeCount"] == 0
        assert summary["teamCount"] == 1
        assert summary["perTeamMemberCounts"][0]["count"] == 0
        assert [e["action"] for e in summary["recentLogEntries"]] == ["CREATE_TEAM", "REGISTER"]

    def test_dashboard_recent_limit(self, client, session):
        summary = client.get("/api/v1/dashboard/", params={"recent": 0}, headers=session[0]).json()
        assert summary["recentLogEntries"] == []
