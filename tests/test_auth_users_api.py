from fastapi.testclient import TestClient

from geed_api.app.core.security import create_access_token
from geed_api.app.main import create_app
from geed_api.app.stores import DataStore

from conftest import ADMIN, USER

NEW_USER = {"name": "Jo Lee", "email": "Jo@Example.com", "password": "secret1"}


def test_register_returns_token_and_user(client):
    response = client.post("/api/auth/register", json=NEW_USER)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "jo@example.com"
    assert body["user"]["role"] == "user"
    assert "password" not in body["user"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.json()["user"]["email"] == "jo@example.com"


def test_duplicate_registration_is_rejected(client):
    client.post("/api/auth/register", json=NEW_USER)
    response = client.post("/api/auth/register", json={**NEW_USER, "email": "jo@example.com"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "email"


def test_registration_validates_payload(client):
    response = client.post("/api/auth/register", json={"name": "J", "email": "nope", "password": "123"})
    assert response.status_code == 400
    assert {e["field"] for e in response.json()["errors"]} == {"name", "email", "password"}


def test_bad_credentials_are_unauthorized(client):
    wrong = client.post("/api/auth/login", json={**ADMIN, "password": "wrong-password"})
    assert wrong.status_code == 401
    assert wrong.json() == {"success": False, "message": "Invalid credentials"}

    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert unknown.status_code == 401


def test_token_checks(client, user_headers):
    assert client.get("/api/auth/me").json()["message"] == "Not authorized, no token"
    bad = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert bad.status_code == 401
    assert bad.json()["message"] == "Invalid or expired token"
    assert client.post("/api/auth/logout", headers=user_headers).status_code == 200


def test_disabled_account_cannot_log_in(client, admin_headers, login):
    john_headers = login(USER)
    john = client.get("/api/auth/me", headers=john_headers).json()["user"]

    response = client.put(f"/api/users/{john['id']}", json={"is_active": False}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["user"]["is_active"] is False

    assert client.post("/api/auth/login", json=USER).json()["message"] == "Account is deactivated"
    assert client.get("/api/auth/me", headers=john_headers).json()["message"] == "User account disabled"


def test_dashboard_depends_on_role(client, admin_headers, user_headers):
    client.post(
        "/api/contact",
        json={"name": "Jo Lee", "email": "jo@x.com", "subject": "Hello there", "message": "Is anybody listening?"},
    )

    user_stats = client.get("/api/users/dashboard", headers=user_headers).json()["stats"]
    assert user_stats["total_services"] == 3
    assert user_stats["total_users"] is None

    admin_stats = client.get("/api/users/dashboard", headers=admin_headers).json()["stats"]
    assert admin_stats == {"total_services": 3, "total_users": 2, "total_contacts": 1, "new_contacts": 1}


def test_profile_update(client, user_headers):
    response = client.put("/api/users/profile", json={"phone": "+212600000000", "company": "Acme"}, headers=user_headers)

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["company"] == "Acme"
    assert user["name"] == "John Doe"


def test_change_password(client, user_headers):
    wrong = client.put(
        "/api/users/change-password",
        json={"current_password": "not-it", "new_password": "newpass1"},
        headers=user_headers,
    )
    assert wrong.status_code == 400
    assert wrong.json()["errors"][0]["field"] == "current_password"

    ok = client.put(
        "/api/users/change-password",
        json={"current_password": USER["password"], "new_password": "newpass1"},
        headers=user_headers,
    )
    assert ok.status_code == 200
    assert client.post("/api/auth/login", json=USER).status_code == 401
    assert client.post("/api/auth/login", json={**USER, "password": "newpass1"}).status_code == 200


def test_admin_user_management(client, admin_headers, user_headers):
    assert client.get("/api/users", headers=user_headers).status_code == 403

    listing = client.get("/api/users", headers=admin_headers).json()
    assert listing["total"] == 2
    assert all("password" not in user for user in listing["users"])

    admin_id = client.get("/api/auth/me", headers=admin_headers).json()["user"]["id"]
    john_id = next(u["id"] for u in listing["users"] if u["email"] == USER["email"])

    assert client.get(f"/api/users/{john_id}", headers=admin_headers).json()["user"]["name"] == "John Doe"
    assert client.delete(f"/api/users/{admin_id}", headers=admin_headers).status_code == 400
    assert client.put(f"/api/users/{admin_id}", json={"role": "user"}, headers=admin_headers).status_code == 400

    promoted = client.put(f"/api/users/{john_id}", json={"role": "admin"}, headers=admin_headers)
    assert promoted.json()["user"]["role"] == "admin"

    assert client.delete(f"/api/users/{john_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/users/{john_id}", headers=admin_headers).status_code == 404
    # The deleted user's token no longer works.
    assert client.get("/api/auth/me", headers=user_headers).json()["message"] == "User no longer exists"


def test_health_reports_backend(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["backend"] == "memory"


class BrokenStore(DataStore):
    async def get_all_services(self, *args, **kwargs):
        raise RuntimeError("database exploded")


def test_unexpected_errors_become_generic_500():
    app = create_app(BrokenStore(connect=lambda: None))
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/services")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Server error"}


def test_role_comes_from_the_account_not_the_token(client, login):
    john = client.get("/api/auth/me", headers=login(USER)).json()["user"]
    token = create_access_token({"sub": john["id"], "role": "admin"})

    response = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
