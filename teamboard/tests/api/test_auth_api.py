#tests/api/test_auth_api.py
from datetime import timedelta
from fastapi.testclient import TestClient

from teamboard.core import security


def test_login_success(client: TestClient):
    response = client.post("/auth/login", json={"password": "testadminpassword"})
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert "expires_at" in data
    payload = security.verify_access_token(data["access_token"])
    assert payload["sub"] == "admin"


def test_login_incorrect_password(client: TestClient):
    response = client.post("/auth/login", json={"password": "wrong"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect password"


def test_login_token_opens_protected_route(client: TestClient):
    token = client.post("/auth/login", json={"password": "testadminpassword"}).json()["access_token"]
    response = client.post(
        "/projects/",
        json={"name": "Via login"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 201


def test_protected_route_without_token(client: TestClient):
    response = client.post("/projects/", json={"name": "No token"})
    assert response.status_code == 401


def test_protected_route_with_invalid_token(client: TestClient):
    response = client.post(
        "/projects/",
        json={"name": "Bad token"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401


def test_protected_route_with_expired_token(client: TestClient):
    token, _ = security.create_admin_token(expires_delta=timedelta(minutes=-5))
    response = client.post(
        "/projects/",
        json={"name": "Expired"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401


def test_non_admin_subject_is_rejected(client: TestClient):
    token, _ = security.create_access_token({"sub": "someone"})
    response = client.post(
        "/projects/",
        json={"name": "Wrong subject"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401


def test_reads_are_open(client: TestClient):
    assert client.get("/projects/").status_code == 200
    assert client.get("/users/").status_code == 200
    assert client.get("/analytics/stats").status_code == 200


def test_health(client: TestClient):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/").status_code == 200
