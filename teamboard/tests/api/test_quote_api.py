#tests/api/test_quote_api.py
from fastapi.testclient import TestClient


def _create(client: TestClient, headers: dict, content: str, author=None):
    response = client.post("/quotes/", json={"content": content, "author": author}, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_create_quote_success(client: TestClient, admin_token_headers: dict):
    data = _create(client, admin_token_headers, "Less is more.", "Mies van der Rohe")
    assert data["content"] == "Less is more."
    assert data["author"] == "Mies van der Rohe"
    assert "id" in data


def test_create_quote_requires_admin(client: TestClient):
    response = client.post("/quotes/", json={"content": "Nope"})
    assert response.status_code == 401


def test_create_quote_without_content(client: TestClient, admin_token_headers: dict):
    response = client.post("/quotes/", json={"author": "Nobody"}, headers=admin_token_headers)
    assert response.status_code == 400
    assert "Content is required" in response.json()["detail"]


def test_list_quotes(client: TestClient, admin_token_headers: dict):
    first = _create(client, admin_token_headers, "First")
    second = _create(client, admin_token_headers, "Second")
    response = client.get("/quotes/")
    assert response.status_code == 200
    assert [q["id"] for q in response.json()] == [second["id"], first["id"]]


def test_random_quote(client: TestClient, admin_token_headers: dict):
    response = client.get("/quotes/", params={"random": "true"})
    assert response.status_code == 200
    assert response.json() is None

    quote = _create(client, admin_token_headers, "Only one")
    response = client.get("/quotes/", params={"random": "true"})
    assert response.status_code == 200
    assert response.json()["id"] == quote["id"]


def test_delete_quote(client: TestClient, admin_token_headers: dict):
    quote = _create(client, admin_token_headers, "Short-lived")
    assert client.delete(f"/quotes/{quote['id']}").status_code == 401

    response = client.delete(f"/quotes/{quote['id']}", headers=admin_token_headers)
    assert response.status_code == 200
    assert response.json()["result"] == quote["id"]

    response = client.delete(f"/quotes/{quote['id']}", headers=admin_token_headers)
    assert response.status_code == 404
