# tests/helpers.py

from fastapi.testclient import TestClient


def register(client: TestClient, name: str = "A", email: str = "a@x.com", password: str = "secret1") -> str:
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
