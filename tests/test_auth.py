"""Tests for registration, login and profile endpoints."""

import pytest
from httpx import AsyncClient

from app.core.security import decode_access_token
from app.models.user import User


@pytest.mark.asyncio
async def test_register_creates_customer(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "New Person", "email": "New@Example.com", "password": "password123"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "new@example.com"
    assert data["role"] == "customer"
    assert "hashedPassword" not in data
    assert "password" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, customer: User) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Again", "email": "casey@example.com", "password": "password123"},
    )

    assert response.status_code == 409
    assert response.json() == {"status": "fail", "message": "User already exists"}


@pytest.mark.asyncio
async def test_register_short_password_rejected(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Short", "email": "short@example.com", "password": "123"},
    )

    assert response.status_code == 400
    assert response.json()["status"] == "fail"


@pytest.mark.asyncio
async def test_login_returns_token_with_role(client: AsyncClient, customer: User) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "casey@example.com", "password": "password123"},
    )

    assert response.status_code == 200
    body = response.json()
    payload = decode_access_token(body["token"])
    assert payload["sub"] == customer.id
    assert payload["role"] == "customer"
    assert body["expires_in"] == 24 * 60 * 60
    assert body["data"]["email"] == "casey@example.com"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password",
    [("casey@example.com", "wrong-password"), ("nobody@example.com", "password123")],
)
async def test_login_failures_are_indistinguishable(
    client: AsyncClient, customer: User, email: str, password: str
) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": password},
    )

    assert response.status_code == 401
    assert response.json() == {"status": "fail", "message": "Invalid email or password"}


@pytest.mark.asyncio
async def test_logout(client: AsyncClient, auth_headers: dict) -> None:
    response = await client.post("/api/v1/auth/logout", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Logged out"}


@pytest.mark.asyncio
async def test_get_profile(client: AsyncClient, auth_headers: dict, customer: User) -> None:
    response = await client.get("/api/v1/users/profile", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["id"] == customer.id


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, auth_headers: dict) -> None:
    response = await client.put(
        "/api/v1/users/profile",
        json={"name": "Casey Renamed", "phone": "+44 7700 900123"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Casey Renamed"
    assert data["phone"] == "+44 7700 900123"


@pytest.mark.asyncio
async def test_update_profile_email_taken(
    client: AsyncClient, auth_headers: dict, other_customer: User
) -> None:
    response = await client.put(
        "/api/v1/users/profile",
        json={"email": "robin@example.com"},
        headers=auth_headers,
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_change_password_then_login(client: AsyncClient, auth_headers: dict) -> None:
    response = await client.put(
        "/api/v1/users/profile/password",
        json={"password": "a-new-password"},
        headers=auth_headers,
    )
    assert response.status_code == 200

    old = await client.post(
        "/api/v1/auth/login",
        json={"email": "casey@example.com", "password": "password123"},
    )
    new = await client.post(
        "/api/v1/auth/login",
        json={"email": "casey@example.com", "password": "a-new-password"},
    )
    assert old.status_code == 401
    assert new.status_code == 200
