"""
API tests for authentication and user-invite endpoints.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from app.core.security import create_access_token
from app.models import User
from tests.factories import TEST_PASSWORD, auth_headers


@pytest.mark.api
class TestAuthEndpoints:
    """Test authentication API endpoints."""

    async def test_register_user(self, client: AsyncClient, acme):
        response = await client.post(
            "/api/auth/register",
            json={
                "name": "New User",
                "email": "newuser@acme.com",
                "password": "secret1",
                "tenantSlug": "acme",
            },
        )

        assert response.status_code == 201
        data = response.json()

        assert data["message"] == "User registered successfully"
        assert data["token"]
        assert data["user"]["email"] == "newuser@acme.com"
        assert data["user"]["role"] == "member"
        assert data["user"]["tenant"]["slug"] == "acme"
        assert data["user"]["tenant"]["plan"] == "free"
        assert "password" not in data["user"]
        assert "hashedPassword" not in data["user"]

    async def test_register_unknown_tenant(self, client: AsyncClient, db_session, acme):
        response = await client.post(
            "/api/auth/register",
            json={
                "name": "Lost",
                "email": "lost@acme.com",
                "password": "secret1",
                "tenantSlug": "initech",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid tenant"
        assert await db_session.scalar(select(func.count(User.id))) == 0

    async def test_register_duplicate_email(self, client: AsyncClient, test_user):
        response = await client.post(
            "/api/auth/register",
            json={
                "name": "Copy",
                "email": test_user.email,
                "password": "secret1",
                "tenantSlug": "acme",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists with this email"

    @pytest.mark.parametrize("payload", [
        {"name": "A", "email": "a@acme.com", "password": "123", "tenantSlug": "acme"},
        {"name": "A", "email": "not-an-email", "password": "secret1", "tenantSlug": "acme"},
        {"email": "a@acme.com", "password": "secret1", "tenantSlug": "acme"},
    ])
    async def test_register_invalid_payload(self, client: AsyncClient, acme, payload):
        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"]

    async def test_login_success(self, client: AsyncClient, test_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": test_user.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()

        assert data["message"] == "Login successful"
        assert data["tokenType"] == "bearer"
        assert data["user"]["id"] == test_user.id

        me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
        assert me.status_code == 200

    async def test_login_wrong_password(self, client: AsyncClient, test_user):
        response = await client.post(
            "/api/auth/login",
            json={"email": test_user.email, "password": "WrongPassword123!"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"
        assert "token" not in response.json()

    async def test_login_unknown_email(self, client: AsyncClient, acme):
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@acme.com", "password": "whatever"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    async def test_get_current_user(self, authenticated_client: AsyncClient, test_user):
        response = await authenticated_client.get("/api/auth/me")

        assert response.status_code == 200
        user = response.json()["user"]

        assert user["id"] == test_user.id
        assert user["tenantId"] == test_user.tenant_id
        assert user["tenant"]["slug"] == "acme"

    async def test_get_current_user_unauthorized(self, client: AsyncClient):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_get_current_user_bad_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    async def test_get_current_user_expired_token(self, client: AsyncClient, test_user):
        token = create_access_token(subject=test_user.id, expires_delta=timedelta(seconds=-10))

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_password_whitespace_is_significant(self, client: AsyncClient, acme):
        registered = await client.post(
            "/api/auth/register",
            json={
                "name": "  Spacey  ",
                "email": "spacey@acme.com",
                "password": " secret1 ",
                "tenantSlug": " acme ",
            },
        )
        assert registered.status_code == 201
        assert registered.json()["user"]["name"] == "Spacey"

        exact = await client.post(
            "/api/auth/login",
            json={"email": "spacey@acme.com", "password": " secret1 "},
        )
        trimmed = await client.post(
            "/api/auth/login",
            json={"email": "spacey@acme.com", "password": "secret1"},
        )

        assert exact.status_code == 200
        assert trimmed.status_code == 401

    async def test_update_profile(self, authenticated_client: AsyncClient):
        response = await authenticated_client.put(
            "/api/auth/profile",
            json={"name": "Renamed", "avatar": "https://example.com/me.png"},
        )

        assert response.status_code == 200
        data = response.json()

        assert data["message"] == "Profile updated successfully"
        assert data["user"]["name"] == "Renamed"
        assert data["user"]["avatar"] == "https://example.com/me.png"

    async def test_logout(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logout successful"}


@pytest.mark.api
class TestInviteEndpoint:

    async def test_admin_invites_into_own_tenant(self, admin_client: AsyncClient, test_admin):
        response = await admin_client.post(
            "/api/users/invite",
            json={"name": "Invitee", "email": "invitee@acme.com", "role": "admin"},
        )

        assert response.status_code == 201
        data = response.json()

        assert data["message"] == "User invited successfully"
        assert data["user"]["tenantId"] == test_admin.tenant_id
        assert data["user"]["role"] == "admin"

    async def test_member_cannot_invite(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(
            "/api/users/invite",
            json={"name": "Invitee", "email": "invitee@acme.com"},
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    async def test_invite_existing_email(self, client: AsyncClient, test_admin, globex_user):
        response = await client.post(
            "/api/users/invite",
            json={"name": "Dup", "email": globex_user.email},
            headers=auth_headers(test_admin),
        )

        assert response.status_code == 400
