"""
API tests for tenant endpoints.
"""

import pytest
from httpx import AsyncClient

from app.models import Tenant
from tests.factories import NoteFactory, auth_headers


@pytest.mark.api
class TestTenantUpgrade:

    async def test_admin_upgrades_own_tenant(self, admin_client: AsyncClient, db_session, acme):
        response = await admin_client.post("/api/tenants/acme/upgrade")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Tenant upgraded to Pro successfully"
        assert data["tenant"]["slug"] == "acme"
        assert data["tenant"]["plan"] == "pro"

        tenant = await db_session.get(Tenant, acme.id)
        assert tenant.plan == "pro"

    async def test_upgrade_is_idempotent(self, admin_client: AsyncClient):
        first = await admin_client.post("/api/tenants/acme/upgrade")
        second = await admin_client.post("/api/tenants/acme/upgrade")

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["tenant"]["plan"] == "pro"

    async def test_admin_cannot_upgrade_other_tenant(self, admin_client: AsyncClient, db_session, globex):
        response = await admin_client.post("/api/tenants/globex/upgrade")

        assert response.status_code == 403
        assert response.json()["detail"].startswith("Forbidden")

        tenant = await db_session.get(Tenant, globex.id)
        assert tenant.plan == "free"

    async def test_member_cannot_upgrade(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/tenants/acme/upgrade")

        assert response.status_code == 403

    async def test_upgrade_requires_auth(self, client: AsyncClient, acme):
        response = await client.post("/api/tenants/acme/upgrade")

        assert response.status_code == 401


@pytest.mark.api
class TestTenantUsage:

    async def test_free_tenant_usage(self, authenticated_client: AsyncClient, db_session, test_user, other_user):
        await NoteFactory.create(db_session, test_user)
        await NoteFactory.create(db_session, other_user)
        await NoteFactory.create(db_session, test_user, is_archived=True)

        response = await authenticated_client.get("/api/tenants/me")

        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "acme"
        assert data["plan"] == "free"
        assert data["activeNotes"] == 2
        assert data["noteLimit"] == 3

    async def test_pro_tenant_has_no_limit(self, client: AsyncClient, test_user, test_admin):
        await client.post("/api/tenants/acme/upgrade", headers=auth_headers(test_admin))

        response = await client.get("/api/tenants/me", headers=auth_headers(test_user))

        assert response.json()["plan"] == "pro"
        assert response.json()["noteLimit"] is None


@pytest.mark.api
class TestHealthEndpoints:

    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    async def test_health_checks_database(self, client: AsyncClient):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["checks"]["database"]["status"] == "healthy"

    async def test_trace_headers(self, client: AsyncClient):
        response = await client.get("/health/live", headers={"X-Trace-ID": "trace-123"})

        assert response.headers["x-trace-id"] == "trace-123"
        assert response.headers["x-request-id"]
