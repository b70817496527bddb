"""
Pytest fixtures for all tests.

Provides:
- A fresh SQLite database per test (aiosqlite), tables created from metadata
- An app whose get_db dependency uses the test session
- Tenants (acme, globex), users and authenticated clients
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.database import Base, db_manager, get_db
from app.main import create_application
from app.models import Tenant, TenantPlan, User, UserRole
from tests.factories import TEST_PASSWORD, TenantFactory, UserFactory, auth_headers


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'notes_test.db'}"


@pytest_asyncio.fixture
async def test_db_engine(database_url: str):
    """Create the test engine and schema."""
    engine = create_async_engine(database_url, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_db_engine) -> AsyncGenerator[AsyncSession, None]:
    """One session per test, shared by fixtures and the app."""
    session_factory = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_session: AsyncSession, database_url: str):
    """
    Create FastAPI test application.

    Overrides the database dependency to use the test session.
    """
    application = create_application()

    async def override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = override_get_db

    # Health checks talk to db_manager directly
    db_manager.init(database_url)
    yield application
    await db_manager.close()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client bound to the ASGI app.

    Usage:
        async def test_endpoint(client):
            response = await client.get("/api/notes")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# Test data
@pytest_asyncio.fixture
async def acme(db_session: AsyncSession) -> Tenant:
    """Free-plan tenant 'acme'."""
    return await TenantFactory.create(db_session, name="Acme", slug="acme", plan=TenantPlan.FREE.value)


@pytest_asyncio.fixture
async def globex(db_session: AsyncSession) -> Tenant:
    """Free-plan tenant 'globex'."""
    return await TenantFactory.create(db_session, name="Globex", slug="globex", plan=TenantPlan.FREE.value)


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession, acme: Tenant) -> User:
    """Acme member."""
    return await UserFactory.create(
        db_session,
        acme,
        name="Acme User",
        email="user@acme.com",
        password=TEST_PASSWORD,
    )


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession, acme: Tenant) -> User:
    """A second acme member."""
    return await UserFactory.create(db_session, acme, name="Other User", email="other@acme.com")


@pytest_asyncio.fixture
async def test_admin(db_session: AsyncSession, acme: Tenant) -> User:
    """Acme admin."""
    return await UserFactory.create(
        db_session,
        acme,
        name="Acme Admin",
        email="admin@acme.com",
        role=UserRole.ADMIN.value,
    )


@pytest_asyncio.fixture
async def globex_user(db_session: AsyncSession, globex: Tenant) -> User:
    """Globex member."""
    return await UserFactory.create(db_session, globex, name="Globex User", email="user@globex.com")


@pytest_asyncio.fixture
async def authenticated_client(client: AsyncClient, test_user: User) -> AsyncClient:
    """HTTP client authenticated as the acme member."""
    client.headers.update(auth_headers(test_user))
    return client


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient, test_admin: User) -> AsyncClient:
    """HTTP client authenticated as the acme admin."""
    client.headers.update(auth_headers(test_admin))
    return client
