"""
Factory pattern for creating test data.

Provides easy-to-use functions for creating test objects
with sensible defaults and optional overrides.
"""

from typing import Any

from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token, hash_password
from app.models import Note, NoteShare, Tenant, TenantPlan, User, UserRole

fake = Faker()

TEST_PASSWORD = "Test123!"


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header for `user`."""
    return {"Authorization": f"Bearer {create_access_token(subject=user.id)}"}


class TenantFactory:
    """Factory for creating test tenants."""

    @staticmethod
    async def create(
        db: AsyncSession,
        **kwargs: Any,
    ) -> Tenant:
        """
        Create a test tenant.

        Usage:
            tenant = await TenantFactory.create(db, slug="initech", plan="pro")
        """
        defaults = {
            "name": fake.company(),
            "slug": fake.unique.slug(),
            "plan": TenantPlan.FREE.value,
        }
        defaults.update(kwargs)

        tenant = Tenant(**defaults)
        db.add(tenant)
        await db.commit()
        await db.refresh(tenant)
        return tenant


class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    async def create(
        db: AsyncSession,
        tenant: Tenant,
        **kwargs: Any,
    ) -> User:
        """
        Create a test user.

        Usage:
            user = await UserFactory.create(db, tenant, email="custom@test.com")
        """
        password = kwargs.pop("password", TEST_PASSWORD)

        defaults = {
            "name": fake.name(),
            "email": fake.unique.email(),
            "hashed_password": hash_password(password),
            "role": UserRole.MEMBER.value,
            "is_verified": True,
            "tenant_id": tenant.id,
        }
        defaults.update(kwargs)

        user = User(**defaults)
        user.tenant = tenant
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user


class NoteFactory:
    """Factory for creating test notes (bypasses the quota check)."""

    @staticmethod
    async def create(
        db: AsyncSession,
        user: User,
        shared_with: list[User] | None = None,
        **kwargs: Any,
    ) -> Note:
        """
        Create a test note authored by `user` in the user's tenant.

        Usage:
            note = await NoteFactory.create(db, user, title="Standup", is_pinned=True)
        """
        defaults = {
            "title": fake.sentence(nb_words=4)[:100],
            "content": fake.text(max_nb_chars=200),
            "category": "General",
            "tags": [],
            "color": "#ffffff",
            "tenant_id": user.tenant_id,
            "author_id": user.id,
        }
        defaults.update(kwargs)

        note = Note(**defaults)
        note.shared_with = [NoteShare(user_id=other.id) for other in shared_with or []]
        db.add(note)
        await db.commit()
        await db.refresh(note)
        return note

    @staticmethod
    async def create_batch(
        db: AsyncSession,
        user: User,
        count: int = 3,
        **kwargs: Any,
    ) -> list[Note]:
        """Create multiple notes at once."""
        notes = []
        for _ in range(count):
            notes.append(await NoteFactory.create(db, user, **kwargs))
        return notes
