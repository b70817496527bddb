"""
Seed database with demo tenants and accounts (password: "password").

Idempotent: existing tenants and users (matched by slug/email) are
updated in place rather than duplicated.
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from app.core.database import db_manager
from app.core.logging_config import get_logger, setup_logging
from app.core.security import hash_password
from app.models.tenant import Tenant, TenantPlan
from app.models.user import User, UserRole

DEMO_PASSWORD = "password"

TENANTS = [
    {"name": "Acme", "slug": "acme", "plan": TenantPlan.FREE.value},
    {"name": "Globex", "slug": "globex", "plan": TenantPlan.FREE.value},
]

USERS = [
    {"name": "Acme Admin", "email": "admin@acme.com", "role": UserRole.ADMIN.value, "tenant": "acme"},
    {"name": "Acme User", "email": "user@acme.com", "role": UserRole.MEMBER.value, "tenant": "acme"},
    {"name": "Globex Admin", "email": "admin@globex.com", "role": UserRole.ADMIN.value, "tenant": "globex"},
    {"name": "Globex User", "email": "user@globex.com", "role": UserRole.MEMBER.value, "tenant": "globex"},
]

logger = get_logger("seed_db")


async def seed_data() -> None:
    """Upsert demo tenants and users."""
    setup_logging()
    db_manager.init()
    await db_manager.create_tables()

    async for db in db_manager.get_session():
        tenants: dict[str, Tenant] = {}
        for entry in TENANTS:
            result = await db.execute(select(Tenant).where(Tenant.slug == entry["slug"]))
            tenant = result.scalar_one_or_none()
            if tenant is None:
                tenant = Tenant(**entry)
                db.add(tenant)
                logger.info("seed_tenant_created", slug=entry["slug"])
            else:
                tenant.name = entry["name"]
                tenant.plan = entry["plan"]
            tenants[entry["slug"]] = tenant
        await db.flush()

        password_hash = hash_password(DEMO_PASSWORD)
        for entry in USERS:
            tenant = tenants[entry["tenant"]]
            result = await db.execute(select(User).where(User.email == entry["email"]))
            user = result.scalar_one_or_none()
            if user is None:
                user = User(email=entry["email"])
                db.add(user)
                logger.info("seed_user_created", email=entry["email"])
            user.name = entry["name"]
            user.role = entry["role"]
            user.tenant_id = tenant.id
            user.hashed_password = password_hash
            user.is_verified = True

    await db_manager.close()
    logger.info("seed_completed", tenants=len(TENANTS), users=len(USERS))


if __name__ == "__main__":
    asyncio.run(seed_data())
