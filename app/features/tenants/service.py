"""
Tenant business logic.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import AuthorizationError, ResourceNotFoundError
from app.core.metrics import tenant_upgrades_total
from app.core.permissions import can_manage_tenant
from app.features.notes.service import note_service
from app.models.tenant import Tenant, TenantPlan
from app.models.user import User
from app.schemas.tenant import TenantUsage

logger = structlog.get_logger(__name__)


class TenantService:
    """Tenant lookups and plan changes."""

    @staticmethod
    async def get_usage(db: AsyncSession, current_user: User) -> TenantUsage:
        """The caller's tenant with its active-note usage."""
        result = await db.execute(
            select(Tenant).where(Tenant.id == current_user.tenant_id)
        )
        tenant = result.scalar_one_or_none()
        if not tenant:
            raise ResourceNotFoundError("Tenant not found")

        active = await note_service.count_active_notes(db, tenant.id)
        usage = TenantUsage.model_validate(tenant)
        usage.active_notes = active
        usage.note_limit = settings.free_plan_note_limit if tenant.is_free else None
        return usage

    @staticmethod
    async def upgrade(db: AsyncSession, slug: str, current_user: User) -> Tenant:
        """
        Move a tenant to the pro plan.

        Only an admin of that same tenant may do this. Upgrading a pro
        tenant is a successful no-op.
        """
        slug = slug.strip().lower()

        decision = can_manage_tenant(current_user, slug)
        if not decision:
            tenant_upgrades_total.labels(result="forbidden").inc()
            logger.warning(
                "tenant_upgrade_denied",
                slug=slug,
                user_id=current_user.id,
                reason=decision.reason,
            )
            raise AuthorizationError(f"Forbidden: {decision.reason}")

        result = await db.execute(select(Tenant).where(Tenant.slug == slug))
        tenant = result.scalar_one_or_none()
        if not tenant:
            raise ResourceNotFoundError("Tenant not found")

        previous = tenant.plan
        tenant.plan = TenantPlan.PRO.value
        await db.commit()
        await db.refresh(tenant)

        tenant_upgrades_total.labels(result="upgraded" if previous != tenant.plan else "noop").inc()
        logger.info("tenant_upgraded", tenant_id=tenant.id, previous_plan=previous, plan=tenant.plan)
        return tenant


# Singleton instance
tenant_service = TenantService()
