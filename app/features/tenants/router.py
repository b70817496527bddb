"""
Tenant management endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import CurrentAdmin, CurrentUser
from app.features.tenants.service import tenant_service
from app.schemas.tenant import TenantRead, TenantUpgradeResponse, TenantUsage

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.get("/me", response_model=TenantUsage)
async def get_my_tenant(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantUsage:
    """
    Get current user's tenant information.

    Includes the plan, the number of active notes and the note cap.
    """
    return await tenant_service.get_usage(db, current_user)


@router.post("/{slug}/upgrade", response_model=TenantUpgradeResponse)
async def upgrade_tenant(
    slug: str,
    current_user: CurrentAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantUpgradeResponse:
    """
    Upgrade a tenant to the pro plan (admin of that tenant only).

    No payment is processed; the plan flips unconditionally.
    """
    tenant = await tenant_service.upgrade(db, slug, current_user)
    return TenantUpgradeResponse(
        message="Tenant upgraded to Pro successfully",
        tenant=TenantRead.model_validate(tenant),
    )
