"""
Pydantic schemas for Tenant.
"""

from datetime import datetime

from pydantic import Field

from app.schemas.common import BaseSchema


class TenantSummary(BaseSchema):
    """Tenant fields embedded in user payloads."""

    id: str
    name: str = Field(..., min_length=1, max_length=255, description="Organization name")
    slug: str = Field(..., min_length=1, max_length=100, description="URL-friendly identifier")
    plan: str = Field(..., description="Subscription plan (free|pro)")


class TenantRead(TenantSummary):
    """Schema for reading tenant data."""

    created_at: datetime
    updated_at: datetime


class TenantUsage(TenantRead):
    """Tenant with its note quota usage."""

    active_notes: int = Field(0, description="Non-archived notes in the tenant")
    note_limit: int | None = Field(None, description="Active-note cap (null when unlimited)")


class TenantUpgradeResponse(BaseSchema):
    """Response after a plan upgrade."""

    message: str
    tenant: TenantRead
