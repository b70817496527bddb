"""
Tenant model for multi-tenancy.

Each tenant represents an organization using the platform.
"""

from enum import Enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base import BaseModel


class TenantPlan(str, Enum):
    """Subscription tier; gates the active-note quota."""
    FREE = "free"
    PRO = "pro"


class Tenant(BaseModel):
    """
    Tenant (organization) model.

    Provides:
    - Data isolation between organizations
    - Subscription plan (free tenants have a capped note quota)
    """

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Organization name"
    )

    # Immutable after creation; always stored lowercase
    slug: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="URL-friendly identifier (e.g., 'acme')"
    )

    plan: Mapped[str] = mapped_column(
        String(20),
        default=TenantPlan.FREE.value,
        nullable=False,
        comment="Subscription plan (free|pro)"
    )

    # Relationships
    users: Mapped[list["User"]] = relationship(
        "User",
        back_populates="tenant",
        cascade="all, delete-orphan"
    )

    @validates("slug")
    def _normalize_slug(self, key: str, value: str) -> str:
        if self.slug is not None and self.slug != value.strip().lower():
            raise ValueError("Tenant slug is immutable")
        return value.strip().lower()

    @property
    def is_free(self) -> bool:
        return self.plan == TenantPlan.FREE.value

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, slug={self.slug}, plan={self.plan})>"
