"""
User model for authentication and authorization.
"""

from enum import Enum

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class UserRole(str, Enum):
    """Role within a tenant."""
    ADMIN = "admin"
    MEMBER = "member"


class User(BaseModel):
    """User account model."""

    __tablename__ = "users"

    # Profile
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    avatar: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Avatar URL"
    )

    # Authentication
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address (unique)"
    )

    hashed_password: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Bcrypt hashed password"
    )

    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.MEMBER.value,
        nullable=False,
        comment="Role within the tenant (admin|member)"
    )

    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Email verification status"
    )

    # Multi-tenancy
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Associated tenant ID"
    )

    # Relationships
    tenant: Mapped["Tenant"] = relationship(
        "Tenant",
        back_populates="users",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
