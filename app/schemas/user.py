"""
Pydantic schemas for User.
"""

from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.common import BaseSchema, TrimmedStr
from app.schemas.tenant import TenantSummary


class UserBase(BaseSchema):
    """Base user schema."""

    name: TrimmedStr = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User email address")


class UserInvite(UserBase):
    """Schema for an admin inviting a user into their tenant."""

    password: str | None = Field(None, min_length=6, max_length=100, description="Initial password (generated when omitted)")
    role: str | None = Field(None, description="admin or member (default)")


class ProfileUpdate(BaseSchema):
    """Schema for updating the caller's own profile (all optional)."""

    name: TrimmedStr | None = Field(None, max_length=255)
    avatar: TrimmedStr | None = Field(None, max_length=2048)


class UserBrief(BaseSchema):
    """Author summary embedded in notes."""

    id: str
    name: str
    email: str


class UserRead(BaseSchema):
    """Schema for reading user data."""

    id: str
    name: str
    email: str
    avatar: str | None = None
    role: str
    is_verified: bool
    tenant_id: str
    tenant: TenantSummary | None = None
    created_at: datetime


class UserEnvelope(BaseSchema):
    """`{user}` response wrapper."""

    user: UserRead


class UserMessageResponse(BaseSchema):
    """`{message, user}` response wrapper."""

    message: str
    user: UserRead
