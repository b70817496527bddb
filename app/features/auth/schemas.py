"""
Authentication-specific schemas.
"""

from pydantic import EmailStr, Field

from app.schemas.common import BaseSchema, TrimmedStr
from app.schemas.user import UserBase, UserRead


class RegisterRequest(UserBase):
    """Self-registration into an existing tenant."""

    password: str = Field(..., min_length=6, max_length=100, description="User password")
    tenant_slug: TrimmedStr = Field(..., min_length=1, max_length=100, description="Slug of the tenant to join")
    role: str | None = Field(None, description="admin or member (default)")


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=1, description="User password")


class AuthResponse(BaseSchema):
    """Token plus the authenticated user."""

    message: str
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserRead
