"""
Authentication endpoints.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.features.auth.dependencies import CurrentUser
from app.features.auth.schemas import AuthResponse, LoginRequest, RegisterRequest
from app.features.auth.service import auth_service
from app.schemas.common import MessageResponse
from app.schemas.user import ProfileUpdate, UserEnvelope, UserMessageResponse, UserRead

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """
    Register a new user into an existing tenant.

    Fails with 400 on a duplicate email or an unknown tenant slug.
    """
    user = await auth_service.register(db, data)
    return auth_service.build_auth_response(user, "User registered successfully")


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Exchange email and password for an access token."""
    user = await auth_service.authenticate_user(
        db,
        email=data.email,
        password=data.password,
    )

    if not user:
        raise AuthenticationError("Invalid credentials")

    return auth_service.build_auth_response(user, "Login successful")


@router.get("/me", response_model=UserEnvelope)
async def get_current_user_info(
    current_user: CurrentUser,
) -> UserEnvelope:
    """Get the authenticated user with their tenant."""
    return UserEnvelope(user=UserRead.model_validate(current_user))


@router.put("/profile", response_model=UserMessageResponse)
async def update_profile(
    data: ProfileUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserMessageResponse:
    """Update name and/or avatar; blank values are ignored."""
    user = await auth_service.update_profile(db, current_user, data)
    return UserMessageResponse(
        message="Profile updated successfully",
        user=UserRead.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: CurrentUser,
) -> MessageResponse:
    """
    Logout endpoint.

    Tokens are stateless; the client discards its copy.
    """
    logger.info("user_logged_out", user_id=current_user.id)
    return MessageResponse(message="Logout successful")
