"""
User management endpoints (tenant admins).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.auth.dependencies import CurrentAdmin
from app.features.auth.service import auth_service
from app.schemas.user import UserInvite, UserMessageResponse, UserRead

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/invite", response_model=UserMessageResponse, status_code=status.HTTP_201_CREATED)
async def invite_user(
    data: UserInvite,
    current_user: CurrentAdmin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserMessageResponse:
    """
    Invite a user into the admin's own tenant.

    A random password is generated when none is given.
    """
    user = await auth_service.invite_user(db, data, current_user)
    return UserMessageResponse(
        message="User invited successfully",
        user=UserRead.model_validate(user),
    )
