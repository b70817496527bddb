"""
Authentication dependencies for dependency injection.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.context import set_request_context
from app.core.database import get_db
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.permissions import can_admin
from app.core.security import decode_token
from app.models.user import User

logger = structlog.get_logger(__name__)

# Security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Resolve the bearer token to a user (with tenant loaded).

    Records the user and tenant ids on the request state and in the
    logging context.
    """
    if not credentials:
        raise AuthenticationError("Authentication required")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type. Use access token.")

    user_id: str | None = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if not user:
        logger.warning("token_user_not_found", user_id=user_id)
        raise AuthenticationError("User not found")

    request.state.user_id = user.id
    request.state.tenant_id = user.tenant_id
    set_request_context(user_id=user.id, tenant_id=user.tenant_id)

    return user


async def get_current_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Require the admin role within the caller's tenant."""
    decision = can_admin(current_user)
    if not decision:
        logger.warning("admin_access_denied", user_id=current_user.id, reason=decision.reason)
        raise AuthorizationError("Admin access required")
    return current_user


# Type aliases for cleaner code
CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentAdmin = Annotated[User, Depends(get_current_admin)]
