"""
Authentication and user-management business logic.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import ValidationError
from app.core.metrics import auth_attempts_total
from app.core.security import (
    create_access_token,
    generate_password,
    hash_password,
    verify_password,
)
from app.features.auth.schemas import AuthResponse, RegisterRequest
from app.models.tenant import Tenant
from app.models.user import User, UserRole
from app.schemas.user import ProfileUpdate, UserInvite, UserRead

logger = structlog.get_logger(__name__)


def _normalize_role(role: str | None) -> str:
    """Only an explicit 'admin' request yields an admin."""
    return UserRole.ADMIN.value if role == UserRole.ADMIN.value else UserRole.MEMBER.value


class AuthService:
    """Authentication service with business logic."""

    @staticmethod
    async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
        result = await db.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def authenticate_user(
        db: AsyncSession,
        email: str,
        password: str,
    ) -> User | None:
        """
        Authenticate user by email and password.

        Returns:
            User object if authenticated, None otherwise
        """
        user = await AuthService.get_user_by_email(db, email)

        if not user:
            logger.warning("login_unknown_email", email=email)
            auth_attempts_total.labels(outcome="unknown_user").inc()
            return None

        if not verify_password(password, user.hashed_password):
            logger.warning("login_bad_password", user_id=user.id)
            auth_attempts_total.labels(outcome="bad_password").inc()
            return None

        auth_attempts_total.labels(outcome="success").inc()
        logger.info("login_succeeded", user_id=user.id, tenant_id=user.tenant_id)
        return user

    @staticmethod
    async def _create_user(
        db: AsyncSession,
        *,
        name: str,
        email: str,
        password: str,
        role: str | None,
        tenant: Tenant,
    ) -> User:
        if await AuthService.get_user_by_email(db, email):
            raise ValidationError("User already exists with this email")

        user = User(
            name=name,
            email=email.lower(),
            hashed_password=hash_password(password),
            role=_normalize_role(role),
            tenant_id=tenant.id,
            is_verified=False,
        )
        user.tenant = tenant

        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # A concurrent insert won the unique email index
            await db.rollback()
            logger.warning("user_email_conflict", email=email.lower())
            raise ValidationError("User already exists with this email")
        await db.refresh(user)
        return user

    @staticmethod
    async def register(
        db: AsyncSession,
        data: RegisterRequest,
    ) -> User:
        """
        Register a new user into an existing tenant.

        Raises:
            ValidationError: duplicate email or unknown tenant slug
        """
        result = await db.execute(
            select(Tenant).where(Tenant.slug == data.tenant_slug.lower())
        )
        tenant = result.scalar_one_or_none()
        if not tenant:
            logger.warning("register_unknown_tenant", tenant_slug=data.tenant_slug)
            raise ValidationError("Invalid tenant")

        user = await AuthService._create_user(
            db,
            name=data.name,
            email=data.email,
            password=data.password,
            role=data.role,
            tenant=tenant,
        )
        logger.info("user_registered", user_id=user.id, tenant_id=tenant.id, role=user.role)
        return user

    @staticmethod
    async def invite_user(
        db: AsyncSession,
        data: UserInvite,
        inviter: User,
    ) -> User:
        """Create a user in the inviter's tenant."""
        user = await AuthService._create_user(
            db,
            name=data.name,
            email=data.email,
            password=data.password or generate_password(),
            role=data.role,
            tenant=inviter.tenant,
        )
        logger.info(
            "user_invited",
            user_id=user.id,
            invited_by=inviter.id,
            tenant_id=inviter.tenant_id,
            role=user.role,
        )
        return user

    @staticmethod
    async def update_profile(
        db: AsyncSession,
        user: User,
        data: ProfileUpdate,
    ) -> User:
        """Apply non-blank profile fields."""
        if data.name:
            user.name = data.name
        if data.avatar:
            user.avatar = data.avatar

        await db.commit()
        await db.refresh(user)

        logger.info("profile_updated", user_id=user.id)
        return user

    @staticmethod
    def build_auth_response(user: User, message: str) -> AuthResponse:
        """Issue an access token for a user."""
        return AuthResponse(
            message=message,
            token=create_access_token(subject=user.id),
            token_type="bearer",
            expires_in=settings.access_token_expire_minutes * 60,
            user=UserRead.model_validate(user),
        )


# Singleton instance
auth_service = AuthService()
