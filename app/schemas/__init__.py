"""
Pydantic schemas package.
"""

from app.schemas.common import (
    BaseSchema,
    MessageResponse,
    PageInfo,
)
from app.schemas.note import (
    CategoryListResponse,
    NoteCreate,
    NoteFilter,
    NoteListResponse,
    NoteRead,
    NoteResponse,
    NoteUpdate,
    ShareEntry,
)
from app.schemas.tenant import TenantRead, TenantSummary, TenantUpgradeResponse, TenantUsage
from app.schemas.user import (
    ProfileUpdate,
    UserBrief,
    UserEnvelope,
    UserInvite,
    UserMessageResponse,
    UserRead,
)

__all__ = [
    # Common
    "BaseSchema",
    "MessageResponse",
    "PageInfo",
    # Note
    "CategoryListResponse",
    "NoteCreate",
    "NoteFilter",
    "NoteListResponse",
    "NoteRead",
    "NoteResponse",
    "NoteUpdate",
    "ShareEntry",
    # Tenant
    "TenantRead",
    "TenantSummary",
    "TenantUpgradeResponse",
    "TenantUsage",
    # User
    "ProfileUpdate",
    "UserBrief",
    "UserEnvelope",
    "UserInvite",
    "UserMessageResponse",
    "UserRead",
]
