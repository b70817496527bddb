"""
Database models package.
"""

from app.core.database import Base
from app.models.base import BaseModel
from app.models.tenant import Tenant, TenantPlan
from app.models.user import User, UserRole
from app.models.note import Note, NoteShare, SharePermission

__all__ = [
    "Base",
    "BaseModel",
    "Tenant",
    "TenantPlan",
    "User",
    "UserRole",
    "Note",
    "NoteShare",
    "SharePermission",
]
