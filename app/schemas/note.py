"""
Pydantic schemas for Note.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from app.models.note import (
    CONTENT_MAX_LENGTH,
    DEFAULT_CATEGORY,
    DEFAULT_COLOR,
    TITLE_MAX_LENGTH,
)
from app.schemas.common import BaseSchema, PageInfo, TrimmedStr
from app.schemas.user import UserBrief

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def _clean_tags(tags: list[str]) -> list[str]:
    """Strip tags, drop blanks and duplicates (first occurrence wins)."""
    seen: dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


def _require_text(value: str) -> str:
    """Note bodies keep their whitespace but may not be blank."""
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class ShareEntry(BaseSchema):
    """A sharing entry as supplied by the author."""

    user_id: str = Field(..., description="User to share with (same tenant)")
    permission: Literal["read", "write"] = "read"


class ShareRead(BaseSchema):
    """A sharing entry as returned to clients."""

    user_id: str
    permission: str


class NoteCreate(BaseSchema):
    """
    Schema for note creation.

    Author and tenant are never accepted from the client; unknown keys
    such as `author` or `tenant` are dropped.
    """

    title: TrimmedStr = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)
    category: TrimmedStr = Field(DEFAULT_CATEGORY, max_length=100)
    tags: list[str] = Field(default_factory=list)
    color: str = Field(DEFAULT_COLOR, pattern=HEX_COLOR_PATTERN)
    is_public: bool = False

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        return _require_text(v)

    @field_validator("category")
    @classmethod
    def default_blank_category(cls, v: str) -> str:
        return v or DEFAULT_CATEGORY

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class NoteUpdate(BaseSchema):
    """Partial update; omitted (or null) fields are left unchanged."""

    title: TrimmedStr | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = Field(None, min_length=1, max_length=CONTENT_MAX_LENGTH)
    category: TrimmedStr | None = Field(None, max_length=100)
    tags: list[str] | None = None
    color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)
    is_public: bool | None = None
    shared_with: list[ShareEntry] | None = Field(
        None, description="Replaces the whole sharing list when supplied"
    )

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str | None) -> str | None:
        return None if v is None else _require_text(v)

    @field_validator("category")
    @classmethod
    def default_blank_category(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v or DEFAULT_CATEGORY

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _clean_tags(v)


class NoteRead(BaseSchema):
    """Schema for reading note data."""

    id: str
    title: str
    content: str
    category: str
    tags: list[str]
    color: str
    is_pinned: bool
    is_archived: bool
    is_public: bool
    tenant_id: str
    author_id: str
    author: UserBrief | None = None
    shared_with: list[ShareRead] = []
    created_at: datetime
    updated_at: datetime


class NoteResponse(BaseSchema):
    """`{message, note}` response wrapper."""

    message: str
    note: NoteRead


class NoteListResponse(BaseSchema):
    """A page of notes plus pagination info."""

    notes: list[NoteRead]
    pagination: PageInfo


class NoteFilter(BaseSchema):
    """Query parameters for listing notes."""

    page: int = 1
    limit: int = 10
    category: TrimmedStr | None = None
    search: TrimmedStr | None = Field(None, max_length=200)
    is_archived: bool = False


class CategoryListResponse(BaseSchema):
    """Distinct categories used by the caller's notes."""

    categories: list[str]
