"""
Note model and its sharing entries.
"""

from enum import Enum

from sqlalchemy import JSON, Boolean, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

DEFAULT_CATEGORY = "General"
DEFAULT_COLOR = "#ffffff"
TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 10000


class SharePermission(str, Enum):
    """Permission recorded on a share entry."""
    READ = "read"
    WRITE = "write"


class Note(BaseModel):
    """
    A short text note.

    Every note belongs to exactly one tenant and one author. Only the
    author may mutate it; share entries grant read visibility.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        comment="Note title"
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body"
    )

    category: Mapped[str] = mapped_column(
        String(100),
        default=DEFAULT_CATEGORY,
        nullable=False,
        index=True,
        comment="Free-text category"
    )

    tags: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
        comment="Tag strings"
    )

    color: Mapped[str] = mapped_column(
        String(7),
        default=DEFAULT_COLOR,
        nullable=False,
        comment="Hex color (#RRGGBB)"
    )

    # Flags
    is_pinned: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Surfaced first in default sort order"
    )

    is_archived: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
        comment="Hidden from the active view; not counted against quota"
    )

    is_public: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Public flag"
    )

    # Ownership & tenant isolation
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Tenant ID"
    )

    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Authoring user"
    )

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant")
    author: Mapped["User"] = relationship("User", lazy="selectin")
    shared_with: Mapped[list["NoteShare"]] = relationship(
        "NoteShare",
        back_populates="note",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_note_tenant_author_updated", "tenant_id", "author_id", "updated_at"),
        Index("idx_note_tenant_archived", "tenant_id", "is_archived"),
    )

    def is_shared_with(self, user_id: str) -> bool:
        return any(share.user_id == user_id for share in self.shared_with)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"


class NoteShare(BaseModel):
    """A (note, user, permission) sharing entry."""

    __tablename__ = "note_shares"

    note_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    permission: Mapped[str] = mapped_column(
        String(10),
        default=SharePermission.READ.value,
        nullable=False,
        comment="read|write (write is recorded but grants no mutation)"
    )

    note: Mapped["Note"] = relationship("Note", back_populates="shared_with")

    __table_args__ = (
        UniqueConstraint("note_id", "user_id", name="uq_note_share_user"),
    )

    def __repr__(self) -> str:
        return f"<NoteShare(note_id={self.note_id}, user_id={self.user_id})>"
