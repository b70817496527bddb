"""
Base model with common fields for all entities.

Provides:
- Primary key (UUID string)
- Timestamps (created_at, updated_at)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """
    Abstract base model for all database tables.

    Provides common fields:
    - id: UUID primary key
    - created_at: Timestamp when record was created
    - updated_at: Timestamp when record was last modified

    Timestamps are set client-side so that they are available right after
    a flush without another round trip, and keep sub-second precision on
    every backend (the notes list sorts on updated_at).
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Unique identifier"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when record was last updated"
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
