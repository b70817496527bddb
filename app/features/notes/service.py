"""
Note management business logic.

Every query is scoped to the caller's tenant; authorship and sharing are
then decided by app.core.permissions. Denials surface as 404 so callers
cannot probe for notes they may not see.
"""

import math

import structlog
from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import QuotaExceededError, ResourceNotFoundError, ValidationError
from app.core.metrics import note_quota_rejections_total, notes_created_total, notes_deleted_total
from app.core.performance import PerformanceMonitor
from app.core.permissions import NoteAction, can_access_note
from app.models.base import utcnow
from app.models.note import Note, NoteShare
from app.models.tenant import Tenant
from app.models.user import User
from app.schemas.common import PageInfo
from app.schemas.note import NoteCreate, NoteFilter, NoteUpdate, ShareEntry

logger = structlog.get_logger(__name__)

ALL_CATEGORIES = "All"
NOTE_NOT_FOUND = "Note not found"


def _like_pattern(term: str) -> str:
    """Substring LIKE pattern with the term's own wildcards escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def clamp_pagination(page: int, limit: int) -> tuple[int, int]:
    """Coerce page/limit to positive integers, capping the page size."""
    page = max(page, 1)
    limit = min(max(limit, 1), settings.max_page_size)
    return page, limit


class NoteService:
    """Note CRUD, toggles and quota enforcement."""

    @staticmethod
    async def _reload(db: AsyncSession, note_id: str) -> Note:
        """Fetch a note with its author and shares freshly loaded."""
        result = await db.execute(
            select(Note)
            .where(Note.id == note_id)
            .options(selectinload(Note.author), selectinload(Note.shared_with))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    @staticmethod
    async def _load_authorized(
        db: AsyncSession,
        note_id: str,
        current_user: User,
        action: NoteAction,
    ) -> Note:
        result = await db.execute(
            select(Note).where(
                and_(
                    Note.id == note_id,
                    Note.tenant_id == current_user.tenant_id,
                )
            )
        )
        note = result.scalar_one_or_none()
        if note is None:
            raise ResourceNotFoundError(NOTE_NOT_FOUND)

        decision = can_access_note(current_user, note, action)
        if not decision:
            logger.info(
                "note_access_denied",
                note_id=note_id,
                user_id=current_user.id,
                action=action.value,
                reason=decision.reason,
            )
            raise ResourceNotFoundError(NOTE_NOT_FOUND)
        return note

    @staticmethod
    async def count_active_notes(db: AsyncSession, tenant_id: str) -> int:
        """Non-archived notes in a tenant, across all authors."""
        result = await db.execute(
            select(func.count(Note.id)).where(
                and_(Note.tenant_id == tenant_id, Note.is_archived.is_(False))
            )
        )
        return result.scalar_one()

    @staticmethod
    async def list_notes(
        db: AsyncSession,
        current_user: User,
        filters: NoteFilter,
    ) -> tuple[list[Note], PageInfo]:
        """A page of the caller's own notes, pinned first then most recently updated."""
        page, limit = clamp_pagination(filters.page, filters.limit)

        async with PerformanceMonitor("list_notes", tenant_id=current_user.tenant_id):
            query = select(Note).where(
                and_(
                    Note.tenant_id == current_user.tenant_id,
                    Note.author_id == current_user.id,
                    Note.is_archived == filters.is_archived,
                )
            )

            if filters.category and filters.category != ALL_CATEGORIES:
                query = query.where(Note.category == filters.category)
            if filters.search:
                pattern = _like_pattern(filters.search)
                query = query.where(
                    or_(
                        Note.title.ilike(pattern, escape="\\"),
                        Note.content.ilike(pattern, escape="\\"),
                    )
                )

            total_result = await db.execute(select(func.count()).select_from(query.subquery()))
            total = total_result.scalar_one()

            query = (
                query.order_by(Note.is_pinned.desc(), Note.updated_at.desc(), Note.id)
                .offset((page - 1) * limit)
                .limit(limit)
            )
            result = await db.execute(query)
            notes = list(result.scalars().all())

        return notes, PageInfo(current=page, pages=math.ceil(total / limit), total=total)

    @staticmethod
    async def create_note(
        db: AsyncSession,
        current_user: User,
        data: NoteCreate,
    ) -> Note:
        """
        Create a note for the caller, enforcing the free-plan quota.

        The tenant row is locked before counting so concurrent creates for
        one tenant are serialized (where the backend supports row locks).
        """
        result = await db.execute(
            select(Tenant)
            .where(Tenant.id == current_user.tenant_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        tenant = result.scalar_one()

        if tenant.is_free:
            active = await NoteService.count_active_notes(db, tenant.id)
            if active >= settings.free_plan_note_limit:
                note_quota_rejections_total.inc()
                logger.info(
                    "note_quota_exceeded",
                    tenant_id=tenant.id,
                    active_notes=active,
                    limit=settings.free_plan_note_limit,
                )
                raise QuotaExceededError(
                    "Note limit reached for Free plan. Upgrade to Pro to add more notes.",
                    details={"limit": settings.free_plan_note_limit, "active": active},
                )

        note = Note(
            title=data.title,
            content=data.content,
            category=data.category,
            tags=data.tags,
            color=data.color,
            is_public=data.is_public,
            tenant_id=tenant.id,
            author_id=current_user.id,
        )
        db.add(note)
        await db.commit()

        notes_created_total.labels(plan=tenant.plan).inc()
        logger.info("note_created", note_id=note.id, tenant_id=tenant.id, author_id=current_user.id)

        return await NoteService._reload(db, note.id)

    @staticmethod
    async def get_note(db: AsyncSession, note_id: str, current_user: User) -> Note:
        """A note the caller authored or that is shared with them."""
        return await NoteService._load_authorized(db, note_id, current_user, NoteAction.READ)

    @staticmethod
    async def _replace_shares(
        db: AsyncSession,
        note: Note,
        entries: list[ShareEntry],
        current_user: User,
    ) -> None:
        # Last entry wins for repeated users
        wanted = {entry.user_id: entry.permission for entry in entries}

        if current_user.id in wanted:
            raise ValidationError("A note cannot be shared with its author")

        if wanted:
            result = await db.execute(
                select(User.id).where(
                    and_(
                        User.id.in_(list(wanted)),
                        User.tenant_id == current_user.tenant_id,
                    )
                )
            )
            found = set(result.scalars().all())
            missing = sorted(set(wanted) - found)
            if missing:
                raise ValidationError(
                    "Notes can only be shared with users of the same tenant",
                    details={"unknown_user_ids": missing},
                )

        # Reconcile in place so a kept user never hits the unique constraint
        for share in list(note.shared_with):
            if share.user_id in wanted:
                share.permission = wanted.pop(share.user_id)
            else:
                note.shared_with.remove(share)
        for user_id, permission in wanted.items():
            note.shared_with.append(NoteShare(user_id=user_id, permission=permission))

    @staticmethod
    async def update_note(
        db: AsyncSession,
        note_id: str,
        current_user: User,
        data: NoteUpdate,
    ) -> Note:
        """Partial update by the author. The quota is not re-checked."""
        note = await NoteService._load_authorized(db, note_id, current_user, NoteAction.WRITE)

        changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"shared_with"})
        for field, value in changes.items():
            setattr(note, field, value)

        if data.shared_with is not None:
            await NoteService._replace_shares(db, note, data.shared_with, current_user)

        note.updated_at = utcnow()
        await db.commit()

        logger.info("note_updated", note_id=note.id, fields=sorted(changes))
        return await NoteService._reload(db, note.id)

    @staticmethod
    async def delete_note(db: AsyncSession, note_id: str, current_user: User) -> None:
        """Hard delete by the author."""
        note = await NoteService._load_authorized(db, note_id, current_user, NoteAction.WRITE)

        await db.delete(note)
        await db.commit()

        notes_deleted_total.inc()
        logger.info("note_deleted", note_id=note_id, author_id=current_user.id)

    @staticmethod
    async def toggle_pin(db: AsyncSession, note_id: str, current_user: User) -> Note:
        note = await NoteService._load_authorized(db, note_id, current_user, NoteAction.WRITE)

        note.is_pinned = not note.is_pinned
        await db.commit()

        logger.info("note_pin_toggled", note_id=note.id, is_pinned=note.is_pinned)
        return await NoteService._reload(db, note.id)

    @staticmethod
    async def toggle_archive(db: AsyncSession, note_id: str, current_user: User) -> Note:
        note = await NoteService._load_authorized(db, note_id, current_user, NoteAction.WRITE)

        note.is_archived = not note.is_archived
        await db.commit()

        logger.info("note_archive_toggled", note_id=note.id, is_archived=note.is_archived)
        return await NoteService._reload(db, note.id)

    @staticmethod
    async def list_categories(db: AsyncSession, current_user: User) -> list[str]:
        """Distinct categories of the caller's own notes."""
        result = await db.execute(
            select(Note.category)
            .where(
                and_(
                    Note.tenant_id == current_user.tenant_id,
                    Note.author_id == current_user.id,
                )
            )
            .distinct()
            .order_by(Note.category)
        )
        return list(result.scalars().all())


# Singleton instance
note_service = NoteService()
