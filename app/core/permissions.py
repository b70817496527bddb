"""
Access policy.

Every authorization rule lives here as a pure function returning an
AccessDecision, so the policy can be read and tested on its own. Callers
translate a denial into the error that fits their endpoint (notes mask
denials as 404, admin endpoints answer 403).
"""

from dataclasses import dataclass
from enum import Enum

from app.models.note import Note
from app.models.user import User, UserRole


class NoteAction(str, Enum):
    """What a caller wants to do with a note."""
    READ = "read"
    WRITE = "write"  # update, delete, pin, archive, share


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a capability check."""

    allowed: bool
    reason: str

    def __bool__(self) -> bool:
        return self.allowed


def allow(reason: str) -> AccessDecision:
    return AccessDecision(True, reason)


def deny(reason: str) -> AccessDecision:
    return AccessDecision(False, reason)


def can_admin(user: User) -> AccessDecision:
    """Admin-only actions (invites, plan upgrades)."""
    if user.role == UserRole.ADMIN.value:
        return allow("user is a tenant admin")
    return deny("admin role required")


def can_manage_tenant(user: User, tenant_slug: str) -> AccessDecision:
    """Admin actions addressed at a tenant by slug."""
    decision = can_admin(user)
    if not decision:
        return decision
    if user.tenant is None or user.tenant.slug != tenant_slug.strip().lower():
        return deny("cross-tenant access")
    return allow("admin of this tenant")


def can_access_note(user: User, note: Note, action: NoteAction) -> AccessDecision:
    """
    Note visibility and mutation rights.

    The tenant must always match. Reads are open to the author and to
    users the note is shared with; writes are open to the author only,
    whatever permission a share entry records.
    """
    if note.tenant_id != user.tenant_id:
        return deny("note belongs to another tenant")

    if note.author_id == user.id:
        return allow("author")

    if action is NoteAction.READ and note.is_shared_with(user.id):
        return allow("shared with user")

    if action is NoteAction.WRITE:
        return deny("only the author may modify a note")
    return deny("note is not shared with user")
