"""
Unit tests for the access policy.

Uses transient model instances; no database involved.
"""

import pytest

from app.core.permissions import NoteAction, can_access_note, can_admin, can_manage_tenant
from app.models import Note, NoteShare, Tenant, User, UserRole


def make_tenant(slug: str) -> Tenant:
    return Tenant(id=f"t-{slug}", name=slug.title(), slug=slug, plan="free")


def make_user(user_id: str, tenant: Tenant, role: str = UserRole.MEMBER.value) -> User:
    user = User(id=user_id, name=user_id, email=f"{user_id}@example.com", role=role, tenant_id=tenant.id)
    user.tenant = tenant
    return user


def make_note(author: User, shared: list[tuple[User, str]] = ()) -> Note:
    note = Note(id="n-1", title="t", content="c", tenant_id=author.tenant_id, author_id=author.id)
    note.shared_with = [NoteShare(user_id=user.id, permission=perm) for user, perm in shared]
    return note


@pytest.fixture
def acme():
    return make_tenant("acme")


@pytest.fixture
def globex():
    return make_tenant("globex")


@pytest.mark.unit
class TestAdminPolicy:

    def test_admin_allowed(self, acme):
        assert can_admin(make_user("a", acme, UserRole.ADMIN.value)).allowed

    def test_member_denied(self, acme):
        decision = can_admin(make_user("m", acme))

        assert not decision
        assert decision.reason == "admin role required"

    def test_manage_own_tenant(self, acme):
        admin = make_user("a", acme, UserRole.ADMIN.value)

        assert can_manage_tenant(admin, "acme")
        assert can_manage_tenant(admin, "ACME")

    def test_manage_other_tenant_denied(self, acme):
        decision = can_manage_tenant(make_user("a", acme, UserRole.ADMIN.value), "globex")

        assert not decision
        assert decision.reason == "cross-tenant access"

    def test_member_cannot_manage_own_tenant(self, acme):
        assert not can_manage_tenant(make_user("m", acme), "acme")


@pytest.mark.unit
class TestNotePolicy:

    def test_author_can_read_and_write(self, acme):
        author = make_user("x", acme)
        note = make_note(author)

        assert can_access_note(author, note, NoteAction.READ)
        assert can_access_note(author, note, NoteAction.WRITE)

    def test_stranger_in_same_tenant_denied(self, acme):
        note = make_note(make_user("x", acme))
        stranger = make_user("y", acme)

        assert not can_access_note(stranger, note, NoteAction.READ)
        assert not can_access_note(stranger, note, NoteAction.WRITE)

    def test_shared_user_reads_only(self, acme):
        reader = make_user("y", acme)
        note = make_note(make_user("x", acme), shared=[(reader, "read")])

        assert can_access_note(reader, note, NoteAction.READ)
        assert not can_access_note(reader, note, NoteAction.WRITE)

    def test_write_share_grants_no_mutation(self, acme):
        writer = make_user("y", acme)
        note = make_note(make_user("x", acme), shared=[(writer, "write")])

        decision = can_access_note(writer, note, NoteAction.WRITE)

        assert not decision
        assert decision.reason == "only the author may modify a note"

    def test_cross_tenant_denied_even_for_author_id(self, acme, globex):
        author = make_user("x", acme)
        note = make_note(author)
        impostor = make_user("x", globex)

        decision = can_access_note(impostor, note, NoteAction.READ)

        assert not decision
        assert decision.reason == "note belongs to another tenant"
