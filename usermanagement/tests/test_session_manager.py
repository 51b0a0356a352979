"""Session slot handling."""
from __future__ import annotations

from dataclasses import replace

from core.common.entity_store import SESSION, USERS, InMemoryEntityStore, seed_store
from core.models.user import User, UserRole
from usermanagement.logic.session_manager import SessionManager
from usermanagement.logic.user_repository import UserRepository


def _session() -> tuple[InMemoryEntityStore, SessionManager]:
    store = InMemoryEntityStore()
    seed_store(store)
    return store, SessionManager(store)


def test_login_writes_single_snapshot() -> None:
    store, session = _session()
    user = session.login("admin", "123")
    assert user is not None and user.role is UserRole.ADMIN
    assert len(store.get(SESSION)) == 1
    assert session.is_logged_in()
    assert session.current_username() == "admin"


def test_password_compared_exactly() -> None:
    _, session = _session()
    assert session.login("admin", "123 ") is None
    assert session.login("Admin", "123") is None


def test_refresh_ignores_other_users() -> None:
    _, session = _session()
    session.login("admin", "123")
    stranger = User(id="x", username="x", first_name="X", last_name="Y", role=UserRole.PROGRAM_HEAD)
    assert session.refresh(stranger) is False
    assert session.current_user().username == "admin"


def test_refresh_rewrites_own_snapshot() -> None:
    _, session = _session()
    admin = session.login("admin", "123")
    assert session.refresh(replace(admin, email="admin@example.org")) is True
    assert session.current_user().email == "admin@example.org"


def test_unreadable_snapshot_is_discarded() -> None:
    store, session = _session()
    store.set(SESSION, [{"id": "u", "username": "u", "role": "NOBODY"}])
    assert session.current_user() is None
    assert not store.has(SESSION)


def test_incomplete_user_record_is_skipped() -> None:
    store, session = _session()
    store.set(USERS, store.get(USERS) + [{"id": "broken"}])

    assert [u.username for u in UserRepository(store).get_all_users()] == ["admin"]
    assert session.login("admin", "123") is not None
