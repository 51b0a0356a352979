"""
session_manager.py

Owns the single "current session" slot (collection ``session`` of the store,
holding zero or one user snapshot). Login compares username and password by
plain equality. Observers are notified with UserSessionEvent on login, logout
and when the logged-in user's own record changes.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from core.common.entity_store import SESSION, EntityStore
from core.common.session_events import SessionEventType, UserSessionEvent
from core.exceptions.errors import ScoutsError, UnauthorizedError
from core.logging.logic.logger import Logger, logger as default_logger
from core.models.user import User
from usermanagement.logic.user_repository import UserRepository

log = logging.getLogger(__name__)

SessionObserver = Callable[[UserSessionEvent], None]


class SessionManager:
    """Resolves the current actor for every other service."""

    def __init__(
        self,
        store: EntityStore,
        users: Optional[UserRepository] = None,
        *,
        audit: Optional[Logger] = None,
    ) -> None:
        self._store = store
        self._users = users or UserRepository(store)
        self._audit = audit or default_logger
        self._observers: List[SessionObserver] = []

    # ------------------------------------------------------------------ #
    # Observers                                                          #
    # ------------------------------------------------------------------ #
    def subscribe(self, callback: SessionObserver) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: SessionObserver) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _emit(self, kind: SessionEventType, old: Optional[User], new: Optional[User], reason: str) -> None:
        event = UserSessionEvent(type=kind, old_user=old, new_user=new, reason=reason)
        for callback in list(self._observers):
            callback(event)

    # ------------------------------------------------------------------ #
    # Session slot                                                       #
    # ------------------------------------------------------------------ #
    def current_user(self) -> Optional[User]:
        records = self._store.get(SESSION)
        if not records:
            return None
        try:
            return User.from_record(records[0])
        except (ScoutsError, KeyError) as ex:
            log.warning("Discarding unreadable session snapshot: %s", ex)
            self._store.remove(SESSION)
            return None

    def current_username(self) -> Optional[str]:
        user = self.current_user()
        return user.username if user else None

    def is_logged_in(self) -> bool:
        return self.current_user() is not None

    def require_user(self) -> User:
        user = self.current_user()
        if user is None:
            raise UnauthorizedError("يجب تسجيل الدخول أولاً")
        return user

    # ------------------------------------------------------------------ #
    # Login / Logout                                                     #
    # ------------------------------------------------------------------ #
    def login(self, username: str, password: str) -> Optional[User]:
        """Return the matching user and open the session, or None."""
        user = self._users.verify_login(username, password)
        if user is None:
            self._audit.log(feature="User", event="LoginFailed", username=username,
                            level="WARNING", message="Invalid credentials")
            return None

        old = self.current_user()
        self._store.set(SESSION, [user.to_record()])
        self._audit.log(feature="User", event="LoginSuccess", user_id=user.id,
                        username=user.username, message="Login successful")
        self._emit("login", old, user, "login")
        return user

    def logout(self) -> None:
        """Clear the session slot (idempotent)."""
        old = self.current_user()
        self._store.remove(SESSION)
        if old is None:
            return
        self._audit.log(feature="User", event="Logout", user_id=old.id,
                        username=old.username, message="User logged out")
        self._emit("logout", old, None, "logout")

    def refresh(self, updated: User) -> bool:
        """
        Rewrite the snapshot if ``updated`` is the logged-in user.
        Returns True when the session changed.
        """
        old = self.current_user()
        if old is None or old.id != updated.id:
            return False
        self._store.set(SESSION, [updated.to_record()])
        self._emit("user_changed", old, updated, "profile_update")
        return True
