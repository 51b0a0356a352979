"""
core/tests/test_app_context_session.py

Basic unit tests for the AppContext session API and observer mechanism.
Uses unittest to avoid external test dependencies.
"""

from __future__ import annotations

import unittest

from core.common.app_context import AppContext
from core.common.entity_store import InMemoryEntityStore
from core.common.session_events import UserSessionEvent
from core.exceptions.errors import UnauthorizedError


class TestAppContextSession(unittest.TestCase):
    def setUp(self) -> None:
        self.ctx = AppContext(InMemoryEntityStore())
        self._events: list[UserSessionEvent] = []

        def _cb(ev: UserSessionEvent) -> None:
            self._events.append(ev)

        self._cb = _cb
        self.ctx.subscribe_user_session(self._cb)

    def tearDown(self) -> None:
        self.ctx.unsubscribe_user_session(self._cb)
        self.ctx.session.logout()

    def test_login_event_emitted(self) -> None:
        user = self.ctx.session.login("admin", "123")
        self.assertIsNotNone(user)
        self.assertEqual(self.ctx.current_user(), user)
        self.assertTrue(self._events)
        ev = self._events[-1]
        self.assertEqual(ev.type, "login")
        self.assertIsNone(ev.old_user)
        self.assertEqual(ev.new_user.username, "admin")
        self.assertIs(ev.user, ev.new_user)

    def test_wrong_password_keeps_session_empty(self) -> None:
        self.assertIsNone(self.ctx.session.login("admin", "wrong"))
        self.assertIsNone(self.ctx.current_user())
        self.assertEqual(self._events, [])

    def test_logout_event_emitted(self) -> None:
        self.ctx.session.login("admin", "123")
        self.ctx.session.logout()
        self.assertIsNone(self.ctx.current_user())
        ev = self._events[-1]
        self.assertEqual(ev.type, "logout")
        self.assertIsNotNone(ev.old_user)
        self.assertIsNone(ev.new_user)

    def test_logout_is_idempotent(self) -> None:
        self.ctx.session.logout()
        self.ctx.session.logout()
        self.assertEqual(self._events, [])

    def test_unsubscribe_stops_events(self) -> None:
        self.ctx.unsubscribe_user_session(self._cb)
        self._events.clear()
        self.ctx.session.login("admin", "123")
        self.assertEqual(self._events, [])

    def test_require_user_when_logged_out(self) -> None:
        with self.assertRaises(UnauthorizedError):
            self.ctx.require_user()

    def test_navigation_follows_role(self) -> None:
        self.ctx.session.login("admin", "123")
        ids = [entry.id for entry in self.ctx.navigation()]
        self.assertEqual(ids, ["dashboard", "users", "kit", "unit-reports", "stats"])

    def test_registry_exposes_services(self) -> None:
        self.assertIs(self.ctx.get_service("reports"), self.ctx.reports)
        marker = object()
        self.ctx.register_service("extra", marker)
        self.assertIs(self.ctx.get_service("extra"), marker)


if __name__ == "__main__":
    unittest.main()
