"""Audit trail written by the services."""
from __future__ import annotations

import unittest

from core.common.app_context import AppContext
from core.common.entity_store import InMemoryEntityStore
from core.logging.logic.logger import logger


class TestAuditLogger(unittest.TestCase):
    def setUp(self) -> None:
        logger.clear_logs()
        self.ctx = AppContext(InMemoryEntityStore())

    def tearDown(self) -> None:
        self.ctx.session.logout()
        logger.clear_logs()

    def test_login_events_are_persisted(self) -> None:
        self.ctx.session.login("admin", "bad")
        self.ctx.session.login("admin", "123")

        failed = logger.query_logs(event="LoginFailed")
        self.assertEqual(len(failed), 1)
        self.assertEqual(failed[0].log_level, "WARNING")

        ok = logger.query_logs(feature="User", event="LoginSuccess")
        self.assertEqual(ok[0].user_id, "admin-1")
        self.assertIn("timestamp_utc", ok[0].as_dict())

    def test_username_taken_from_session(self) -> None:
        self.ctx.session.login("admin", "123")
        logger.log(feature="Test", event="Ping")
        entry = logger.query_logs(event="Ping")[0]
        self.assertEqual(entry.username, "admin")

    def test_report_events(self) -> None:
        admin = self.ctx.session.login("admin", "123")
        comm = self.ctx.user_manager.create_user(admin, {
            "username": "c", "password": "p", "first_name": "C", "last_name": "C", "section": "زهرات",
        })
        leader = self.ctx.user_manager.create_user(comm, {
            "username": "l", "password": "p", "first_name": "L", "last_name": "L",
        })
        report = self.ctx.reports.submit(leader, "Report")
        self.ctx.reports.approve(comm, report.id)

        events = [e.event for e in logger.query_logs(reference_id=report.id)]
        self.assertEqual(sorted(events), ["ReportApproved", "ReportSubmitted"])
        self.assertEqual(len(logger.fetch_logs(limit=2)), 2)


if __name__ == "__main__":
    unittest.main()
