"""
core/logging/logic/logger.py
============================

Audit trail of business events, persisted in the SQLite file configured as
``[Database] logging``.

Services log through the module-level ``logger``:

    logger.log(feature="Reports", event="ReportApproved", user_id=..., username=...)

Without an explicit username the registered provider (the session, wired by
AppContext) is asked. ``[Logging] audit_enabled = false`` keeps entries in
memory only.
"""

from __future__ import annotations

import threading
from typing import Callable, List, Optional

from core.common.db_interface import SQLiteRepository
from core.config.config_service import config_service
from core.logging.models.log_entry import COLUMNS, LogEntry

UsernameProvider = Callable[[], Optional[str]]

_FILTERS = {
    "user_id": "user_id",
    "username": "username",
    "feature": "feature",
    "event": "event",
    "reference_id": "reference_id",
    "level": "log_level",
}


class Logger(SQLiteRepository):
    """Process-wide audit logger (one instance, see ``logger`` below)."""

    _instance: "Logger | None" = None
    _instance_lock = threading.Lock()

    def __new__(cls) -> "Logger":
        with cls._instance_lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._ready = False
                cls._instance = instance
        return cls._instance

    def __init__(self) -> None:
        if self._ready:
            return
        super().__init__(config_service.database.logging)
        self._ready = True
        self._lock = threading.Lock()
        self.enabled: bool = config_service.logging.audit_enabled
        self.entries: List[LogEntry] = []
        self._username_provider: Optional[UsernameProvider] = None
        self._create_table()

    def set_username_provider(self, provider: Optional[UsernameProvider]) -> None:
        self._username_provider = provider

    # ------------------------------------------------------------------ #
    def log(
        self,
        feature: str,
        event: str,
        *,
        user_id: Optional[str] = None,
        username: Optional[str] = None,
        level: str = "INFO",
        reference_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> LogEntry:
        if username is None and self._username_provider is not None:
            username = self._username_provider()
        entry = LogEntry(
            feature=feature,
            event=event,
            user_id=user_id,
            username=username or "unknown",
            reference_id=reference_id,
            message=message,
            log_level=level,
        )
        self.entries.append(entry)
        if self.enabled:
            placeholders = ", ".join("?" for _ in COLUMNS)
            with self._lock, self.transaction() as conn:
                conn.execute(
                    f"INSERT INTO logs ({', '.join(COLUMNS)}) VALUES ({placeholders})",
                    entry.to_row(),
                )
        return entry

    # ------------------------------------------------------------------ #
    def query_logs(self, *, limit: int = 1_000, **filters: Optional[str]) -> List[LogEntry]:
        """
        Newest first. Filters: user_id, username, feature, event,
        reference_id, level. ``None`` values are ignored.
        """
        unknown = set(filters) - set(_FILTERS)
        if unknown:
            raise TypeError(f"Unknown log filter(s): {', '.join(sorted(unknown))}")

        clauses = [f"{_FILTERS[name]} = ?" for name, value in filters.items() if value is not None]
        params: list[object] = [value for value in filters.values() if value is not None]
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        sql = f"SELECT * FROM logs {where} ORDER BY timestamp DESC, id DESC LIMIT ?"
        with self._lock:
            rows = self.connect().execute(sql, (*params, limit)).fetchall()
        return [LogEntry.from_row(row) for row in rows]

    def fetch_logs(self, limit: int = 100) -> List[LogEntry]:
        return self.query_logs(limit=limit)

    def clear_logs(self) -> None:
        with self._lock, self.transaction() as conn:
            conn.execute("DELETE FROM logs")
        self.entries.clear()

    # ------------------------------------------------------------------ #
    def _create_table(self) -> None:
        with self._lock, self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    user_id TEXT,
                    username TEXT,
                    feature TEXT NOT NULL,
                    event TEXT NOT NULL,
                    reference_id TEXT,
                    message TEXT,
                    log_level TEXT NOT NULL DEFAULT 'INFO'
                )
                """
            )


logger: Logger = Logger()
