"""
core/common/db_interface.py
===========================

SQLite plumbing shared by the entity store and the audit logger.

• open_database(path)        connection with Row factory, parent folder created
• SQLiteRepository.connect() lazily opened connection, reused until close()
• SQLiteRepository.transaction() commit on success, rollback on error
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

MEMORY = ":memory:"


def open_database(db_path: Path | str, *, check_same_thread: bool = False) -> sqlite3.Connection:
    target = str(db_path)
    if target != MEMORY:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(target, check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    return conn


class SQLiteRepository:
    """Base for classes persisting into one SQLite file."""

    def __init__(self, db_path: Path | str, *, check_same_thread: bool = False) -> None:
        self.db_path = Path(db_path) if str(db_path) != MEMORY else db_path
        self._check_same_thread = check_same_thread
        self._conn: Optional[sqlite3.Connection] = None

    def connect(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = open_database(self.db_path, check_same_thread=self._check_same_thread)
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self.connect()
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        else:
            conn.commit()

    def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            conn.close()
