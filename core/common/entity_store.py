"""
core/common/entity_store.py
===========================

Generic persistent collection store used by every repository.

Contract: whole-collection read/replace keyed by collection name.

    get(name)            -> list of records in insertion order ([] if missing)
    set(name, records)   -> replace the whole collection
    remove(name)         -> drop the collection
    has(name)            -> True once the collection was written

Records are plain JSON-serialisable dicts. Callers treat every mutation as
atomic and re-fetch afterwards; stores never hand out their internal lists.
"""
from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence

from core.common.db_interface import SQLiteRepository

log = logging.getLogger(__name__)

Record = Dict[str, Any]

# Collection names
USERS = "users"
FILES = "files"
STATS = "stats"
SESSION = "session"


class EntityStore(Protocol):
    """Key-value store of named collections."""

    def get(self, name: str) -> List[Record]: ...

    def set(self, name: str, records: Sequence[Record]) -> None: ...

    def remove(self, name: str) -> None: ...

    def has(self, name: str) -> bool: ...


class InMemoryEntityStore:
    """Volatile store for tests and previews."""

    def __init__(self, initial: Dict[str, Sequence[Record]] | None = None) -> None:
        self._data: Dict[str, List[Record]] = {}
        for name, records in (initial or {}).items():
            self.set(name, records)

    def get(self, name: str) -> List[Record]:
        return copy.deepcopy(self._data.get(name, []))

    def set(self, name: str, records: Sequence[Record]) -> None:
        self._data[name] = copy.deepcopy(list(records))

    def remove(self, name: str) -> None:
        self._data.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self._data


class SQLiteEntityStore(SQLiteRepository):
    """Durable store: one row per collection, payload serialised as JSON."""

    def __init__(self, db_path: Path | str) -> None:
        super().__init__(db_path)
        self._ensure_table()

    def get(self, name: str) -> List[Record]:
        row = self.connect().execute(
            "SELECT payload FROM collections WHERE name = ?", (name,)
        ).fetchone()
        if row is None:
            return []
        try:
            data = json.loads(row["payload"])
        except json.JSONDecodeError:
            log.error("Collection '%s' holds invalid JSON, treating it as empty", name)
            return []
        return data if isinstance(data, list) else []

    def set(self, name: str, records: Sequence[Record]) -> None:
        payload = json.dumps(list(records), ensure_ascii=False)
        with self.transaction() as conn:
            conn.execute(
                """
                INSERT INTO collections (name, payload) VALUES (?, ?)
                ON CONFLICT(name) DO UPDATE SET payload = excluded.payload
                """,
                (name, payload),
            )

    def remove(self, name: str) -> None:
        with self.transaction() as conn:
            conn.execute("DELETE FROM collections WHERE name = ?", (name,))

    def has(self, name: str) -> bool:
        row = self.connect().execute(
            "SELECT 1 FROM collections WHERE name = ?", (name,)
        ).fetchone()
        return row is not None

    def _ensure_table(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS collections (
                    name TEXT PRIMARY KEY,
                    payload TEXT NOT NULL
                )
                """
            )


# ---------------------------------------------------------------------- #
#  Seeding                                                               #
# ---------------------------------------------------------------------- #
SEED_ADMIN_ID = "admin-1"


def seed_admin_record(username: str = "admin", password: str = "123") -> Record:
    """Bootstrap admin account created on first initialisation."""
    return {
        "id": SEED_ADMIN_ID,
        "username": username,
        "firstName": "مسؤول",
        "lastName": "النظام",
        "role": "ADMIN",
        "password": password,
        "section": None,
        "unitName": None,
        "email": None,
        "createdBy": "system",
    }


def seed_store(store: EntityStore, *, admin_username: str = "admin", admin_password: str = "123") -> bool:
    """
    Create the initial collections if they do not exist yet.

    Returns True if anything was written. Existing collections are untouched.
    """
    seeded = False
    if not store.has(USERS):
        store.set(USERS, [seed_admin_record(admin_username, admin_password)])
        log.info("Seeded bootstrap admin '%s'", admin_username)
        seeded = True
    for name in (FILES, STATS):
        if not store.has(name):
            store.set(name, [])
            seeded = True
    return seeded
