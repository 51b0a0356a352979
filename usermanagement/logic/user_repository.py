"""
user_repository.py

Collection access for user data. All CRUD helpers required by UserManager
and SessionManager are exposed here.

Records live in the ``users`` collection of the injected EntityStore. Every
write replaces the whole collection; every read re-fetches it.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.common.entity_store import USERS, EntityStore
from core.exceptions.errors import RecordNotFoundError, ScoutsError
from core.models.user import User

log = logging.getLogger(__name__)


class UserRepository:
    """Complete CRUD layer for `User` entities."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    # ------------------------------------------------------------------ #
    # Query helpers                                                      #
    # ------------------------------------------------------------------ #
    def get_all_users(self) -> List[User]:
        users: List[User] = []
        for record in self._store.get(USERS):
            try:
                users.append(User.from_record(record))
            except (ScoutsError, KeyError) as ex:
                log.warning("Skipping malformed user record %r: %s", record.get("id"), ex)
        return users

    def get_user(self, username: str) -> Optional[User]:
        return next((u for u in self.get_all_users() if u.username == username), None)

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.get_all_users() if u.id == user_id), None)

    # ------------------------------------------------------------------ #
    # Authentication                                                     #
    # ------------------------------------------------------------------ #
    def verify_login(self, username: str, password: str) -> Optional[User]:
        """Plain equality of username and password."""
        return next(
            (u for u in self.get_all_users() if u.username == username and u.password == password),
            None,
        )

    # ------------------------------------------------------------------ #
    # Write                                                              #
    # ------------------------------------------------------------------ #
    def add(self, user: User) -> None:
        records = self._store.get(USERS)
        records.append(user.to_record())
        self._store.set(USERS, records)

    def replace(self, user: User) -> None:
        records = self._store.get(USERS)
        for index, record in enumerate(records):
            if str(record.get("id")) == user.id:
                records[index] = user.to_record()
                self._store.set(USERS, records)
                return
        raise RecordNotFoundError("user", user.id)

    def delete(self, user_id: str) -> bool:
        records = self._store.get(USERS)
        kept = [r for r in records if str(r.get("id")) != user_id]
        if len(kept) == len(records):
            return False
        self._store.set(USERS, kept)
        return True
