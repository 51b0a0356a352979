"""
core/common/session_events.py

Notifications sent by SessionManager to its subscribers whenever the logged-in
user appears, disappears or has their own record changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, Optional

from core.models.user import User

SessionEventType = Literal["login", "logout", "user_changed"]


@dataclass(frozen=True, slots=True)
class UserSessionEvent:
    type: SessionEventType
    old_user: Optional[User]
    new_user: Optional[User]
    reason: str = ""
    ts_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def user(self) -> Optional[User]:
        """The user the session holds after the event."""
        return self.new_user
