"""
log_entry.py

One row of the audit trail.

Timestamps are stored as UTC ISO strings; ``as_dict`` adds the local
(Africa/Tunis) rendering used by exports and views.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple

from core.helpers.date_time_helper import utc_to_local_str

# Column order of the ``logs`` table without the autoincrement id.
COLUMNS = (
    "timestamp",
    "user_id",
    "username",
    "feature",
    "event",
    "reference_id",
    "message",
    "log_level",
)


@dataclass(frozen=True)
class LogEntry:
    feature: str
    event: str
    user_id: Optional[str] = None
    username: Optional[str] = None
    reference_id: Optional[str] = None
    message: Optional[str] = None
    log_level: str = "INFO"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LogEntry":
        raw_ts = row["timestamp"]
        ts = datetime.fromisoformat(raw_ts) if isinstance(raw_ts, str) else raw_ts
        return cls(
            id=row["id"],
            timestamp=ts,
            feature=row["feature"] or "",
            event=row["event"] or "",
            user_id=row["user_id"],
            username=row["username"],
            reference_id=row["reference_id"],
            message=row["message"],
            log_level=row["log_level"] or "INFO",
        )

    def to_row(self) -> Tuple[Any, ...]:
        """Values in ``COLUMNS`` order for an INSERT."""
        values = asdict(self)
        values["timestamp"] = self.timestamp.isoformat()
        return tuple(values[name] for name in COLUMNS)

    def as_dict(self) -> dict:
        utc_iso = self.timestamp.replace(microsecond=0).isoformat()
        data = asdict(self)
        data["timestamp_utc"] = utc_iso
        data["timestamp"] = utc_to_local_str(utc_iso)
        return data
