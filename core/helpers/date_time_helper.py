"""
date_time_helper.py

Helper functions for conversion and formatting of date and time values,
with UTC storage and Africa/Tunis display.

All features and modules should use ONLY these helpers for date/time logic.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

# Local timezone for display
LOCAL_TZ = ZoneInfo("Africa/Tunis")


def utc_now_iso() -> str:
    """
    Returns the current UTC time as an ISO8601 string (YYYY-MM-DDTHH:MM:SS+00:00).
    Used for logging and store records.
    """
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def utc_to_local_str(utc_iso: str) -> str:
    """
    Formats a UTC ISO8601 timestamp as a human-readable local string.

    :param utc_iso: UTC time as ISO string (from store/logs)
    :return: String in format "DD/MM/YYYY HH:MM" (local time)
    """
    dt_utc = datetime.fromisoformat(utc_iso)
    if dt_utc.tzinfo is None:
        dt_utc = dt_utc.replace(tzinfo=timezone.utc)
    return dt_utc.astimezone(LOCAL_TZ).strftime("%d/%m/%Y %H:%M")
