"""Data-level invariants checked before any store mutation.

Pure functions over already loaded records. Each raises the matching domain
error from :mod:`core.exceptions.errors` and returns ``None`` on success.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from core.exceptions.errors import (
    DuplicateCommissionerForSectionError,
    DuplicateUsernameError,
    ValidationFailedError,
)
from core.models.user import ScoutSection, User, UserRole
from unitstatistics.models.unit_stats import LeaderDetail

REQUIRED_USER_FIELDS = ("username", "password", "first_name", "last_name")


def ensure_unique_username(users: Iterable[User], username: str, *, exclude_id: Optional[str] = None) -> None:
    for user in users:
        if user.id != exclude_id and user.username == username:
            raise DuplicateUsernameError(username)


def ensure_single_commissioner(
    users: Iterable[User], section: ScoutSection, *, exclude_id: Optional[str] = None
) -> None:
    """At most one commissioner per section, region-wide."""
    for user in users:
        if user.id == exclude_id:
            continue
        if user.role is UserRole.COMMISSIONER and user.section == section:
            raise DuplicateCommissionerForSectionError(section)


def validate_user_fields(data: Mapping[str, Any]) -> None:
    missing = [name for name in REQUIRED_USER_FIELDS if not str(data.get(name) or "").strip()]
    if missing:
        raise ValidationFailedError()


def validate_leader_details(leaders: Iterable[LeaderDetail]) -> None:
    if any(not leader.name.strip() for leader in leaders):
        raise ValidationFailedError("يرجى إدخال أسماء جميع القادة")


def validate_member_count(count: Any) -> int:
    """Return the count as int, rejecting negatives and non-numbers."""
    if isinstance(count, float) and not count.is_integer():
        raise ValidationFailedError("عدد الأفراد غير صالح")
    try:
        value = int(count)
    except (TypeError, ValueError):
        raise ValidationFailedError("عدد الأفراد غير صالح") from None
    if value < 0:
        raise ValidationFailedError("عدد الأفراد غير صالح")
    return value
