"""
stats_service.py

Unit statistics on behalf of an acting user. A unit leader maintains exactly
one record (member count and leader roster); supervisors and commissioners
read them through the PermissionPolicy.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional, Union
from uuid import uuid4

from core.exceptions.errors import UnauthorizedError, ValidationFailedError
from core.helpers.date_time_helper import utc_now_iso
from core.logging.logic.logger import Logger, logger as default_logger
from core.models.user import ALL_SECTIONS, Scope, User
from core.policy import constraint_validator as constraints
from core.policy.permission_policy import PermissionPolicy
from unitstatistics.logic.stats_repository import StatsRepository
from unitstatistics.models.unit_stats import LeaderDetail, UnitStatistics

LeaderInput = Union[LeaderDetail, Mapping[str, Any]]


def _to_leader(item: LeaderInput) -> LeaderDetail:
    if isinstance(item, LeaderDetail):
        return item
    if not isinstance(item, Mapping):
        raise ValidationFailedError("بيانات القائد غير صالحة")
    record = {
        "id": item.get("id"),
        "name": item.get("name"),
        "trainingLevel": item.get("training_level", item.get("trainingLevel")),
        "role": item.get("unit_role", item.get("role")),
    }
    return LeaderDetail.from_record(record)


class StatsService:
    def __init__(
        self,
        stats: StatsRepository,
        *,
        policy: Optional[PermissionPolicy] = None,
        audit: Optional[Logger] = None,
    ) -> None:
        self._repo = stats
        self._policy = policy or PermissionPolicy()
        self._audit = audit or default_logger

    def get_own(self, actor: User) -> Optional[UnitStatistics]:
        return self._repo.get_by_leader(actor.id)

    def list_stats(self, actor: User, section_filter: Optional[Scope] = ALL_SECTIONS) -> List[UnitStatistics]:
        return self._policy.visible_stats(actor, self._repo.list_all(), section_filter)

    def save(self, actor: User, member_count: Any, leaders: Iterable[LeaderInput]) -> UnitStatistics:
        """
        Create or replace the actor's statistics record.

        The existing record id is kept so references stay valid; the unit
        name and section always follow the leader's current profile.
        """
        if not self._policy.can_edit_stats(actor, actor.id):
            raise UnauthorizedError()

        roster = tuple(_to_leader(item) for item in leaders)
        constraints.validate_leader_details(roster)
        count = constraints.validate_member_count(member_count)

        existing = self._repo.get_by_leader(actor.id)
        if existing is None:
            record = UnitStatistics(
                id=uuid4().hex,
                leader_id=actor.id,
                section=actor.section,  # type: ignore[arg-type]
                unit_name=actor.unit_display_name,
                member_count=count,
                leaders=roster,
            )
        else:
            record = replace(
                existing,
                section=actor.section,
                unit_name=actor.unit_display_name,
                member_count=count,
                leaders=roster,
                last_updated=utc_now_iso(),
            )

        self._repo.upsert(record)
        self._audit.log(feature="Stats", event="StatsSaved", user_id=actor.id,
                        username=actor.username, reference_id=record.id,
                        message=f"{count} members, {record.leader_count} leaders")
        return record

    def reset(self, actor: User) -> bool:
        """Delete the actor's record. Returns False when there was none."""
        if not self._policy.can_edit_stats(actor, actor.id):
            raise UnauthorizedError()
        removed = self._repo.delete_by_leader(actor.id)
        if removed:
            self._audit.log(feature="Stats", event="StatsReset", user_id=actor.id,
                            username=actor.username, message="Statistics reset")
        return removed
