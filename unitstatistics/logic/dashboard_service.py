"""
dashboard_service.py

Landing-page figures: member and leader totals over the statistics visible to
the actor, the number of uploaded files, and members per section.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from core.models.user import ScoutSection, User, UserRole
from documents.logic.document_repository import DocumentRepository
from unitstatistics.logic.stats_repository import StatsRepository


@dataclass(frozen=True)
class DashboardSummary:
    total_members: int
    total_leaders: int
    total_files: int


class DashboardService:
    def __init__(self, stats: StatsRepository, documents: DocumentRepository) -> None:
        self._stats = stats
        self._documents = documents

    def summary(self, actor: User) -> DashboardSummary:
        records = self._stats.list_all()
        if actor.role is UserRole.COMMISSIONER and actor.section is not None:
            records = [r for r in records if r.section == actor.section]
        return DashboardSummary(
            total_members=sum(r.member_count for r in records),
            total_leaders=sum(r.leader_count for r in records),
            total_files=self._documents.count(),
        )

    def members_per_section(self) -> Dict[ScoutSection, int]:
        """Every section in declaration order, zero when no unit reported."""
        totals = {section: 0 for section in ScoutSection}
        for record in self._stats.list_all():
            totals[record.section] += record.member_count
        return totals
