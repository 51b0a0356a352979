"""
stats_repository.py

Access to the ``stats`` collection. At most one record per leader id:
``upsert`` replaces the leader's record in place or appends it.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from core.common.entity_store import STATS, EntityStore
from core.exceptions.errors import ScoutsError
from unitstatistics.models.unit_stats import UnitStatistics

log = logging.getLogger(__name__)


class StatsRepository:
    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def list_all(self) -> List[UnitStatistics]:
        result: List[UnitStatistics] = []
        for record in self._store.get(STATS):
            try:
                result.append(UnitStatistics.from_record(record))
            except (ScoutsError, KeyError, ValueError, TypeError) as ex:
                log.warning("Skipping malformed statistics record %r: %s", record.get("id"), ex)
        return result

    def get_by_leader(self, leader_id: str) -> Optional[UnitStatistics]:
        return next((s for s in self.list_all() if s.leader_id == leader_id), None)

    def upsert(self, stats: UnitStatistics) -> None:
        records = self._store.get(STATS)
        for index, record in enumerate(records):
            if str(record.get("leaderId")) == stats.leader_id:
                records[index] = stats.to_record()
                break
        else:
            records.append(stats.to_record())
        self._store.set(STATS, records)

    def delete_by_leader(self, leader_id: str) -> bool:
        records = self._store.get(STATS)
        kept = [r for r in records if str(r.get("leaderId")) != leader_id]
        if len(kept) == len(records):
            return False
        self._store.set(STATS, kept)
        return True
