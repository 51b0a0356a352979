"""Unit statistics: upsert per leader, roster validation, leader count."""
from __future__ import annotations

import unittest

from core.common.entity_store import STATS, InMemoryEntityStore
from core.exceptions.errors import UnauthorizedError, ValidationFailedError
from core.models.user import ScoutSection, User, UserRole
from unitstatistics.logic.stats_repository import StatsRepository
from unitstatistics.logic.stats_service import StatsService
from unitstatistics.models.unit_stats import LeaderDetail, LeaderUnitRole, TrainingLevel, UnitStatistics

LEADER = User(id="l1", username="leader", first_name="Amel", last_name="T",
              role=UserRole.UNIT_LEADER, section=ScoutSection.KACHAFA, unit_name="Unit 7")
COMM = User(id="c1", username="comm", first_name="C", last_name="C",
            role=UserRole.COMMISSIONER, section=ScoutSection.KACHAFA)


class TestStatsService(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryEntityStore()
        self.service = StatsService(StatsRepository(self.store))

    def test_second_save_replaces_record(self) -> None:
        first = self.service.save(LEADER, 20, [LeaderDetail("Ali")])
        second = self.service.save(LEADER, 25, [LeaderDetail("Ali"), LeaderDetail("Sara")])

        records = self.store.get(STATS)
        self.assertEqual(len(records), 1)
        self.assertEqual(second.id, first.id)
        self.assertEqual(records[0]["memberCount"], 25)

    def test_leader_count_follows_roster(self) -> None:
        saved = self.service.save(LEADER, "12", [
            {"name": "Ali", "training_level": "WOOD_BADGE", "unit_role": "UNIT_LEADER"},
            {"name": "Sara", "trainingLevel": "تمهيدي", "role": "مساعد قائد وحدة"},
            {"name": "Omar", "trainingLevel": "custom level"},
        ])
        self.assertEqual(saved.member_count, 12)
        self.assertEqual(saved.leader_count, 3)
        self.assertNotIn("leaderCount", self.store.get(STATS)[0])

        own = self.service.get_own(LEADER)
        self.assertEqual(own.leader_count, 3)
        self.assertIs(own.leaders[0].training_level, TrainingLevel.WOOD_BADGE)
        self.assertIs(own.leaders[1].unit_role, LeaderUnitRole.ASSISTANT)
        self.assertEqual(own.leaders[2].training_level, "custom level")
        self.assertEqual(own.unit_name, "Unit 7")

    def test_blank_leader_name_rejected(self) -> None:
        with self.assertRaises(ValidationFailedError):
            self.service.save(LEADER, 10, [LeaderDetail("Ali"), LeaderDetail("  ")])
        self.assertEqual(self.store.get(STATS), [])

    def test_negative_member_count_rejected(self) -> None:
        for bad in (-1, "many", None):
            with self.assertRaises(ValidationFailedError):
                self.service.save(LEADER, bad, [])

    def test_fractional_member_count_rejected(self) -> None:
        with self.assertRaises(ValidationFailedError):
            self.service.save(LEADER, 3.9, [])
        self.assertEqual(self.store.get(STATS), [])
        self.assertEqual(self.service.save(LEADER, 4.0, []).member_count, 4)

    def test_leader_entry_must_be_a_mapping(self) -> None:
        with self.assertRaises(ValidationFailedError):
            self.service.save(LEADER, 3, ["Ali"])
        self.assertEqual(self.store.get(STATS), [])

    def test_only_leaders_write(self) -> None:
        with self.assertRaises(UnauthorizedError):
            self.service.save(COMM, 10, [])
        with self.assertRaises(UnauthorizedError):
            self.service.reset(COMM)

    def test_reset(self) -> None:
        self.service.save(LEADER, 10, [])
        self.assertTrue(self.service.reset(LEADER))
        self.assertIsNone(self.service.get_own(LEADER))
        self.assertFalse(self.service.reset(LEADER))

    def test_list_stats_for_commissioner(self) -> None:
        self.service.save(LEADER, 10, [])
        foreign = UnitStatistics(id="s9", leader_id="l9", section=ScoutSection.ASHBAL, unit_name="Other")
        StatsRepository(self.store).upsert(foreign)
        self.assertEqual([s.leader_id for s in self.service.list_stats(COMM)], ["l1"])


if __name__ == "__main__":
    unittest.main()
