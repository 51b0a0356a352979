"""
unit_stats.py

Membership statistics of one unit, owned by its unit leader.
The number of leaders is never stored: it is always ``len(leaders)``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union
from uuid import uuid4

from core.helpers.date_time_helper import utc_now_iso
from core.models.user import ScoutSection


class TrainingLevel(Enum):
    NONE = "بدون تأهيل"
    PRELIMINARY = "تمهيدي"
    WOOD_BADGE = "شارة خشبية"
    ASSISTANT_TRAINER = "مساعد قائد تدريب"
    LEADER_TRAINER = "قائد تدريب"


class LeaderUnitRole(Enum):
    UNIT_LEADER = "قائد وحدة"
    ASSISTANT = "مساعد قائد وحدة"
    AIDE = "معين"
    TRAINING = "تحت التدريب"


def _parse_label(enum_cls: type[Enum], raw: Any) -> Union[Enum, str]:
    """Known labels become enum members, anything else is kept as free text."""
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw or "").strip()
    for member in enum_cls:
        if member.value == text or member.name == text.upper():
            return member
    return text


def _label(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


@dataclass(frozen=True, slots=True)
class LeaderDetail:
    name: str
    training_level: Union[TrainingLevel, str] = TrainingLevel.PRELIMINARY
    unit_role: Union[LeaderUnitRole, str] = LeaderUnitRole.ASSISTANT
    id: str = field(default_factory=lambda: uuid4().hex)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "trainingLevel": _label(self.training_level),
            "role": _label(self.unit_role),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "LeaderDetail":
        return cls(
            id=str(record.get("id") or uuid4().hex),
            name=str(record.get("name") or ""),
            training_level=_parse_label(TrainingLevel, record.get("trainingLevel") or TrainingLevel.PRELIMINARY),
            unit_role=_parse_label(LeaderUnitRole, record.get("role") or LeaderUnitRole.ASSISTANT),
        )


@dataclass(frozen=True, slots=True)
class UnitStatistics:
    id: str
    leader_id: str
    section: ScoutSection
    unit_name: str
    member_count: int = 0
    leaders: tuple[LeaderDetail, ...] = ()
    last_updated: str = field(default_factory=utc_now_iso)

    @property
    def leader_count(self) -> int:
        return len(self.leaders)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "leaderId": self.leader_id,
            "section": self.section.value,
            "unitName": self.unit_name,
            "memberCount": self.member_count,
            "leaders": [leader.to_record() for leader in self.leaders],
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "UnitStatistics":
        leaders: List[LeaderDetail] = [
            LeaderDetail.from_record(item) for item in (record.get("leaders") or [])
        ]
        return cls(
            id=str(record["id"]),
            leader_id=str(record["leaderId"]),
            section=ScoutSection.parse(record.get("section")),
            unit_name=str(record.get("unitName") or ""),
            member_count=int(record.get("memberCount") or 0),
            leaders=tuple(leaders),
            last_updated=str(record.get("lastUpdated") or utc_now_iso()),
        )
