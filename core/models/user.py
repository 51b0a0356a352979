"""
user.py

Defines the central User model, the four hierarchical roles and the scout
sections. Every feature uses this model for the current actor and for user
records; permission decisions branch on ``User.role`` only inside
:mod:`core.policy.permission_policy`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from core.exceptions.errors import ValidationFailedError


class UserRole(Enum):
    """
    Hierarchical roles. Values are the labels shown to users,
    member names are what the store persists.
    """
    ADMIN = "مسؤول النظام"
    PROGRAM_HEAD = "رئيس لجنة البرنامج"
    COMMISSIONER = "مفوض"
    UNIT_LEADER = "قائد وحدة"

    @classmethod
    def parse(cls, raw: Any) -> "UserRole":
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip()
        if text.upper() in cls.__members__:
            return cls[text.upper()]
        for role in cls:
            if role.value == text:
                return role
        raise ValidationFailedError(f"Unknown role '{raw}'")


class ScoutSection(Enum):
    """Age-division tracks of the region."""
    ASAFIR = "عصافير"
    ASHBAL = "أشبال"
    ZAHRAT = "زهرات"
    KACHAFA = "كشافة"
    MORSHIDAT = "مرشدات"
    JAWALA = "جوالة"
    DALILAT = "دليلات"

    @classmethod
    def parse(cls, raw: Any) -> "ScoutSection":
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip()
        for section in cls:
            if section.value == text:
                return section
        if text.upper() in cls.__members__:
            return cls[text.upper()]
        raise ValidationFailedError(f"Unknown section '{raw}'")


# Scope of a document: one section or every section.
ALL_SECTIONS = "ALL"
Scope = Union[ScoutSection, str]


def parse_scope(raw: Any) -> Scope:
    """Return ``ALL_SECTIONS`` or the matching ``ScoutSection``."""
    if raw is None or str(getattr(raw, "value", raw)).strip().upper() in ("", ALL_SECTIONS):
        return ALL_SECTIONS
    return ScoutSection.parse(raw)


def scope_to_raw(scope: Scope) -> str:
    return scope.value if isinstance(scope, ScoutSection) else ALL_SECTIONS


SECTIONED_ROLES = frozenset({UserRole.COMMISSIONER, UserRole.UNIT_LEADER})


@dataclass(frozen=True, slots=True)
class User:
    """
    An actor of the system. ``role`` is the discriminant:

    * ADMIN / PROGRAM_HEAD carry no section.
    * COMMISSIONER requires a section.
    * UNIT_LEADER requires a section and may carry a unit name.
    """

    id: str
    username: str
    first_name: str
    last_name: str
    role: UserRole
    password: str = ""
    section: Optional[ScoutSection] = None
    unit_name: Optional[str] = None
    email: Optional[str] = None
    created_by: str = "system"

    def __post_init__(self) -> None:
        if self.role in SECTIONED_ROLES and self.section is None:
            raise ValidationFailedError(f"Role {self.role.name} requires a section")
        if self.role not in SECTIONED_ROLES and self.section is not None:
            raise ValidationFailedError(f"Role {self.role.name} cannot be bound to a section")
        if self.unit_name and self.role is not UserRole.UNIT_LEADER:
            raise ValidationFailedError("Only unit leaders carry a unit name")

    def __str__(self) -> str:
        return f"User({self.id}): {self.username} [{self.display_name}], Role: {self.role.name}"

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def unit_display_name(self) -> str:
        """Name used as author of unit reports: the unit, else the person."""
        return self.unit_name or self.display_name

    # ------------------------------------------------------------------ #
    # Record mapping                                                     #
    # ------------------------------------------------------------------ #
    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role.name,
            "password": self.password,
            "section": self.section.value if self.section else None,
            "unitName": self.unit_name,
            "email": self.email,
            "createdBy": self.created_by,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        section = record.get("section")
        return cls(
            id=str(record["id"]),
            username=str(record["username"]),
            first_name=record.get("firstName") or "",
            last_name=record.get("lastName") or "",
            role=UserRole.parse(record.get("role")),
            password=record.get("password") or "",
            section=ScoutSection.parse(section) if section else None,
            unit_name=record.get("unitName") or None,
            email=record.get("email") or None,
            created_by=record.get("createdBy") or "system",
        )
