"""
core/common/navigation.py
=========================

Menu entries of the application and the roles that see them.

• NAVIGATION: static catalog, ordered by sort_order
• navigation_for(actor): entries visible to the actor, with role-dependent labels
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from core.models.user import User, UserRole

ALL_ROLES = frozenset(UserRole)


@dataclass(frozen=True)
class NavEntry:
    id: str
    label: str
    sort_order: int = 999
    visible_for: frozenset = ALL_ROLES
    leader_label: Optional[str] = None

    def allowed_in_menu(self, role: UserRole) -> bool:
        return role in self.visible_for

    def label_for(self, role: UserRole) -> str:
        if role is UserRole.UNIT_LEADER and self.leader_label:
            return self.leader_label
        return self.label


NAVIGATION: tuple[NavEntry, ...] = (
    NavEntry("dashboard", "لوحة القيادة", 10),
    NavEntry(
        "users",
        "إدارة المستخدمين",
        20,
        visible_for=frozenset({UserRole.ADMIN, UserRole.PROGRAM_HEAD, UserRole.COMMISSIONER}),
    ),
    NavEntry("kit", "الحقيبة", 30),
    NavEntry("unit-reports", "تقارير الوحدات", 40, leader_label="ملفات الوحدة"),
    NavEntry("stats", "الإحصائيات والبيانات", 50, leader_label="بيانات الوحدة"),
)


def navigation_for(actor: User) -> List[NavEntry]:
    """Entries for ``actor`` in menu order, labels resolved for the actor's role."""
    entries = sorted(NAVIGATION, key=lambda e: e.sort_order)
    return [
        NavEntry(e.id, e.label_for(actor.role), e.sort_order, e.visible_for)
        for e in entries
        if e.allowed_in_menu(actor.role)
    ]
