"""
===============================================================================
Permission Policy – who may create, see and modify what
-------------------------------------------------------------------------------
Purpose:
    Single place for every role-dependent decision: account creation, uploads,
    file/user/statistics visibility and modification rights. Services call
    this policy before touching the store; presentation code may use it to
    hide controls but never replaces it.

Design:
    - No store access here.
    - Stateless, pure computations from the acting User and the records.
===============================================================================
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from core.common.entity_store import SEED_ADMIN_ID
from core.models.user import ALL_SECTIONS, Scope, ScoutSection, User, UserRole, parse_scope
from documents.enum.file_category import FileCategory
from documents.models.document import PedagogicalFile
from unitstatistics.models.unit_stats import UnitStatistics

SUPERVISOR_ROLES = frozenset({UserRole.ADMIN, UserRole.PROGRAM_HEAD})

# Which roles an actor may create.
ROLE_CREATION_MATRIX: dict[UserRole, frozenset[UserRole]] = {
    UserRole.ADMIN: frozenset({UserRole.COMMISSIONER, UserRole.PROGRAM_HEAD}),
    UserRole.PROGRAM_HEAD: frozenset({UserRole.COMMISSIONER}),
    UserRole.COMMISSIONER: frozenset({UserRole.UNIT_LEADER}),
    UserRole.UNIT_LEADER: frozenset(),
}

KIT_UPLOAD_ROLES = frozenset({UserRole.ADMIN, UserRole.PROGRAM_HEAD, UserRole.COMMISSIONER})


def is_seed_admin(user: User) -> bool:
    return user.id == SEED_ADMIN_ID


def is_supervisor(user: User) -> bool:
    """Admin or program head: region-wide visibility."""
    return user.role in SUPERVISOR_ROLES


def normalize_filter(section_filter: Optional[Scope]) -> Scope:
    """Section filter as ALL_SECTIONS or a ScoutSection; labels and member names are parsed."""
    return parse_scope(section_filter)


class PermissionPolicy:
    """
    Evaluate permissions of an actor.

    Rules:
      - Create accounts: Admin -> Commissioner/ProgramHead, ProgramHead -> Commissioner,
        Commissioner -> UnitLeader (in the commissioner's own section).
      - Kit uploads (Legal/Technical): Admin, ProgramHead, Commissioner.
        Unit reports: UnitLeader only.
      - Modify a file: its uploader, Admin or ProgramHead.
      - Users: the seed admin is hidden from everyone but itself; nobody manages
        themself or the seed admin from the list.
    """

    # ------------------------------------------------------------------ #
    # Accounts                                                           #
    # ------------------------------------------------------------------ #
    def can_create_role(self, actor: User, target_role: UserRole) -> bool:
        return target_role in ROLE_CREATION_MATRIX.get(actor.role, frozenset())

    def creatable_roles(self, actor: User) -> List[UserRole]:
        """Roles offered in the creation form, in declaration order."""
        allowed = ROLE_CREATION_MATRIX.get(actor.role, frozenset())
        return [role for role in UserRole if role in allowed]

    def can_manage_users(self, actor: User) -> bool:
        return bool(ROLE_CREATION_MATRIX.get(actor.role))

    def visible_users(self, actor: User, users: Iterable[User], search_term: str = "") -> List[User]:
        """Users listed in the management table for ``actor``."""
        needle = (search_term or "").strip().lower()
        result: List[User] = []
        for user in users:
            if is_seed_admin(user) and not is_seed_admin(actor):
                continue
            if needle and needle not in user.display_name.lower():
                continue
            if is_supervisor(actor):
                result.append(user)
            elif actor.role is UserRole.COMMISSIONER:
                if user.role is UserRole.UNIT_LEADER and user.section == actor.section:
                    result.append(user)
        return result

    def can_modify_user(self, actor: User, target: User) -> bool:
        """Edit/delete from the management list (self-management excluded)."""
        if target.id == actor.id or is_seed_admin(target):
            return False
        if is_supervisor(actor):
            return True
        if actor.role is UserRole.COMMISSIONER:
            return target.role is UserRole.UNIT_LEADER and target.section == actor.section
        return False

    # ------------------------------------------------------------------ #
    # Files                                                              #
    # ------------------------------------------------------------------ #
    def can_upload_to_category(self, actor: User, category: FileCategory) -> bool:
        if category.is_report:
            return actor.role is UserRole.UNIT_LEADER
        return actor.role in KIT_UPLOAD_ROLES

    def upload_scope(self, actor: User, requested: Optional[Scope] = None) -> Scope:
        """
        Scope a new/edited document receives.

        Commissioners and leaders are pinned to their own section; supervisors
        choose freely (default: every section).
        """
        if actor.role in (UserRole.COMMISSIONER, UserRole.UNIT_LEADER):
            return actor.section  # type: ignore[return-value]
        return requested if isinstance(requested, ScoutSection) else ALL_SECTIONS

    def can_filter_by_section(self, actor: User) -> bool:
        return is_supervisor(actor)

    def visible_files(
        self,
        actor: User,
        files: Iterable[PedagogicalFile],
        category: FileCategory,
        section_filter: Optional[Scope] = ALL_SECTIONS,
    ) -> List[PedagogicalFile]:
        """Kit documents of one category visible to ``actor``."""
        wanted = normalize_filter(section_filter) if is_supervisor(actor) else ALL_SECTIONS
        result: List[PedagogicalFile] = []
        for file in files:
            if file.category is not category:
                continue
            if actor.role is UserRole.UNIT_LEADER:
                if file.is_global or file.scope == actor.section:
                    result.append(file)
                continue
            if wanted != ALL_SECTIONS and not file.is_global and file.scope != wanted:
                continue
            result.append(file)
        return result

    def can_modify_file(self, actor: User, file: PedagogicalFile) -> bool:
        return file.uploader_id == actor.id or is_supervisor(actor)

    # ------------------------------------------------------------------ #
    # Unit statistics                                                    #
    # ------------------------------------------------------------------ #
    def can_edit_stats(self, actor: User, leader_id: str) -> bool:
        """Only the owning unit leader writes or resets a statistics record."""
        return actor.role is UserRole.UNIT_LEADER and actor.id == leader_id

    def visible_stats(
        self,
        actor: User,
        stats: Iterable[UnitStatistics],
        section_filter: Optional[Scope] = ALL_SECTIONS,
    ) -> List[UnitStatistics]:
        wanted = normalize_filter(section_filter)
        result: List[UnitStatistics] = []
        for record in stats:
            if actor.role is UserRole.UNIT_LEADER:
                if record.leader_id == actor.id:
                    result.append(record)
            elif actor.role is UserRole.COMMISSIONER:
                if record.section == actor.section:
                    result.append(record)
            elif wanted == ALL_SECTIONS or record.section == wanted:
                result.append(record)
        return result
