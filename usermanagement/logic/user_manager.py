"""
user_manager.py

Business logic: account creation, profile updates and deletion.
*All* audit events of user administration are logged **here**, never in the
presentation layer. Every operation checks the PermissionPolicy first, then
the data constraints, and only then writes the store.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from core.exceptions.errors import RecordNotFoundError, UnauthorizedError, ValidationFailedError
from core.logging.logic.logger import Logger, logger as default_logger
from core.models.user import ScoutSection, User, UserRole
from core.policy import constraint_validator as constraints
from core.policy.permission_policy import PermissionPolicy
from usermanagement.logic.session_manager import SessionManager
from usermanagement.logic.user_repository import UserRepository

EDITABLE_FIELDS = ("username", "password", "first_name", "last_name", "email", "unit_name")


class UserManager:
    """User administration on behalf of an acting user."""

    def __init__(
        self,
        users: UserRepository,
        session: SessionManager,
        *,
        policy: Optional[PermissionPolicy] = None,
        audit: Optional[Logger] = None,
    ) -> None:
        self._repo = users
        self._session = session
        self._policy = policy or PermissionPolicy()
        self._audit = audit or default_logger

    # ------------------------------------------------------------------ #
    # Creation                                                           #
    # ------------------------------------------------------------------ #
    def create_user(self, actor: User, data: Mapping[str, Any]) -> User:
        """
        Create an account.

        Commissioners always create unit leaders of their own section.
        Admins and program heads create commissioners (default) or, for admins,
        program heads; a commissioner needs a section.
        """
        if actor.role is UserRole.COMMISSIONER:
            role = UserRole.UNIT_LEADER
        else:
            role = UserRole.parse(data.get("role") or UserRole.COMMISSIONER)

        if not self._policy.can_create_role(actor, role):
            self._audit.log(feature="User", event="CreateDenied", user_id=actor.id,
                            username=actor.username, level="WARNING",
                            message=f"{actor.role.name} may not create {role.name}")
            raise UnauthorizedError()

        constraints.validate_user_fields(data)

        section: Optional[ScoutSection] = None
        if role is UserRole.UNIT_LEADER:
            section = actor.section
        elif role is UserRole.COMMISSIONER:
            if not data.get("section"):
                raise ValidationFailedError("يجب اختيار القسم")
            section = ScoutSection.parse(data["section"])

        username = str(data["username"]).strip()
        existing = self._repo.get_all_users()
        constraints.ensure_unique_username(existing, username)
        if role is UserRole.COMMISSIONER:
            constraints.ensure_single_commissioner(existing, section)  # type: ignore[arg-type]

        user = User(
            id=uuid4().hex,
            username=username,
            password=str(data["password"]),
            first_name=str(data["first_name"]).strip(),
            last_name=str(data["last_name"]).strip(),
            role=role,
            section=section,
            unit_name=(str(data.get("unit_name") or "").strip() or None) if role is UserRole.UNIT_LEADER else None,
            email=(str(data.get("email") or "").strip() or None),
            created_by=actor.id,
        )
        self._repo.add(user)
        self._audit.log(feature="User", event="UserCreated", user_id=actor.id,
                        username=actor.username, reference_id=user.id,
                        message=f"Created {role.name} '{username}'")
        return user

    # ------------------------------------------------------------------ #
    # Update                                                             #
    # ------------------------------------------------------------------ #
    def update_user(self, actor: User, user_id: str, changes: Mapping[str, Any]) -> User:
        """
        Update profile fields of ``user_id``.

        Allowed for the user themself or for a superior permitted by the
        policy. Role and section are immutable here.
        """
        target = self._repo.get_user_by_id(user_id)
        if target is None:
            raise RecordNotFoundError("user", user_id)

        if target.id != actor.id and not self._policy.can_modify_user(actor, target):
            raise UnauthorizedError()

        if "role" in changes and UserRole.parse(changes["role"]) is not target.role:
            raise ValidationFailedError("لا يمكن تغيير الدور")
        if changes.get("section") and ScoutSection.parse(changes["section"]) != target.section:
            raise ValidationFailedError("لا يمكن تغيير القسم")

        merged: Dict[str, Any] = {
            "username": target.username,
            "password": target.password,
            "first_name": target.first_name,
            "last_name": target.last_name,
            "email": target.email,
            "unit_name": target.unit_name,
        }
        merged.update({k: v for k, v in changes.items() if k in EDITABLE_FIELDS})
        constraints.validate_user_fields(merged)

        username = str(merged["username"]).strip()
        if username != target.username:
            constraints.ensure_unique_username(self._repo.get_all_users(), username, exclude_id=target.id)

        updated = replace(
            target,
            username=username,
            password=str(merged["password"]),
            first_name=str(merged["first_name"]).strip(),
            last_name=str(merged["last_name"]).strip(),
            email=(str(merged.get("email") or "").strip() or None),
            unit_name=(str(merged.get("unit_name") or "").strip() or None)
            if target.role is UserRole.UNIT_LEADER else None,
        )
        self._repo.replace(updated)
        self._session.refresh(updated)
        self._audit.log(feature="Profile", event="UpdateSuccess", user_id=actor.id,
                        username=actor.username, reference_id=updated.id,
                        message=f"Updated user '{updated.username}'")
        return updated

    # ------------------------------------------------------------------ #
    # Delete                                                             #
    # ------------------------------------------------------------------ #
    def delete_user(self, actor: User, user_id: str) -> None:
        target = self._repo.get_user_by_id(user_id)
        if target is None:
            raise RecordNotFoundError("user", user_id)
        if not self._policy.can_modify_user(actor, target):
            self._audit.log(feature="User", event="DeleteDenied", user_id=actor.id,
                            username=actor.username, reference_id=user_id, level="WARNING",
                            message=f"Refused to delete '{target.username}'")
            raise UnauthorizedError()

        self._repo.delete(user_id)
        self._audit.log(feature="User", event="UserDeleted", user_id=actor.id,
                        username=actor.username, reference_id=user_id,
                        message=f"Deleted user '{target.username}'")

    # ------------------------------------------------------------------ #
    # Query-Helper                                                       #
    # ------------------------------------------------------------------ #
    def list_users(self, actor: User, search_term: str = "") -> List[User]:
        return self._policy.visible_users(actor, self._repo.get_all_users(), search_term)

    def creatable_roles(self, actor: User) -> List[UserRole]:
        return self._policy.creatable_roles(actor)

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self._repo.get_user_by_id(user_id)
