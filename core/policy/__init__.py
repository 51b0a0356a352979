"""Authorization and data-constraint rules (no I/O)."""

from core.policy.permission_policy import PermissionPolicy, is_seed_admin, is_supervisor

__all__ = ["PermissionPolicy", "is_seed_admin", "is_supervisor"]
