# core/common/app_context.py
"""
Runtime context & service registry for the Mahdia scouts space.

IMPORTANT ARCHITECTURE RULE:
- ConfigService is the SINGLE source of truth for database paths and seed data.
- Services never reach for ambient state: the store is injected here and the
  acting user is passed explicitly to every operation.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from core.common.entity_store import EntityStore, SQLiteEntityStore, seed_store
from core.common.navigation import NavEntry, navigation_for
from core.common.session_events import UserSessionEvent
from core.config.config_service import CONFIG_DIR, SeedConfig, config_service
from core.logging.logic.logger import Logger, logger as default_logger
from core.models.user import User
from core.policy.permission_policy import PermissionPolicy
from documents.logic.document_repository import DocumentRepository
from documents.logic.kit_service import KitService
from documents.logic.report_service import ReportService
from documents.services.policy.workflow_policy import WorkflowPolicy
from unitstatistics.logic.dashboard_service import DashboardService
from unitstatistics.logic.stats_repository import StatsRepository
from unitstatistics.logic.stats_service import StatsService
from usermanagement.logic.session_manager import SessionManager
from usermanagement.logic.user_manager import UserManager
from usermanagement.logic.user_repository import UserRepository

log = logging.getLogger(__name__)


class AppContext:
    """Central runtime context (no GUI state)."""

    def __init__(
        self,
        store: Optional[EntityStore] = None,
        *,
        seed: Optional[SeedConfig] = None,
        audit: Optional[Logger] = None,
    ) -> None:
        if store is None:
            store = SQLiteEntityStore(config_service.database.store)
            log.info("Opened entity store at %s", config_service.database.store)
        self.store = store

        seed = seed or config_service.seed
        seed_store(self.store, admin_username=seed.admin_username, admin_password=seed.admin_password)

        self.audit = audit or default_logger
        self.policy = PermissionPolicy()

        # ---------- Repositories -------------------------------------------
        self.user_repository = UserRepository(self.store)
        self.document_repository = DocumentRepository(self.store)
        self.stats_repository = StatsRepository(self.store)

        # ---------- Services -----------------------------------------------
        self.session = SessionManager(self.store, self.user_repository, audit=self.audit)
        self.user_manager = UserManager(self.user_repository, self.session, policy=self.policy, audit=self.audit)
        self.kit = KitService(self.document_repository, policy=self.policy, audit=self.audit)
        self.reports = ReportService(
            self.document_repository,
            workflow=WorkflowPolicy.load_from_directory(CONFIG_DIR),
            policy=self.policy,
            audit=self.audit,
        )
        self.stats = StatsService(self.stats_repository, policy=self.policy, audit=self.audit)
        self.dashboard = DashboardService(self.stats_repository, self.document_repository)

        self.audit.set_username_provider(self.session.current_username)

        # ---------- Service registry for DI -------------------------------
        self.services: dict[str, object] = {
            "session": self.session,
            "user_manager": self.user_manager,
            "kit": self.kit,
            "reports": self.reports,
            "stats": self.stats,
            "dashboard": self.dashboard,
            "policy": self.policy,
        }

    # ---------- Dynamic registration ---------------------------------
    def register_service(self, name: str, instance: object) -> None:
        self.services[name] = instance

    def get_service(self, name: str) -> Optional[object]:
        return self.services.get(name)

    # ---------- Session shortcuts ------------------------------------
    def current_user(self) -> Optional[User]:
        return self.session.current_user()

    def require_user(self) -> User:
        return self.session.require_user()

    def subscribe_user_session(self, callback: Callable[[UserSessionEvent], None]) -> None:
        self.session.subscribe(callback)

    def unsubscribe_user_session(self, callback: Callable[[UserSessionEvent], None]) -> None:
        self.session.unsubscribe(callback)

    def navigation(self) -> List[NavEntry]:
        """Menu entries of the logged-in user."""
        return navigation_for(self.require_user())
