"""Layering of the configuration service."""
from __future__ import annotations

from pathlib import Path

from core.config.config_service import ConfigService


def test_embedded_defaults() -> None:
    cfg = ConfigService()
    assert cfg.seed.admin_password == "123"
    assert isinstance(cfg.database.store, Path)
    assert cfg.meta_source("Seed", "admin_password")["layer"] in ("code", "defaults.ini")


def test_environment_overrides_defaults(monkeypatch) -> None:
    monkeypatch.setenv("MAHDIA_SEED__ADMIN_USERNAME", "chief")
    monkeypatch.setenv("MAHDIA_LOGGING__AUDIT_ENABLED", "off")
    cfg = ConfigService()
    assert cfg.seed.admin_username == "chief"
    assert cfg.logging.audit_enabled is False
    assert cfg.meta_source("Seed", "admin_username") == {"layer": "env", "source": "os.environ"}


def test_user_file_wins_over_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setenv("MAHDIA_SEED__ADMIN_USERNAME", "from-env")
    user_ini = tmp_path / "mahdia_scouts" / "config.ini"
    user_ini.parent.mkdir(parents=True)
    user_ini.write_text("[Seed]\nadmin_username = from-user\n", encoding="utf-8")

    cfg = ConfigService()
    assert cfg.seed.admin_username == "from-user"
    assert cfg.meta_source("Seed", "admin_username")["layer"] == "user"


def test_get_with_cast(monkeypatch) -> None:
    monkeypatch.setenv("MAHDIA_GENERAL__RETRIES", "3")
    cfg = ConfigService()
    assert cfg.get("General", "retries", cast=int) == 3
    assert cfg.get("General", "missing") is None
