"""
core/config/config_service.py
=============================

Typed configuration assembled from layers; a later layer wins per key:

    code defaults  <  core/config/defaults.ini  <  MAHDIA_<SECTION>__<KEY>
                   <  core/config/config.ini    <  user config.ini

``meta_source(section, key)`` tells which layer supplied a value.
"""
from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Tuple, get_type_hints

Sections = Dict[str, Dict[str, Any]]

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = PROJECT_ROOT / "core" / "config"
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
MACHINE_INI = CONFIG_DIR / "config.ini"
ENV_PREFIX = "MAHDIA_"

_CODE_DEFAULTS: Sections = {
    "Database": {
        "store": str(PROJECT_ROOT / "databases" / "scouts-store.db"),
        "logging": str(PROJECT_ROOT / "databases" / "logs.db"),
    },
    "Seed": {"admin_username": "admin", "admin_password": "123"},
    "General": {"app_name": "فضاء جهة المهدية", "version": "1.0.0"},
    "Logging": {"audit_enabled": "true"},
}

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class DatabaseConfig:
    store: Path
    logging: Path


@dataclass
class SeedConfig:
    admin_username: str = "admin"
    admin_password: str = "123"


@dataclass
class GeneralConfig:
    app_name: str = ""
    version: str = ""


@dataclass
class LoggingConfig:
    audit_enabled: bool = True


# --------------------------------------------------------------------------- #
#  Layer sources
# --------------------------------------------------------------------------- #

def _ini(path: Path) -> Sections:
    if not path.exists():
        return {}
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    return {name: dict(parser.items(name)) for name in parser.sections()}


def _environment() -> Sections:
    """MAHDIA_SEED__ADMIN_USERNAME=x  ->  {"Seed": {"admin_username": "x"}}"""
    found: Sections = {}
    for name, value in os.environ.items():
        if not name.startswith(ENV_PREFIX) or "__" not in name:
            continue
        section, key = name[len(ENV_PREFIX):].split("__", 1)
        found.setdefault(section.title(), {})[key.lower()] = value
    return found


def user_config_path() -> Path:
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
        return base / "MahdiaScouts" / "config.ini"
    base = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return base / "mahdia_scouts" / "config.ini"


def _layers() -> List[Tuple[str, str, Sections]]:
    user_ini = user_config_path()
    return [
        ("code", "embedded", _CODE_DEFAULTS),
        ("defaults.ini", str(DEFAULTS_INI), _ini(DEFAULTS_INI)),
        ("env", "os.environ", _environment()),
        ("machine", str(MACHINE_INI), _ini(MACHINE_INI)),
        ("user", str(user_ini), _ini(user_ini)),
    ]


# --------------------------------------------------------------------------- #
#  Conversion
# --------------------------------------------------------------------------- #

def _convert(raw: Any, target: type) -> Any:
    if target is bool:
        return raw if isinstance(raw, bool) else str(raw).strip().lower() in _TRUE
    if target is Path:
        return Path(str(raw)).expanduser()
    return target(raw)


def _section(cls: type, values: Dict[str, Any]) -> Any:
    hints = get_type_hints(cls)
    return cls(**{
        f.name: _convert(values.get(f.name, f.default), hints.get(f.name, str))
        for f in fields(cls)
    })


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #


class ConfigService:
    """Merged, typed view over all configuration layers."""

    database: DatabaseConfig
    seed: SeedConfig
    general: GeneralConfig
    logging: LoggingConfig

    def __init__(self) -> None:
        self._lock = RLock()
        self.reload()

    def reload(self) -> None:
        with self._lock:
            values: Sections = {}
            origin: Dict[Tuple[str, str], Dict[str, str]] = {}
            for layer, source, sections in _layers():
                for section, items in sections.items():
                    values.setdefault(section, {}).update(items)
                    for key in items:
                        origin[(section, key)] = {"layer": layer, "source": source}
            self._values = values
            self._origin = origin

            self.database = _section(DatabaseConfig, values.get("Database", {}))
            self.seed = _section(SeedConfig, values.get("Seed", {}))
            self.general = _section(GeneralConfig, values.get("General", {}))
            self.logging = _section(LoggingConfig, values.get("Logging", {}))

    def get(self, section: str, key: str, *, cast: Callable[[Any], Any] | type = str) -> Any:
        raw = self._values.get(section, {}).get(key)
        if raw is None:
            return None
        return _convert(raw, cast) if isinstance(cast, type) else cast(raw)

    def meta_source(self, section: str, key: str) -> Optional[Dict[str, str]]:
        return self._origin.get((section, key))


config_service = ConfigService()
