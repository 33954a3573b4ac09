"""Configuration manager for DepGraph CLI using a TOML file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml

from .config import BASE_DIR, DEFAULT_TOOL_TIMEOUT

logger = logging.getLogger(__name__)

CONFIG_FILE = BASE_DIR / "config.toml"


@dataclass
class Settings:
    """Effective settings after merging the config file over defaults."""
    dumpbin_path: Optional[Path] = None
    timeout: float = DEFAULT_TOOL_TIMEOUT
    show_system: bool = False
    tree: bool = False
    name_prefixes: List[str] = field(default_factory=list)
    path_patterns: List[str] = field(default_factory=list)


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, exc)
        return {}


def _save_full_config(config: Dict[str, Any]) -> bool:
    """Write entire config dict to TOML file, preserving all sections."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            toml.dump(config, f)
        return True
    except OSError as exc:
        logger.warning("Could not write config %s: %s", CONFIG_FILE, exc)
        return False


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring config key %r: expected a [%s] table, got %r", name, name, section)
        return {}
    return section


def _flag(section: Dict[str, Any], section_name: str, key: str) -> bool:
    value = section.get(key, False)
    if not isinstance(value, bool):
        logger.warning("Invalid %s.%s %r (expected true or false), using false", section_name, key, value)
        return False
    return value


def _string_list(section: Dict[str, Any], section_name: str, key: str) -> List[str]:
    value = section.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        logger.warning("Invalid %s.%s %r (expected a list of strings), ignoring it", section_name, key, value)
        return []
    return value


def _writable_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    # a malformed scalar under this key is replaced by a fresh table
    if not isinstance(config.get(name), dict):
        config[name] = {}
    return config[name]


def load_settings() -> Settings:
    """Build :class:`Settings` from the config file.

    Missing sections and keys keep their defaults. Values of the wrong type
    are ignored with a warning rather than failing the run.
    """
    config = load_full_config()
    dumpbin = _section(config, "dumpbin")
    display = _section(config, "display")
    filters = _section(config, "filters")

    settings = Settings()
    path = dumpbin.get("path")
    if isinstance(path, str) and path:
        settings.dumpbin_path = Path(path)
    elif path is not None:
        logger.warning("Invalid dumpbin.path %r, auto-detecting dumpbin", path)

    if "timeout" in dumpbin:
        timeout = dumpbin["timeout"]
        if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
            settings.timeout = float(timeout)
        else:
            logger.warning("Invalid dumpbin.timeout %r, using %s", timeout, DEFAULT_TOOL_TIMEOUT)

    settings.show_system = _flag(display, "display", "show_system")
    settings.tree = _flag(display, "display", "tree")
    settings.name_prefixes = _string_list(filters, "filters", "name_prefixes")
    settings.path_patterns = _string_list(filters, "filters", "path_patterns")
    return settings


def save_dumpbin_path(path: Path) -> bool:
    """Persist the dumpbin location under ``[dumpbin]``.

    Preserves other sections in the file.
    """
    config = load_full_config()
    _writable_section(config, "dumpbin")["path"] = str(path)
    return _save_full_config(config)


def save_timeout(seconds: float) -> bool:
    config = load_full_config()
    _writable_section(config, "dumpbin")["timeout"] = seconds
    return _save_full_config(config)


def clear_config() -> bool:
    """Remove the config file, resetting everything to defaults."""
    try:
        CONFIG_FILE.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove config %s: %s", CONFIG_FILE, exc)
        return False
    return True
