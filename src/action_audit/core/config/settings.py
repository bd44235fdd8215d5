"""
Action Audit settings.

Settings sources (lowest to highest priority):
1. Bundled defaults: action_audit.data/config/defaults.yaml
2. Project settings: <repo_root>/config/action_audit.yml (or .yaml)
3. Environment variables: ACTION_AUDIT_<KEY> (e.g. ACTION_AUDIT_LOG_TAG)
4. Explicit overrides passed to ``load_settings``

All values live under the top-level ``audit`` key.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import yaml

from action_audit.core.exceptions import SettingsError
from action_audit.core.utils.io import read_yaml, resolve_yaml_path
from action_audit.core.utils.merge import deep_merge
from action_audit.data import read_yaml as read_data_yaml

from .templating import SafeDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "ACTION_AUDIT_"
SETTINGS_FILE = "action_audit.yml"
SECTION = "audit"

LineFormatter = Callable[[str, str, str], str]

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    low = str(value).strip().lower()
    if low in {"true", "1", "yes", "on"}:
        return True
    if low in {"false", "0", "no", "off", ""}:
        return False
    raise SettingsError(f"Expected a boolean, got {value!r}")


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


@dataclass(frozen=True)
class AuditSettings:
    """Resolved settings for the audit emitter and source discovery."""

    log_tag: Optional[str] = None
    log_format: str = "{controller}/{action} - {message}"
    logger_name: str = "action_audit.audit"
    level: str = "INFO"
    source_name: str = "audit"
    plugin_roots: Tuple[Path, ...] = field(default_factory=tuple)
    entry_points: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AuditSettings":
        """Build settings from the ``audit`` section, validating every value."""
        if not isinstance(data, Mapping):
            raise SettingsError(f"'{SECTION}' settings must be a mapping, got {type(data).__name__}")

        level = str(data.get("level", cls.level) or cls.level).upper()
        if level not in _LEVELS:
            raise SettingsError(f"Unknown log level: {level}", context={"level": level})

        roots = data.get("plugin_roots") or []
        if isinstance(roots, (str, os.PathLike)):
            roots = [roots]
        if not isinstance(roots, (list, tuple)):
            raise SettingsError("'plugin_roots' must be a list of paths")

        settings = cls(
            log_tag=_as_optional_str(data.get("log_tag")),
            log_format=str(data.get("log_format") or cls.log_format),
            logger_name=str(data.get("logger_name") or cls.logger_name),
            level=level,
            source_name=str(data.get("source_name") or cls.source_name),
            plugin_roots=tuple(Path(str(p)) for p in roots if p),
            entry_points=_as_bool(data.get("entry_points", True)),
        )
        settings._check_format()
        return settings

    def _check_format(self) -> None:
        try:
            self.log_format.format_map(SafeDict(controller="", action="", message=""))
        except (ValueError, IndexError, AttributeError, KeyError) as exc:
            raise SettingsError(
                f"Invalid log_format {self.log_format!r}: {exc}",
                context={"log_format": self.log_format},
            ) from exc

    @property
    def level_number(self) -> int:
        return int(getattr(logging, self.level))

    def formatter(self) -> LineFormatter:
        """Return ``(controller, action, message) -> line`` built from ``log_format``."""
        fmt = self.log_format

        def _format(controller: str, action: str, message: str) -> str:
            return fmt.format_map(SafeDict(controller=controller, action=action, message=message))

        return _format

    def with_overrides(self, **changes: Any) -> "AuditSettings":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "log_tag": self.log_tag,
            "log_format": self.log_format,
            "logger_name": self.logger_name,
            "level": self.level,
            "source_name": self.source_name,
            "plugin_roots": [str(p) for p in self.plugin_roots],
            "entry_points": self.entry_points,
        }


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Map ``ACTION_AUDIT_LOG_TAG=X`` to ``{"log_tag": "X"}``.

    ``ACTION_AUDIT_PLUGIN_ROOTS`` is split on ``os.pathsep``.
    """
    out: Dict[str, Any] = {}
    for key in sorted(environ.keys()):
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX):].lower()
        if not re.fullmatch(r"[a-z][a-z0-9_]*", name):
            logger.debug("Ignoring malformed settings variable %s", key)
            continue
        value = environ[key]
        if name == "plugin_roots":
            out[name] = [p for p in value.split(os.pathsep) if p]
        else:
            out[name] = value
    return out


def _project_settings(repo_root: Path) -> Dict[str, Any]:
    path = resolve_yaml_path(Path(repo_root) / "config" / SETTINGS_FILE)
    if not path.exists():
        return {}
    try:
        data = read_yaml(path, default={}, raise_on_error=True)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise SettingsError(f"Cannot read settings file {path}: {exc}", context={"path": str(path)}) from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping", context={"path": str(path)})
    if data.get(SECTION, {}) is None:
        # Section present but fully commented out.
        data = {k: v for k, v in data.items() if k != SECTION}
    return data


def load_settings(
    repo_root: Optional[Path] = None,
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AuditSettings:
    """Load layered settings.

    Args:
        repo_root: Project root holding ``config/action_audit.yml``. Skipped if None.
        overrides: Highest-priority values for the ``audit`` section.
        environ: Environment mapping (defaults to ``os.environ``).

    Raises:
        SettingsError: A layer is unreadable or a value is invalid.
    """
    cfg: Dict[str, Any] = dict(read_data_yaml("config", "defaults.yaml") or {})
    if repo_root is not None:
        cfg = deep_merge(cfg, _project_settings(repo_root))

    env = _env_overrides(os.environ if environ is None else environ)
    if env:
        cfg = deep_merge(cfg, {SECTION: env})
    if overrides:
        cfg = deep_merge(cfg, {SECTION: dict(overrides)})

    section = cfg.get(SECTION)
    if section is None:
        section = {}
    return AuditSettings.from_mapping(section)


__all__ = ["AuditSettings", "ENV_PREFIX", "LineFormatter", "SETTINGS_FILE", "load_settings"]
