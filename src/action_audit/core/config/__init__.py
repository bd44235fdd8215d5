"""Action Audit settings (bundled defaults, project file, environment)."""
from __future__ import annotations

from .settings import ENV_PREFIX, SETTINGS_FILE, AuditSettings, load_settings
from .templating import SafeDict

__all__ = ["AuditSettings", "ENV_PREFIX", "SETTINGS_FILE", "SafeDict", "load_settings"]
