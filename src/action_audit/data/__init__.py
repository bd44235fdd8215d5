"""
Packaged data for Action Audit.

- config/defaults.yaml: lowest settings layer
- schemas/audit-messages.schema.yaml: shape of a message source
- templates/: starter files written by ``action-audit init``
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Absolute path of a packaged data directory or file.

    Example:
        >>> get_data_path("templates", "audit.yml")
        PosixPath('/path/to/action_audit/data/templates/audit.yml')
    """
    base = Path(str(resources.files("action_audit.data") / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> Any:
    """Parsed packaged YAML file (cached; callers must not mutate the result)."""
    return yaml.safe_load(get_data_path(subpackage, filename).read_text(encoding="utf-8"))


__all__ = ["get_data_path", "read_yaml"]
