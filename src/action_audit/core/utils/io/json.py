"""JSON read helpers."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_MISSING = object()  # Sentinel for unset default


def read_json(path: Path, default: Any = _MISSING) -> Any:
    """Read JSON from ``path``.

    Args:
        path: File to read
        default: Returned when the file is missing or invalid. When omitted,
            errors propagate to the caller.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        if default is _MISSING:
            raise
        return default


__all__ = ["read_json"]
