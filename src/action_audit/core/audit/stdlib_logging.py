from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from action_audit.core.utils.io import ensure_directory

PACKAGE_LOGGER = "action_audit"

_CONFIGURED_TARGET: str | None = None
_ACTION_AUDIT_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(
    *,
    level: str = "INFO",
    log_path: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach one handler to the ``action_audit`` logger and return it.

    Writes to ``log_path`` when given, otherwise to ``stream`` (stderr by
    default). Idempotent per-process: if already configured for the same
    target, only the level is updated. Host applications that configure
    logging themselves never need to call this.
    """
    global _CONFIGURED_TARGET, _ACTION_AUDIT_HANDLER

    base = logging.getLogger(PACKAGE_LOGGER)
    lvl = _level_from_name(level)

    if log_path is not None:
        target = str(Path(log_path).resolve())
    else:
        target = f"stream:{id(stream or sys.stderr)}"

    if _CONFIGURED_TARGET == target and _ACTION_AUDIT_HANDLER is not None:
        base.setLevel(lvl)
        _ACTION_AUDIT_HANDLER.setLevel(lvl)
        return base

    # Replace the handler installed by a previous call when switching targets.
    if _ACTION_AUDIT_HANDLER is not None:
        base.removeHandler(_ACTION_AUDIT_HANDLER)
        _ACTION_AUDIT_HANDLER.close()
        _ACTION_AUDIT_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        ensure_directory(Path(target).parent)
        handler = logging.FileHandler(target, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handler.setLevel(lvl)

    base.setLevel(lvl)
    base.propagate = False
    base.addHandler(handler)

    _ACTION_AUDIT_HANDLER = handler
    _CONFIGURED_TARGET = target
    return base


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_stdlib_logging``."""
    global _CONFIGURED_TARGET, _ACTION_AUDIT_HANDLER
    base = logging.getLogger(PACKAGE_LOGGER)
    if _ACTION_AUDIT_HANDLER is not None:
        base.removeHandler(_ACTION_AUDIT_HANDLER)
        _ACTION_AUDIT_HANDLER.close()
    base.propagate = True
    base.setLevel(logging.NOTSET)
    _CONFIGURED_TARGET = None
    _ACTION_AUDIT_HANDLER = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests", "PACKAGE_LOGGER"]
