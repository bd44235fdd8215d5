"""Shared CLI utilities."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, Iterable

from action_audit.core.app import ActionAudit
from action_audit.core.audit import configure_stdlib_logging


def get_repo_root(args: argparse.Namespace) -> Path:
    """Repository root from ``--repo-root`` or the current directory."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return Path.cwd().resolve()


def parse_params(pairs: Iterable[str]) -> Dict[str, str]:
    """Turn ``["id=123", "name=Acme"]`` into a dict.

    Raises:
        ValueError: An item has no ``=``.
    """
    out: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Parameters must look like name=value, got {pair!r}")
        out[name] = value
    return out


def build_app(args: argparse.Namespace, *, load: bool = True) -> ActionAudit:
    """Create the ``ActionAudit`` instance for a command and load its sources."""
    configure_stdlib_logging(level="DEBUG" if getattr(args, "verbose", False) else "WARNING")
    app = ActionAudit(
        repo_root=get_repo_root(args),
        extra_sources=[Path(s) for s in getattr(args, "sources", None) or []],
    )
    if load:
        app.init()
    return app
