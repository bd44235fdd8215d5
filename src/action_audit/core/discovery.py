"""Message source discovery.

Builds the ordered list of message files for a registry:

1. the application root: ``<app_root>/config/audit.yml``
2. explicit plugin roots, in the order given
3. roots advertised by installed distributions through the
   ``action_audit.engines`` entry-point group (sorted by entry-point name)

Later files win on collisions when loaded with ``AuditMessages.load_all``.
Only files that exist are returned.

An entry point may load to a path (``str`` / ``PathLike``), a module (its
package directory is used) or a zero-argument callable returning a path.
"""
from __future__ import annotations

import logging
import os
from importlib.metadata import entry_points
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "action_audit.engines"
CONFIG_DIR = "config"
DEFAULT_SOURCE_NAME = "audit"


def source_file_for(root: Path, name: str = DEFAULT_SOURCE_NAME) -> Optional[Path]:
    """Return ``<root>/config/<name>.yml`` (or ``.yaml``) if it exists."""
    config_dir = Path(root) / CONFIG_DIR
    for ext in (".yml", ".yaml"):
        candidate = config_dir / f"{name}{ext}"
        if candidate.is_file():
            return candidate
    return None


def _root_from_target(target: Any) -> Optional[Path]:
    if isinstance(target, ModuleType):
        module_file = getattr(target, "__file__", None)
        return Path(module_file).parent if module_file else None
    if isinstance(target, (str, os.PathLike)):
        return Path(target)
    if callable(target):
        return _root_from_target(target())
    return None


def entry_point_roots(group: str = ENTRY_POINT_GROUP) -> List[Path]:
    """Roots advertised by installed distributions.

    Broken entry points are logged and skipped.
    """
    roots: List[Path] = []
    for ep in sorted(entry_points(group=group), key=lambda e: e.name):
        try:
            root = _root_from_target(ep.load())
        except Exception as exc:
            logger.warning("Could not load audit engine entry point %s: %s", ep.name, exc)
            continue
        if root is None:
            logger.warning("Audit engine entry point %s did not resolve to a path; skipped", ep.name)
            continue
        roots.append(root)
    return roots


def discover_roots(
    app_root: Optional[Path],
    *,
    plugin_roots: Iterable[Path] = (),
    include_entry_points: bool = True,
) -> List[Path]:
    """Ordered, de-duplicated roots: application, plugins, entry points."""
    ordered: List[Path] = []
    seen: set[Path] = set()
    candidates: List[Path] = []
    if app_root is not None:
        candidates.append(Path(app_root))
    candidates.extend(Path(p) for p in plugin_roots)
    if include_entry_points:
        candidates.extend(entry_point_roots())

    for root in candidates:
        key = root.expanduser().resolve()
        if key in seen:
            continue
        seen.add(key)
        ordered.append(key)
    return ordered


def discover_sources(
    app_root: Optional[Path],
    *,
    plugin_roots: Iterable[Path] = (),
    name: str = DEFAULT_SOURCE_NAME,
    include_entry_points: bool = True,
) -> List[Path]:
    """Message files to load, application first.

    Args:
        app_root: Application root (``None`` to skip it)
        plugin_roots: Additional roots in precedence order (relative paths
            are taken relative to ``app_root``)
        name: Source file stem (``audit`` -> ``config/audit.yml``)
        include_entry_points: Also search ``action_audit.engines`` roots

    Returns:
        Existing files in load order.
    """
    base = Path(app_root) if app_root is not None else None
    plugins = [
        (base / p) if base is not None and not Path(p).is_absolute() else Path(p)
        for p in plugin_roots
    ]
    sources: List[Path] = []
    for root in discover_roots(base, plugin_roots=plugins, include_entry_points=include_entry_points):
        found = source_file_for(root, name)
        if found is None:
            logger.debug("No audit messages under %s", root)
            continue
        sources.append(found)
    return sources


__all__ = [
    "ENTRY_POINT_GROUP",
    "discover_roots",
    "discover_sources",
    "entry_point_roots",
    "source_file_for",
]
