"""Audit message registry.

Holds the merged template tree and answers ``lookup(path, key)``.

Sources are loaded in order and deep-merged: later sources win on leaf
collisions, sibling keys survive. A source that cannot be read or has the
wrong shape is skipped as a whole and logged; it never reaches the tree.

Writers serialize on a lock and publish a freshly built tree with a single
reference assignment. Readers take no lock and always see a complete tree.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from action_audit.core.exceptions import MessagePathError, SourceError

from .nodes import EMPTY, Leaf, SubTree, build_tree, insert_leaf, iter_leaves, merge_trees, resolve, to_plain
from .sources import MessageSource, describe_source, read_source

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"


def split_path(path: str) -> List[str]:
    """Split a controller path into segments, dropping empty ones.

    ``"manage/accounts"`` -> ``["manage", "accounts"]``; ``""`` addresses the root.
    """
    if path is None or not isinstance(path, str):
        raise MessagePathError(
            f"Message path must be a string, got {type(path).__name__}",
            context={"path": repr(path)},
        )
    return [part for part in path.split(PATH_SEPARATOR) if part]


def _check_key(key: Any) -> str:
    if key is None or not isinstance(key, str):
        raise MessagePathError(
            f"Message key must be a string, got {type(key).__name__}",
            context={"key": repr(key)},
        )
    if not key:
        raise MessagePathError("Message key must not be empty")
    return key


class AuditMessages:
    """Registry of audit message templates keyed by controller path and action.

    Usage:
        messages = AuditMessages()
        messages.load_all([app_root / "config" / "audit.yml", *engine_files])
        template = messages.lookup("manage/accounts", "create")
    """

    def __init__(self) -> None:
        self._tree: SubTree = EMPTY
        self._write_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _read_fragment(self, source: MessageSource) -> Optional[SubTree]:
        label = describe_source(source)
        try:
            data = read_source(source)
        except SourceError as exc:
            logger.warning("Skipping audit message source %s: %s", label, exc)
            return None
        if data is None:
            logger.debug("Audit message source %s does not exist; skipped", label)
            return None
        logger.debug("Loaded audit message source %s", label)
        return build_tree(data)

    def load(self, source: MessageSource) -> bool:
        """Deep-merge one source into the registry.

        Returns:
            True if the source was applied, False if it was missing or invalid.
        """
        fragment = self._read_fragment(source)
        if fragment is None:
            return False
        with self._write_lock:
            self._tree = merge_trees(self._tree, fragment)
        return True

    def load_all(self, sources: Iterable[MessageSource]) -> int:
        """Load ``sources`` in order; later sources win on collisions.

        All accepted sources are merged first and published together.

        Returns:
            Number of sources applied.
        """
        fragments = [f for f in (self._read_fragment(s) for s in sources) if f is not None]
        if fragments:
            with self._write_lock:
                tree: SubTree = self._tree
                for fragment in fragments:
                    tree = merge_trees(tree, fragment)
                self._tree = tree
        return len(fragments)

    def replace_all(self, sources: Iterable[MessageSource]) -> int:
        """Rebuild the registry from ``sources`` (``clear`` + ``load_all``).

        The new tree is published in one step, so concurrent lookups never
        observe the empty intermediate state.
        """
        fragments = [f for f in (self._read_fragment(s) for s in sources) if f is not None]
        tree: SubTree = EMPTY
        for fragment in fragments:
            tree = merge_trees(tree, fragment)
        with self._write_lock:
            self._tree = tree
        return len(fragments)

    # ------------------------------------------------------------------
    # Programmatic access
    # ------------------------------------------------------------------
    def lookup(self, path: str, key: str) -> Any:
        """Return the template configured for ``path`` / ``key``, or ``None``.

        ``None`` is returned when a segment is missing, a segment is a leaf,
        ``key`` is missing, or ``key`` names a sub-tree.

        Raises:
            MessagePathError: ``path`` or ``key`` is not a usable string.
        """
        segments = split_path(path)
        key = _check_key(key)
        level = resolve(self._tree, segments)
        if level is None:
            return None
        node = level.get(key)
        if isinstance(node, Leaf):
            return node.value
        return None

    def add_message(self, path: str, key: str, template: Any) -> None:
        """Store ``template`` at ``path`` / ``key``, creating levels as needed."""
        segments = split_path(path)
        key = _check_key(key)
        with self._write_lock:
            self._tree = insert_leaf(self._tree, segments, key, template)

    def clear(self) -> None:
        """Drop every template."""
        with self._write_lock:
            self._tree = EMPTY

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subtree(self, path: str = "") -> Optional[Dict[str, Any]]:
        """Plain-dict copy of the sub-tree at ``path`` (``None`` if absent)."""
        level = resolve(self._tree, split_path(path))
        return None if level is None else to_plain(level)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict copy of the whole tree."""
        return to_plain(self._tree)

    def templates(self) -> Dict[str, Any]:
        """Flat view: ``"manage/accounts#create" -> template`` (null leaves skipped)."""
        out: Dict[str, Any] = {}
        for segments, value in iter_leaves(self._tree):
            if value is None:
                continue
            *parents, key = segments
            out[f"{PATH_SEPARATOR.join(parents)}#{key}"] = value
        return out

    def __len__(self) -> int:
        return sum(1 for _, value in iter_leaves(self._tree) if value is not None)

    def __bool__(self) -> bool:
        return bool(self._tree.children)

    def __repr__(self) -> str:
        return f"AuditMessages(templates={len(self)})"


__all__ = ["AuditMessages", "split_path", "PATH_SEPARATOR"]
