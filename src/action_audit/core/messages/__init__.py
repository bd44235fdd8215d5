"""Audit message templates: tree nodes, sources and the registry."""
from __future__ import annotations

from .nodes import Leaf, SubTree, build_tree, merge_nodes, merge_trees
from .registry import PATH_SEPARATOR, AuditMessages, split_path
from .sources import MessageSource, read_source

__all__ = [
    "AuditMessages",
    "Leaf",
    "SubTree",
    "MessageSource",
    "PATH_SEPARATOR",
    "build_tree",
    "merge_nodes",
    "merge_trees",
    "read_source",
    "split_path",
]
