"""Template tree nodes.

A message tree is a tagged union of two node kinds:

- ``Leaf``: a configured template (normally a string; other YAML scalars are
  kept as-is and stringified at render time)
- ``SubTree``: a mapping from path segment to further nodes

Nodes are immutable. ``merge_nodes`` and ``insert_leaf`` return new trees and
share every sub-tree they do not touch, so a published tree can be read from
any thread while a writer builds its successor.

Merge rules:

- sub-tree over sub-tree: merge recursively
- anything else (leaf over leaf, leaf over sub-tree, sub-tree over leaf):
  the newer node replaces the older one
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Sequence, Tuple, Union


@dataclass(frozen=True)
class Leaf:
    value: Any


@dataclass(frozen=True)
class SubTree:
    children: Mapping[str, "Node"] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.children, MappingProxyType):
            object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def get(self, segment: str) -> "Node | None":
        return self.children.get(segment)

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)


Node = Union[Leaf, SubTree]

EMPTY = SubTree()


def build_tree(data: Mapping[Any, Any]) -> SubTree:
    """Convert a nested plain mapping into a ``SubTree``.

    Keys are converted with ``str`` (YAML may produce ints or booleans for
    keys such as ``1`` or ``on``). Nested mappings become sub-trees, every
    other value becomes a leaf.
    """
    children: Dict[str, Node] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            children[str(key)] = build_tree(value)
        else:
            children[str(key)] = Leaf(value)
    return SubTree(children)


def merge_nodes(base: Node, override: Node) -> Node:
    """Deep-merge ``override`` into ``base`` without mutating either."""
    if not (isinstance(base, SubTree) and isinstance(override, SubTree)):
        return override
    if not override.children:
        return base
    if not base.children:
        return override

    merged: Dict[str, Node] = dict(base.children)
    for segment, node in override.children.items():
        existing = merged.get(segment)
        merged[segment] = node if existing is None else merge_nodes(existing, node)
    return SubTree(merged)


def merge_trees(base: SubTree, override: SubTree) -> SubTree:
    """``merge_nodes`` for two sub-trees; the result is always a sub-tree."""
    merged = merge_nodes(base, override)
    if not isinstance(merged, SubTree):
        raise TypeError(
            f"merge_trees expects two sub-trees, got {type(base).__name__} and {type(override).__name__}"
        )
    return merged


def insert_leaf(tree: SubTree, segments: Sequence[str], key: str, value: Any) -> SubTree:
    """Return a copy of ``tree`` with ``value`` stored at ``segments`` / ``key``.

    Missing intermediate segments are created. An intermediate segment that
    currently holds a leaf is replaced by a sub-tree.
    """
    if not segments:
        children = dict(tree.children)
        children[key] = Leaf(value)
        return SubTree(children)

    head, rest = segments[0], segments[1:]
    child = tree.get(head)
    if not isinstance(child, SubTree):
        child = EMPTY
    children = dict(tree.children)
    children[head] = insert_leaf(child, rest, key, value)
    return SubTree(children)


def resolve(tree: SubTree, segments: Sequence[str]) -> SubTree | None:
    """Walk ``segments`` from ``tree``; ``None`` unless every step is a sub-tree."""
    current: Node = tree
    for segment in segments:
        if not isinstance(current, SubTree):
            return None
        nxt = current.get(segment)
        if nxt is None:
            return None
        current = nxt
    return current if isinstance(current, SubTree) else None


def iter_leaves(tree: SubTree, prefix: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], Any]]:
    """Yield ``(segments, value)`` for every leaf, depth first."""
    for segment, node in tree.children.items():
        if isinstance(node, SubTree):
            yield from iter_leaves(node, prefix + (segment,))
        else:
            yield prefix + (segment,), node.value


def to_plain(node: Node) -> Any:
    """Convert a node back into plain ``dict`` / scalar values."""
    if isinstance(node, Leaf):
        return node.value
    return {segment: to_plain(child) for segment, child in node.children.items()}


__all__ = [
    "Leaf",
    "SubTree",
    "Node",
    "EMPTY",
    "build_tree",
    "merge_nodes",
    "merge_trees",
    "insert_leaf",
    "resolve",
    "iter_leaves",
    "to_plain",
]
