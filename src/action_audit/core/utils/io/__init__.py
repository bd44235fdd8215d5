"""I/O utilities for Action Audit.

- Core: atomic text writes and directory creation
- JSON: tolerant reads
- YAML: locked reads, dumps and .yml/.yaml resolution
"""
from __future__ import annotations

from .core import (
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    read_text,
    write_text,
)
from .json import read_json
from .yaml import (
    dump_yaml_string,
    read_yaml,
    resolve_yaml_path,
)

__all__ = [
    # core
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
    # json
    "read_json",
    # yaml
    "read_yaml",
    "dump_yaml_string",
    "resolve_yaml_path",
]
