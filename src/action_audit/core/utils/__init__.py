"""Shared helpers (file I/O, dictionary merging)."""
from __future__ import annotations

from .merge import deep_merge

__all__ = ["deep_merge"]
