"""Small templating helpers for the line formatter.

This module must not import the registry or the emitter to avoid circular
imports during settings initialization.
"""

from __future__ import annotations


class SafeDict(dict):
    """dict that preserves unknown `{placeholders}` instead of raising."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


__all__ = ["SafeDict"]
