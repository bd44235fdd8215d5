"""Core library: template registry, interpolation, discovery and emitter."""
from __future__ import annotations

from .exceptions import ActionAuditError, MessagePathError, SettingsError, SourceError
from .interpolation import find_placeholders, interpolate, render
from .messages import AuditMessages

__all__ = [
    "ActionAuditError",
    "MessagePathError",
    "SettingsError",
    "SourceError",
    "AuditMessages",
    "find_placeholders",
    "interpolate",
    "render",
]
