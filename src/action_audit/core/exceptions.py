from __future__ import annotations

from typing import Any, Dict, Mapping


class ActionAuditError(Exception):
    """Base exception for Action Audit."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class MessagePathError(ActionAuditError, TypeError):
    """Raised when a registry lookup or insertion gets an unusable path or key.

    This signals a caller contract violation (``None`` path, non-string key,
    empty key), not a missing template.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ActionAuditError.__init__(self, message, context=context)
        TypeError.__init__(self, message)


class SourceError(ActionAuditError, ValueError):
    """Raised when a message source cannot be read or has the wrong shape."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ActionAuditError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class SettingsError(ActionAuditError, ValueError):
    """Raised when audit settings are invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ActionAuditError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "ActionAuditError",
    "MessagePathError",
    "SourceError",
    "SettingsError",
]
