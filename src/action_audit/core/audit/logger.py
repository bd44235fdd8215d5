from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, MutableMapping, Optional, Tuple

from action_audit.core.interpolation import render
from action_audit.core.messages import PATH_SEPARATOR, AuditMessages

from .naming import controller_path_for

_log = logging.getLogger(__name__)

DEFAULT_LOGGER_NAME = "action_audit.audit"

LineFormatter = Callable[[str, str, str], str]


def default_format(controller_path: str, action_name: str, message: str) -> str:
    """``"manage/accounts/create - Created account 123"``."""
    return f"{controller_path}{PATH_SEPARATOR}{action_name} - {message}"


def tag_prefix(tags: Tuple[str, ...]) -> str:
    """``("AUDIT", "web")`` -> ``"[AUDIT] [web] "``."""
    return "".join(f"[{t}] " for t in tags)


class TaggedLogger(logging.LoggerAdapter):
    """Prefix every message with ``[tag]`` and expose the tags on the record.

    Records carry ``record.tags`` so structured handlers can use them without
    parsing the message.
    """

    def __init__(self, logger: logging.Logger, tags: Tuple[str, ...]) -> None:
        super().__init__(logger, {"tags": list(tags)})
        self.tags = tuple(tags)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("tags", list(self.tags))
        kwargs["extra"] = extra
        return f"{tag_prefix(self.tags)}{msg}", kwargs


class AuditLogger:
    """Resolve, render, format and emit audit lines.

    Usage:
        audit = AuditLogger(messages, log_tag="AUDIT")
        audit.audit("manage/accounts", "create", {"id": "123"})
        # INFO [AUDIT] manage/accounts/create - Created account 123
    """

    def __init__(
        self,
        messages: AuditMessages,
        *,
        logger: Optional[logging.Logger] = None,
        log_tag: Optional[str] = None,
        log_formatter: Optional[LineFormatter] = None,
        level: int = logging.INFO,
    ) -> None:
        self.messages = messages
        self.logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.log_tag = log_tag
        self.log_formatter = log_formatter
        self.level = level

    def _sink(self) -> logging.Logger | logging.LoggerAdapter:
        if self.log_tag:
            return TaggedLogger(self.logger, (self.log_tag,))
        return self.logger

    def format_line(self, controller_path: str, action_name: str, message: str) -> str:
        if self.log_formatter is None:
            return default_format(controller_path, action_name, message)
        try:
            return str(self.log_formatter(controller_path, action_name, message))
        except Exception:
            _log.warning(
                "Audit log formatter failed for %s/%s; using default format",
                controller_path,
                action_name,
                exc_info=True,
            )
            return default_format(controller_path, action_name, message)

    def preview(
        self,
        controller_path: str,
        action_name: str,
        params: Optional[Mapping[Any, Any]] = None,
    ) -> Optional[str]:
        """The line ``audit`` would emit, including the tag prefix, without logging it."""
        template = self.messages.lookup(controller_path, action_name)
        if template is None:
            return None
        line = self.format_line(controller_path, action_name, render(template, params))
        return f"{tag_prefix((self.log_tag,))}{line}" if self.log_tag else line

    def audit(
        self,
        controller_path: str,
        action_name: str,
        params: Optional[Mapping[Any, Any]] = None,
    ) -> Optional[str]:
        """Emit the audit line for ``controller_path`` / ``action_name``.

        Returns:
            The emitted line, or ``None`` when no template is configured.
        """
        template = self.messages.lookup(controller_path, action_name)
        if template is None:
            return None

        message = render(template, params)
        line = self.format_line(controller_path, action_name, message)
        self._sink().log(self.level, line)
        return line

    def audit_controller(
        self,
        controller: Any,
        action_name: str,
        params: Optional[Mapping[Any, Any]] = None,
    ) -> Optional[str]:
        """Like ``audit`` with the path derived from a controller name, class or instance."""
        return self.audit(controller_path_for(controller), action_name, params)


__all__ = ["AuditLogger", "TaggedLogger", "default_format", "tag_prefix", "DEFAULT_LOGGER_NAME"]
