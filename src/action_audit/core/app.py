"""Application-owned Action Audit instance.

The host application creates one ``ActionAudit`` at startup and passes it to
whatever needs to emit audit lines (request hooks, background jobs). There
is no module-level registry.

    audit = ActionAudit(repo_root=Path("."))
    audit.init()
    ...
    audit.audit("manage/accounts", "create", request_params)
    ...
    audit.reload()     # e.g. from a file watcher in development
    audit.teardown()
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from action_audit.core.audit import AuditLogger
from action_audit.core.config import AuditSettings, load_settings
from action_audit.core.discovery import discover_sources
from action_audit.core.interpolation import render
from action_audit.core.messages import AuditMessages, MessageSource

logger = logging.getLogger(__name__)


class ActionAudit:
    """Owns one registry and one emitter with init / reload / teardown."""

    def __init__(
        self,
        settings: Optional[AuditSettings] = None,
        *,
        repo_root: Optional[Path] = None,
        messages: Optional[AuditMessages] = None,
        extra_sources: Sequence[MessageSource] = (),
    ) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else None
        self.settings = settings if settings is not None else load_settings(self.repo_root)
        self.messages = messages if messages is not None else AuditMessages()
        self.extra_sources: List[MessageSource] = list(extra_sources)
        self.emitter = AuditLogger(
            self.messages,
            logger=logging.getLogger(self.settings.logger_name),
            log_tag=self.settings.log_tag,
            log_formatter=self.settings.formatter(),
            level=self.settings.level_number,
        )
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def sources(self) -> List[MessageSource]:
        """Sources in load order: discovered files, then ``extra_sources``."""
        discovered = discover_sources(
            self.repo_root,
            plugin_roots=self.settings.plugin_roots,
            name=self.settings.source_name,
            include_entry_points=self.settings.entry_points,
        )
        return [*discovered, *self.extra_sources]

    def init(self) -> int:
        """Load every source into the registry. Returns the number applied."""
        applied = self.messages.load_all(self.sources())
        self._initialized = True
        logger.debug("Action Audit initialized with %d source(s), %d template(s)", applied, len(self.messages))
        return applied

    def reload(self) -> int:
        """Rebuild the registry from freshly discovered sources."""
        applied = self.messages.replace_all(self.sources())
        self._initialized = True
        logger.debug("Action Audit reloaded: %d source(s), %d template(s)", applied, len(self.messages))
        return applied

    def teardown(self) -> None:
        self.messages.clear()
        self._initialized = False

    def load(self, sources: Iterable[MessageSource]) -> int:
        """Merge additional sources into the live registry."""
        return self.messages.load_all(sources)

    def lookup(self, path: str, key: str) -> Any:
        return self.messages.lookup(path, key)

    def render(self, path: str, key: str, params: Optional[Mapping[Any, Any]] = None) -> Optional[str]:
        """Lookup + render without logging; ``None`` when no template is configured."""
        template = self.messages.lookup(path, key)
        if template is None:
            return None
        return render(template, params)

    def audit(self, path: str, key: str, params: Optional[Mapping[Any, Any]] = None) -> Optional[str]:
        return self.emitter.audit(path, key, params)

    def audit_controller(self, controller: Any, action_name: str, params: Optional[Mapping[Any, Any]] = None) -> Optional[str]:
        return self.emitter.audit_controller(controller, action_name, params)

    def __enter__(self) -> "ActionAudit":
        if not self._initialized:
            self.init()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.teardown()


__all__ = ["ActionAudit"]
