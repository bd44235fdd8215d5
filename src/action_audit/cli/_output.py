"""CLI output in text or ``--json`` mode.

Results go to stdout, errors to stderr. JSON payloads use ``default=str`` so
paths and other non-JSON scalars in templates still serialize.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Print command results as plain text or as JSON documents."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dumps(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent, default=str)

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """``{"status": ..., **data}`` in JSON mode, ``message`` otherwise."""
        if self.json_mode:
            print(self._dumps({"status": status, **data}))
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        msg = message or str(error)
        if self.json_mode:
            print(self._dumps({"error": error_code, "message": msg}), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(self._dumps(data))

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        """Indented ``key: value`` line; silent in JSON mode."""
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")
