"""
Message source validation command.

SUMMARY: Check every message source and list template placeholders

Each discovered source is read on its own so one broken file does not hide
problems in the others. Exit code is 1 when any source is invalid.
"""

from __future__ import annotations

import argparse
from typing import Any

from action_audit.cli import OutputFormatter, add_standard_flags, build_app
from action_audit.core.exceptions import SourceError
from action_audit.core.interpolation import find_placeholders
from action_audit.core.messages import build_tree, read_source
from action_audit.core.messages.nodes import iter_leaves
from action_audit.core.messages.sources import describe_source

SUMMARY = "Check every message source and list template placeholders"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def check_source(source: Any) -> dict[str, Any]:
    entry: dict[str, Any] = {"source": describe_source(source)}
    try:
        data = read_source(source)
    except SourceError as exc:
        entry.update(status="invalid", error=str(exc), errors=exc.context.get("errors", []))
        return entry
    if data is None:
        entry.update(status="missing")
        return entry

    templates: dict[str, list[str]] = {}
    for segments, value in iter_leaves(build_tree(data)):
        *parents, key = segments
        templates[f"{'/'.join(parents)}#{key}"] = find_placeholders(value)
    entry.update(status="ok", templates=templates)
    return entry


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    app = build_app(args, load=False)

    results = [check_source(s) for s in app.sources()]
    invalid = [r for r in results if r["status"] == "invalid"]

    if formatter.json_mode:
        formatter.json_output({"valid": not invalid, "sources": results})
        return 1 if invalid else 0

    if not results:
        formatter.text("No message sources found")
    for r in results:
        formatter.text(f"{r['source']}: {r['status']}")
        if r["status"] == "invalid":
            formatter.text_kv("error", r["error"])
        for name, placeholders in (r.get("templates") or {}).items():
            formatter.text_kv(name, ", ".join(placeholders) if placeholders else "(no placeholders)")
    return 1 if invalid else 0
