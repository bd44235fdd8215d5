"""
Merged message tree command.

SUMMARY: Show the merged message tree (or one sub-tree)

Displays the result of deep-merging every discovered source, application
first, plugins after.
"""

from __future__ import annotations

import argparse

from action_audit.cli import OutputFormatter, add_standard_flags, build_app
from action_audit.core.utils.io import dump_yaml_string

SUMMARY = "Show the merged message tree (or one sub-tree)"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default="",
        help="Controller path of the sub-tree to show (default: everything)",
    )
    parser.add_argument(
        "--format",
        choices=["yaml", "json", "flat"],
        default="yaml",
        help="Output format (default: yaml)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    app = build_app(args)

    output_format = "json" if args.json else args.format

    if output_format == "flat":
        prefix = args.path.strip("/")
        for name, template in sorted(app.messages.templates().items()):
            if not prefix or name == prefix or name.startswith(prefix + "/") or name.startswith(prefix + "#"):
                formatter.text(f"{name}: {template}")
        return 0

    tree = app.messages.subtree(args.path)
    if tree is None:
        formatter.text(f"No sub-tree at {args.path}")
        return 1

    if output_format == "json":
        formatter.json_output(tree)
    else:
        formatter.text(dump_yaml_string(tree, sort_keys=False).rstrip() if tree else "{}")
    return 0
