"""
Template lookup command.

SUMMARY: Print the template configured for a controller path and action
"""

from __future__ import annotations

import argparse

from action_audit.cli import OutputFormatter, add_standard_flags, build_app

SUMMARY = "Print the template configured for a controller path and action"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Controller path, e.g. 'manage/accounts'")
    parser.add_argument("key", help="Action name, e.g. 'create'")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    app = build_app(args)

    template = app.lookup(args.path, args.key)
    found = template is not None
    if formatter.json_mode:
        formatter.json_output({"path": args.path, "key": args.key, "found": found, "template": template})
    elif found:
        formatter.text(str(template))
    else:
        formatter.text(f"No template for {args.path} {args.key}")
    return 0 if found else 1
