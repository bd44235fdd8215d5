"""
Template render command.

SUMMARY: Render the template for a controller path and action with parameters
"""

from __future__ import annotations

import argparse

from action_audit.cli import OutputFormatter, add_standard_flags, build_app, parse_params

SUMMARY = "Render the template for a controller path and action with parameters"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Controller path, e.g. 'manage/accounts'")
    parser.add_argument("key", help="Action name, e.g. 'create'")
    parser.add_argument(
        "-p",
        "--param",
        dest="params",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Parameter value (repeatable)",
    )
    parser.add_argument(
        "--line",
        action="store_true",
        help="Print the full audit line (tag + configured format) instead of the message",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        params = parse_params(args.params)
    except ValueError as exc:
        formatter.error(exc, error_code="invalid_param")
        return 2

    app = build_app(args)
    message = app.render(args.path, args.key, params)
    if message is None:
        if formatter.json_mode:
            formatter.json_output({"path": args.path, "key": args.key, "found": False})
        else:
            formatter.text(f"No template for {args.path} {args.key}")
        return 1

    output = app.emitter.preview(args.path, args.key, params) if args.line else message

    if formatter.json_mode:
        formatter.json_output({"path": args.path, "key": args.key, "found": True, "output": output})
    else:
        formatter.text(output)
    return 0
