"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag (application root holding config/audit.yml)."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Application root (default: current directory)",
    )


def add_source_flag(parser: argparse.ArgumentParser) -> None:
    """Add repeatable --source flag for extra message files."""
    parser.add_argument(
        "--source",
        dest="sources",
        action="append",
        default=[],
        metavar="FILE",
        help="Extra message file loaded after discovered sources (repeatable)",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log source loading details to stderr",
    )


def add_force_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing files",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Flags shared by every command that reads messages."""
    add_json_flag(parser)
    add_repo_root_flag(parser)
    add_source_flag(parser)
    add_verbose_flag(parser)
