"""
Project scaffolding command.

SUMMARY: Create config/audit.yml and config/action_audit.yml starter files
"""

from __future__ import annotations

import argparse
from pathlib import Path

from action_audit.cli import OutputFormatter, add_force_flag, add_json_flag
from action_audit.core.config import SETTINGS_FILE
from action_audit.core.utils.io import ensure_directory, read_text, write_text
from action_audit.data import get_data_path

SUMMARY = "Create config/audit.yml and config/action_audit.yml starter files"

STARTER_FILES = (
    ("audit.yml", "audit.yml"),
    ("action_audit.yml", SETTINGS_FILE),
)


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI arguments for ``action-audit init``."""
    parser.add_argument(
        "project_path",
        nargs="?",
        default=".",
        help="Application directory to initialize (defaults to current directory)",
    )
    add_force_flag(parser)
    add_json_flag(parser)


def seed_files(project_root: Path, *, force: bool = False) -> dict[str, list[str]]:
    """Copy the packaged templates into ``<project_root>/config`` (idempotent)."""
    config_dir = ensure_directory(project_root / "config")
    created: list[str] = []
    skipped: list[str] = []
    for template_name, target_name in STARTER_FILES:
        target = config_dir / target_name
        if target.exists() and not force:
            skipped.append(str(target))
            continue
        write_text(target, read_text(get_data_path("templates", template_name)))
        created.append(str(target))
    return {"created": created, "skipped": skipped}


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    project_root = Path(args.project_path).resolve()

    result = seed_files(project_root, force=bool(getattr(args, "force", False)))

    lines = [f"Created {p}" for p in result["created"]]
    lines += [f"Skipped {p} (exists; use --force to overwrite)" for p in result["skipped"]]
    formatter.success(result, "\n".join(lines) or "Nothing to do")
    return 0
