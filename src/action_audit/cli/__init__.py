"""
Action Audit CLI package.

Provides the command-line interface with auto-discovery of commands
from cli/commands/.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_force_flag,
    add_json_flag,
    add_repo_root_flag,
    add_source_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._utils import build_app, get_repo_root, parse_params

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_source_flag",
    "add_verbose_flag",
    "add_force_flag",
    "add_standard_flags",
    # Utilities
    "build_app",
    "get_repo_root",
    "parse_params",
]
