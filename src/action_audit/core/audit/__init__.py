"""Audit line emission: formatting, tagging and stdlib logging setup."""
from __future__ import annotations

from .logger import DEFAULT_LOGGER_NAME, AuditLogger, TaggedLogger, default_format, tag_prefix
from .naming import controller_path_for, underscore
from .stdlib_logging import configure_stdlib_logging, reset_stdlib_logging_for_tests

__all__ = [
    "AuditLogger",
    "DEFAULT_LOGGER_NAME",
    "TaggedLogger",
    "configure_stdlib_logging",
    "controller_path_for",
    "default_format",
    "reset_stdlib_logging_for_tests",
    "tag_prefix",
    "underscore",
]
