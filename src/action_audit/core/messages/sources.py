"""Message source reading and validation.

A source is either a path to a YAML/JSON file or an already parsed mapping.
``read_source`` turns it into a plain ``dict`` that matches the
``audit-messages`` schema, or raises ``SourceError``. A missing file is not
an error: ``read_source`` returns ``None`` and the registry skips it.
"""
from __future__ import annotations

import os
import stat
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from jsonschema import Draft202012Validator

from action_audit.core.exceptions import SourceError
from action_audit.core.utils.io import read_json, read_yaml
from action_audit.data import read_yaml as read_data_yaml

MessageSource = Union[str, "os.PathLike[str]", Mapping[str, Any]]

SCHEMA_FILE = "audit-messages.schema.yaml"


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    return Draft202012Validator(read_data_yaml("schemas", SCHEMA_FILE))


def describe_source(source: Any) -> str:
    """Short human label for log lines and CLI output."""
    if isinstance(source, Mapping):
        return f"<mapping with {len(source)} top-level keys>"
    if isinstance(source, (str, os.PathLike)):
        return str(Path(source))
    return f"<{type(source).__name__}>"


def normalize_keys(data: Mapping[Any, Any]) -> Dict[str, Any]:
    """Copy ``data`` recursively with every key converted to ``str``."""
    out: Dict[str, Any] = {}
    for key, value in data.items():
        out[str(key)] = normalize_keys(value) if isinstance(value, Mapping) else value
    return out


def schema_errors(data: Any) -> List[str]:
    """Return readable schema violations for ``data`` (empty when valid)."""
    errors = sorted(_validator().iter_errors(data), key=lambda e: list(e.absolute_path))
    out: List[str] = []
    for err in errors:
        location = "/".join(str(p) for p in err.absolute_path) or "<root>"
        out.append(f"{location}: {err.message}")
    return out


def _parse_file(path: Path) -> Any:
    try:
        if path.suffix.lower() == ".json":
            return read_json(path)
        return read_yaml(path, default={}, raise_on_error=True)
    except (OSError, UnicodeDecodeError, ValueError, RecursionError, yaml.YAMLError) as exc:
        raise SourceError(
            f"Cannot parse message source {path}: {exc}",
            context={"source": str(path)},
        ) from exc


def read_source(source: MessageSource) -> Optional[Dict[str, Any]]:
    """Read and validate one message source.

    Args:
        source: Path to a ``.yml``/``.yaml``/``.json`` file, or a mapping.

    Returns:
        Plain nested dict, or ``None`` when ``source`` is a path that does
        not exist.

    Raises:
        SourceError: The source cannot be parsed, is not a mapping at the top
            level, or does not match the message schema.
    """
    label = describe_source(source)

    if isinstance(source, Mapping):
        raw: Any = source
    elif isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            mode = path.stat().st_mode
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as exc:
            raise SourceError(f"Cannot access message source {path}: {exc}", context={"source": label}) from exc
        if not stat.S_ISREG(mode):
            raise SourceError(f"Message source is not a file: {path}", context={"source": label})
        raw = _parse_file(path)
    else:
        raise SourceError(
            f"Unsupported message source type: {type(source).__name__}",
            context={"source": label},
        )

    if not isinstance(raw, Mapping):
        raise SourceError(
            f"Message source must be a mapping at the top level, got {type(raw).__name__}",
            context={"source": label},
        )

    try:
        data = normalize_keys(raw)
        problems = schema_errors(data)
    except RecursionError as exc:
        # Self-referencing YAML anchors or nesting beyond the interpreter limit.
        raise SourceError(
            f"Message source {label} is recursive or nested too deeply",
            context={"source": label},
        ) from exc
    if problems:
        raise SourceError(
            f"Message source {label} does not match the message schema: {problems[0]}",
            context={"source": label, "errors": problems},
        )
    return data


__all__ = [
    "MessageSource",
    "describe_source",
    "normalize_keys",
    "read_source",
    "schema_errors",
]
