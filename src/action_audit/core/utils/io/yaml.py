"""YAML I/O utilities with advisory read locks."""
from __future__ import annotations

import fcntl
from pathlib import Path
from typing import Any

import yaml


def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    """Multiline templates dump as ``|`` blocks so `show` output stays readable."""
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


yaml.add_representer(str, _str_representer, Dumper=yaml.SafeDumper)


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Parse a YAML file under a shared lock.

    An empty document yields ``default``. A missing or unparsable file also
    yields ``default`` unless ``raise_on_error`` is set, in which case the
    ``OSError`` / ``yaml.YAMLError`` propagates (message sources and the
    settings file turn it into their own error types).
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            data = yaml.safe_load(f)
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        return data if data is not None else default
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def dump_yaml_string(data: Any, sort_keys: bool = True) -> str:
    """Dump data to YAML string."""
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=sort_keys,
        allow_unicode=True,
    )


def resolve_yaml_path(path: Path) -> Path:
    """Resolve a YAML path that may be either ``.yml`` or ``.yaml``.

    ``.yml`` is preferred when both exist (``config/audit.yml`` is the
    conventional name). If no existing candidate is found, returns ``path``
    unchanged.
    """
    p = Path(path)
    base = p.with_suffix("") if p.suffix in {".yml", ".yaml"} else p

    for ext in (".yml", ".yaml"):
        candidate = base.with_suffix(ext)
        if candidate.exists():
            return candidate

    return p


__all__ = [
    "read_yaml",
    "dump_yaml_string",
    "resolve_yaml_path",
]
