"""Text file helpers used by ``action-audit init``.

Writes go through a temp file in the target directory and ``os.replace`` so
a half-written starter file is never left behind.
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, TextIO, Union


def ensure_parent_dir(path: Path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) if needed and return it.

    Raises:
        NotADirectoryError: ``path`` exists and is a file.
    """
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Path exists but is not a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Call ``write_fn`` on a locked temp file, fsync it and move it to ``path``."""
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile("w", encoding=encoding, dir=str(path.parent), delete=False) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def read_text(path: Union[str, Path]) -> str:
    return Path(path).read_text(encoding="utf-8")


def write_text(path: Union[str, Path], content: str) -> None:
    """Atomically replace ``path`` with ``content`` (UTF-8)."""
    atomic_write(Path(path), lambda f: f.write(content))


__all__ = [
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
]
