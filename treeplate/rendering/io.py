"""File I/O operations for rendering."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO

from ..core.errors import IOFailure

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOFailure("create directory", path.parent, str(exc)) from exc


@contextmanager
def atomic_text_writer(path: Path, mode: int = 0o644) -> Iterator[TextIO]:
    """Open a UTF-8 temporary file that replaces ``path`` only on success.

    If the block raises, the temporary file is removed and ``path`` is left
    untouched.

    Args:
        path: Destination file path
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def _remove_file(path: Path) -> None:
    try:
        path.unlink()
    except OSError as exc:
        raise IOFailure("delete file", path, str(exc)) from exc


def _remove_dir(path: Path) -> None:
    try:
        path.rmdir()
    except OSError as exc:
        raise IOFailure("delete directory", path, str(exc)) from exc


def rebuild_output_tree(output_root: Path) -> None:
    """Delete everything under ``output_root`` and recreate it empty.

    Files are removed depth-first, each directory only once its children are
    gone. Symlinked directories are unlinked, never followed.

    Args:
        output_root: Output directory owned by the run
    """
    root = Path(output_root)
    if root.is_symlink() or root.is_file():
        _remove_file(root)
    elif root.is_dir():
        logger.debug(f"Clearing output directory {root}")
        for dirpath, dirnames, filenames in os.walk(root, topdown=False):
            current = Path(dirpath)
            for name in filenames:
                _remove_file(current / name)
            for name in dirnames:
                child = current / name
                if child.is_symlink():
                    _remove_file(child)
                else:
                    _remove_dir(child)
        _remove_dir(root)

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOFailure("create directory", root, str(exc)) from exc
