"""Template search path resolution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..core.models import IncludePathMode, InputFile

logger = logging.getLogger(__name__)

SEARCH_PATH_SEPARATOR = ", "


def _input_locations(
    input_files: Iterable[InputFile], mode: IncludePathMode
) -> list[Path]:
    if mode is IncludePathMode.FILES:
        return [input_file.absolute_path.absolute() for input_file in input_files]

    # Parent directories, first appearance wins.
    seen: dict[Path, None] = {}
    for input_file in input_files:
        seen.setdefault(input_file.absolute_path.absolute().parent, None)
    return list(seen)


def resolve_search_path(
    input_files: Iterable[InputFile],
    include_dirs: Iterable[Path] | None,
    mode: IncludePathMode = IncludePathMode.FILES,
) -> str:
    """Build the template engine search path.

    Input file locations come first, in order, followed by every explicit
    include directory. Entries are neither deduplicated (except parent
    directories in ``DIRECTORIES`` mode) nor checked for existence.

    Args:
        input_files: Template sources of the run
        include_dirs: Extra directories searched for included templates
        mode: Whether input files contribute themselves or their parent directory

    Returns:
        Entries joined with ``", "``
    """
    entries: list[str] = []
    for location in _input_locations(input_files, mode):
        logger.info(f"Collecting search path entry {location}")
        entries.append(str(location))
    for include_dir in include_dirs or []:
        location = Path(include_dir).absolute()
        logger.info(f"Collecting include dir {location}")
        entries.append(str(location))
    return SEARCH_PATH_SEPARATOR.join(entries)


def split_search_path(search_path: str) -> list[str]:
    """Split a search path string back into its entries."""
    return [entry.strip() for entry in search_path.split(",") if entry.strip()]
