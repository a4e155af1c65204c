"""Input file collection from source directories."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from .core.errors import IOFailure
from .core.models import InputFile

logger = logging.getLogger(__name__)


def _matches(relative_name: str, patterns: tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatchcase(relative_name, pattern) for pattern in patterns)


class InputFileSet:
    """Restartable, ordered view of the template files under some roots.

    Every iteration walks the roots again in the order given, visiting
    directories and files sorted by name. Relative paths are relative to the
    root the file was found under.
    """

    def __init__(
        self,
        roots: Iterable[Path],
        includes: Iterable[str] = (),
        excludes: Iterable[str] = (),
    ) -> None:
        self.roots = [Path(root) for root in roots]
        self.includes = tuple(includes)
        self.excludes = tuple(excludes)

    def _accepts(self, relative_name: str) -> bool:
        if self.includes and not _matches(relative_name, self.includes):
            return False
        return not _matches(relative_name, self.excludes)

    def _walk(self, root: Path) -> Iterator[InputFile]:
        if not root.is_dir():
            raise IOFailure("read source directory", root, "not a directory")

        root = root.absolute()
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            current = Path(dirpath)
            prefix = current.relative_to(root).parts
            for name in sorted(filenames):
                relative_path = (*prefix, name)
                if not self._accepts("/".join(relative_path)):
                    continue
                yield InputFile(
                    relative_path=relative_path, absolute_path=current / name
                )

    def __iter__(self) -> Iterator[InputFile]:
        for root in self.roots:
            logger.debug(f"Collecting templates under {root}")
            yield from self._walk(root)
