from __future__ import annotations

from pathlib import Path

import pytest

from treeplate.core.models import InputFile, ProjectInfo
from treeplate.settings import get_settings


def make_input(root: Path, relative: str, text: str = "") -> InputFile:
    """Create a template under ``root`` and return it as an input file."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return InputFile(relative_path=tuple(relative.split("/")), absolute_path=path)


def snapshot(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def project(tmp_path: Path) -> ProjectInfo:
    return ProjectInfo(name="demo", root_dir=tmp_path, version="1.2.3")


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
