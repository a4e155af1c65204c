from pathlib import Path

import pytest

from treeplate.core.errors import IOFailure
from treeplate.rendering.io import ensure_parent, rebuild_output_tree


def test_rebuild_removes_nested_content(tmp_path: Path):
    out = tmp_path / "out"
    (out / "a" / "b").mkdir(parents=True)
    (out / "a" / "b" / "deep.txt").write_text("x")
    (out / "ghost.txt").write_text("boo")
    (out / "empty").mkdir()

    rebuild_output_tree(out)

    assert out.is_dir()
    assert list(out.iterdir()) == []


def test_rebuild_creates_missing_root_and_parents(tmp_path: Path):
    out = tmp_path / "x" / "y" / "out"

    rebuild_output_tree(out)

    assert out.is_dir()


def test_rebuild_replaces_file_at_root(tmp_path: Path):
    out = tmp_path / "out"
    out.write_text("not a directory")

    rebuild_output_tree(out)

    assert out.is_dir()


def test_rebuild_unlinks_symlinked_dirs_without_following(tmp_path: Path):
    keep = tmp_path / "keep"
    keep.mkdir()
    (keep / "precious.txt").write_text("keep me")
    out = tmp_path / "out"
    out.mkdir()
    (out / "link").symlink_to(keep, target_is_directory=True)

    rebuild_output_tree(out)

    assert list(out.iterdir()) == []
    assert (keep / "precious.txt").read_text() == "keep me"


def test_rebuild_failure_is_reported(tmp_path: Path, monkeypatch):
    out = tmp_path / "out"
    out.mkdir()
    locked = out / "locked.txt"
    locked.write_text("x")

    def refuse(self, missing_ok=False):
        raise PermissionError("locked")

    monkeypatch.setattr(Path, "unlink", refuse)

    with pytest.raises(IOFailure) as excinfo:
        rebuild_output_tree(out)

    assert excinfo.value.operation == "delete file"
    assert excinfo.value.path == locked
    assert isinstance(excinfo.value.__cause__, PermissionError)


def test_ensure_parent(tmp_path: Path):
    target = tmp_path / "a" / "b" / "file.txt"

    ensure_parent(target)

    assert target.parent.is_dir()
    assert not target.exists()
