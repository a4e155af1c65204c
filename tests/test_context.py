from pathlib import Path

import pytest

from treeplate.core.errors import ConfigurationWarning
from treeplate.core.models import InputFile
from treeplate.environment.context import build_context


def _input(relative: str) -> InputFile:
    segments = tuple(relative.split("/")) if relative else ()
    return InputFile(relative_path=segments, absolute_path=Path("/src") / relative)


def test_package_and_class_from_relative_path(project):
    ctx = build_context({}, _input("org/example/Widget.java"), project)

    assert ctx["package"] == "org.example"
    assert ctx["class"] == "Widget"
    assert ctx["project"] is project


def test_file_at_root_has_empty_package(project):
    ctx = build_context({}, _input("Main.java"), project)

    assert ctx["package"] == ""
    assert ctx["class"] == "Main"


def test_only_one_trailing_extension_is_stripped(project):
    ctx = build_context({}, _input("a/Gen.java.java"), project)

    assert ctx["class"] == "Gen.java"


def test_other_extensions_are_kept(project):
    ctx = build_context({}, _input("a/readme.vm"), project)

    assert ctx["class"] == "readme.vm"


def test_configured_extension(project):
    ctx = build_context({}, _input("a/readme.vm"), project, source_extension=".vm")

    assert ctx["class"] == "readme"


def test_empty_extension_disables_stripping(project):
    ctx = build_context({}, _input("Main.java"), project, source_extension="")

    assert ctx["class"] == "Main.java"


def test_derived_values_override_base_values(project):
    base = {"package": "should_be_overwritten", "class": "x", "project": "y", "k": 1}

    ctx = build_context(base, _input("a/b/C.java"), project)

    assert ctx["package"] == "a.b"
    assert ctx["class"] == "C"
    assert ctx["project"] is project
    assert ctx["k"] == 1


def test_base_values_are_not_mutated(project):
    base = {"package": "keep"}

    first = build_context(base, _input("a/A.java"), project)
    first["extra"] = True
    second = build_context(base, _input("b/B.java"), project)

    assert base == {"package": "keep"}
    assert "extra" not in second
    assert first is not second


def test_absent_base_values_warns_and_is_empty(project):
    with pytest.warns(ConfigurationWarning):
        ctx = build_context(None, _input("a/A.java"), project)

    assert set(ctx) == {"project", "package", "class"}


def test_empty_relative_path_degrades_to_empty_strings(project):
    ctx = build_context({}, _input(""), project)

    assert ctx["package"] == ""
    assert ctx["class"] == ""
