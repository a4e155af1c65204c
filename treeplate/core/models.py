"""Domain models for template tree compilation."""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePath
from typing import Any, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectInfo(BaseModel):
    """Project handle exposed to templates as ``project``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name")
    root_dir: Path = Field(default_factory=Path.cwd, description="Project root")
    version: str = Field(default="unspecified", description="Project version")


ContextValue = Union[
    str,
    int,
    float,
    bool,
    None,
    ProjectInfo,
    Mapping[str, Any],
    Sequence[Any],
]
Context = dict[str, ContextValue]


class InputFile(BaseModel):
    """A template source file together with its path relative to its source root."""

    model_config = ConfigDict(frozen=True)

    relative_path: tuple[str, ...] = Field(..., description="Relative path segments")
    absolute_path: Path = Field(..., description="Absolute path of the template")

    @field_validator("relative_path")
    @classmethod
    def check_segments(cls, segments: tuple[str, ...]) -> tuple[str, ...]:
        for segment in segments:
            if segment in ("", ".", "..") or "/" in segment or "\\" in segment:
                raise ValueError(f"Invalid relative path segment: {segment!r}")
            if PurePath(segment).anchor:
                raise ValueError(f"Relative path segment is absolute: {segment!r}")
        return segments

    @property
    def parent_segments(self) -> tuple[str, ...]:
        return self.relative_path[:-1]

    @property
    def last_name(self) -> str:
        return self.relative_path[-1] if self.relative_path else ""

    @property
    def relative_name(self) -> str:
        return "/".join(self.relative_path)


class IncludePathMode(str, Enum):
    """How input files contribute to the template search path."""

    FILES = "files"
    DIRECTORIES = "directories"


class EngineConfig(BaseModel):
    """Explicit per-instance template engine configuration."""

    model_config = ConfigDict(frozen=True)

    search_path: str = Field(default="", description="Comma-space joined search path")
    cache_enabled: bool = Field(default=True, description="Cache loaded templates")
    strict_undefined: bool = Field(
        default=True, description="Fail on unresolved references"
    )
    trim_blocks: bool = True
    lstrip_blocks: bool = True
    keep_trailing_newline: bool = True


class CompileOptions(BaseModel):
    """Per-run options for the tree compiler."""

    source_extension: str | None = Field(
        default=".java", description="Suffix stripped from the file name for 'class'"
    )
    cache_enabled: bool = True
    strict_undefined: bool = True
    include_path_mode: IncludePathMode = IncludePathMode.FILES
    continue_on_error: bool = Field(
        default=False, description="Keep rendering after a failed file"
    )


class RenderUnit(BaseModel):
    """One input-file-to-output-file rendering within a run."""

    input_file: InputFile
    relative_output_path: tuple[str, ...]
    output_file: Path
    context: dict[str, Any]


class RenderFailure(BaseModel):
    """A failed render recorded when continuing on error."""

    relative_path: str
    message: str


class CompileReport(BaseModel):
    """Summary of a compile run."""

    output_root: Path
    search_path: str
    rendered: list[Path] = Field(default_factory=list)
    failures: list[RenderFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
