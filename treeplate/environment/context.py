"""Per-file rendering context."""

from __future__ import annotations

import logging
import warnings
from typing import Any, Mapping

from ..core.errors import ConfigurationWarning
from ..core.models import Context, InputFile

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_EXTENSION = ".java"


def package_name(input_file: InputFile) -> str:
    """Dot-joined parent directories of the file, empty at the root."""
    return ".".join(input_file.parent_segments)


def class_name(input_file: InputFile, source_extension: str | None) -> str:
    """File name with one trailing ``source_extension`` removed."""
    name = input_file.last_name
    if source_extension and name.endswith(source_extension):
        return name[: -len(source_extension)]
    return name


def build_context(
    base_values: Mapping[str, Any] | None,
    input_file: InputFile,
    project: Any,
    source_extension: str | None = DEFAULT_SOURCE_EXTENSION,
) -> Context:
    """Build the context for rendering one input file.

    Args:
        base_values: User supplied values, copied and never mutated
        input_file: File being rendered
        project: Project handle exposed as ``project``
        source_extension: Suffix stripped from the file name for ``class``

    Returns:
        A new context with ``project``, ``package`` and ``class`` set last
    """
    context: Context = {}
    if base_values is None:
        warnings.warn(
            "Template context is absent; rendering with derived values only",
            ConfigurationWarning,
            stacklevel=2,
        )
    else:
        logger.debug(
            f"Applying {len(base_values)} context value(s) to {input_file.relative_name}"
        )
        context.update(base_values)

    context["project"] = project
    context["package"] = package_name(input_file)
    context["class"] = class_name(input_file, source_extension)
    return context
