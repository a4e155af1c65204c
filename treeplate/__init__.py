"""Treeplate - directory-tree template compiler.

Renders a tree of Jinja2 templates into a mirrored output tree, with
``project``, ``package`` and ``class`` derived from each file's path.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.errors import (
    ConfigurationWarning,
    IOFailure,
    ProcessingFailure,
    TemplateError,
    TreeplateError,
)
from .core.models import CompileOptions, CompileReport, InputFile, ProjectInfo
from .rendering.compiler import compile_tree
from .sources import InputFileSet

# Re-export main CLI entry point
from .cli import main

__all__ = [
    "CompileOptions",
    "CompileReport",
    "ConfigurationWarning",
    "IOFailure",
    "InputFile",
    "InputFileSet",
    "ProcessingFailure",
    "ProjectInfo",
    "TemplateError",
    "TreeplateError",
    "compile_tree",
    "main",
]
