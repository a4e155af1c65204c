"""Error types raised while compiling a template tree."""

from __future__ import annotations

from pathlib import Path


class TreeplateError(Exception):
    """Base class for all treeplate failures."""


class IOFailure(TreeplateError):
    """Raised when a filesystem operation fails."""

    def __init__(self, operation: str, path: Path | str, reason: str = "") -> None:
        self.operation = operation
        self.path = Path(path)
        message = f"Failed to {operation} {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TemplateError(TreeplateError):
    """Raised when the template engine cannot evaluate a template."""

    def __init__(self, name: str, message: str, lineno: int | None = None) -> None:
        self.name = name
        self.message = message
        self.lineno = lineno
        location = f"{name}:{lineno}" if lineno is not None else name
        super().__init__(f"Template error in {location}: {message}")


class ProcessingFailure(TreeplateError):
    """Raised when a single input file could not be rendered."""

    def __init__(self, relative_path: str, cause: BaseException) -> None:
        self.relative_path = relative_path
        self.cause = cause
        super().__init__(f"Failed to process {relative_path}: {cause}")


class ConfigurationWarning(UserWarning):
    """Non-fatal configuration problem, e.g. an absent context map."""
