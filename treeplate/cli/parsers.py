"""CLI argument parsers and validators."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import typer
import yaml

_INTEGER = re.compile(r"^-?\d+$")
_DECIMAL = re.compile(r"^-?\d+\.\d+$")


def coerce_value(raw: str) -> bool | int | float | str:
    """Type a --value string: true/false, integers and decimals, else text."""
    if raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    if _INTEGER.match(raw):
        return int(raw)
    if _DECIMAL.match(raw):
        return float(raw)
    return raw


def parse_value(value: str) -> tuple[str, Any]:
    """Parse a context argument in format KEY=VALUE.

    An empty VALUE yields ``None``, which removes the key from the context.
    """
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, raw = value.split("=", 1)
    key = key.strip()
    if not key:
        raise typer.BadParameter(f"Empty key in: {value!r}")
    return key, (coerce_value(raw) if raw != "" else None)


def parse_values_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON mapping of context values."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise typer.BadParameter(f"Cannot read values file {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise typer.BadParameter(f"Invalid values file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise typer.BadParameter(f"Values file {path} must contain a mapping")
    return {str(key): val for key, val in data.items()}


def merge_context_values(
    files: list[Path], values: list[str]
) -> dict[str, Any]:
    """Merge values files in order, then KEY=VALUE pairs on top."""
    context: dict[str, Any] = {}
    for path in files:
        context.update(parse_values_file(path))
    for key, val in map(parse_value, values):
        if val is None:
            context.pop(key, None)
        else:
            context[key] = val
    return context


def parse_extension(value: str) -> str | None:
    """Normalise a source extension; an empty string disables stripping."""
    value = value.strip()
    if not value:
        return None
    return value if value.startswith(".") else f".{value}"
