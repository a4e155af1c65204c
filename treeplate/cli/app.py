"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import TreeplateError
from ..core.models import IncludePathMode, ProjectInfo
from ..environment.includes import resolve_search_path
from ..rendering import compiler
from ..settings import get_settings
from ..sources import InputFileSet
from .parsers import merge_context_values, parse_extension

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="treeplate",
    help="Render a directory tree of Jinja2 templates into an output tree.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    logging.captureWarnings(True)


@app.command()
def render(
    sources: Annotated[
        list[Path],
        typer.Argument(help="Template source directories.", metavar="SOURCE..."),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output directory. Its previous content is deleted.",
            metavar="DIR",
        ),
    ],
    include_dirs: Annotated[
        list[Path],
        typer.Option(
            "--include",
            "-I",
            help="Extra directory searched for included templates. Repeatable.",
            metavar="DIR",
        ),
    ] = [],
    values: Annotated[
        list[str],
        typer.Option(
            "--value",
            help="Context value (format: KEY=VALUE, empty VALUE removes KEY). Repeatable.",
            metavar="KEY=VALUE",
        ),
    ] = [],
    values_files: Annotated[
        list[Path],
        typer.Option(
            "--values-file",
            help="YAML or JSON mapping of context values. Repeatable.",
            metavar="FILE",
        ),
    ] = [],
    patterns: Annotated[
        list[str],
        typer.Option(
            "--pattern",
            help="Only render files whose relative path matches GLOB. Repeatable.",
            metavar="GLOB",
        ),
    ] = [],
    excludes: Annotated[
        list[str],
        typer.Option(
            "--exclude",
            help="Skip files whose relative path matches GLOB. Repeatable.",
            metavar="GLOB",
        ),
    ] = [],
    source_extension: Annotated[
        Optional[str],
        typer.Option(
            "--source-extension",
            help="Suffix stripped from file names for 'class' (default: .java, empty disables).",
            metavar="EXT",
        ),
    ] = None,
    include_path_mode: Annotated[
        Optional[IncludePathMode],
        typer.Option(
            "--include-path-mode",
            help="Add input files themselves or their parent directories to the search path.",
        ),
    ] = None,
    continue_on_error: Annotated[
        bool,
        typer.Option(
            "--continue-on-error",
            help="Keep rendering after a failed file and report all failures.",
        ),
    ] = False,
    no_cache: Annotated[
        bool,
        typer.Option("--no-cache", help="Disable the template cache."),
    ] = False,
    project_name: Annotated[
        str,
        typer.Option(
            "--project-name",
            help="Name exposed as project.name (default: current directory name).",
        ),
    ] = "",
    project_version: Annotated[
        str,
        typer.Option("--project-version", help="Version exposed as project.version."),
    ] = "unspecified",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render every template under SOURCE into the output directory."""
    _configure_logging(verbose)

    logger.debug("Starting treeplate")

    options = get_settings().to_options(
        source_extension=(
            parse_extension(source_extension) or ""
            if source_extension is not None
            else None
        ),
        include_path_mode=include_path_mode,
        continue_on_error=True if continue_on_error else None,
        cache_enabled=False if no_cache else None,
    )
    context = merge_context_values(values_files, values)
    root_dir = Path.cwd()
    project = ProjectInfo(
        name=project_name or root_dir.name,
        root_dir=root_dir,
        version=project_version,
    )
    input_files = InputFileSet(sources, includes=patterns, excludes=excludes)

    logger.debug(f"Options: {options}")

    try:
        report = compiler.compile_tree(
            input_files,
            include_dirs,
            context,
            output,
            project,
            options=options,
        )
    except TreeplateError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    if not report.ok:
        logger.error(f"{len(report.failures)} file(s) failed to render")
        raise typer.Exit(code=1)

    logger.debug(f"Completed: {len(report.rendered)} file(s) rendered")


@app.command("search-path")
def search_path(
    sources: Annotated[
        list[Path],
        typer.Argument(help="Template source directories.", metavar="SOURCE..."),
    ],
    include_dirs: Annotated[
        list[Path],
        typer.Option("--include", "-I", help="Extra include directory. Repeatable."),
    ] = [],
    include_path_mode: Annotated[
        Optional[IncludePathMode],
        typer.Option("--include-path-mode", help="Search path mode."),
    ] = None,
) -> None:
    """Print the template search path a render would use."""
    mode = include_path_mode or get_settings().include_path_mode
    try:
        path = resolve_search_path(InputFileSet(sources), include_dirs, mode)
    except TreeplateError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(path)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
