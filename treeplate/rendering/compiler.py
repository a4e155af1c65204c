"""Template tree compilation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from ..core.errors import IOFailure, ProcessingFailure, TemplateError
from ..core.models import (
    CompileOptions,
    CompileReport,
    EngineConfig,
    InputFile,
    RenderFailure,
    RenderUnit,
)
from ..environment.context import build_context
from ..environment.includes import resolve_search_path
from .engine import JinjaTemplateEngine, TemplateEngine
from .io import atomic_text_writer, rebuild_output_tree

logger = logging.getLogger(__name__)


def plan_render_unit(
    input_file: InputFile,
    output_root: Path,
    base_values: Mapping[str, Any] | None,
    project: Any,
    options: CompileOptions,
) -> RenderUnit:
    """Work out where one input file renders to and with which context."""
    return RenderUnit(
        input_file=input_file,
        relative_output_path=input_file.relative_path,
        output_file=output_root.joinpath(*input_file.relative_path),
        context=build_context(
            base_values, input_file, project, options.source_extension
        ),
    )


def render_unit(unit: RenderUnit, engine: TemplateEngine) -> Path:
    """Render a single input file into its output file.

    Args:
        unit: Planned render
        engine: Configured template engine

    Returns:
        Output file path
    """
    logger.debug(
        f"Preprocessing {unit.input_file.absolute_path} -> {unit.output_file}"
    )

    source_path = unit.input_file.absolute_path
    try:
        with source_path.open("r", encoding="utf-8") as reader:
            with atomic_text_writer(unit.output_file) as writer:
                engine.evaluate(
                    unit.context, reader, unit.input_file.relative_name, writer
                )
    except UnicodeDecodeError as exc:
        raise IOFailure("decode", source_path, str(exc)) from exc
    return unit.output_file


def compile_tree(
    input_files: Iterable[InputFile],
    include_dirs: Iterable[Path] | None,
    base_values: Mapping[str, Any] | None,
    output_root: Path,
    project: Any,
    *,
    options: CompileOptions | None = None,
    engine_factory: Callable[[], TemplateEngine] = JinjaTemplateEngine,
) -> CompileReport:
    """Rebuild ``output_root`` from the rendered input files.

    The output directory is emptied first. Files render in the order the
    caller gives them. By default the first failing file aborts the run with
    ``ProcessingFailure``; files written before it are kept.

    Args:
        input_files: Template sources with their relative paths
        include_dirs: Extra directories searched for included templates
        base_values: User context values
        output_root: Output directory, owned by this run
        project: Project handle exposed to templates as ``project``
        options: Per-run options
        engine_factory: Creates the template engine for the run

    Returns:
        Report of rendered files and, when continuing on error, failures
    """
    options = options or CompileOptions()
    output_root = Path(output_root).absolute()
    files = list(input_files)

    search_path = resolve_search_path(files, include_dirs, options.include_path_mode)
    rebuild_output_tree(output_root)

    engine = engine_factory()
    engine.configure(
        EngineConfig(
            search_path=search_path,
            cache_enabled=options.cache_enabled,
            strict_undefined=options.strict_undefined,
        ),
        logger,
    )

    report = CompileReport(output_root=output_root, search_path=search_path)
    logger.info(f"Rendering {len(files)} template(s) into {output_root}")

    for input_file in files:
        try:
            unit = plan_render_unit(
                input_file, output_root, base_values, project, options
            )
            report.rendered.append(render_unit(unit, engine))
        except (OSError, IOFailure, TemplateError) as exc:
            failure = ProcessingFailure(input_file.relative_name, exc)
            if not options.continue_on_error:
                raise failure from exc
            logger.error(str(failure))
            report.failures.append(
                RenderFailure(relative_path=input_file.relative_name, message=str(exc))
            )

    logger.info(
        f"Rendered {len(report.rendered)} file(s), {len(report.failures)} failure(s)"
    )
    return report
