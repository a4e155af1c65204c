"""Template engine adapter."""

from __future__ import annotations

import logging
import traceback
from typing import Any, Mapping, Protocol, TextIO

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Undefined

from ..core.errors import TemplateError
from ..core.models import EngineConfig
from ..environment.includes import split_search_path

logger = logging.getLogger(__name__)

# Jinja's own default template cache size.
DEFAULT_CACHE_SIZE = 400


def _template_lineno(exc: BaseException, filename: str) -> int | None:
    """Template line of the innermost traceback frame Jinja mapped to ``filename``."""
    for frame in reversed(traceback.extract_tb(exc.__traceback__)):
        if frame.filename == filename:
            return frame.lineno
    return None


class TemplateEngine(Protocol):
    """What the tree compiler needs from a template engine."""

    def configure(
        self, config: EngineConfig, log: logging.Logger | None = None
    ) -> None: ...

    def evaluate(
        self, context: Mapping[str, Any], source: TextIO, name: str, sink: TextIO
    ) -> None: ...


class JinjaTemplateEngine:
    """Evaluate templates with a private Jinja2 environment."""

    def __init__(self) -> None:
        self._env: Environment | None = None

    def _set_property(self, log: logging.Logger, name: str, value: object) -> None:
        log.info(f"Template engine property: {name} = {value}")

    def configure(
        self, config: EngineConfig, log: logging.Logger | None = None
    ) -> None:
        """Build the Jinja2 environment from an explicit configuration.

        Args:
            config: Engine configuration for this instance
            log: Logger receiving the configured properties
        """
        log = log or logger
        search_path = split_search_path(config.search_path)
        cache_size = DEFAULT_CACHE_SIZE if config.cache_enabled else 0
        undefined = StrictUndefined if config.strict_undefined else Undefined

        self._set_property(log, "loader", "file")
        self._set_property(log, "loader.path", config.search_path)
        self._set_property(log, "loader.cache", config.cache_enabled)
        self._set_property(log, "undefined", undefined.__name__)

        self._env = Environment(
            loader=FileSystemLoader(search_path),
            undefined=undefined,
            autoescape=False,
            cache_size=cache_size,
            trim_blocks=config.trim_blocks,
            lstrip_blocks=config.lstrip_blocks,
            keep_trailing_newline=config.keep_trailing_newline,
        )

    def evaluate(
        self, context: Mapping[str, Any], source: TextIO, name: str, sink: TextIO
    ) -> None:
        """Render ``source`` against ``context`` and stream the result to ``sink``.

        Args:
            context: Values available to the template
            source: Template text
            name: Logical template name used in error reports
            sink: Destination for the rendered text

        Raises:
            TemplateError: On syntax errors, undefined values, missing includes
                or any other error raised while the template runs
        """
        if self._env is None:
            raise RuntimeError("Template engine used before configure()")

        env = self._env
        text = source.read()
        try:
            code = env.compile(text, name=name, filename=name)
            template = env.template_class.from_code(env, code, env.make_globals(None))
            template.stream(dict(context)).dump(sink)
        except jinja2.TemplateError as exc:
            lineno = getattr(exc, "lineno", None)
            message = f"{type(exc).__name__}: {exc.message or exc}"
            raise TemplateError(name, message, lineno) from exc
        except OSError:
            raise
        except Exception as exc:
            message = f"{type(exc).__name__}: {exc}"
            raise TemplateError(name, message, _template_lineno(exc, name)) from exc
