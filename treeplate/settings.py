from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.models import CompileOptions, IncludePathMode


class CompilerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TREEPLATE_", case_sensitive=False)

    source_extension: str | None = ".java"
    cache_enabled: bool = True
    strict_undefined: bool = True
    include_path_mode: IncludePathMode = IncludePathMode.FILES
    continue_on_error: bool = False

    def to_options(self, **overrides: object) -> CompileOptions:
        """Per-run options, with ``None`` overrides falling back to settings."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return CompileOptions(**values)


@lru_cache(maxsize=1)
def get_settings() -> CompilerSettings:
    return CompilerSettings()
