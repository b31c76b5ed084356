"""Configuration management for gimme-readme.

Resolve once at the command boundary, freeze, then flow:

- `resolve_config` merges programmatic overrides, environment variables,
  the ``~/.gimme_readme_config`` file and defaults into a `ResolvedConfig`.
- `ResolvedConfig.to_dispatch_config` / `to_destination` produce the
  immutable values the pipeline consumes.
"""

from pathlib import Path
from typing import Any

from .audit import SourceTracker, generate_telemetry_summary
from .env_loader import EnvironmentConfigLoader
from .file_loader import (
    CONFIG_FILE_ENV,
    ConfigFileError,
    FileConfigLoader,
    default_config_path,
)
from .resolver import ConfigResolver
from .schema import DEFAULT_MODEL, DEFAULT_TEMPERATURE, ReadmeSettings
from .types import ConfigOrigin, ResolvedConfig, SourceMap


def resolve_config(
    overrides: dict[str, Any] | None = None,
    *,
    config_file: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources.

    Args:
        overrides: Explicit values, e.g. from command-line options.
        config_file: Alternative config file path.
        environ: Alternative environment mapping (defaults to ``os.environ``).

    Returns:
        ResolvedConfig with merged values and per-field origins.
    """
    path = Path(config_file).expanduser() if config_file is not None else None
    return ConfigResolver().resolve(overrides, config_file=path, environ=environ)


__all__ = [  # noqa: RUF022
    "resolve_config",
    "ResolvedConfig",
    "SourceMap",
    "ConfigOrigin",
    "ReadmeSettings",
    "ConfigResolver",
    "FileConfigLoader",
    "EnvironmentConfigLoader",
    "ConfigFileError",
    "SourceTracker",
    "generate_telemetry_summary",
    "default_config_path",
    "CONFIG_FILE_ENV",
    "DEFAULT_MODEL",
    "DEFAULT_TEMPERATURE",
]
