"""Configuration resolution with precedence handling.

Merges configuration from every source according to the documented order:
Programmatic > Environment > Config file > Defaults
"""

import logging
from pathlib import Path
from typing import Any

from gimme_readme.exceptions import ConfigurationError

from .audit import SourceTracker
from .env_loader import EnvironmentConfigLoader
from .file_loader import FileConfigLoader
from .schema import ReadmeSettings, schema_defaults
from .types import ResolvedConfig

log = logging.getLogger(__name__)


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        """Initialize the configuration resolver."""
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        config_file: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Presence is decided by ``is not None``, never by truthiness, so a
        temperature of ``0`` from any source is kept.

        Args:
            programmatic: Explicit overrides (highest precedence). ``None``
                values mean "not given".
            config_file: Config file to read instead of the default location.
            environ: Environment mapping to read instead of ``os.environ``.

        Raises:
            ConfigurationError: If any source holds invalid values.
        """
        source_tracker = SourceTracker()
        merged_config: dict[str, Any] = {}

        # Step 1: schema defaults
        for field, value in schema_defaults().items():
            merged_config[field] = value
            source_tracker.set_origin(field, "default")

        # Step 2: persisted config file
        for field, value in self.file_loader.load(config_file).items():
            if field in merged_config:
                merged_config[field] = value
                source_tracker.set_origin(field, "file")

        # Step 3: environment variables
        try:
            env_config = self.env_loader.load_env_config(environ)
        except ValueError as e:
            raise ConfigurationError(f"Environment configuration error: {e}") from e
        for field, value in env_config.items():
            if field in merged_config:
                merged_config[field] = value
                source_tracker.set_origin(field, "env")

        # Step 4: programmatic overrides
        for field, value in (programmatic or {}).items():
            if field in merged_config and value is not None:
                merged_config[field] = value
                source_tracker.set_origin(field, "programmatic")

        # Step 5: validate the merged result
        try:
            final_config = ReadmeSettings(**merged_config).to_dict()
        except Exception as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        resolved = ResolvedConfig(
            api_key=final_config["api_key"],
            model=final_config["model"],
            temperature=final_config["temperature"],
            output_file=final_config["output_file"],
            custom_prompt=final_config["custom_prompt"],
            origin=source_tracker.get_source_map(),
        )
        log.debug("Resolved configuration: %s", resolved)
        return resolved
