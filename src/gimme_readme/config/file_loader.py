"""Loading of the persisted ``~/.gimme_readme_config`` file.

The file uses dotenv syntax (``KEY=value`` lines) with the same variable
names as the environment, e.g.::

    GEMINI_API_KEY=...
    MODEL=gemini-1.5-pro
    TEMPERATURE=0.3
"""

import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from gimme_readme.exceptions import ConfigurationError

from .env_loader import ENV_VARS, lookup
from .schema import ReadmeSettings

CONFIG_FILE_NAME = ".gimme_readme_config"
CONFIG_FILE_ENV = "GIMME_README_CONFIG_FILE"


class ConfigFileError(ConfigurationError):
    """Raised when the configuration file cannot be read or parsed."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        """Initialize with file path, message, and optional cause."""
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(f"Config file error in {file_path}: {message}")


def default_config_path() -> Path:
    """Return the config file location, honouring ``GIMME_README_CONFIG_FILE``."""
    override = os.getenv(CONFIG_FILE_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_FILE_NAME


class FileConfigLoader:
    """Loads configuration values from the dotenv-formatted config file."""

    def load(self, path: Path | None = None) -> dict[str, Any]:
        """Load the config file.

        Returns:
            Validated values for the fields present in the file. Empty dict
            when the file does not exist.

        Raises:
            ConfigFileError: If the file exists but cannot be read or holds
                invalid values.
        """
        config_path = path or default_config_path()
        if not config_path.is_file():
            return {}

        try:
            raw = dotenv_values(config_path, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFileError(config_path, f"Failed to read: {e}", cause=e) from e

        values: dict[str, str] = {}
        for field in ENV_VARS:
            hit = lookup(raw, field)
            if hit is not None:
                values[field] = hit[1]
        if not values:
            return {}

        try:
            settings = ReadmeSettings(**values)
        except Exception as e:
            raise ConfigFileError(config_path, f"Invalid values: {e}", cause=e) from e
        return {field: getattr(settings, field) for field in values}
