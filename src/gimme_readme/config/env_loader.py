"""Environment variable configuration loading.

Variables are read under their historical bare names (``MODEL``,
``TEMPERATURE``, ...) and under a ``GIMME_README_`` prefixed form. When both
are set the prefixed one wins.
"""

import os
from typing import Any

from .schema import ReadmeSettings

# Field name -> accepted variable names, highest priority first.
ENV_VARS: dict[str, tuple[str, ...]] = {
    "api_key": ("GIMME_README_API_KEY", "GEMINI_API_KEY"),
    "model": ("GIMME_README_MODEL", "MODEL"),
    "temperature": ("GIMME_README_TEMPERATURE", "TEMPERATURE"),
    "output_file": ("GIMME_README_OUTPUT_FILE", "OUTPUT_FILE"),
    "custom_prompt": ("GIMME_README_CUSTOM_PROMPT", "CUSTOM_PROMPT"),
}


def lookup(mapping: dict[str, str | None], field: str) -> tuple[str, str] | None:
    """Return ``(variable_name, value)`` for the first variable set for field."""
    for name in ENV_VARS[field]:
        value = mapping.get(name)
        if value is not None and value.strip() != "":
            return name, value
    return None


class EnvironmentConfigLoader:
    """Loads configuration from process environment variables."""

    def load_env_config(self, environ: dict[str, str] | None = None) -> dict[str, Any]:
        """Load configuration from environment variables.

        Returns:
            Only the fields actually present in the environment, validated
            and coerced.

        Raises:
            ValueError: If environment variables contain invalid values.
        """
        source = dict(os.environ if environ is None else environ)
        env_values: dict[str, str] = {}
        used: list[str] = []
        for field in ENV_VARS:
            hit = lookup(source, field)
            if hit is not None:
                name, value = hit
                env_values[field] = value
                used.append(f"{name}={'<redacted>' if field == 'api_key' else value}")

        if not env_values:
            return {}

        try:
            settings = ReadmeSettings(**env_values)
        except Exception as e:
            raise ValueError(
                f"Invalid environment variable values: {', '.join(used)}. Error: {e}"
            ) from e
        return {field: getattr(settings, field) for field in env_values}
