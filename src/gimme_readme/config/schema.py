"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces values
from every source (programmatic, environment, the persisted config file and
built-in defaults) into the correct types.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from gimme_readme.core.types import MAX_TEMPERATURE, MIN_TEMPERATURE

DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_TEMPERATURE = 0.5


class ReadmeSettings(BaseSettings):
    """Pydantic settings schema for gimme-readme.

    Values arrive already merged by the resolver; this class only validates
    them and supplies defaults.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Accept init values only; `ConfigResolver` owns source precedence."""
        return (init_settings,)

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
    )

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Gemini model identifier",
        min_length=1,
    )

    temperature: float = Field(
        default=DEFAULT_TEMPERATURE,
        description="Sampling temperature for the model",
        ge=MIN_TEMPERATURE,
        le=MAX_TEMPERATURE,
    )

    output_file: str | None = Field(
        default=None,
        description="File to write the response to; console when unset",
    )

    custom_prompt: str | None = Field(
        default=None,
        description="Instruction placed before the file contents",
    )

    @field_validator("api_key", "output_file", "custom_prompt", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty strings as unset."""
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("model")
    @classmethod
    def model_not_blank(cls, v: str) -> str:
        """Strip the model id and reject whitespace-only values."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("model must not be blank")
        return stripped

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for SourceMap annotation."""
        return {
            "api_key": self.api_key,
            "model": self.model,
            "temperature": self.temperature,
            "output_file": self.output_file,
            "custom_prompt": self.custom_prompt,
        }


def schema_defaults() -> dict[str, Any]:
    """Return the declared defaults without consulting any environment."""
    return {
        name: field.get_default(call_default_factory=True)
        for name, field in ReadmeSettings.model_fields.items()
    }
