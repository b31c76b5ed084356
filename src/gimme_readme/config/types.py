"""Core configuration data types.

Configuration is resolved once at the command boundary, then frozen into a
`DispatchConfig` and an `OutputDestination`; pipeline stages never read the
environment themselves.
"""

from collections.abc import Mapping
from typing import Literal, NamedTuple

from gimme_readme.core.prompts import DEFAULT_PROMPT
from gimme_readme.core.types import DispatchConfig, OutputDestination

# --- Source tracking types ---

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

FIELD_ORDER = ("api_key", "model", "temperature", "output_file", "custom_prompt")
SENSITIVE_FIELDS = frozenset({"api_key"})


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources.

    Carries audit metadata recording where each value came from.
    """

    api_key: str | None
    model: str
    temperature: float
    output_file: str | None
    custom_prompt: str | None

    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"ResolvedConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"temperature={self.temperature!r}, output_file={self.output_file!r}, "
            f"custom_prompt={'<set>' if self.custom_prompt else None!r}, "
            f"origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        """Repr with redacted API key for safe debugging."""
        return self.__str__()

    @property
    def instruction(self) -> str:
        """The base instruction: the custom prompt, else the built-in one."""
        if self.custom_prompt is not None:
            return self.custom_prompt
        return DEFAULT_PROMPT

    def to_dispatch_config(self, *, wants_usage_metrics: bool = False) -> DispatchConfig:
        """Freeze the model settings for the single dispatch of this invocation."""
        return DispatchConfig(
            model=self.model,
            temperature=float(self.temperature),
            wants_usage_metrics=wants_usage_metrics,
        )

    def to_destination(self) -> OutputDestination:
        """Resolve where the response goes."""
        if self.output_file is None:
            return OutputDestination.console()
        return OutputDestination.file(self.output_file)

    def audit(self) -> str:
        """Generate a redacted report showing the origin of each field."""
        lines = []
        for field in FIELD_ORDER:
            if field not in self.origin:
                continue
            origin = self.origin[field]
            value = getattr(self, field)
            if field in SENSITIVE_FIELDS:
                shown = "None" if value is None else "<redacted>"
            elif field == "custom_prompt" and value is not None:
                shown = f"<{len(value)} chars>"
            else:
                shown = str(value)
            lines.append(f"{field}: {origin}:{shown}")
        return "\n".join(lines)
