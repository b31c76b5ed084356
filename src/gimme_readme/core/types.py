"""Core data types that flow through the pipeline.

This module defines the immutable data structures that represent the state
of a request as it moves through the stages: classification, prompt assembly,
model dispatch and result routing. Each stage consumes one state and produces
the next, so an invalid transition cannot be expressed.
"""

from __future__ import annotations

import dataclasses
import enum
from pathlib import Path
import typing

# --- Minimal guard helpers ---


def _is_tuple_of(value: object, typ: type | tuple[type, ...]) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, typ) for v in value)


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result type ---
# Stages return Success | Failure instead of raising, so the orchestrator can
# stop at the first failure without broad try/except blocks.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful result in the pipeline."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failure in the pipeline, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


# --- Data model ---

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


@dataclasses.dataclass(frozen=True, slots=True)
class ClassifiedPaths:
    """Partition of the requested paths into accepted and excluded.

    Both sequences keep the caller's original order.
    """

    accepted: tuple[str, ...]
    excluded: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate that both sides are tuples of strings."""
        _require(
            condition=_is_tuple_of(self.accepted, str),
            message="must be a tuple[str, ...]",
            field_name="accepted",
            exc=TypeError,
        )
        _require(
            condition=_is_tuple_of(self.excluded, str),
            message="must be a tuple[str, ...]",
            field_name="excluded",
            exc=TypeError,
        )

    @classmethod
    def from_partition(
        cls,
        paths: typing.Iterable[str],
        is_excluded: typing.Callable[[str], bool],
    ) -> ClassifiedPaths:
        """Split ``paths`` by ``is_excluded``; every path lands on exactly one side."""
        accepted: list[str] = []
        excluded: list[str] = []
        for path in paths:
            (excluded if is_excluded(path) else accepted).append(path)
        return cls(accepted=tuple(accepted), excluded=tuple(excluded))

    @property
    def has_accepted(self) -> bool:  # noqa: D102
        return bool(self.accepted)


@dataclasses.dataclass(frozen=True, slots=True)
class DispatchConfig:
    """Immutable settings for the single inference request of an invocation."""

    model: str
    temperature: float
    wants_usage_metrics: bool = False

    def __post_init__(self) -> None:
        """Validate model identifier and temperature bounds."""
        _require(
            condition=isinstance(self.model, str) and self.model.strip() != "",
            message="must be a non-empty str",
            field_name="model",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.temperature, int | float)
            and not isinstance(self.temperature, bool)
            and MIN_TEMPERATURE <= self.temperature <= MAX_TEMPERATURE,
            message=(
                f"must be a number within [{MIN_TEMPERATURE}, {MAX_TEMPERATURE}],"
                f" got {self.temperature!r}"
            ),
            field_name="temperature",
        )
        _require(
            condition=isinstance(self.wants_usage_metrics, bool),
            message="must be a bool",
            field_name="wants_usage_metrics",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class OutputDestination:
    """Where the final response goes: a file path, or the console when None."""

    path: Path | None = None

    @classmethod
    def console(cls) -> OutputDestination:
        """Emit the response as the command's console output."""
        return cls(path=None)

    @classmethod
    def file(cls, path: str | Path) -> OutputDestination:
        """Persist the response to ``path``, overwriting existing content."""
        _require(
            condition=str(path).strip() != "",
            message="cannot be empty",
            field_name="path",
        )
        return cls(path=Path(path))

    @property
    def is_console(self) -> bool:  # noqa: D102
        return self.path is None

    def __str__(self) -> str:
        return "<console>" if self.path is None else str(self.path)


@dataclasses.dataclass(frozen=True, slots=True)
class UsageMetrics:
    """Token accounting reported by the inference service."""

    prompt_tokens: int = 0
    output_tokens: int = 0
    cached_tokens: int = 0

    @property
    def total_tokens(self) -> int:  # noqa: D102
        return (self.prompt_tokens - self.cached_tokens) + self.output_tokens


@dataclasses.dataclass(frozen=True, slots=True)
class ModelResponse:
    """The successful outcome of a dispatch."""

    text: str
    usage: UsageMetrics | None = None

    def __post_init__(self) -> None:
        """Validate response text type."""
        _require(
            condition=isinstance(self.text, str),
            message="must be str",
            field_name="text",
            exc=TypeError,
        )


# --- Typed command states ---
# These dataclasses define the shape of the data as it is transformed by
# each stage of the pipeline.


@dataclasses.dataclass(frozen=True, slots=True)
class InitialCommand:
    """The initial state of a request, created by the caller."""

    files: tuple[str, ...]
    instruction: str
    config: DispatchConfig
    destination: OutputDestination = dataclasses.field(
        default_factory=OutputDestination.console
    )

    def __post_init__(self) -> None:
        """Validate InitialCommand invariants.

        Emptiness of ``files`` is not checked here; the orchestrator reports it
        as an `EmptyInputError` so it becomes a pipeline outcome.
        """
        _require(
            condition=_is_tuple_of(self.files, str),
            message="must be a tuple[str, ...]",
            field_name="files",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.instruction, str),
            message="must be str",
            field_name="instruction",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.config, DispatchConfig),
            message="must be a DispatchConfig",
            field_name="config",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.destination, OutputDestination),
            message="must be an OutputDestination",
            field_name="destination",
            exc=TypeError,
        )

    @classmethod
    def from_files(
        cls,
        files: typing.Iterable[str | Path],
        *,
        instruction: str,
        config: DispatchConfig,
        destination: OutputDestination | None = None,
    ) -> InitialCommand:
        """Build a command from any iterable of str or Path entries."""
        return cls(
            files=tuple(str(f) for f in files),
            instruction=instruction,
            config=config,
            destination=destination or OutputDestination.console(),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class ClassifiedCommand:
    """The state after the requested paths have been classified."""

    initial: InitialCommand
    classified: ClassifiedPaths


@dataclasses.dataclass(frozen=True, slots=True)
class AssembledCommand:
    """The state after the prompt payload has been built."""

    classified: ClassifiedCommand
    prompt: str

    @property
    def initial(self) -> InitialCommand:  # noqa: D102
        return self.classified.initial


@dataclasses.dataclass(frozen=True, slots=True)
class DispatchedCommand:
    """The state after the model returned a response."""

    assembled: AssembledCommand
    response: ModelResponse

    @property
    def initial(self) -> InitialCommand:  # noqa: D102
        return self.assembled.initial


@dataclasses.dataclass(frozen=True, slots=True)
class RouteOutcome:
    """The final artifact of a successful invocation.

    ``text`` is always the model's response. ``written_path`` is set only when
    the response was persisted to a file.
    """

    text: str
    destination: OutputDestination
    written_path: Path | None = None
    usage: UsageMetrics | None = None


class PipelineState(enum.Enum):
    """States of one pipeline invocation."""

    START = "start"
    CLASSIFIED = "classified"
    ASSEMBLED = "assembled"
    DISPATCHED = "dispatched"
    ROUTED = "routed"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:  # noqa: D102
        return self in (PipelineState.DONE, PipelineState.FAILED)


@dataclasses.dataclass(frozen=True, slots=True)
class PipelineRun:
    """Record of one invocation: terminal state, tagged result and path taken."""

    state: PipelineState
    result: Result[RouteOutcome, Exception]
    transitions: tuple[PipelineState, ...]
    classified: ClassifiedPaths | None = None

    @property
    def ok(self) -> bool:  # noqa: D102
        return self.state is PipelineState.DONE and isinstance(self.result, Success)

    @property
    def excluded(self) -> tuple[str, ...]:
        """Paths excluded by the ignore rules, if classification ran."""
        return self.classified.excluded if self.classified is not None else ()
