"""The orchestrator that runs one README generation request.

The pipeline is a fixed sequence of stages, each moving the invocation to the
next state::

    START -> CLASSIFIED -> ASSEMBLED -> DISPATCHED -> ROUTED -> DONE

Any stage failure moves it to the terminal FAILED state, carrying the
stage's error unchanged. Nothing downstream of a failure runs, and nothing
is retried. The orchestrator returns a `PipelineRun` instead of raising so it
can be used as a library call; the command line maps it to an exit code.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gimme_readme.core.types import (
    ClassifiedCommand,
    ClassifiedPaths,
    Failure,
    InitialCommand,
    PipelineRun,
    PipelineState,
    Success,
)
from gimme_readme.exceptions import EmptyInputError, GimmeReadmeError, NoValidFilesError
from gimme_readme.pipeline.model_dispatcher import ModelDispatcher
from gimme_readme.pipeline.path_filter import PathFilter
from gimme_readme.pipeline.prompt_assembler import PromptAssembler
from gimme_readme.pipeline.result_router import ResultRouter
from gimme_readme.telemetry import TelemetryContext

if TYPE_CHECKING:
    from gimme_readme.config import ResolvedConfig
    from gimme_readme.pipeline.base import BaseAsyncHandler
    from gimme_readme.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)


class _Transitions:
    """Records the states one invocation passes through."""

    def __init__(self) -> None:
        self.states: list[PipelineState] = [PipelineState.START]
        self.classified: ClassifiedPaths | None = None

    @property
    def current(self) -> PipelineState:
        return self.states[-1]

    def advance(self, state: PipelineState) -> None:
        self.states.append(state)

    def fail(self, error: GimmeReadmeError) -> PipelineRun:
        logger.debug("Pipeline failed from %s: %s", self.current.value, error)
        self.states.append(PipelineState.FAILED)
        return PipelineRun(
            state=PipelineState.FAILED,
            result=Failure(error),
            transitions=tuple(self.states),
            classified=self.classified,
        )


class PipelineOrchestrator:
    """Sequences classification, assembly, dispatch and routing.

    Stage handlers can be replaced individually, which is how tests supply
    fake readers, adapters and writers.
    """

    def __init__(
        self,
        *,
        path_filter: PathFilter | None = None,
        prompt_assembler: PromptAssembler | None = None,
        model_dispatcher: ModelDispatcher | None = None,
        result_router: ResultRouter | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Initialize the orchestrator with optional stage overrides."""
        self._stages: tuple[tuple[BaseAsyncHandler[Any, Any, Any], PipelineState], ...] = (
            (path_filter or PathFilter(), PipelineState.CLASSIFIED),
            (prompt_assembler or PromptAssembler(), PipelineState.ASSEMBLED),
            (model_dispatcher or ModelDispatcher(), PipelineState.DISPATCHED),
            (result_router or ResultRouter(), PipelineState.ROUTED),
        )
        self._telemetry = telemetry or TelemetryContext()

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Return the stage names in execution order."""
        return tuple(type(h).__name__ for h, _ in self._stages)

    async def execute(self, command: InitialCommand) -> PipelineRun:
        """Run ``command`` through every stage.

        Returns:
            A `PipelineRun` in state DONE with a `Success(RouteOutcome)`, or in
            state FAILED with a `Failure` carrying the originating error.
        """
        run = _Transitions()
        ctx = self._telemetry

        if not command.files:
            ctx.count("pipeline.error", stage="input")
            return run.fail(EmptyInputError())

        current: Any = command
        for handler, next_state in self._stages:
            stage_name = type(handler).__name__
            with ctx("pipeline.stage", stage=stage_name):
                result = await handler.handle(current)

            if not isinstance(result, Success | Failure):
                raise TypeError(
                    f"Stage {stage_name} returned {type(result).__name__}; "
                    "expected Success or Failure."
                )
            if isinstance(result, Failure):
                ctx.count("pipeline.error", stage=stage_name)
                return run.fail(result.error)

            current = result.value
            run.advance(next_state)

            if isinstance(current, ClassifiedCommand):
                run.classified = current.classified
                failure = self._check_classified(current.classified)
                if failure is not None:
                    ctx.count("pipeline.error", stage=stage_name)
                    return run.fail(failure)

        run.advance(PipelineState.DONE)
        return PipelineRun(
            state=PipelineState.DONE,
            result=Success(current),
            transitions=tuple(run.states),
            classified=run.classified,
        )

    def _check_classified(self, classified: ClassifiedPaths) -> GimmeReadmeError | None:
        if classified.excluded:
            logger.warning(
                "Ignoring %d file(s) due to .gitignore patterns: %s",
                len(classified.excluded),
                ", ".join(classified.excluded),
            )
        if not classified.accepted:
            return NoValidFilesError(classified.excluded)
        logger.info(
            "Sending %d file(s): %s",
            len(classified.accepted),
            ", ".join(classified.accepted),
        )
        return None


def create_orchestrator(
    config: ResolvedConfig | None = None,
    *,
    telemetry: TelemetryContextProtocol | None = None,
) -> PipelineOrchestrator:
    """Create an orchestrator wired to the real collaborators.

    Args:
        config: Resolved configuration; resolved from the environment when
            omitted. Only the API key is read here.
        telemetry: Optional telemetry context.
    """
    if config is None:
        from gimme_readme.config import resolve_config

        config = resolve_config()
    return PipelineOrchestrator(
        model_dispatcher=ModelDispatcher(api_key=config.api_key),
        telemetry=telemetry,
    )


async def generate_readme(
    files: Iterable[str | Path],
    *,
    config: ResolvedConfig | None = None,
    wants_usage_metrics: bool = False,
    orchestrator: PipelineOrchestrator | None = None,
) -> PipelineRun:
    """Library entry point: build the command from config and run it once."""
    if config is None:
        from gimme_readme.config import resolve_config

        config = resolve_config()
    command = InitialCommand.from_files(
        files,
        instruction=config.instruction,
        config=config.to_dispatch_config(wants_usage_metrics=wants_usage_metrics),
        destination=config.to_destination(),
    )
    runner = orchestrator or create_orchestrator(config)
    return await runner.execute(command)


__all__ = ["PipelineOrchestrator", "create_orchestrator", "generate_readme"]
