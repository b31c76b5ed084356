"""Fakes for the pipeline's external collaborators."""

from __future__ import annotations

from pathlib import Path

from gimme_readme.core.types import (
    DispatchConfig,
    InitialCommand,
    ModelResponse,
    OutputDestination,
    UsageMetrics,
)
from gimme_readme.exceptions import FileReadError
from gimme_readme.executor import PipelineOrchestrator
from gimme_readme.files.ignore import IgnoreMatcher
from gimme_readme.pipeline.model_dispatcher import ModelDispatcher
from gimme_readme.pipeline.path_filter import PathFilter
from gimme_readme.pipeline.prompt_assembler import PromptAssembler
from gimme_readme.pipeline.result_router import ResultRouter


class FakeAdapter:
    """Records every inference call and returns a canned response or raises."""

    def __init__(
        self,
        text: str = "OK",
        *,
        error: Exception | None = None,
        usage: UsageMetrics | None = None,
    ) -> None:
        self.text = text
        self.error = error
        self.usage = usage
        self.calls: list[tuple[str, DispatchConfig]] = []

    async def infer_text(self, prompt: str, config: DispatchConfig) -> ModelResponse:
        self.calls.append((prompt, config))
        if self.error is not None:
            raise self.error
        return ModelResponse(text=self.text, usage=self.usage)


class FakeReader:
    """Serves file contents from a dict; unknown paths fail like a missing file."""

    def __init__(self, contents: dict[str, str]) -> None:
        self.contents = contents
        self.calls: list[str] = []

    def __call__(self, path: str) -> str:
        self.calls.append(path)
        if path not in self.contents:
            raise FileReadError(path, FileNotFoundError(path))
        return self.contents[path]


class RecordingPersister:
    """Stores written content in memory instead of on disk."""

    def __init__(self) -> None:
        self.writes: dict[Path, str] = {}

    def __call__(self, path: Path, content: str) -> Path:
        self.writes[Path(path)] = content
        return Path(path)


def make_config(
    model: str = "gemini-1.5-flash",
    temperature: float = 0.5,
    *,
    wants_usage_metrics: bool = False,
) -> DispatchConfig:
    return DispatchConfig(
        model=model, temperature=temperature, wants_usage_metrics=wants_usage_metrics
    )


def make_command(
    files: tuple[str, ...] | list[str],
    *,
    instruction: str = "Summarize:\n",
    destination: OutputDestination | None = None,
    config: DispatchConfig | None = None,
) -> InitialCommand:
    return InitialCommand.from_files(
        files,
        instruction=instruction,
        config=config or make_config(),
        destination=destination,
    )


def make_orchestrator(
    *,
    matcher: IgnoreMatcher | None = None,
    reader: FakeReader | None = None,
    adapter: FakeAdapter | None = None,
    persister: RecordingPersister | None = None,
) -> PipelineOrchestrator:
    return PipelineOrchestrator(
        path_filter=PathFilter(matcher or IgnoreMatcher.empty()),
        prompt_assembler=PromptAssembler(reader) if reader else PromptAssembler(),
        model_dispatcher=ModelDispatcher(adapter=adapter or FakeAdapter()),
        result_router=ResultRouter(persister) if persister else ResultRouter(),
    )
