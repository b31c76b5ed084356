"""Generate README documentation from source files with a Gemini model."""

import importlib.metadata
import logging

from gimme_readme.config import ResolvedConfig, resolve_config
from gimme_readme.core.prompts import DEFAULT_PROMPT
from gimme_readme.core.types import (
    ClassifiedPaths,
    DispatchConfig,
    Failure,
    InitialCommand,
    ModelResponse,
    OutputDestination,
    PipelineRun,
    PipelineState,
    Result,
    RouteOutcome,
    Success,
    UsageMetrics,
)
from gimme_readme.exceptions import (
    ConfigurationError,
    EmptyInputError,
    FileReadError,
    GimmeReadmeError,
    IgnoreRulesError,
    ModelInvocationError,
    NoValidFilesError,
    OutputWriteError,
)
from gimme_readme.executor import (
    PipelineOrchestrator,
    create_orchestrator,
    generate_readme,
)

try:
    __version__ = importlib.metadata.version("gimme-readme")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Library default: no output unless the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Orchestration
    "PipelineOrchestrator",
    "create_orchestrator",
    "generate_readme",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "DEFAULT_PROMPT",
    # Core types
    "InitialCommand",
    "ClassifiedPaths",
    "DispatchConfig",
    "OutputDestination",
    "ModelResponse",
    "UsageMetrics",
    "RouteOutcome",
    "PipelineRun",
    "PipelineState",
    "Result",
    "Success",
    "Failure",
    # Exceptions
    "GimmeReadmeError",
    "ConfigurationError",
    "IgnoreRulesError",
    "EmptyInputError",
    "NoValidFilesError",
    "FileReadError",
    "ModelInvocationError",
    "OutputWriteError",
]
