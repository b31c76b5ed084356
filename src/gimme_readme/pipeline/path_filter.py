"""Path classification stage of the pipeline."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from pathlib import Path

from gimme_readme.core.types import (
    ClassifiedCommand,
    ClassifiedPaths,
    Failure,
    InitialCommand,
    Result,
    Success,
)
from gimme_readme.exceptions import IgnoreRulesError
from gimme_readme.files.ignore import IgnoreMatcher, load_ignore_matcher, relative_to_cwd
from gimme_readme.pipeline.base import BaseAsyncHandler

logger = logging.getLogger(__name__)


def classify(
    paths: Sequence[str],
    matcher: IgnoreMatcher,
    *,
    cwd: str | Path | None = None,
) -> ClassifiedPaths:
    """Partition ``paths`` into accepted and excluded, keeping caller order.

    Each path is tested in its form relative to ``cwd``; the original string
    is what lands in the result.
    """
    return ClassifiedPaths.from_partition(
        paths, lambda path: matcher.ignores(relative_to_cwd(path, cwd))
    )


class PathFilter(BaseAsyncHandler[InitialCommand, ClassifiedCommand, IgnoreRulesError]):
    """Classifies requested paths with a gitignore-style matcher.

    An injected matcher is used for every run. Otherwise ``matcher_factory``
    (``.gitignore`` of the working directory by default) is called on each
    run, so a reused orchestrator sees the current rules.
    """

    def __init__(
        self,
        matcher: IgnoreMatcher | None = None,
        *,
        matcher_factory: Callable[[], IgnoreMatcher] = load_ignore_matcher,
        cwd: str | Path | None = None,
    ) -> None:
        """Initialize with an optional matcher and working directory."""
        self._matcher = matcher
        self._matcher_factory = matcher_factory
        self._cwd = cwd

    async def handle(
        self, command: InitialCommand
    ) -> Result[ClassifiedCommand, IgnoreRulesError]:
        """Classify the command's files."""
        try:
            matcher = self._matcher if self._matcher is not None else self._matcher_factory()
            classified = classify(command.files, matcher, cwd=self._cwd)
        except Exception as e:
            return Failure(IgnoreRulesError(f"Failed to apply ignore rules: {e}"))
        logger.debug(
            "Classified %d path(s): %d accepted, %d excluded",
            len(command.files),
            len(classified.accepted),
            len(classified.excluded),
        )
        return Success(ClassifiedCommand(initial=command, classified=classified))
