"""Result routing stage of the pipeline."""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path

from gimme_readme.core.types import (
    DispatchedCommand,
    Failure,
    ModelResponse,
    OutputDestination,
    Result,
    RouteOutcome,
    Success,
)
from gimme_readme.exceptions import GimmeReadmeError, OutputWriteError
from gimme_readme.files.operations import persist as default_persist
from gimme_readme.pipeline.base import BaseAsyncHandler

logger = logging.getLogger(__name__)

type Persister = Callable[[Path, str], object]


def route(
    result: Result[ModelResponse, GimmeReadmeError],
    destination: OutputDestination,
    persist: Persister = default_persist,
) -> Result[RouteOutcome, GimmeReadmeError]:
    """Deliver a successful response to its destination.

    A failure is returned unchanged without touching the destination. File
    destinations receive the response text exactly as returned.
    """
    if isinstance(result, Failure):
        return result

    response = result.value
    if destination.path is None:
        return Success(
            RouteOutcome(text=response.text, destination=destination, usage=response.usage)
        )

    try:
        persist(destination.path, response.text)
    except OutputWriteError as e:
        return Failure(e)
    except OSError as e:
        return Failure(OutputWriteError(destination.path, e))
    logger.debug("Wrote model response to %s", destination.path)
    return Success(
        RouteOutcome(
            text=response.text,
            destination=destination,
            written_path=destination.path,
            usage=response.usage,
        )
    )


class ResultRouter(BaseAsyncHandler[DispatchedCommand, RouteOutcome, GimmeReadmeError]):
    """Routes the model response to a file or to the console output."""

    def __init__(self, persist: Persister = default_persist) -> None:
        """Initialize with the file-writing collaborator."""
        self._persist = persist

    async def handle(
        self, command: DispatchedCommand
    ) -> Result[RouteOutcome, GimmeReadmeError]:
        """Route the dispatched response."""
        return route(
            Success(command.response), command.initial.destination, self._persist
        )
