"""Prompt assembly stage of the pipeline."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging

from gimme_readme.core.types import (
    AssembledCommand,
    ClassifiedCommand,
    Failure,
    Result,
    Success,
)
from gimme_readme.exceptions import FileReadError
from gimme_readme.files.operations import read_file as default_read_file
from gimme_readme.pipeline.base import BaseAsyncHandler

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"

type FileReader = Callable[[str], str]


def assemble(
    base_instruction: str,
    accepted_files: Sequence[str],
    read_file: FileReader = default_read_file,
) -> str:
    """Append each file's content to ``base_instruction``.

    Files are read in order and every content block is followed by a blank
    line. The first unreadable file stops assembly.

    Raises:
        FileReadError: For the first file that cannot be read.
    """
    parts = [base_instruction]
    for path in accepted_files:
        try:
            content = read_file(path)
        except FileReadError:
            raise
        except Exception as e:
            raise FileReadError(path, e) from e
        parts.append(content)
        parts.append(BLOCK_SEPARATOR)
    return "".join(parts)


class PromptAssembler(BaseAsyncHandler[ClassifiedCommand, AssembledCommand, FileReadError]):
    """Builds the single request string from the accepted files."""

    def __init__(self, read_file: FileReader = default_read_file) -> None:
        """Initialize with the file-reading collaborator."""
        self._read_file = read_file

    async def handle(
        self, command: ClassifiedCommand
    ) -> Result[AssembledCommand, FileReadError]:
        """Assemble the prompt for the accepted files."""
        accepted = command.classified.accepted
        try:
            prompt = assemble(command.initial.instruction, accepted, self._read_file)
        except FileReadError as e:
            return Failure(e)
        logger.debug(
            "Assembled prompt of %d characters from %d file(s)", len(prompt), len(accepted)
        )
        return Success(AssembledCommand(classified=command, prompt=prompt))
