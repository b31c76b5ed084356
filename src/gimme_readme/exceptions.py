"""Exceptions for the README generation pipeline.

Every terminal pipeline failure derives from `GimmeReadmeError` so callers can
catch one type. Stages return these errors inside `Failure` values rather than
raising them; only the configuration boundary raises directly.
"""

from __future__ import annotations

from pathlib import Path


class GimmeReadmeError(Exception):
    """Base exception for all gimme-readme errors."""


class ConfigurationError(GimmeReadmeError):
    """Raised when configuration values are invalid or cannot be loaded."""


class EmptyInputError(GimmeReadmeError):
    """No files were supplied to the command."""

    def __init__(self, message: str = "No files were provided.") -> None:  # noqa: D107
        super().__init__(message)


class NoValidFilesError(GimmeReadmeError):
    """Every supplied file was excluded by the ignore rules."""

    def __init__(self, excluded: tuple[str, ...] = ()) -> None:  # noqa: D107
        self.excluded = tuple(excluded)
        super().__init__("No valid files to process.")


class FileReadError(GimmeReadmeError):
    """A file could not be read."""

    def __init__(self, path: str | Path, cause: Exception | None = None) -> None:  # noqa: D107
        self.path = str(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Unable to read file '{self.path}'{detail}")


class ModelInvocationError(GimmeReadmeError):
    """The inference call failed; wraps the transport or service error."""

    def __init__(  # noqa: D107
        self,
        message: str,
        *,
        model: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.model = model
        self.cause = cause
        super().__init__(message)


class OutputWriteError(GimmeReadmeError):
    """The model response could not be written to its destination."""

    def __init__(self, path: str | Path, cause: Exception | None = None) -> None:  # noqa: D107
        self.path = str(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Unable to write output file '{self.path}'{detail}")


class IgnoreRulesError(ConfigurationError):
    """The ``.gitignore`` rules could not be loaded or applied."""
