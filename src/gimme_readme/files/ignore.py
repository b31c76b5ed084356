"""Gitignore-style path matching.

Wraps a `pathspec.GitIgnoreSpec` so the pipeline depends only on a single
``ignores(relative_path)`` predicate.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import os
from pathlib import Path

import pathspec

log = logging.getLogger(__name__)

GITIGNORE_FILE = ".gitignore"
# Always excluded, whether or not a .gitignore exists.
BUILTIN_PATTERNS: tuple[str, ...] = (".git/",)


class IgnoreMatcher:
    """Decides whether a path relative to the working directory is ignored."""

    def __init__(self, spec: pathspec.PathSpec, patterns: tuple[str, ...] = ()) -> None:  # noqa: D107
        self._spec = spec
        self.patterns = patterns

    @classmethod
    def from_patterns(
        cls, lines: Iterable[str], *, include_builtin: bool = True
    ) -> IgnoreMatcher:
        """Build a matcher from gitignore lines."""
        patterns = tuple(lines)
        if include_builtin:
            patterns = BUILTIN_PATTERNS + patterns
        return cls(pathspec.GitIgnoreSpec.from_lines(patterns), patterns)

    @classmethod
    def empty(cls) -> IgnoreMatcher:
        """A matcher that ignores nothing."""
        return cls.from_patterns((), include_builtin=False)

    def ignores(self, relative_path: str) -> bool:
        """Return True when ``relative_path`` matches an ignore pattern."""
        normalized = relative_path.replace(os.sep, "/")
        if normalized in ("", "."):
            return False
        return self._spec.match_file(normalized)


def load_ignore_matcher(root: str | Path | None = None) -> IgnoreMatcher:
    """Load ``.gitignore`` from ``root`` (default: the working directory).

    A missing file yields a matcher with only the built-in patterns.
    """
    base = Path(root) if root is not None else Path.cwd()
    gitignore = base / GITIGNORE_FILE
    if not gitignore.is_file():
        log.debug("No %s found in %s", GITIGNORE_FILE, base)
        return IgnoreMatcher.from_patterns(())
    with gitignore.open(encoding="utf-8", errors="replace") as f:
        lines = f.read().splitlines()
    log.debug("Loaded %d lines from %s", len(lines), gitignore)
    return IgnoreMatcher.from_patterns(lines)


def relative_to_cwd(path: str, cwd: str | Path | None = None) -> str:
    """Express ``path`` relative to ``cwd`` (default: the working directory)."""
    start = os.fspath(cwd) if cwd is not None else os.getcwd()
    try:
        return os.path.relpath(os.path.abspath(path), start)
    except ValueError:
        # Different drive on Windows; no relative form exists.
        return path
