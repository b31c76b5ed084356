"""Local file collaborators: ignore rules, reading and persisting."""

from .ignore import IgnoreMatcher, load_ignore_matcher, relative_to_cwd
from .operations import persist, read_file

__all__ = [
    "IgnoreMatcher",
    "load_ignore_matcher",
    "relative_to_cwd",
    "read_file",
    "persist",
]
