"""Behavioral tests for path classification."""

from pathlib import Path

import pytest

from gimme_readme.core.types import ClassifiedCommand, Failure, Success
from gimme_readme.exceptions import ConfigurationError, IgnoreRulesError
from gimme_readme.files.ignore import IgnoreMatcher
from gimme_readme.pipeline.path_filter import PathFilter, classify
from tests.helpers import make_command


@pytest.mark.unit
def test_matcher_excluding_nothing_accepts_every_path_in_order():
    paths = ["b.py", "a.py", "src/c.py", "docs/readme.md"]

    classified = classify(paths, IgnoreMatcher.empty())

    assert classified.accepted == tuple(paths)
    assert classified.excluded == ()


@pytest.mark.unit
def test_partition_keeps_caller_order_on_both_sides():
    matcher = IgnoreMatcher.from_patterns(["*.env", "build/"])
    paths = ["main.py", "secret.env", "build/out.js", "lib.py", "local.env"]

    classified = classify(paths, matcher)

    assert classified.accepted == ("main.py", "lib.py")
    assert classified.excluded == ("secret.env", "build/out.js", "local.env")
    assert set(classified.accepted).isdisjoint(classified.excluded)
    assert sorted(classified.accepted + classified.excluded) == sorted(paths)


@pytest.mark.unit
def test_absolute_paths_are_matched_relative_to_cwd(tmp_path: Path):
    matcher = IgnoreMatcher.from_patterns(["secrets/"])
    secret = str(tmp_path / "secrets" / "key.txt")
    public = str(tmp_path / "app.py")

    classified = classify([secret, public], matcher, cwd=tmp_path)

    # Original strings are preserved in the result
    assert classified.excluded == (secret,)
    assert classified.accepted == (public,)


@pytest.mark.unit
def test_git_directory_is_always_excluded():
    classified = classify([".git/config", "app.py"], IgnoreMatcher.from_patterns([]))

    assert classified.excluded == (".git/config",)


@pytest.mark.unit
def test_negated_pattern_re_includes_file():
    matcher = IgnoreMatcher.from_patterns(["*.md", "!README.md"])

    classified = classify(["README.md", "NOTES.md"], matcher)

    assert classified.accepted == ("README.md",)
    assert classified.excluded == ("NOTES.md",)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_handler_wraps_classification_in_command():
    handler = PathFilter(IgnoreMatcher.from_patterns(["secret.env"]))

    result = await handler.handle(make_command(["a.txt", "secret.env"]))

    assert isinstance(result, Success)
    assert isinstance(result.value, ClassifiedCommand)
    assert result.value.classified.accepted == ("a.txt",)
    assert result.value.classified.excluded == ("secret.env",)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_handler_reloads_rules_on_each_run():
    rules = iter([["*.log"], ["*.txt"]])

    def factory() -> IgnoreMatcher:
        return IgnoreMatcher.from_patterns(next(rules))

    handler = PathFilter(matcher_factory=factory)
    first = await handler.handle(make_command(["a.txt", "b.log"]))
    second = await handler.handle(make_command(["a.txt", "b.log"]))

    assert first.value.classified.excluded == ("b.log",)
    assert second.value.classified.excluded == ("a.txt",)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unreadable_rules_fail_as_configuration_error():
    def factory() -> IgnoreMatcher:
        raise PermissionError(".gitignore: permission denied")

    result = await PathFilter(matcher_factory=factory).handle(make_command(["a.txt"]))

    assert isinstance(result, Failure)
    assert isinstance(result.error, IgnoreRulesError)
    assert isinstance(result.error, ConfigurationError)
    assert "permission denied" in str(result.error)
