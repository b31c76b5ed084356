"""Command-line entry point (exposed as ``gimme-readme``).

Usage examples::

    # Print a README for two files to the console
    gimme-readme -f src/app.py src/utils.py

    # Write the response to a file with a custom model and temperature
    gimme-readme -f src/*.py -o README.md -m gemini-1.5-pro -t 0

    # Show where each configuration value comes from
    gimme-readme --show-config

Defaults for the model, temperature, output file and prompt are read from the
environment and from ``~/.gimme_readme_config``; command-line options win.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from gimme_readme import __version__
from gimme_readme.config import resolve_config
from gimme_readme.core.types import Failure
from gimme_readme.exceptions import ConfigurationError
from gimme_readme.executor import create_orchestrator, generate_readme
from gimme_readme.telemetry import LoggingReporter, TelemetryContext

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gimme_readme.core.types import PipelineRun, UsageMetrics

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Define the command-line options."""
    parser = argparse.ArgumentParser(
        prog="gimme-readme",
        description="Generate a README for a set of source files using a Gemini model.",
    )
    parser.add_argument(
        "-f",
        "--files",
        nargs="*",
        default=None,
        metavar="FILE",
        help="Files whose contents are sent to the model.",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        default=None,
        help="Write the response to this file instead of printing it.",
    )
    parser.add_argument(
        "-m",
        "--model",
        default=None,
        help="Model identifier (default: gemini-1.5-flash).",
    )
    parser.add_argument(
        "-p",
        "--prompt",
        default=None,
        help="Instruction placed before the file contents.",
    )
    parser.add_argument(
        "-t",
        "--temperature",
        default=None,
        help="Sampling temperature between 0 and 2 (default: 0.5).",
    )
    parser.add_argument(
        "--token",
        action="store_true",
        help="Report token usage for the request.",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the effective configuration and where each value came from.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log debug output to stderr.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by ``-v`` flags."""
    level = logging.DEBUG if verbosity > 0 else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)
    for noisy in ("httpx", "google_genai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def format_usage(usage: UsageMetrics) -> str:
    """Render token usage for the console."""
    return (
        f"Token usage: prompt={usage.prompt_tokens} output={usage.output_tokens} "
        f"cached={usage.cached_tokens} total={usage.total_tokens}"
    )


def report(run: PipelineRun, *, model: str, wants_usage: bool) -> int:
    """Print the outcome of a run and return the process exit code."""
    if isinstance(run.result, Failure):
        print(f"error: {run.result.error}", file=sys.stderr)
        return 1

    outcome = run.result.value
    if outcome.written_path is not None:
        print(
            f"Response from the {model} model written to {outcome.written_path}",
            file=sys.stderr,
        )
    else:
        print(outcome.text)
    if wants_usage:
        if outcome.usage is not None:
            print(format_usage(outcome.usage), file=sys.stderr)
        else:
            print("Token usage was not reported by the model.", file=sys.stderr)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Primary CLI entry point. Returns an exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    overrides = {
        "model": args.model,
        "temperature": args.temperature,
        "output_file": args.output_file,
        "custom_prompt": args.prompt,
    }
    try:
        config = resolve_config(overrides)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.show_config:
        print(config.audit())
        return 0

    files = tuple(args.files or ())
    orchestrator = create_orchestrator(
        config, telemetry=TelemetryContext(LoggingReporter())
    )
    if files:
        print(f"Waiting for a response from the {config.model} model...", file=sys.stderr)
    run = asyncio.run(
        generate_readme(
            files,
            config=config,
            wants_usage_metrics=args.token,
            orchestrator=orchestrator,
        )
    )
    return report(run, model=config.model, wants_usage=args.token)


def run() -> None:
    """Console-script wrapper that exits with the code from `main`."""
    sys.exit(main())


if __name__ == "__main__":
    run()
