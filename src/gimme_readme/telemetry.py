"""Stage timings and error counters.

Off by default: `TelemetryContext` hands out a shared no-op object unless
``GIMME_README_TELEMETRY=1`` is set and at least one reporter is given.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
import logging
import os
import time
from typing import Any, Protocol, runtime_checkable

log = logging.getLogger(__name__)

TELEMETRY_ENV = "GIMME_README_TELEMETRY"

# Names of the scopes currently open in this task, outermost first.
_open_scopes: ContextVar[tuple[str, ...]] = ContextVar("open_scopes", default=())


def telemetry_enabled() -> bool:
    """Return True when the telemetry environment toggle is set."""
    return os.getenv(TELEMETRY_ENV) == "1"


@runtime_checkable
class TelemetryReporter(Protocol):
    """Receives finished scope timings and recorded metrics."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None: ...  # noqa: D102
    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None: ...  # noqa: D102


class _SilentTelemetry:
    """Accepts every call and records nothing."""

    __slots__ = ()

    @contextmanager
    def __call__(self, name: str, **metadata: Any) -> Iterator["_SilentTelemetry"]:  # noqa: ARG002
        yield self

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        pass


class _ReportingTelemetry:
    """Times nested scopes and forwards the results to reporters.

    A reporter that raises is logged and skipped; it never fails the
    pipeline.
    """

    __slots__ = ("reporters",)

    def __init__(self, *reporters: TelemetryReporter) -> None:
        self.reporters = reporters

    @contextmanager
    def __call__(self, name: str, **metadata: Any) -> Iterator["_ReportingTelemetry"]:
        parents = _open_scopes.get()
        token = _open_scopes.set((*parents, name))
        started = time.perf_counter()
        try:
            yield self
        finally:
            elapsed = time.perf_counter() - started
            _open_scopes.reset(token)
            path = ".".join((*parents, name))
            self._emit("record_timing", path, elapsed, depth=len(parents), **metadata)

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        """Add ``increment`` to the counter ``name`` under the open scope."""
        path = ".".join((*_open_scopes.get(), name))
        self._emit("record_metric", path, increment, metric_type="counter", **metadata)

    def _emit(self, method: str, path: str, value: Any, **metadata: Any) -> None:
        for reporter in self.reporters:
            try:
                getattr(reporter, method)(path, value, **metadata)
            except Exception:
                log.exception("Telemetry reporter %s failed", type(reporter).__name__)


_SILENT = _SilentTelemetry()

type TelemetryContextProtocol = _ReportingTelemetry | _SilentTelemetry


def TelemetryContext(*reporters: TelemetryReporter) -> TelemetryContextProtocol:  # noqa: N802
    """Return a reporting context, or the shared silent one when disabled."""
    if reporters and telemetry_enabled():
        return _ReportingTelemetry(*reporters)
    return _SILENT


class LoggingReporter:
    """Writes timings and counters to the debug log."""

    def __init__(self, logger: logging.Logger | None = None) -> None:  # noqa: D107
        self._log = logger or log

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:  # noqa: D102
        self._log.debug("timing %s %.4fs %s", scope, duration, metadata or "")

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:  # noqa: D102
        self._log.debug("metric %s=%r %s", scope, value, metadata or "")
