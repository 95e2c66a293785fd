"""Per-step timings for ``--verbose`` probe runs.

Disabled by default: :func:`timed_step` then yields None and
:func:`timed` calls straight through. Once enabled, every step timed
inside a ``@timed`` operation is appended to
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from nativeprobe.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_steps: ContextVar[list[StepTiming] | None] = ContextVar("_steps", default=None)

log = structlog.get_logger("nativeprobe.telemetry")


@dataclass
class StepTiming:
    """Wall time spent in one probe step."""

    step: str
    started: float = field(default_factory=time.perf_counter)
    duration_ms: float = 0.0
    notes: dict[str, Any] = field(default_factory=dict)

    def note(self, key: str, value: Any) -> None:
        self.notes[key] = value

    def as_dict(self) -> dict[str, Any]:
        row: dict[str, Any] = {"step": self.step, "duration_ms": round(self.duration_ms, 3)}
        if self.notes:
            row["notes"] = self.notes
        return row


@contextmanager
def timed_step(step: str) -> Iterator[StepTiming | None]:
    """Time *step* if telemetry is on and a ``@timed`` call is collecting."""
    collected = _steps.get() if _enabled.get() else None
    if collected is None:
        yield None
        return
    timing = StepTiming(step)
    try:
        yield timing
    finally:
        timing.duration_ms = (time.perf_counter() - timing.started) * 1000
        collected.append(timing)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def timed(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Collect the steps of *func* and attach them to its ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        started = time.perf_counter()
        token = _steps.set([])
        try:
            result = func(*args, **kwargs)
            steps = _steps.get() or []
        finally:
            _steps.reset(token)

        total_ms = round((time.perf_counter() - started) * 1000, 3)
        log.debug("operation.timed", operation=func.__qualname__, total_ms=total_ms)
        if not isinstance(result, ServiceResult):
            return result
        telemetry = {
            "operation": func.__qualname__,
            "total_ms": total_ms,
            "steps": [s.as_dict() for s in steps],
        }
        meta = {**(result.meta or {}), "telemetry": telemetry}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Turn step timing on for the current context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
