"""Execution telemetry: one span tree per ``execute`` call.

Off by default; a disabled check costs a single ``ContextVar.get``.
When enabled, the root span covers the whole execution with one child for
the precondition gate and one per step, and the finished tree lands in
``Outcome.meta["telemetry"]``.
"""

from __future__ import annotations

import dataclasses
import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from usecase.services.outcome import Outcome

if TYPE_CHECKING:
    from usecase.domain.steps import Step

log = structlog.get_logger("usecase.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """Timed section of one execution."""

    name: str
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.annotations:
            result["annotations"] = self.annotations
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a child span under the active execution span.

    Yields None when telemetry is off or no execution is being traced.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return

    child = Span(name=name)
    parent.children.append(child)
    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _current_span.reset(token)


@contextmanager
def gate_span(pre_condition_count: int) -> Generator[Span | None]:
    with trace_span("pre_conditions") as span:
        if span:
            span.annotate("declared", pre_condition_count)
        yield span


@contextmanager
def step_span(index: int, step: Step) -> Generator[Span | None]:
    """Span for one step, tagged with how its command and builder are called."""
    with trace_span(f"step[{index}]") as span:
        if span:
            span.annotate("command_kind", str(step.command_kind))
            span.annotate("builder_kind", str(step.builder_kind))
        yield span


def _with_telemetry(outcome: Outcome, span: Span) -> Outcome:
    merged = {**(outcome.meta or {}), "telemetry": span.to_dict()}
    return dataclasses.replace(outcome, meta=merged)


def traced(
    execute: Callable[[Any, Any], Outcome],
) -> Callable[[Any, Any], Outcome]:
    """Wrap a use case's ``execute`` in a root span.

    The span records the use case's class name and the outcome kind.
    A command error is recorded on the span, logged, and re-raised.
    """

    @functools.wraps(execute)
    def wrapper(use_case: Any, params: Any) -> Outcome:
        if not _enabled.get():
            return execute(use_case, params)

        name = type(use_case).__name__
        span = Span(name=f"{name}.execute")
        span.annotate("use_case", name)
        token = _current_span.set(span)
        try:
            outcome = execute(use_case, params)
        except Exception as exc:
            span.annotate("error", type(exc).__name__)
            log.debug("execution.raised", use_case=name, error=type(exc).__name__)
            raise
        finally:
            span.end()
            _current_span.reset(token)

        span.annotate("outcome", outcome.kind)
        log.debug(
            "execution.complete",
            use_case=name,
            outcome=outcome.kind,
            duration_ms=round(span.duration_ms, 2),
            steps=sum(1 for c in span.children if c.name.startswith("step[")),
        )
        return _with_telemetry(outcome, span)

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The innermost active span, for commands that want to annotate it."""
    if not _enabled.get():
        return None
    return _current_span.get()
