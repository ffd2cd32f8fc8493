"""Step pipeline — builder → validators → command, threaded across steps.

Error policy per stage:
- Builder raises   → ``PreConditionFailed(cause=error)``; pipeline stops.
- Validator invalid → ``Failed(errors, preceding_input)``; pipeline stops.
- Command raises   → NOT caught; propagates to the caller of ``execute``.

Each command's return value is the next step's input; the last one is the
``Success`` result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from usecase.domain.steps import Step
from usecase.services.outcome import Failed, Outcome, PreConditionFailed, Success
from usecase.services.telemetry import step_span

logger = logging.getLogger(__name__)


def _prepare(step: Step, index: int, value: Any) -> tuple[Any, PreConditionFailed | None]:
    """Apply the step's builder, converting any error into an outcome."""
    try:
        return step.prepare(value), None
    except Exception as exc:
        logger.debug(
            "Step %d builder raised %s",
            index,
            type(exc).__name__,
            exc_info=True,
        )
        return None, PreConditionFailed(cause=exc)


def _validate(step: Step, index: int, value: Any) -> Failed | None:
    for validator in step.validators:
        report = validator.validate(value)
        if not report.valid():
            logger.debug("Step %d failed validation on %s", index, sorted(report.errors()))
            return Failed(errors=report, preceding_input=value)
    return None


def run(steps: Sequence[Step], initial_input: Any) -> Outcome:
    """Run *steps* in order starting from *initial_input*."""
    value = initial_input
    for index, step in enumerate(steps):
        with step_span(index, step):
            prepared, failure = _prepare(step, index, value)
            if failure is not None:
                return failure

            failed = _validate(step, index, prepared)
            if failed is not None:
                return failed

            value = step.invoke(prepared)
        logger.debug("Step %d completed", index)
    return Success(result=value)
