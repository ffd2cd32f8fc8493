"""Precondition gate — ordered, short-circuiting system checks.

INVARIANT: The first failing precondition wins; later ones are never called.
A check that raises is reported the same way as one that returns False,
with the exception as the cause.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from usecase.domain.contracts import Precondition
from usecase.services.outcome import PreConditionFailed
from usecase.services.telemetry import gate_span

logger = logging.getLogger(__name__)


def verify(pre_conditions: Sequence[Precondition], value: Any) -> PreConditionFailed | None:
    """Check *pre_conditions* in order against *value*.

    Returns:
        ``PreConditionFailed`` for the first unmet or raising check,
        or None when every precondition is satisfied.
    """
    with gate_span(len(pre_conditions)) as span:
        for checked, pre_condition in enumerate(pre_conditions, start=1):
            try:
                satisfied = pre_condition.satisfied(value)
            except Exception as exc:
                logger.debug(
                    "Pre-condition %s raised %s",
                    type(pre_condition).__name__,
                    type(exc).__name__,
                    exc_info=True,
                )
                if span:
                    span.annotate("checked", checked)
                return PreConditionFailed(cause=exc)
            if not satisfied:
                logger.debug("Pre-condition %s not satisfied", type(pre_condition).__name__)
                if span:
                    span.annotate("checked", checked)
                return PreConditionFailed(cause=pre_condition)
        if span:
            span.annotate("checked", len(pre_conditions))
    return None
