"""Outcome algebra — the result of executing a use case.

INVARIANT: Exactly one variant describes an execution, and for any outcome
at most one of ``on_success`` / ``on_failure`` / ``on_pre_condition_failed``
invokes its handler. Called without a handler, each accessor returns its
payload (or None on the other variants).

Variants:
- :class:`Neutral` — nothing happened.
- :class:`Success` — all steps ran; carries the final command output.
- :class:`PreConditionFailed` — a precondition failed or a check/builder
  raised; carries the precondition or the exception as ``cause``.
- :class:`Failed` — a validator rejected a step's input.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar

from usecase.domain.tags import tag_for
from usecase.services.dispatch import FailureView

Handler = Callable[[Any], Any]


@dataclass(frozen=True)
class Outcome:
    """Base outcome: every accessor is a no-op.

    Attributes:
        meta: Optional execution metadata (telemetry). Ignored by equality.
    """

    kind: ClassVar[str] = "outcome"

    meta: dict[str, Any] | None = field(default=None, compare=False, kw_only=True)

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def is_pre_condition_failed(self) -> bool:
        return False

    @property
    def is_neutral(self) -> bool:
        return False

    def on_success(self, handler: Handler | None = None) -> Any:
        return None

    def on_failure(self, handler: Handler | None = None) -> Any:
        return None

    def on_pre_condition_failed(self, handler: Callable[[FailureView], Any] | None = None) -> Any:
        return None

    def __str__(self) -> str:
        return f"#<{type(self).__name__}>"


@dataclass(frozen=True)
class Neutral(Outcome):
    """No result and no failure; the never-executed state."""

    kind: ClassVar[str] = "neutral"

    @property
    def is_neutral(self) -> bool:
        return True


@dataclass(frozen=True)
class Success(Outcome):
    kind: ClassVar[str] = "success"

    result: Any = None

    @property
    def is_success(self) -> bool:
        return True

    def on_success(self, handler: Handler | None = None) -> Any:
        if handler is not None:
            handler(self.result)
        return self.result

    def __str__(self) -> str:
        return f"#<Success: {self.result}>"


@dataclass(frozen=True)
class PreConditionFailed(Outcome):
    """A precondition was unmet, or a check or builder raised.

    The two are distinguished only by the runtime type of ``cause``.
    """

    kind: ClassVar[str] = "pre_condition_failed"

    cause: Any = None

    @property
    def is_pre_condition_failed(self) -> bool:
        return True

    @property
    def tag(self) -> str:
        return tag_for(self.cause)

    def dispatch(self) -> FailureView:
        """Start a fresh ``when`` / ``otherwise`` matching session."""
        return FailureView(self.cause)

    def on_pre_condition_failed(self, handler: Callable[[FailureView], Any] | None = None) -> Any:
        """Return the raw cause; pass a fresh FailureView to *handler* if given."""
        if handler is not None:
            handler(self.dispatch())
        return self.cause

    def __str__(self) -> str:
        return f"#<PreConditionFailed: {self.cause}>"


@dataclass(frozen=True)
class Failed(Outcome):
    """A validator rejected the builder output of a step.

    Attributes:
        errors: The validation report (``valid()`` / ``errors()``).
        preceding_input: The builder output that failed validation.
    """

    kind: ClassVar[str] = "failed"

    errors: Any = None
    preceding_input: Any = None

    @property
    def is_failure(self) -> bool:
        return True

    def on_failure(self, handler: Handler | None = None) -> Any:
        if handler is not None:
            handler(self.errors)
        return self.errors

    def __str__(self) -> str:
        return f"#<Failed: {self.errors}>"
