"""FailureView — symbolic dispatch over a failed precondition.

A view is a single linear matching session: all ``when`` branches first,
the ``otherwise`` catch-all last.

Usage::

    outcome.on_pre_condition_failed(
        lambda f: f.when("user_logged_in", redirect_to_login)
                   .when("project_admin", forbid)
                   .otherwise(report)
    )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from usecase.domain.tags import tag_for


class DispatchOrderError(RuntimeError):
    """A ``when`` branch was registered after ``otherwise``."""


class FailureView:
    """Wraps the cause of a ``PreConditionFailed`` outcome for tag matching.

    Attributes:
        cause: The failing precondition instance or the caught exception.
        tag: The cause's resolved dispatch tag.
    """

    def __init__(self, cause: Any) -> None:
        self.cause = cause
        self.tag = tag_for(cause)
        self._matched = False
        self._closed = False

    @property
    def matched(self) -> bool:
        """Whether any ``when`` branch has matched so far."""
        return self._matched

    def when(self, tag: str, handler: Callable[[Any], Any]) -> FailureView:
        """Call *handler* with the cause if *tag* matches.

        Raises:
            DispatchOrderError: If ``otherwise`` was already registered.
        """
        if self._closed:
            msg = f"when({tag!r}) registered after otherwise() on {self!r}"
            raise DispatchOrderError(msg)
        if self.tag == tag:
            self._matched = True
            handler(self.cause)
        return self

    def otherwise(self, handler: Callable[[Any], Any]) -> FailureView:
        """Call *handler* with the cause unless a ``when`` branch matched."""
        self._closed = True
        if not self._matched:
            handler(self.cause)
        return self

    def __repr__(self) -> str:
        return f"<FailureView tag={self.tag!r} cause={self.cause!r}>"
