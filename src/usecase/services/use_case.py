"""UseCase — base class for concrete use cases.

Subclasses declare their configuration in ``__init__``; the definition is
frozen on first :meth:`UseCase.execute` (or :attr:`UseCase.definition`
access) and is read-only afterwards.

Usage::

    class CreateRepository(UseCase):
        def __init__(self, user: User) -> None:
            self.input_class(NewRepositoryInput)
            self.pre_condition(UserLoggedIn(user))
            self.pre_condition(ProjectAdmin(user))
            self.validator(presence_of("name"))
            self.command(CreateRepositoryCommand(user))

    CreateRepository(user).execute({"name": "dotfiles"}).on_success(show)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any, Self

from usecase.domain.contracts import Precondition
from usecase.services.definition import DefinitionBuilder, UseCaseDefinition
from usecase.services.outcome import Outcome
from usecase.services.telemetry import traced

logger = logging.getLogger(__name__)

_freeze_lock = threading.Lock()


class UseCase:
    """Base for use cases configured through fluent declaration calls."""

    _definition: UseCaseDefinition | None = None
    _definition_builder: DefinitionBuilder | None = None

    def _configure(self) -> DefinitionBuilder:
        if self._definition is not None:
            msg = f"{type(self).__name__} definition is frozen; configure it in __init__"
            raise RuntimeError(msg)
        if self._definition_builder is None:
            self._definition_builder = DefinitionBuilder()
        return self._definition_builder

    # --- Declaration API ---

    def input_class(self, adapter: Any) -> Self:
        self._configure().input_class(adapter)
        return self

    def pre_condition(self, pre_condition: Precondition) -> Self:
        self._configure().pre_condition(pre_condition)
        return self

    def builder(self, builder: Any) -> Self:
        """Set the builder for the next declared command."""
        self._configure().builder(builder)
        return self

    def validator(self, *validators: Any) -> Self:
        """Add validators for the next declared command."""
        self._configure().validator(*validators)
        return self

    def command(
        self,
        command: Any,
        *,
        builder: Any = None,
        validators: Iterable[Any] | None = None,
        validator: Any = None,
    ) -> Self:
        self._configure().command(
            command,
            builder=builder,
            validators=validators,
            validator=validator,
        )
        return self

    step = command

    # --- Execution ---

    @property
    def definition(self) -> UseCaseDefinition:
        """The frozen definition (built on first access)."""
        if self._definition is None:
            with _freeze_lock:
                if self._definition is None:
                    pending = self._definition_builder or DefinitionBuilder()
                    self._definition = pending.build()
                    self._definition_builder = None
        return self._definition

    @traced
    def execute(self, params: Any) -> Outcome:
        """Run the use case once against *params*.

        Returns:
            ``PreConditionFailed``, ``Failed``, or ``Success``.

        Raises:
            Exception: Whatever a command raises; command errors are not caught.
        """
        outcome = self.definition.execute(params)
        logger.debug("%s finished: %s", type(self).__name__, outcome.kind)
        return outcome

    def __repr__(self) -> str:
        # Must not freeze the definition; reprs are taken while configuring.
        state = "frozen" if self._definition is not None else "configuring"
        return f"<{type(self).__name__} {state}>"
