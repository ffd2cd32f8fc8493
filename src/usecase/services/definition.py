"""UseCaseDefinition and DefinitionBuilder.

Configuration accumulates in a :class:`DefinitionBuilder` and is frozen
once into a :class:`UseCaseDefinition`, which the gate and pipeline read.
A frozen definition is safe to share across threads provided its
collaborators are.

Usage::

    definition = (
        define()
        .input_class(NewRepositoryInput)
        .pre_condition(UserLoggedIn(user))
        .validator(presence_of("name"))
        .command(CreateRepository(user))
        .build()
    )
    outcome = definition.execute({"name": "dotfiles"})
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Self

from pydantic import BaseModel

from usecase.domain.contracts import InputAdapter, Precondition
from usecase.domain.steps import Step
from usecase.services.gate import verify
from usecase.services.outcome import Outcome
from usecase.services.pipeline import run

logger = logging.getLogger(__name__)


def _resolve_adapter(adapter: Any) -> InputAdapter | None:
    if adapter is None:
        return None
    if isinstance(adapter, type) and issubclass(adapter, BaseModel):
        return adapter.model_validate
    if callable(adapter):
        return adapter
    msg = f"Input adapter {adapter!r} must be callable"
    raise TypeError(msg)


@dataclass(frozen=True)
class UseCaseDefinition:
    """Immutable use-case configuration.

    Attributes:
        pre_conditions: Checks evaluated in order before any step.
        steps: Step descriptors evaluated in order.
        input_adapter: Optional adapter applied to raw input first.
            Pydantic models are applied via ``model_validate``.
    """

    pre_conditions: tuple[Precondition, ...] = ()
    steps: tuple[Step, ...] = ()
    input_adapter: Any = None
    _adapt: InputAdapter | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pre_conditions", tuple(self.pre_conditions))
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "_adapt", _resolve_adapter(self.input_adapter))

    def adapt(self, raw: Any) -> Any:
        """Apply the input adapter; errors propagate."""
        if self._adapt is None:
            return raw
        return self._adapt(raw)

    def execute(self, raw: Any) -> Outcome:
        """Adapt *raw*, verify preconditions, then run the steps.

        Raises:
            Exception: Whatever a command (or the input adapter) raises.
        """
        value = self.adapt(raw)
        failure = verify(self.pre_conditions, value)
        if failure is not None:
            return failure
        return run(self.steps, value)


class DefinitionBuilder:
    """Accumulates configuration calls, then freezes them with :meth:`build`.

    ``builder()`` and ``validator()`` calls made before a ``command()`` are
    pending and attach to that next command. Keyword arguments passed to
    ``command()`` take precedence over pending values.
    """

    def __init__(self) -> None:
        self._pre_conditions: list[Precondition] = []
        self._steps: list[Step] = []
        self._input_adapter: Any = None
        self._pending_builder: Any = None
        self._pending_validators: list[Any] = []

    def input_class(self, adapter: Any) -> Self:
        _resolve_adapter(adapter)
        self._input_adapter = adapter
        return self

    def pre_condition(self, pre_condition: Precondition) -> Self:
        if not isinstance(pre_condition, Precondition):
            msg = f"Pre-condition {pre_condition!r} must define satisfied()"
            raise TypeError(msg)
        self._pre_conditions.append(pre_condition)
        return self

    def builder(self, builder: Any) -> Self:
        self._pending_builder = builder
        return self

    def validator(self, *validators: Any) -> Self:
        self._pending_validators.extend(validators)
        return self

    def command(
        self,
        command: Any,
        *,
        builder: Any = None,
        validators: Iterable[Any] | None = None,
        validator: Any = None,
    ) -> Self:
        """Append a step for *command*.

        Args:
            command: Object with ``execute`` or a callable.
            builder: Explicit builder; overrides the command's own ``build``.
            validators: Ordered validators for this step; an empty list
                discards validators pending from :meth:`validator`.
            validator: Single-validator shorthand, appended after *validators*.
        """
        explicit = None if validators is None else list(validators)
        if validator is not None:
            explicit = [*(explicit or ()), validator]

        step = Step.create(
            command,
            builder=builder if builder is not None else self._pending_builder,
            validators=explicit if explicit is not None else self._pending_validators,
        )
        self._steps.append(step)
        self._pending_builder = None
        self._pending_validators = []
        logger.debug("Declared step %d: %r", len(self._steps) - 1, step)
        return self

    step = command

    def build(self) -> UseCaseDefinition:
        if self._pending_builder is not None or self._pending_validators:
            logger.warning("Builder/validators declared after the last command are ignored")
        return UseCaseDefinition(
            pre_conditions=tuple(self._pre_conditions),
            steps=tuple(self._steps),
            input_adapter=self._input_adapter,
        )


def define() -> DefinitionBuilder:
    """Start a new definition."""
    return DefinitionBuilder()
