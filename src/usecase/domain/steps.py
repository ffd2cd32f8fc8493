"""Step descriptor — one builder → validators → command unit.

Capabilities are resolved once at construction. The effective builder is
the explicit ``builder`` when given, else the command itself when it
defines ``build``, else identity.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from usecase.domain.contracts import (
    Builder,
    BuilderKind,
    CommandKind,
    ValidationReport,
    Validator,
    builder_kind,
    command_kind,
)


@dataclass(frozen=True)
class CallableValidator:
    """Adapts a plain ``fn(value) -> report`` callable to the Validator contract."""

    fn: Any

    def validate(self, value: Any) -> ValidationReport:
        return self.fn(value)


def as_validator(obj: Any) -> Validator:
    """Return *obj* as a Validator, wrapping bare callables.

    Raises:
        TypeError: If *obj* has neither ``validate`` nor ``__call__``.
    """
    if isinstance(obj, Validator):
        return obj
    if callable(obj):
        return CallableValidator(obj)
    msg = f"Validator {obj!r} must define validate() or be callable"
    raise TypeError(msg)


@dataclass(frozen=True)
class Step:
    """Immutable step descriptor with resolved invocation kinds.

    Attributes:
        command: Business logic; ``execute`` preferred over ``__call__``.
        builder: Explicit builder, overriding the command's own ``build``.
        validators: Ordered validators run against the builder output.
        command_kind: Resolved invocation style of ``command``.
        builder_kind: Resolved application style of ``effective_builder``.
        effective_builder: The builder actually applied, or None for identity.
    """

    command: Any
    builder: Any = None
    validators: tuple[Validator, ...] = ()
    command_kind: CommandKind = field(init=False)
    builder_kind: BuilderKind = field(init=False)
    effective_builder: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        effective = self.builder
        if effective is None and isinstance(self.command, Builder):
            effective = self.command

        object.__setattr__(self, "command_kind", command_kind(self.command))
        object.__setattr__(self, "builder_kind", builder_kind(effective))
        object.__setattr__(self, "effective_builder", effective)
        object.__setattr__(self, "validators", tuple(as_validator(v) for v in self.validators))

    @classmethod
    def create(
        cls,
        command: Any,
        *,
        builder: Any = None,
        validators: Iterable[Any] = (),
    ) -> Step:
        """Build a step, accepting any iterable of validators."""
        return cls(command=command, builder=builder, validators=tuple(validators))

    def prepare(self, value: Any) -> Any:
        """Apply the effective builder to *value*."""
        if self.builder_kind is BuilderKind.BUILD:
            return self.effective_builder.build(value)
        if self.builder_kind is BuilderKind.CALLABLE:
            return self.effective_builder(value)
        return value

    def invoke(self, value: Any) -> Any:
        """Run the command with *value*. Errors propagate."""
        if self.command_kind is CommandKind.EXECUTABLE:
            return self.command.execute(value)
        return self.command(value)
