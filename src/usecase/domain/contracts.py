"""Capability contracts for the collaborators a use case orchestrates.

All contracts are structural: any object with the right methods qualifies,
no base class required. Capability probing happens once, when a step is
declared, and is recorded as a :class:`CommandKind` / :class:`BuilderKind`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable


class CommandKind(StrEnum):
    """How a step invokes its command."""

    EXECUTABLE = "executable"
    CALLABLE = "callable"


class BuilderKind(StrEnum):
    """How a step transforms its input before validation."""

    BUILD = "build"
    CALLABLE = "callable"
    IDENTITY = "identity"


@runtime_checkable
class Precondition(Protocol):
    """System-level gate check evaluated before any step runs.

    Implementations may declare a ``tag`` (class attribute, classmethod, or
    instance attribute) used for symbolic failure dispatch.
    """

    def satisfied(self, value: Any) -> bool: ...


@runtime_checkable
class Builder(Protocol):
    """Transforms step input; ``build`` is preferred over ``__call__``."""

    def build(self, value: Any) -> Any: ...


@runtime_checkable
class ValidationReport(Protocol):
    """Result of running a validator against a value."""

    def valid(self) -> bool: ...

    def errors(self) -> Mapping[str, Sequence[str]]: ...


@runtime_checkable
class Validator(Protocol):
    def validate(self, value: Any) -> ValidationReport: ...


@runtime_checkable
class Executable(Protocol):
    """Business logic unit; ``execute`` is preferred over ``__call__``."""

    def execute(self, value: Any) -> Any: ...


InputAdapter = Callable[[Any], Any]


def command_kind(command: Any) -> CommandKind:
    """Resolve how *command* is invoked.

    Raises:
        TypeError: If *command* exposes neither ``execute`` nor ``__call__``.
    """
    if isinstance(command, Executable):
        return CommandKind.EXECUTABLE
    if callable(command):
        return CommandKind.CALLABLE
    msg = f"Command {command!r} must define execute() or be callable"
    raise TypeError(msg)


def builder_kind(builder: Any) -> BuilderKind:
    """Resolve how *builder* is applied (``None`` means identity).

    Raises:
        TypeError: If *builder* exposes neither ``build`` nor ``__call__``.
    """
    if builder is None:
        return BuilderKind.IDENTITY
    if isinstance(builder, Builder):
        return BuilderKind.BUILD
    if callable(builder):
        return BuilderKind.CALLABLE
    msg = f"Builder {builder!r} must define build() or be callable"
    raise TypeError(msg)
