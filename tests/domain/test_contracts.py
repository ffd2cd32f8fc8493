"""Tests for capability resolution."""

from typing import Any

import pytest

from usecase.domain.contracts import (
    BuilderKind,
    CommandKind,
    Precondition,
    builder_kind,
    command_kind,
)


class ExecutableCommand:
    def execute(self, value: Any) -> Any:
        return value


class CallableCommand:
    def __call__(self, value: Any) -> Any:
        return value


class BothCommand(ExecutableCommand, CallableCommand):
    pass


class BuildingBuilder:
    def build(self, value: Any) -> Any:
        return value


class AlwaysTrue:
    def satisfied(self, value: Any) -> bool:
        return True


class TestCommandKind:
    def test_members(self) -> None:
        assert {k.value for k in CommandKind} == {"executable", "callable"}

    def test_execute_preferred(self) -> None:
        assert command_kind(ExecutableCommand()) is CommandKind.EXECUTABLE
        assert command_kind(BothCommand()) is CommandKind.EXECUTABLE

    def test_callable_fallback(self) -> None:
        assert command_kind(CallableCommand()) is CommandKind.CALLABLE
        assert command_kind(lambda v: v) is CommandKind.CALLABLE

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError, match="execute"):
            command_kind(42)


class TestBuilderKind:
    def test_members(self) -> None:
        assert {k.value for k in BuilderKind} == {"build", "callable", "identity"}

    def test_none_is_identity(self) -> None:
        assert builder_kind(None) is BuilderKind.IDENTITY

    def test_build_preferred(self) -> None:
        assert builder_kind(BuildingBuilder()) is BuilderKind.BUILD
        assert builder_kind(BuildingBuilder) is BuilderKind.BUILD

    def test_callable_fallback(self) -> None:
        assert builder_kind(str.upper) is BuilderKind.CALLABLE

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError, match="build"):
            builder_kind("not a builder")


class TestPreconditionProtocol:
    def test_structural(self) -> None:
        assert isinstance(AlwaysTrue(), Precondition)
        assert not isinstance(object(), Precondition)
