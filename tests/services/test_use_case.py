"""End-to-end tests for UseCase subclasses."""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest

from tests.sample_use_cases import (
    CreateRepository,
    CreateRepositoryWithBuilder,
    CreateRepositoryWithExplodingBuilder,
    ExplodingRepository,
    PimpRecord,
    ProjectAdmin,
    Repository,
    User,
    UserLoggedIn,
)
from usecase import UseCase
from usecase.services.definition import DefinitionBuilder
from usecase.services.outcome import Failed, PreConditionFailed, Success


class RaisingUser(User):
    @property  # type: ignore[override]
    def id(self) -> int:
        raise RuntimeError("Oops!")

    @id.setter
    def id(self, value: int) -> None:
        pass


class TestPreConditions:
    def test_fails_first_pre_condition_no_user(self) -> None:
        outcome = CreateRepository(None).execute({})
        assert isinstance(outcome.on_pre_condition_failed(), UserLoggedIn)

    def test_fails_second_pre_condition_user_cannot_admin(self, admin: User) -> None:
        admin.can_admin = False
        outcome = CreateRepository(admin).execute({})
        assert isinstance(outcome.on_pre_condition_failed(), ProjectAdmin)

    def test_fails_with_error_if_pre_condition_raises(self) -> None:
        user = RaisingUser(42, "Christian", can_admin=True)
        outcome = CreateRepository(user).execute({})
        assert isinstance(outcome.on_pre_condition_failed(), RuntimeError)

    def test_dispatch_by_tag(self) -> None:
        handled: list[str] = []
        CreateRepository(None).execute({}).on_pre_condition_failed(
            lambda f: f.when("user_logged_in", lambda _: handled.append("login"))
            .when("project_admin", lambda _: handled.append("admin"))
            .otherwise(lambda _: handled.append("other"))
        )
        assert handled == ["login"]


class TestValidation:
    def test_fails_on_input_validation(self, admin: User) -> None:
        outcome = CreateRepository(admin).execute({})
        validation = outcome.on_failure()
        assert validation is not None
        assert not validation.valid()
        assert validation.error_count == 1
        assert "name" in validation.errors()

    def test_single_blank_field(self, admin: User) -> None:
        outcome = CreateRepository(admin).execute({"name": ""})
        assert isinstance(outcome, Failed)
        assert list(outcome.errors.errors()) == ["name"]


class TestExecution:
    def test_executes_command(self, admin: User) -> None:
        outcome = CreateRepository(admin).execute({"name": "My repository"})
        result = outcome.on_success()
        assert isinstance(result, Repository)
        assert result.name == "My repository"

    def test_raises_if_command_raises(self, admin: User) -> None:
        with pytest.raises(RuntimeError, match="Crash!"):
            ExplodingRepository(admin).execute(None)

    def test_two_steps(self) -> None:
        outcome = PimpRecord().execute({"name": "Mr"})
        assert outcome == Success({"id": 1349, "name": "Mr (Pimped)"})

    def test_two_steps_validation(self) -> None:
        outcome = PimpRecord().execute({"name": ""})
        assert outcome.is_failure

    def test_no_steps_returns_raw_input(self) -> None:
        assert UseCase().execute({"name": "x"}) == Success({"name": "x"})


class TestBuilders:
    def test_builder_output_is_validated_and_executed(self, admin: User) -> None:
        outcome = CreateRepositoryWithBuilder(admin).execute({"name": "dotfiles"})
        assert outcome.on_success() == Repository(1349, "dotfiles!")

    def test_builder_output_can_fail_validation(self, admin: User) -> None:
        outcome = CreateRepositoryWithBuilder(admin).execute({"name": "invalid"})
        assert isinstance(outcome, Failed)
        assert outcome.preceding_input == Repository(None, None)

    def test_exploding_builder_is_pre_condition_failure(self, admin: User) -> None:
        outcome = CreateRepositoryWithExplodingBuilder(admin).execute({"name": "x"})
        assert isinstance(outcome, PreConditionFailed)
        assert isinstance(outcome.cause, ValueError)
        assert outcome.tag == "value_error"

    def test_explicit_builder_overrides_command_build(self) -> None:
        class SelfBuilding:
            def build(self, value: Any) -> str:
                return "implicit"

            def execute(self, value: Any) -> Any:
                return value

        class Case(UseCase):
            def __init__(self) -> None:
                self.command(SelfBuilding(), builder=lambda v: "explicit")

        assert Case().execute("x") == Success("explicit")

    def test_command_build_used_by_default(self) -> None:
        class SelfBuilding:
            def build(self, value: Any) -> str:
                return f"built {value}"

            def execute(self, value: Any) -> Any:
                return value

        class Case(UseCase):
            def __init__(self) -> None:
                self.command(SelfBuilding())

        assert Case().execute("x") == Success("built x")


class TestDefinitionLifecycle:
    def test_frozen_after_execute(self, admin: User) -> None:
        use_case = CreateRepository(admin)
        use_case.execute({"name": "x"})
        with pytest.raises(RuntimeError, match="frozen"):
            use_case.command(lambda v: v)

    def test_definition_is_cached(self, admin: User) -> None:
        use_case = CreateRepository(admin)
        assert use_case.definition is use_case.definition

    def test_reusable_across_executions(self, admin: User) -> None:
        use_case = CreateRepository(admin)
        assert use_case.execute({"name": "a"}).on_success() == Repository(1349, "a")
        assert use_case.execute({"name": "b"}).on_success() == Repository(1349, "b")

    def test_identical_use_cases_give_identical_outcomes(self, admin: User) -> None:
        assert PimpRecord().execute({"name": "Mr"}) == PimpRecord().execute({"name": "Mr"})
        assert CreateRepository(admin).execute({"name": ""}) == CreateRepository(admin).execute(
            {"name": ""}
        )

    def test_repr_does_not_freeze(self) -> None:
        use_case = PimpRecord()
        assert "configuring" in repr(use_case)
        use_case.execute({"name": "Mr"})
        assert "frozen" in repr(use_case)

    def test_exception_causes_match_by_type_and_args(self, admin: User) -> None:
        """Caught errors compare by identity, so compare their type and args."""
        first = CreateRepositoryWithExplodingBuilder(admin).execute({"name": "x"})
        second = CreateRepositoryWithExplodingBuilder(admin).execute({"name": "x"})
        assert first != second
        assert type(first.cause) is type(second.cause)
        assert first.cause.args == second.cause.args == ("Oops",)

    def test_concurrent_first_execute_freezes_once(
        self, admin: User, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        original_build = DefinitionBuilder.build

        def slow_build(self: DefinitionBuilder) -> Any:
            time.sleep(0.05)
            return original_build(self)

        monkeypatch.setattr(DefinitionBuilder, "build", slow_build)
        use_case = CreateRepository(admin)
        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [pool.submit(use_case.execute, {"name": "x"}) for _ in range(2)]
            outcomes = [future.result() for future in futures]
        assert outcomes == [Success(Repository(1349, "x"))] * 2
