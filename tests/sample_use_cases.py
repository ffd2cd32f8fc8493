"""Sample domain and use cases shared by the test suite and CLI tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from usecase import UseCase, presence_of


@dataclass
class Repository:
    id: int | None
    name: str | None


@dataclass
class User:
    id: int
    name: str
    can_admin: bool = False


class NewRepositoryInput(BaseModel):
    name: str | None = None


NewRepositoryValidator = presence_of("name")


class UserLoggedIn:
    def __init__(self, user: User | None) -> None:
        self.user = user

    def satisfied(self, params: Any) -> bool:
        return self.user is not None and self.user.id == 42


class ProjectAdmin:
    def __init__(self, user: User | None) -> None:
        self.user = user

    def satisfied(self, params: Any) -> bool:
        return self.user is not None and self.user.can_admin


class CreateRepositoryCommand:
    def __init__(self, user: User | None) -> None:
        self.user = user

    def execute(self, params: Any) -> Repository:
        return Repository(1349, params.name)


class CreateRepository(UseCase):
    def __init__(self, user: User | None) -> None:
        self.input_class(NewRepositoryInput)
        self.pre_condition(UserLoggedIn(user))
        self.pre_condition(ProjectAdmin(user))
        self.validator(NewRepositoryValidator)
        self.command(CreateRepositoryCommand(user))


class ExplodingCommand:
    def execute(self, params: Any) -> Any:
        raise RuntimeError("Crash!")


class ExplodingRepository(UseCase):
    def __init__(self, user: User | None) -> None:
        self.command(ExplodingCommand())


class RepositoryBuilder:
    @classmethod
    def build(cls, params: Any) -> Repository:
        if params.name == "invalid":
            return Repository(None, None)
        return Repository(None, f"{params.name}!")


class CreateRepositoryWithBuilder(UseCase):
    def __init__(self, user: User | None) -> None:
        self.input_class(NewRepositoryInput)
        self.builder(RepositoryBuilder)
        self.validator(NewRepositoryValidator)
        self.command(CreateRepositoryCommand(user))


class CreateRepositoryWithExplodingBuilder(UseCase):
    def __init__(self, user: User | None) -> None:
        self.input_class(NewRepositoryInput)
        self.builder(self)
        self.validator(NewRepositoryValidator)
        self.command(CreateRepositoryCommand(user))

    def build(self, params: Any) -> Any:
        raise ValueError("Oops")


def create_record(params: dict[str, Any]) -> dict[str, Any]:
    return {"id": 1349, "name": params["name"]}


def pimp_record(record: dict[str, Any]) -> dict[str, Any]:
    return {**record, "name": f"{record['name']} (Pimped)"}


class PimpRecord(UseCase):
    """Two steps: create a record, then decorate its name."""

    def __init__(self) -> None:
        self.command(create_record, validator=presence_of("name"))
        self.command(pimp_record)


def admin_create_repository() -> CreateRepository:
    """Zero-argument factory used by the CLI tests."""
    return CreateRepository(User(42, "Christian", can_admin=True))


def anonymous_create_repository() -> CreateRepository:
    return CreateRepository(None)


def exploding_repository() -> ExplodingRepository:
    return ExplodingRepository(None)
