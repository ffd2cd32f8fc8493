"""Validation results and ready-made validators.

Any object with ``validate(value) -> report`` works as a step validator,
where the report exposes ``valid()`` and ``errors()``. This module ships a
pydantic-backed :class:`ValidationResult` plus two validator flavours:

- :class:`ModelValidator` — validate a value against a pydantic model.
- :func:`validator` — combine plain rule functions returning field errors.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

ROOT_FIELD = "__root__"
BLANK_MESSAGE = "can't be blank"

Rule = Callable[[Any], Mapping[str, Sequence[str]] | None]


class ValidationResult(BaseModel):
    """Outcome of validating one value.

    Attributes:
        target: The value that was validated.
        error_map: Field name to ordered error messages. Empty when valid.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target: Any = None
    error_map: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    def valid(self) -> bool:
        return not self.error_map

    def errors(self) -> dict[str, tuple[str, ...]]:
        return self.error_map

    @property
    def error_count(self) -> int:
        """Number of fields with at least one error."""
        return len(self.error_map)

    @classmethod
    def from_pydantic(cls, target: Any, exc: ValidationError) -> ValidationResult:
        """Convert a pydantic ``ValidationError`` into field-keyed messages.

        The field key is the dotted error location; model-level errors
        (empty location) are keyed under ``__root__``.
        """
        collected: dict[str, list[str]] = {}
        for error in exc.errors():
            key = ".".join(str(part) for part in error["loc"]) or ROOT_FIELD
            collected.setdefault(key, []).append(error["msg"])
        return cls(target=target, error_map={k: tuple(v) for k, v in collected.items()})


class ModelValidator:
    """Validate a mapping or attribute-bearing object against a pydantic model."""

    def __init__(self, model: type[BaseModel]) -> None:
        self.model = model

    def validate(self, value: Any) -> ValidationResult:
        try:
            self.model.model_validate(value, from_attributes=True)
        except ValidationError as exc:
            return ValidationResult.from_pydantic(value, exc)
        return ValidationResult(target=value)

    def __repr__(self) -> str:
        return f"ModelValidator({self.model.__name__})"


@dataclass(frozen=True)
class RuleValidator:
    """Run rule functions in order and merge their field errors."""

    rules: tuple[Rule, ...]

    def validate(self, value: Any) -> ValidationResult:
        collected: dict[str, list[str]] = {}
        for rule in self.rules:
            for key, messages in (rule(value) or {}).items():
                collected.setdefault(key, []).extend(messages)
        return ValidationResult(
            target=value,
            error_map={k: tuple(v) for k, v in collected.items() if v},
        )


def validator(*rules: Rule) -> RuleValidator:
    """Build a validator from rule functions.

    Each rule receives the value and returns ``{field: [messages]}`` or None.

    Examples:
        >>> check = validator(lambda v: None if v.get("age", 0) >= 18 else {"age": ["too young"]})
        >>> check.validate({"age": 12}).errors()
        {'age': ('too young',)}
    """
    return RuleValidator(rules=rules)


def _read_field(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


def _is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Sequence, Mapping, set, frozenset)):
        return len(value) == 0
    return False


def presence_of(*fields: str) -> RuleValidator:
    """Validator requiring each of *fields* to be present and non-blank."""

    def rule(value: Any) -> dict[str, list[str]]:
        return {name: [BLANK_MESSAGE] for name in fields if _is_blank(_read_field(value, name))}

    return validator(rule)
