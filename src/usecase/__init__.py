"""usecase — declarative orchestration of multi-step business operations.

A use case gates execution behind preconditions, runs ordered
builder → validators → command steps, and reports one of four outcomes
that callers branch on declaratively.
"""

from __future__ import annotations

from usecase.domain.steps import Step
from usecase.domain.tags import default_tag, tag_for
from usecase.domain.validation import (
    ModelValidator,
    ValidationResult,
    presence_of,
    validator,
)
from usecase.services.definition import DefinitionBuilder, UseCaseDefinition, define
from usecase.services.dispatch import DispatchOrderError, FailureView
from usecase.services.outcome import Failed, Neutral, Outcome, PreConditionFailed, Success
from usecase.services.use_case import UseCase

__version__ = "0.1.0"

__all__ = [
    "DefinitionBuilder",
    "DispatchOrderError",
    "Failed",
    "FailureView",
    "ModelValidator",
    "Neutral",
    "Outcome",
    "PreConditionFailed",
    "Step",
    "Success",
    "UseCase",
    "UseCaseDefinition",
    "ValidationResult",
    "__version__",
    "default_tag",
    "define",
    "presence_of",
    "tag_for",
    "validator",
]
