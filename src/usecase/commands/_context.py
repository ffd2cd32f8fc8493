"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging and telemetry, resolves use-case
targets, and centralizes outcome emission (stdout/stderr + exit codes).
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

import click

from usecase.output.formatters import format_outcome
from usecase.services.definition import UseCaseDefinition
from usecase.services.use_case import UseCase

if TYPE_CHECKING:
    from usecase.config.settings import UseCaseSettings
    from usecase.services.outcome import Outcome

# Exit codes per outcome kind; anything unlisted exits 0.
EXIT_CODES = {
    "failed": 1,
    "pre_condition_failed": 2,
}

Runnable = UseCase | UseCaseDefinition


def _import_attr(target: str) -> Any:
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"Expected 'module:attribute', got {target!r}"
        raise click.BadParameter(msg, param_hint="TARGET")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import {module_name!r}: {exc}"
        raise click.BadParameter(msg, param_hint="TARGET") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            msg = f"{module_name!r} has no attribute {attr_path!r}"
            raise click.BadParameter(msg, param_hint="TARGET") from exc
    return obj


def resolve_target(target: str) -> Runnable:
    """Resolve ``module:attr`` to a use case or definition.

    *attr* may be a UseCase instance, a UseCaseDefinition, a UseCase
    subclass (instantiated without arguments), or a zero-argument factory
    returning either.
    """
    obj = _import_attr(target)
    if isinstance(obj, type) and issubclass(obj, UseCase):
        obj = obj()
    elif callable(obj) and not isinstance(obj, Runnable):
        obj = obj()
    if not isinstance(obj, Runnable):
        msg = f"{target!r} did not resolve to a UseCase or UseCaseDefinition"
        raise click.BadParameter(msg, param_hint="TARGET")
    return obj


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: UseCaseSettings) -> None:
        self.settings = settings

        from usecase.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.telemetry_enabled:
            from usecase.services.telemetry import enable_telemetry

            enable_telemetry()

    def emit(self, outcome: Outcome) -> None:
        """Format and output an Outcome with correct exit semantics.

        * Success / Neutral: writes to stdout, returns normally.
        * Failed: writes to stderr, exits 1.
        * PreConditionFailed: writes to stderr, exits 2.
        """
        output = format_outcome(outcome, json_output=self.settings.json_output)
        code = EXIT_CODES.get(outcome.kind, 0)
        if code == 0:
            click.echo(output)
            return
        click.echo(output, err=True)
        raise SystemExit(code)
