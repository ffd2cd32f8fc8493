"""Command: show a use case's preconditions and steps."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from usecase.commands._base import UseCaseCommand

if TYPE_CHECKING:
    from usecase.commands._context import AppContext
    from usecase.services.definition import UseCaseDefinition


def _name(obj: Any) -> str:
    if obj is None:
        return "-"
    if isinstance(obj, type) or (callable(obj) and hasattr(obj, "__qualname__")):
        return obj.__qualname__
    return type(obj).__name__


def describe_definition(definition: UseCaseDefinition) -> dict[str, Any]:
    """Summarize *definition* as a JSON-safe dict."""
    from usecase.domain.tags import tag_for

    return {
        "input_adapter": _name(definition.input_adapter),
        "pre_conditions": [
            {"type": type(pc).__name__, "tag": tag_for(pc)} for pc in definition.pre_conditions
        ],
        "steps": [
            {
                "command": _name(step.command),
                "command_kind": str(step.command_kind),
                "builder": _name(step.effective_builder),
                "builder_kind": str(step.builder_kind),
                "validators": len(step.validators),
            }
            for step in definition.steps
        ],
    }


@click.command(cls=UseCaseCommand, examples="  usecase describe myapp.repos:CreateRepository")
@click.argument("target")
@click.pass_obj
def describe(app: AppContext, target: str) -> None:
    """Show the preconditions and steps of TARGET (module:attribute)."""
    from usecase.commands._context import resolve_target
    from usecase.services.definition import UseCaseDefinition

    use_case = resolve_target(target)
    definition = use_case if isinstance(use_case, UseCaseDefinition) else use_case.definition
    summary = describe_definition(definition)

    if app.settings.json_output:
        click.echo(json.dumps(summary, indent=2))
        return

    click.echo(f"input: {summary['input_adapter']}")
    click.echo("pre-conditions:")
    for pc in summary["pre_conditions"]:
        click.echo(f"  - {pc['type']} [{pc['tag']}]")
    click.echo("steps:")
    for index, step in enumerate(summary["steps"]):
        click.echo(
            f"  {index}. {step['command']} ({step['command_kind']})"
            f" builder={step['builder']} ({step['builder_kind']})"
            f" validators={step['validators']}"
        )
