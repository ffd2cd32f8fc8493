"""Command: execute a use case once against JSON input."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from usecase.commands._base import UseCaseCommand

if TYPE_CHECKING:
    from usecase.commands._context import AppContext


def _load_input(raw: str | None, input_file: Path | None) -> Any:
    if raw is not None and input_file is not None:
        raise click.UsageError("Use either --input or --input-file, not both.")
    if input_file is not None:
        raw = input_file.read_text(encoding="utf-8")
    if raw is None:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Input is not valid JSON: {exc}"
        raise click.BadParameter(msg, param_hint="--input") from exc


@click.command(
    cls=UseCaseCommand,
    examples="""\
  usecase run myapp.repos:CreateRepository --input '{"name": "dotfiles"}'
  usecase --json run myapp.repos:make_use_case --input-file params.json
  usecase -v run myapp.repos:CreateRepository""",
)
@click.argument("target")
@click.option("-i", "--input", "raw_input", default=None, help="Input as a JSON document.")
@click.option(
    "-f",
    "--input-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read the JSON input from a file.",
)
@click.pass_obj
def run(app: AppContext, target: str, raw_input: str | None, input_file: Path | None) -> None:
    """Execute TARGET (module:attribute) and print its outcome."""
    from usecase.commands._context import resolve_target

    use_case = resolve_target(target)
    params = _load_input(raw_input, input_file)
    try:
        outcome = use_case.execute(params)
    except Exception as exc:
        msg = f"{type(exc).__name__}: {exc}"
        raise click.ClickException(msg) from exc
    app.emit(outcome)
