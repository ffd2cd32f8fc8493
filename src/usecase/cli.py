"""Root CLI group for usecase with global flags and command registration."""

from __future__ import annotations

import click

from usecase import __version__
from usecase.commands import register_commands
from usecase.commands._context import AppContext
from usecase.config.settings import UseCaseSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="usecase")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and execution telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--telemetry", is_flag=True, help="Include span timings in the outcome.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    telemetry: bool,
    config_path: str | None,
) -> None:
    """usecase — run and inspect declarative use cases."""
    settings = UseCaseSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
        telemetry=telemetry,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)


def main() -> None:
    cli()
