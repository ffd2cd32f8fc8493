"""Subcommand modules for usecase.

Provides register_commands() which uses deferred imports to keep
``usecase --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from usecase.commands.describe import describe
    from usecase.commands.run import run

    cli.add_command(run)
    cli.add_command(describe)
