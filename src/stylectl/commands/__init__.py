"""Subcommand modules for stylectl.

Provides register_commands() which uses deferred imports to keep
``stylectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from stylectl.commands.css import css
    from stylectl.commands.extensions import extensions

    cli.add_command(css)
    cli.add_command(extensions)
