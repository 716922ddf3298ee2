"""Command: list registered extensions and their stylesheets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stylectl.commands._base import StyleCommand

if TYPE_CHECKING:
    from stylectl.commands._context import AppContext


@click.command(
    cls=StyleCommand,
    examples="""\
  stylectl extensions
  stylectl -q extensions
  stylectl --json extensions""",
)
@click.pass_obj
def extensions(app: AppContext) -> None:
    """List registered extensions (config and plugins)."""
    from stylectl.services.extensions import ExtensionService

    app.emit(ExtensionService(app.workspace).list_extensions())
