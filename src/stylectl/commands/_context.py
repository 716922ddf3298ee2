"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Workspace initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stylectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from stylectl.config.settings import StyleSettings
    from stylectl.infrastructure.workspace import Workspace
    from stylectl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is lazily initialized on first use so ``--help`` and
    ``--version`` never load the compiler or plugins.
    """

    def __init__(self, settings: StyleSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from stylectl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from stylectl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from stylectl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        self.echo(result)
        if not result.ok:
            raise SystemExit(1)

    def echo(self, result: ServiceResult) -> None:
        """Output a ServiceResult without exiting (used for watch runs)."""
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
