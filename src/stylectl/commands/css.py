"""Command: recompile stylesheet entry points and extension styles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stylectl.commands._base import StyleCommand

if TYPE_CHECKING:
    from stylectl.commands._context import AppContext
    from stylectl.services.result import ServiceResult

OP = "compile_css"


def _failure(exc: Exception) -> ServiceResult:
    """Map a pipeline failure to an error result."""
    from stylectl.infrastructure.compiler import StylesheetCompileError
    from stylectl.infrastructure.watcher import WatcherError
    from stylectl.services.extensions import ExtensionBuildError
    from stylectl.services.result import error_result

    if isinstance(exc, StylesheetCompileError):
        return error_result(OP, "COMPILE_ERROR", exc)
    if isinstance(exc, ExtensionBuildError):
        return error_result(OP, "EXTENSION_ERROR", exc)
    if isinstance(exc, WatcherError):
        return error_result(OP, "WATCH_ERROR", exc)
    if isinstance(exc, OSError):
        return error_result(OP, "FILESYSTEM_ERROR", exc)
    return error_result(OP, "BUILD_ERROR", exc)


@click.command(
    cls=StyleCommand,
    examples="""\
  stylectl css
  stylectl css --compile-all
  stylectl css --extensions amp-accordion,amp-carousel
  stylectl css --watch
  stylectl --json css""",
)
@click.option("--watch", is_flag=True, help="Keep running and recompile when stylesheets change.")
@click.option("--compile-all", is_flag=True, help="Build styles for every registered extension.")
@click.option(
    "--extensions",
    "extension_names",
    default=None,
    help="Comma-separated extension names to build (default: all).",
)
@click.pass_obj
def css(app: AppContext, watch: bool, compile_all: bool, extension_names: str | None) -> None:
    """Recompile css to build directory."""
    from stylectl.infrastructure.compiler import StylesheetCompileError
    from stylectl.infrastructure.watcher import WatcherError
    from stylectl.services.css import CssService
    from stylectl.services.extensions import ExtensionBuildError

    if extension_names:
        names = [n.strip() for n in extension_names.split(",") if n.strip()]
        build = app.settings.build.model_copy(update={"extensions": names})
        app.settings = app.settings.model_copy(update={"build": build})

    svc = CssService(
        app.workspace,
        on_watch_result=app.echo,
        on_watch_error=lambda exc: app.echo(_failure(exc)),
    )
    try:
        result = svc.compile_all_styles(watch=watch, compile_all=compile_all or None)
    except (StylesheetCompileError, ExtensionBuildError, WatcherError, OSError) as exc:
        svc.stop_watch()
        app.emit(_failure(exc))
        return

    app.emit(result)
    if not watch or svc.watcher is None:
        return

    click.echo(f"Watching {app.workspace.source_dir} for changes (Ctrl+C to stop)", err=True)
    try:
        svc.watcher.wait()
    except KeyboardInterrupt:
        pass
    finally:
        svc.stop_watch()
