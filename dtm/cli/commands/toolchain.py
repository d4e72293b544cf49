from __future__ import annotations

import typer

from dtm.cli.commands._helpers import exit_on_error
from dtm.cli.context import build_context
from dtm.output.console import RichConsole
from dtm.output.progress import NullProgress, ProgressReporter, RichProgressReporter
from dtm.services.toolchains import ToolchainService


def install(
    version: str | None = typer.Argument(
        None,
        help="Version to install (e.g. 1.2.3); leave blank to install the latest version.",
    ),
) -> None:
    """Install a version of the Djinn toolchain."""
    ctx = build_context()
    progress: ProgressReporter = NullProgress()
    if isinstance(ctx.console, RichConsole) and ctx.console.rich.is_terminal:
        progress = RichProgressReporter(ctx.console.rich)
    service = ToolchainService(
        layout=ctx.layout,
        config=ctx.config,
        console=ctx.console,
        progress=progress,
    )
    exit_on_error(service.install(version), ctx)


def list_versions() -> None:
    """List the installed toolchains."""
    ctx = build_context()
    service = ToolchainService(layout=ctx.layout, config=ctx.config, console=ctx.console)
    exit_on_error(service.list_versions(), ctx)


def use(
    version: str = typer.Argument(..., help="Installed version to switch to (e.g. 1.2.3)."),
) -> None:
    """Switch to a particular Djinn toolchain."""
    ctx = build_context()
    service = ToolchainService(layout=ctx.layout, config=ctx.config, console=ctx.console)
    exit_on_error(service.use(version), ctx)
