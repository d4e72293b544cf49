from __future__ import annotations

import os
from pathlib import Path

import typer

from dtm import __version__
from dtm.cli.commands.toolchain import install, list_versions, use
from dtm.core.config import HOME_ENV_VAR
from dtm.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="The Djinn toolchain manager.",
)


# Commands
app.command()(install)
app.command("list")(list_versions)
app.command()(use)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    home: Path | None = typer.Option(
        None,
        "--home",
        help=f"Toolchain home (overrides ${HOME_ENV_VAR} and config).",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if home is not None:
        try:
            root = home.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --home: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if root.exists() and not root.is_dir():
            typer.echo(f"error: --home '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[HOME_ENV_VAR] = str(root)


def main() -> None:
    app()
