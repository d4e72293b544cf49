from __future__ import annotations

from dataclasses import dataclass

import typer

from dtm.core.config import Config, default_config_path, load_config_or_default, resolve_home
from dtm.core.errors import ErrorCode
from dtm.core.result import Err
from dtm.output.console import ConsoleProtocol, RichConsole
from dtm.output.errors import print_toolchain_error, toolchain_error_exit_code
from dtm.toolchain.layout import StorageLayout


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    layout: StorageLayout
    console: ConsoleProtocol


def build_context(console: ConsoleProtocol | None = None) -> CLIContext:
    """Load config, resolve the toolchain home once, and make sure it exists."""
    console = console or RichConsole()

    config_result = load_config_or_default(default_config_path())
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    config = config_result.value

    layout = StorageLayout(home=resolve_home(None, config), shim_name=config.shim_name)
    ensured = layout.ensure()
    if isinstance(ensured, Err):
        print_toolchain_error(ensured.error, console)
        raise typer.Exit(code=toolchain_error_exit_code(ensured.error))

    return CLIContext(config=config, layout=layout, console=console)
