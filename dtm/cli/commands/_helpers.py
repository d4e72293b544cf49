"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from dtm.core.result import Err, Result
from dtm.output.errors import print_toolchain_error, toolchain_error_exit_code

if TYPE_CHECKING:
    from dtm.cli.context import CLIContext
    from dtm.toolchain.errors import ToolchainError

T = TypeVar("T")


def exit_on_error(result: Result[T, ToolchainError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the failure and exit with its code."""
    if isinstance(result, Err):
        print_toolchain_error(result.error, ctx.console)
        raise typer.Exit(code=toolchain_error_exit_code(result.error))
    return result.value
