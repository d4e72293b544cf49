"""Error presentation utilities.

One place decides how each toolchain failure reads on the console and which
exit code it ends the process with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dtm.core.errors import ErrorCode
from dtm.output.console import Style
from dtm.toolchain.errors import (
    IOFailure,
    NetworkFailure,
    NoAssetFailure,
    NotFound,
    NotInstalled,
    ToolchainError,
)

if TYPE_CHECKING:
    from dtm.output.console import ConsoleProtocol

__all__ = ["print_toolchain_error", "toolchain_error_exit_code"]


def print_toolchain_error(error: ToolchainError, console: ConsoleProtocol) -> None:
    """Print a one-line diagnostic (plus hint where useful)."""
    match error:
        case NotInstalled(version=version):
            console.print(f"No such version '{version}' is installed", Style.ERROR)
            console.print("hint: run `dtm list` to see installed versions", Style.DIM)
        case NotFound(tag=tag):
            console.error(f"no release tagged '{tag}'")
        case NoAssetFailure(tag=tag):
            console.error(f"release '{tag}' has no downloadable assets")
        case NetworkFailure(tag=tag, message=message):
            console.error(f"{tag}: {message}")
        case IOFailure(path=path, message=message, tag=tag):
            prefix = f"{tag}: " if tag else ""
            console.error(f"{prefix}{message}: {path}")


def toolchain_error_exit_code(error: ToolchainError) -> int:
    """Get exit code for a toolchain error."""
    match error:
        case NotInstalled():
            return int(ErrorCode.USER_ERROR)
        case NotFound() | NoAssetFailure():
            return int(ErrorCode.RELEASE_ERROR)
        case NetworkFailure():
            return int(ErrorCode.NETWORK_ERROR)
        case IOFailure():
            return int(ErrorCode.IO_ERROR)
