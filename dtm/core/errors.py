"""Process exit codes.

Each failure class of the toolchain commands maps onto one of these codes.
The values are part of the CLI contract and must stay stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (version not installed, bad arguments)
    - 2: Environment error (unreadable or invalid config)
    - 3: Release error (no such release, release without assets)
    - 4: Network error (registry or download unreachable)
    - 5: I/O error (toolchain home not writable, disk full)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    RELEASE_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
