"""Operating system detection.

Picks the user directory convention and decides whether shims get Unix
execute bits.
"""

from __future__ import annotations

import sys as _sys
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "detect_platform",
    "supports_unix_permissions",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    @property
    def is_unix(self) -> bool:
        """Check if this is a Unix-like platform (Linux or macOS)."""
        return self in (Platform.LINUX, Platform.MACOS)

    @property
    def supports_unix_permissions(self) -> bool:
        """Whether chmod execute bits mean anything on this platform."""
        return self.is_unix


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # NOTE: sys.platform instead of platform.system(), which may query WMI on Windows.
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


def supports_unix_permissions() -> bool:
    """Capability check used before setting execute bits on shims."""
    return detect_platform().supports_unix_permissions
