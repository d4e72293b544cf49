"""Failure values for toolchain operations.

Every failure carries the tag or version token it concerns so the command
layer can print a one-line diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "IOFailure",
    "NotFound",
    "NetworkFailure",
    "NoAssetFailure",
    "NotInstalled",
    "RegistryError",
    "ToolchainError",
]


@dataclass(frozen=True, slots=True)
class IOFailure:
    """Filesystem operation was denied or could not complete."""

    path: Path
    message: str
    tag: str | None = None

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"

    @classmethod
    def from_os_error(cls, path: Path, error: OSError, tag: str | None = None) -> IOFailure:
        return cls(path=path, message=error.strerror or str(error), tag=tag)


@dataclass(frozen=True, slots=True)
class NotFound:
    """The registry has no release with this tag."""

    tag: str

    def __str__(self) -> str:
        return f"release '{self.tag}' not found"


@dataclass(frozen=True, slots=True)
class NetworkFailure:
    """Registry or transport error."""

    tag: str
    message: str

    def __str__(self) -> str:
        return f"{self.tag}: {self.message}"


@dataclass(frozen=True, slots=True)
class NoAssetFailure:
    """The release exists but has nothing to download."""

    tag: str

    def __str__(self) -> str:
        return f"release '{self.tag}' has no downloadable assets"


@dataclass(frozen=True, slots=True)
class NotInstalled:
    version: str

    def __str__(self) -> str:
        return f"No such version '{self.version}' is installed"


RegistryError = NotFound | NetworkFailure

ToolchainError = IOFailure | NotFound | NetworkFailure | NoAssetFailure | NotInstalled
