"""On-disk shape of the toolchain home.

    <home>/
      djinn-cli.sh            active shim (POSIX)
      djinn-cli.bat           active shim (Windows)
      toolchains/
        <tag>/
          <hex-id>.<ext>      artifact
          djinn-cli.sh
          djinn-cli.bat
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dtm.core.result import Err, Ok, Result
from dtm.toolchain.errors import IOFailure

__all__ = ["StorageLayout", "VERSIONS_DIR_NAME"]

VERSIONS_DIR_NAME = "toolchains"


@dataclass(frozen=True, slots=True)
class StorageLayout:
    """Path accessors for one toolchain home.

    Attributes:
        home: Toolchain home root
        shim_name: Base name of the launcher scripts (without extension)
    """

    home: Path
    shim_name: str = "djinn-cli"

    @property
    def versions_root(self) -> Path:
        return self.home / VERSIONS_DIR_NAME

    def version_dir(self, tag: str) -> Path:
        return self.versions_root / tag

    def posix_shim(self, directory: Path) -> Path:
        return directory / f"{self.shim_name}.sh"

    def windows_shim(self, directory: Path) -> Path:
        return directory / f"{self.shim_name}.bat"

    @property
    def active_posix_shim(self) -> Path:
        return self.posix_shim(self.home)

    @property
    def active_windows_shim(self) -> Path:
        return self.windows_shim(self.home)

    def artifact_path(self, tag: str, release_id: int, extension: str) -> Path:
        """Artifact file: release id as lowercase hex plus the format extension."""
        return self.version_dir(tag) / f"{release_id:x}.{extension}"

    def ensure(self) -> Result[None, IOFailure]:
        """Create the home and versions root if missing.

        Returns:
            Ok(None), or Err(IOFailure) if creation is denied. Never retried.
        """
        try:
            self.versions_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(IOFailure.from_os_error(self.versions_root, e))
        return Ok(None)
