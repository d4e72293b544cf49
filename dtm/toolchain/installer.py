"""Release installation into a version directory.

Installing a release:
1. creates ``toolchains/<tag>/`` (re-installing simply overwrites),
2. streams the first asset into ``<hex id>.<ext>`` through a hidden
   ``.part`` file that is renamed into place once complete,
3. writes the version's launcher shims pointing at the artifact.

Nothing outside the version directory is touched.
"""

from __future__ import annotations

import contextlib
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dtm.core.result import Err, Ok, Result
from dtm.toolchain.errors import IOFailure, NetworkFailure, NoAssetFailure
from dtm.toolchain.shims import ShimPair, ShimWriter

if TYPE_CHECKING:
    from dtm.output.progress import ProgressReporter
    from dtm.toolchain.http import HttpClient
    from dtm.toolchain.layout import StorageLayout
    from dtm.toolchain.registry import ReleaseDescriptor

__all__ = ["Installer", "InstalledVersion", "InstallError", "PLACEHOLDER_TOTAL"]

# Progress total used when the server does not report a content length.
PLACEHOLDER_TOTAL = 10_000

InstallError = IOFailure | NetworkFailure | NoAssetFailure


@dataclass(frozen=True, slots=True)
class InstalledVersion:
    """A fully populated version directory.

    Attributes:
        tag: Release tag, also the directory name
        directory: ``<home>/toolchains/<tag>``
        artifact: Downloaded release binary
        shims: Launcher pair running the artifact
    """

    tag: str
    directory: Path
    artifact: Path
    shims: ShimPair


class Installer:
    """Downloads a resolved release and generates its launchers.

    Usage:
        installer = Installer(layout, http, launch_command=("java", "-jar"))
        result = installer.install(release)
    """

    def __init__(
        self,
        layout: StorageLayout,
        http: HttpClient,
        *,
        launch_command: Sequence[str],
        artifact_extension: str,
        unix_permissions: bool,
        progress: ProgressReporter | None = None,
    ) -> None:
        self._layout = layout
        self._http = http
        self._launch_command = tuple(launch_command)
        self._extension = artifact_extension
        self._shims = ShimWriter(unix_permissions=unix_permissions)
        self._progress = progress

    def install(self, release: ReleaseDescriptor) -> Result[InstalledVersion, InstallError]:
        """Install release under its tag.

        Returns:
            Ok(InstalledVersion), or Err with the failure and release tag.
            A failed install leaves a partial directory that the next
            install of the same tag overwrites.
        """
        if not release.assets:
            return Err(NoAssetFailure(tag=release.tag))

        directory = self._layout.version_dir(release.tag)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(IOFailure.from_os_error(directory, e, tag=release.tag))

        artifact = self._layout.artifact_path(release.tag, release.id, self._extension)
        downloaded = self._download(release.assets[0], artifact, release.tag)
        if isinstance(downloaded, Err):
            return downloaded

        shims = ShimPair(
            posix=self._layout.posix_shim(directory),
            windows=self._layout.windows_shim(directory),
        )
        try:
            self._shims.write_launcher(shims, self._launch_command, artifact.resolve())
        except OSError as e:
            return Err(IOFailure.from_os_error(directory, e, tag=release.tag))

        return Ok(
            InstalledVersion(tag=release.tag, directory=directory, artifact=artifact, shims=shims)
        )

    def _download(self, url: str, artifact: Path, tag: str) -> Result[Path, InstallError]:
        part = artifact.with_name(f".{artifact.name}.part")

        def on_chunk(downloaded: int, total: int) -> None:
            if self._progress is None:
                return
            total = total or PLACEHOLDER_TOTAL
            self._progress.update(min(downloaded, total), total)

        try:
            result = self._http.download(url, part, progress=on_chunk)
        except OSError as e:
            with contextlib.suppress(OSError):
                part.unlink(missing_ok=True)
            return Err(IOFailure.from_os_error(artifact, e, tag=tag))
        finally:
            if self._progress is not None:
                self._progress.finish()

        if isinstance(result, Err):
            with contextlib.suppress(OSError):
                part.unlink(missing_ok=True)
            return Err(NetworkFailure(tag=tag, message=str(result.error)))

        try:
            os.replace(part, artifact)
        except OSError as e:
            with contextlib.suppress(OSError):
                part.unlink(missing_ok=True)
            return Err(IOFailure.from_os_error(artifact, e, tag=tag))
        return Ok(artifact)
