"""Switching the active toolchain.

The active shim pair at the home root is the only record of which version is
current. Activation rewrites both files in full to delegate to the chosen
version's own shims; artifacts are never copied or re-downloaded.

States: no active shim, or active=V for an installed V. ``activate(V)``
moves to active=V only when V is in the catalog; on failure the active shim
is left as it was.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dtm.core.result import Err, Ok, Result
from dtm.toolchain.errors import IOFailure, NotInstalled
from dtm.toolchain.shims import ShimPair, ShimWriter, read_posix_target

if TYPE_CHECKING:
    from dtm.toolchain.catalog import Catalog
    from dtm.toolchain.layout import StorageLayout

__all__ = ["Activator", "ActivateError"]

ActivateError = NotInstalled | IOFailure


class Activator:
    """Rewrites the active shim pair.

    Usage:
        activator = Activator(layout, catalog, unix_permissions=True)
        match activator.activate("1.2.3"):
            case Err(NotInstalled(version=v)):
                ...
    """

    def __init__(self, layout: StorageLayout, catalog: Catalog, *, unix_permissions: bool) -> None:
        self._layout = layout
        self._catalog = catalog
        self._shims = ShimWriter(unix_permissions=unix_permissions)

    @property
    def active_shims(self) -> ShimPair:
        return ShimPair(
            posix=self._layout.active_posix_shim,
            windows=self._layout.active_windows_shim,
        )

    def activate(self, version: str) -> Result[str, ActivateError]:
        """Make the installed version matching ``version`` active.

        Args:
            version: User token in display form ("1.2.3"); a prefixed token
                is accepted too

        Returns:
            Ok with the activated tag, or Err(NotInstalled) / Err(IOFailure)
        """
        found = self._catalog.find(version)
        if isinstance(found, Err):
            return found
        tag = found.value
        if tag is None:
            return Err(NotInstalled(version=version))

        directory = self._layout.version_dir(tag).resolve()
        target = ShimPair(
            posix=self._layout.posix_shim(directory),
            windows=self._layout.windows_shim(directory),
        )
        try:
            self._shims.write_delegate(self.active_shims, target)
        except OSError as e:
            return Err(IOFailure.from_os_error(self._layout.home, e, tag=tag))
        return Ok(tag)

    def current(self) -> str | None:
        """Tag the active POSIX shim delegates to, or None if there is none."""
        target = read_posix_target(self._layout.active_posix_shim)
        if target is None:
            return None
        directory = target.parent
        if directory.parent.resolve() != self._layout.versions_root.resolve():
            return None
        return directory.name
