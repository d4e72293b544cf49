"""Installed version enumeration.

The catalog is the directory listing of ``<home>/toolchains``; there is no
separate state file. Entries that are not directories are skipped. A
directory left behind by an interrupted install is still listed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dtm.core.result import Err, Ok, Result
from dtm.toolchain.errors import IOFailure
from dtm.toolchain.tags import DEFAULT_TAG_PREFIX, display_form

if TYPE_CHECKING:
    from dtm.toolchain.layout import StorageLayout

__all__ = ["Catalog"]


class Catalog:
    def __init__(self, layout: StorageLayout, *, tag_prefix: str = DEFAULT_TAG_PREFIX) -> None:
        self._layout = layout
        self._tag_prefix = tag_prefix

    def list_installed(self) -> Result[list[str], IOFailure]:
        """List installed tags (directory names) in filesystem order."""
        root = self._layout.versions_root
        if not root.is_dir():
            return Ok([])
        try:
            entries = list(root.iterdir())
        except OSError as e:
            return Err(IOFailure.from_os_error(root, e))

        return Ok([entry.name for entry in entries if entry.is_dir()])

    def display(self, tag: str) -> str:
        return display_form(tag, self._tag_prefix)

    def find(self, version: str) -> Result[str | None, IOFailure]:
        """Find the installed tag whose display form equals version's."""
        wanted = display_form(version.strip(), self._tag_prefix)
        listed = self.list_installed()
        if isinstance(listed, Err):
            return listed
        for tag in listed.value:
            if self.display(tag) == wanted:
                return Ok(tag)
        return Ok(None)
