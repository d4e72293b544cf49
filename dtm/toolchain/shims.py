"""Launcher shim generation.

A shim is a one-command script: version shims run the launch command on the
artifact, active shims hand over to a version shim. Each is written as a
pair:
- ``<name>.sh`` for POSIX shells (LF line endings, mode 0755 where supported)
- ``<name>.bat`` for the Windows command shell (CRLF line endings)

Arguments given to a shim are forwarded ("$@" / %*).
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from dtm.platform.files import atomic_write_text, make_executable

__all__ = ["ShimPair", "ShimWriter", "read_posix_target", "render_posix", "render_windows"]


@dataclass(frozen=True, slots=True)
class ShimPair:
    """Paths of a POSIX + Windows shim pair."""

    posix: Path
    windows: Path


def _cmd_quote(arg: str) -> str:
    if arg and not any(c in arg for c in ' \t"&|<>^()%'):
        return arg
    return '"' + arg.replace('"', '""') + '"'


def render_posix(argv: Sequence[str]) -> str:
    """POSIX shim body that execs argv with forwarded arguments."""
    command = " ".join(shlex.quote(arg) for arg in argv)
    return f'#!/bin/sh\nexec {command} "$@"\n'


def render_windows(argv: Sequence[str], *, call: bool = False) -> str:
    """cmd shim body; ``call`` is needed when argv[0] is itself a batch file."""
    command = " ".join(_cmd_quote(arg) for arg in argv)
    if call:
        command = f"call {command}"
    return f"@echo off\n{command} %*\n"


class ShimWriter:
    """Writes shim pairs.

    Files are replaced atomically, so a concurrent reader sees either the old
    or the new script, never a truncated one.
    """

    def __init__(self, *, unix_permissions: bool) -> None:
        self._unix_permissions = unix_permissions

    def write_launcher(self, shims: ShimPair, command: Sequence[str], artifact: Path) -> ShimPair:
        """Write shims that run ``command <artifact>``.

        Raises:
            OSError: If a shim cannot be written.
        """
        argv = [*command, str(artifact)]
        atomic_write_text(shims.posix, render_posix(argv), newline="\n")
        atomic_write_text(shims.windows, render_windows(argv), newline="\r\n")
        self.mark_executable(shims.posix)
        return shims

    def write_delegate(self, shims: ShimPair, target: ShimPair) -> ShimPair:
        """Write shims that hand over to the ``target`` pair (by path, not content).

        Raises:
            OSError: If a shim cannot be written.
        """
        self.mark_executable(target.posix)
        atomic_write_text(shims.posix, render_posix([str(target.posix)]), newline="\n")
        atomic_write_text(
            shims.windows,
            render_windows([str(target.windows)], call=True),
            newline="\r\n",
        )
        self.mark_executable(shims.posix)
        return shims

    def mark_executable(self, path: Path) -> None:
        if self._unix_permissions:
            make_executable(path)


def read_posix_target(shim: Path) -> Path | None:
    """Return the first exec'd path of a POSIX shim, or None if unreadable."""
    try:
        content = shim.read_text(encoding="utf-8")
    except OSError:
        return None
    for line in content.splitlines():
        if line.startswith("exec "):
            try:
                words = shlex.split(line[len("exec ") :])
            except ValueError:
                return None
            return Path(words[0]) if words else None
    return None
