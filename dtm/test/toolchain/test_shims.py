"""Tests for toolchain/shims.py - launcher shim generation."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from dtm.toolchain.shims import (
    ShimPair,
    ShimWriter,
    read_posix_target,
    render_posix,
    render_windows,
)


def pair(directory: Path) -> ShimPair:
    return ShimPair(posix=directory / "djinn-cli.sh", windows=directory / "djinn-cli.bat")


class TestRender:
    def test_posix_execs_with_args(self) -> None:
        body = render_posix(["java", "-jar", "/opt/djinn/ff.jar"])
        assert body == '#!/bin/sh\nexec java -jar /opt/djinn/ff.jar "$@"\n'

    def test_posix_quotes_spaces(self) -> None:
        body = render_posix(["java", "-jar", "/my home/ff.jar"])
        assert "'/my home/ff.jar'" in body

    def test_windows_body(self) -> None:
        body = render_windows(["java", "-jar", r"C:\djinn\ff.jar"])
        assert body == "@echo off\njava -jar C:\\djinn\\ff.jar %*\n"

    def test_windows_quotes_spaces(self) -> None:
        body = render_windows([r"C:\Users\A B\djinn-cli.bat"], call=True)
        assert 'call "C:\\Users\\A B\\djinn-cli.bat" %*' in body


class TestShimWriterLauncher:
    def test_writes_both_shims(self, tmp_path: Path) -> None:
        shims = pair(tmp_path)
        artifact = tmp_path / "ff.jar"

        ShimWriter(unix_permissions=False).write_launcher(shims, ("java", "-jar"), artifact)

        assert shims.posix.read_bytes() == render_posix(["java", "-jar", str(artifact)]).encode()
        windows = shims.windows.read_bytes()
        assert windows.startswith(b"@echo off\r\n")
        assert windows.endswith(b" %*\r\n")
        assert str(artifact).encode() in windows

    @pytest.mark.skipif(sys.platform == "win32", reason="Unix permissions only")
    def test_posix_shim_is_0755(self, tmp_path: Path) -> None:
        shims = pair(tmp_path)
        ShimWriter(unix_permissions=True).write_launcher(shims, ("java", "-jar"), tmp_path / "a")
        assert stat.S_IMODE(shims.posix.stat().st_mode) == 0o755

    @pytest.mark.skipif(sys.platform == "win32", reason="Unix permissions only")
    def test_no_chmod_without_capability(self, tmp_path: Path) -> None:
        shims = pair(tmp_path)
        ShimWriter(unix_permissions=False).write_launcher(shims, ("java", "-jar"), tmp_path / "a")
        assert not os.access(shims.posix, os.X_OK)


class TestShimWriterDelegate:
    def test_embeds_target_path(self, tmp_path: Path) -> None:
        target = pair(tmp_path / "toolchains" / "v1.0.0")
        ShimWriter(unix_permissions=False).write_launcher(target, ("java", "-jar"), tmp_path / "a")
        active = pair(tmp_path)

        ShimWriter(unix_permissions=False).write_delegate(active, target)

        assert active.posix.read_text() == render_posix([str(target.posix)])
        assert active.windows.read_bytes() == (
            render_windows([str(target.windows)], call=True).replace("\n", "\r\n").encode()
        )

    @pytest.mark.skipif(sys.platform == "win32", reason="Unix permissions only")
    def test_reasserts_target_executable(self, tmp_path: Path) -> None:
        target = pair(tmp_path / "v1")
        ShimWriter(unix_permissions=True).write_launcher(target, ("java", "-jar"), tmp_path / "a")
        target.posix.chmod(0o644)

        ShimWriter(unix_permissions=True).write_delegate(pair(tmp_path), target)

        assert stat.S_IMODE(target.posix.stat().st_mode) == 0o755
        assert stat.S_IMODE(pair(tmp_path).posix.stat().st_mode) == 0o755

    @pytest.mark.skipif(sys.platform == "win32", reason="Unix permissions only")
    def test_missing_target_leaves_active_untouched(self, tmp_path: Path) -> None:
        active = pair(tmp_path)
        active.posix.write_text("previous\n")

        with pytest.raises(OSError):
            ShimWriter(unix_permissions=True).write_delegate(active, pair(tmp_path / "gone"))

        assert active.posix.read_text() == "previous\n"


class TestReadPosixTarget:
    def test_reads_exec_target(self, tmp_path: Path) -> None:
        shim = tmp_path / "djinn-cli.sh"
        target = tmp_path / "my dir" / "djinn-cli.sh"
        shim.write_text(render_posix([str(target)]))
        assert read_posix_target(shim) == target

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_posix_target(tmp_path / "nope.sh") is None

    def test_no_exec_line(self, tmp_path: Path) -> None:
        shim = tmp_path / "djinn-cli.sh"
        shim.write_text("#!/bin/sh\necho hi\n")
        assert read_posix_target(shim) is None
