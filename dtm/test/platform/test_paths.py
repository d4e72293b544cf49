"""Tests for dtm.platform.paths and detection."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from dtm.platform import detection, paths
from dtm.platform.detection import Platform


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    paths.clear_caches()
    detection.detect_platform.cache_clear()
    yield
    paths.clear_caches()
    detection.detect_platform.cache_clear()


def _force_platform(monkeypatch: pytest.MonkeyPatch, platform: Platform) -> None:
    monkeypatch.setattr(paths, "detect_platform", lambda: platform)


class TestPlatform:
    def test_unix_platforms_support_permissions(self) -> None:
        assert Platform.LINUX.supports_unix_permissions is True
        assert Platform.MACOS.supports_unix_permissions is True

    def test_windows_has_no_permission_bits(self) -> None:
        assert Platform.WINDOWS.supports_unix_permissions is False
        assert Platform.UNKNOWN.supports_unix_permissions is False

    def test_detect_matches_sys_platform(self) -> None:
        detected = detection.detect_platform()
        if sys.platform.startswith("linux"):
            assert detected == Platform.LINUX
        elif sys.platform == "darwin":
            assert detected == Platform.MACOS
        elif sys.platform == "win32":
            assert detected == Platform.WINDOWS


class TestLocalDataDir:
    def test_linux_xdg(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        _force_platform(monkeypatch, Platform.LINUX)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
        assert paths.local_data_dir() == tmp_path / "xdg"

    def test_linux_fallback(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        _force_platform(monkeypatch, Platform.LINUX)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert paths.local_data_dir() == tmp_path / ".local" / "share"

    def test_macos(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        _force_platform(monkeypatch, Platform.MACOS)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert paths.local_data_dir() == tmp_path / "Library" / "Application Support"

    def test_windows_localappdata(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        _force_platform(monkeypatch, Platform.WINDOWS)
        monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "Local"))
        assert paths.local_data_dir() == tmp_path / "Local"


class TestUserConfigDir:
    def test_linux_xdg(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        _force_platform(monkeypatch, Platform.LINUX)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        assert paths.user_config_dir() == tmp_path / "cfg" / "dtm"

    def test_windows_appdata(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        _force_platform(monkeypatch, Platform.WINDOWS)
        monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
        assert paths.user_config_dir() == tmp_path / "Roaming" / "dtm"
