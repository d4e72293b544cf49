"""Platform-aware user directories.

The toolchain home defaults to a ``.djinn`` folder in the local data
directory; the optional config file lives in the user config directory.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import Platform, detect_platform

__all__ = [
    "home",
    "local_data_dir",
    "user_config_dir",
    "clear_caches",
]

APP_NAME = "dtm"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix, then Path.home().
    """
    if detect_platform() == Platform.WINDOWS:
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def local_data_dir() -> Path:
    """Get the per-user local data directory.

    Location:
        Windows: %LOCALAPPDATA% (~/AppData/Local)
        macOS:   ~/Library/Application Support
        Linux:   $XDG_DATA_HOME or ~/.local/share
    """
    match detect_platform():
        case Platform.WINDOWS:
            local_app_data = os.environ.get("LOCALAPPDATA")
            if local_app_data:
                return Path(local_app_data)
            return home() / "AppData" / "Local"
        case Platform.MACOS:
            return home() / "Library" / "Application Support"
        case _:
            xdg_data = os.environ.get("XDG_DATA_HOME")
            if xdg_data:
                return Path(xdg_data)
            return home() / ".local" / "share"


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Get the user-level configuration directory.

    Location: ~/.config/dtm/ (Linux/macOS) or %APPDATA%/dtm/ (Windows)
    """
    if detect_platform() == Platform.WINDOWS:
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def clear_caches() -> None:
    """Clear all cached paths.

    Useful for testing when environment variables change.
    """
    home.cache_clear()
    local_data_dir.cache_clear()
    user_config_dir.cache_clear()
