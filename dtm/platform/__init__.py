"""Platform abstraction layer."""

from .detection import Platform, detect_platform, supports_unix_permissions
from .files import atomic_write_text, make_executable
from .paths import home, local_data_dir, user_config_dir

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "supports_unix_permissions",
    # files
    "atomic_write_text",
    "make_executable",
    # paths
    "home",
    "local_data_dir",
    "user_config_dir",
]
