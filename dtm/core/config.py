"""Typed configuration loading.

The optional ``config.toml`` lives in the user config directory and tweaks
where toolchains are stored and how a downloaded release is launched:

    home = "~/djinn"
    repo = "gsayson/djinn"
    launch_command = ["java", "-jar"]
    artifact_extension = "jar"
    shim_name = "djinn-cli"
    tag_prefix = "v"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dtm.platform.paths import local_data_dir, user_config_dir

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list

__all__ = [
    "Config",
    "ConfigError",
    "HOME_ENV_VAR",
    "default_config_path",
    "load_config",
    "load_config_or_default",
    "resolve_home",
]

HOME_ENV_VAR = "DTM_HOME"

DEFAULT_REPO = "gsayson/djinn"
DEFAULT_LAUNCH_COMMAND = ("java", "-jar")
DEFAULT_ARTIFACT_EXTENSION = "jar"
DEFAULT_SHIM_NAME = "djinn-cli"
DEFAULT_TAG_PREFIX = "v"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Toolchain manager configuration."""

    home: Path | None = None
    repo: str = DEFAULT_REPO
    launch_command: tuple[str, ...] = DEFAULT_LAUNCH_COMMAND
    artifact_extension: str = DEFAULT_ARTIFACT_EXTENSION
    shim_name: str = DEFAULT_SHIM_NAME
    tag_prefix: str = DEFAULT_TAG_PREFIX

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a present key has the wrong shape.
        """
        home = get_str(data, "home")

        launch: tuple[str, ...] = DEFAULT_LAUNCH_COMMAND
        if "launch_command" in data:
            items = get_str_list(data, "launch_command")
            if not items:
                raise ValueError("launch_command must be a non-empty list of strings")
            launch = tuple(items)

        repo = get_str(data, "repo") or DEFAULT_REPO
        if repo.count("/") != 1:
            raise ValueError(f"repo must be 'owner/name', got {repo!r}")

        extension = get_str(data, "artifact_extension") or DEFAULT_ARTIFACT_EXTENSION

        prefix = data.get("tag_prefix", DEFAULT_TAG_PREFIX)
        if not isinstance(prefix, str):
            raise ValueError("tag_prefix must be a string")

        return cls(
            home=Path(home).expanduser() if home else None,
            repo=repo,
            launch_command=launch,
            artifact_extension=extension.lstrip("."),
            shim_name=get_str(data, "shim_name") or DEFAULT_SHIM_NAME,
            tag_prefix=prefix,
        )


def default_config_path() -> Path:
    """Location of the user-level config file."""
    return user_config_dir() / "config.toml"


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to config.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)


def resolve_home(
    override: Path | None,
    config: Config,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Pick the toolchain home.

    Order: explicit override (``--home``), ``DTM_HOME``, ``home`` in config,
    then ``<local data dir>/.djinn``.
    """
    env = os.environ if environ is None else environ
    if override is not None:
        return override.expanduser()
    from_env = env.get(HOME_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    if config.home is not None:
        return config.home
    return local_data_dir() / ".djinn"
