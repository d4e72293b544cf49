"""Core types: results, exit codes, configuration."""

from .config import Config, ConfigError, load_config, load_config_or_default, resolve_home
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "resolve_home",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
