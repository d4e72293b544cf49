"""Output abstraction layer."""

from .console import ConsoleProtocol, MockConsole, RichConsole, Style
from .progress import NullProgress, ProgressReporter, RichProgressReporter

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "NullProgress",
    "ProgressReporter",
    "RichProgressReporter",
]
