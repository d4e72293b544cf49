"""Command-level orchestration of toolchain components."""

from .toolchains import ToolchainService

__all__ = ["ToolchainService"]
