"""Djinn Toolchain Manager.

Installs Djinn releases from GitHub into a local toolchain home and switches
which installed version the active launcher runs.
"""

__version__ = "0.1.0"
