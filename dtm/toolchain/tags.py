"""Conversions between registry tags and user-facing version tokens.

Registry tags carry a prefix ("v1.2.3"); users type and read the bare
version ("1.2.3"), called the display form.
"""

from __future__ import annotations

__all__ = ["DEFAULT_TAG_PREFIX", "to_tag", "display_form"]

DEFAULT_TAG_PREFIX = "v"


def to_tag(version: str, prefix: str = DEFAULT_TAG_PREFIX) -> str:
    """Add the tag prefix unless version already carries it.

    Example: to_tag("2.0.0") -> "v2.0.0", to_tag("v2.0.0") -> "v2.0.0".
    """
    version = version.strip()
    if version.startswith(prefix):
        return version
    return f"{prefix}{version}"


def display_form(tag: str, prefix: str = DEFAULT_TAG_PREFIX) -> str:
    """Strip one leading tag prefix."""
    return tag.removeprefix(prefix)
