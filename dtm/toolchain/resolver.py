"""Release resolution - turning a version token into a concrete release.

The resolver only talks to the registry; it never touches the filesystem.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dtm.core.result import Err, Ok, Result
from dtm.toolchain.errors import NoAssetFailure, RegistryError
from dtm.toolchain.tags import DEFAULT_TAG_PREFIX, to_tag

if TYPE_CHECKING:
    from dtm.toolchain.registry import ReleaseDescriptor, ReleaseRegistry

__all__ = ["ReleaseResolver", "ResolveError"]

ResolveError = RegistryError | NoAssetFailure


class ReleaseResolver:
    """Maps "latest" or a version token to a release with at least one asset.

    Usage:
        resolver = ReleaseResolver(GitHubRegistry(http, "gsayson/djinn"))
        match resolver.resolve("1.2.3"):
            case Ok(release):
                ...
    """

    def __init__(self, registry: ReleaseRegistry, *, tag_prefix: str = DEFAULT_TAG_PREFIX) -> None:
        self._registry = registry
        self._tag_prefix = tag_prefix

    def resolve(self, version: str | None = None) -> Result[ReleaseDescriptor, ResolveError]:
        """Resolve a version.

        Args:
            version: Version token ("1.2.3" or "v1.2.3"), or None for latest

        Returns:
            Ok with a descriptor whose asset list is non-empty, or Err with
            NotFound / NetworkFailure / NoAssetFailure. Nothing is retried.
        """
        if version is None:
            result = self._registry.get_latest()
        else:
            result = self._registry.get_by_tag(to_tag(version, self._tag_prefix))

        if isinstance(result, Err):
            return result

        release = result.value
        if not release.assets:
            return Err(NoAssetFailure(tag=release.tag))
        return Ok(release)
