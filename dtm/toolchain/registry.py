"""Release registry backed by the GitHub Releases API.

The registry answers two questions, "what is the latest release" and "what
is the release tagged X", with a ReleaseDescriptor listing its download URLs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
from urllib.parse import quote

from dtm.core.result import Err, Ok, Result
from dtm.core.structured import as_obj_list, as_str_dict
from dtm.toolchain.errors import NetworkFailure, NotFound, RegistryError

if TYPE_CHECKING:
    from dtm.toolchain.http import HttpClient, HttpError

__all__ = [
    "ReleaseDescriptor",
    "ReleaseRegistry",
    "GitHubRegistry",
    "MockRegistry",
    "LATEST",
    "parse_release",
]

# Diagnostic name used when no tag was requested.
LATEST = "latest"

GITHUB_API = "https://api.github.com"


@dataclass(frozen=True, slots=True)
class ReleaseDescriptor:
    """One release as reported by the registry.

    Attributes:
        tag: Tag name (e.g. "v1.2.3")
        id: Numeric release identifier
        assets: Download URLs in registry order; may be empty here, the
            resolver rejects empty releases
    """

    tag: str
    id: int
    assets: tuple[str, ...]


@runtime_checkable
class ReleaseRegistry(Protocol):
    """Source of release descriptors."""

    def get_latest(self) -> Result[ReleaseDescriptor, RegistryError]: ...

    def get_by_tag(self, tag: str) -> Result[ReleaseDescriptor, RegistryError]: ...


class GitHubRegistry:
    """ReleaseRegistry over ``api.github.com/repos/<repo>/releases``.

    Usage:
        registry = GitHubRegistry(RealHttpClient(), "gsayson/djinn")
        result = registry.get_by_tag("v1.2.3")
    """

    def __init__(self, http: HttpClient, repo: str) -> None:
        self._http = http
        self._repo = repo

    @property
    def repo(self) -> str:
        return self._repo

    def latest_url(self) -> str:
        return f"{GITHUB_API}/repos/{self._repo}/releases/latest"

    def tag_url(self, tag: str) -> str:
        return f"{GITHUB_API}/repos/{self._repo}/releases/tags/{quote(tag, safe='')}"

    def get_latest(self) -> Result[ReleaseDescriptor, RegistryError]:
        return self._fetch(self.latest_url(), LATEST)

    def get_by_tag(self, tag: str) -> Result[ReleaseDescriptor, RegistryError]:
        return self._fetch(self.tag_url(tag), tag)

    def _fetch(self, url: str, tag: str) -> Result[ReleaseDescriptor, RegistryError]:
        result = self._http.get_json(url)
        if isinstance(result, Err):
            return Err(_registry_error(result.error, tag))
        return parse_release(result.value, tag)


def _registry_error(error: HttpError, tag: str) -> RegistryError:
    if error.status == 404:
        return NotFound(tag=tag)
    return NetworkFailure(tag=tag, message=str(error))


def parse_release(data: dict[str, Any], tag: str) -> Result[ReleaseDescriptor, RegistryError]:
    """Build a ReleaseDescriptor from a GitHub release payload.

    Args:
        data: Decoded JSON release object
        tag: Requested tag, used in diagnostics

    Returns:
        Ok with the descriptor, or Err(NetworkFailure) on a malformed payload
    """
    tag_name = data.get("tag_name")
    if not isinstance(tag_name, str) or not tag_name:
        return Err(NetworkFailure(tag=tag, message="Missing tag_name in response"))

    release_id = data.get("id")
    if isinstance(release_id, bool) or not isinstance(release_id, int):
        return Err(NetworkFailure(tag=tag, message="Missing release id in response"))

    assets: list[str] = []
    for item in as_obj_list(data.get("assets")) or []:
        asset = as_str_dict(item)
        if asset is None:
            continue
        url = asset.get("browser_download_url")
        if isinstance(url, str) and url:
            assets.append(url)

    return Ok(ReleaseDescriptor(tag=tag_name, id=release_id, assets=tuple(assets)))


class MockRegistry:
    """In-memory registry for tests.

    Records every query in ``calls`` as ("latest", "") or ("tag", <tag>).
    """

    def __init__(self) -> None:
        self._releases: dict[str, ReleaseDescriptor] = {}
        self._latest: str | None = None
        self._failures: dict[str, RegistryError] = {}
        self.calls: list[tuple[str, str]] = []

    def add(self, release: ReleaseDescriptor, *, latest: bool = False) -> None:
        self._releases[release.tag] = release
        if latest:
            self._latest = release.tag

    def fail(self, tag: str, error: RegistryError) -> None:
        """Make queries for tag (or LATEST) return error."""
        self._failures[tag] = error

    def get_latest(self) -> Result[ReleaseDescriptor, RegistryError]:
        self.calls.append(("latest", ""))
        if LATEST in self._failures:
            return Err(self._failures[LATEST])
        if self._latest is None:
            return Err(NotFound(tag=LATEST))
        return Ok(self._releases[self._latest])

    def get_by_tag(self, tag: str) -> Result[ReleaseDescriptor, RegistryError]:
        self.calls.append(("tag", tag))
        if tag in self._failures:
            return Err(self._failures[tag])
        release = self._releases.get(tag)
        if release is None:
            return Err(NotFound(tag=tag))
        return Ok(release)
