"""HTTP client abstraction for registry queries and artifact downloads.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, cast, runtime_checkable

from dtm import __version__
from dtm.core.result import Err, Ok, Result
from dtm.core.structured import as_str_dict

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
    "CHUNK_SIZE",
]

CHUNK_SIZE = 8192


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Lets tests inject canned responses instead of touching the network.
    """

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse the body as a JSON object."""
        ...

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        """Stream URL into dest.

        Args:
            url: URL to download
            dest: Destination file, written chunk by chunk
            progress: Optional callback(downloaded, total) after each chunk;
                total is 0 when the server sends no Content-Length

        Returns:
            Ok with dest path, or Err with HttpError for transport failures

        Raises:
            OSError: If dest cannot be opened or written.
        """
        ...


class RealHttpClient:
    """HTTP client on top of urllib.

    Timeouts come from the client default; they are not user-configurable.
    """

    def __init__(self, timeout: float = 30.0, user_agent: str = f"dtm/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _open(self, url: str, accept: str | None = None) -> Any:
        headers = {"User-Agent": self.user_agent}
        if accept:
            headers["Accept"] = accept
        req = urllib.request.Request(url, headers=headers)
        return urllib.request.urlopen(req, timeout=self.timeout, context=self._ssl_context)

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        try:
            with self._open(url, accept="application/vnd.github+json") as response:
                body: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            data_obj: object = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(cast(dict[str, Any], data))

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        """Stream URL into dest; memory use is bounded by CHUNK_SIZE.

        Raises:
            OSError: If dest cannot be opened or written.
        """
        try:
            response = self._open(url)
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        with response, open(dest, "wb") as f:
            try:
                total = int(response.headers.get("Content-Length") or 0)
            except ValueError:
                total = 0
            downloaded = 0
            while True:
                try:
                    chunk = response.read(CHUNK_SIZE)
                except TimeoutError:
                    return Err(HttpError(url=url, status=0, message="Download timed out"))
                except OSError as e:
                    return Err(HttpError(url=url, status=0, message=str(e)))
                if not chunk:
                    break
                f.write(chunk)
                downloaded += len(chunk)
                if progress:
                    progress(downloaded, total)
        return Ok(dest)


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/repos/o/r/releases/latest", {...})
        client.set_download("https://example.com/djinn.jar", b"PK...")
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self._download_responses: dict[str, bytes | HttpError] = {}
        self._content_lengths: dict[str, int] = {}
        self._chunk_size = chunk_size
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        self._json_responses[url] = response

    def set_download(
        self,
        url: str,
        response: bytes | HttpError,
        *,
        content_length: int | None = None,
    ) -> None:
        """Set download content; content_length=0 simulates a missing header."""
        self._download_responses[url] = response
        if isinstance(response, bytes):
            self._content_lengths[url] = (
                len(response) if content_length is None else content_length
            )

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        self.calls.append(("get_json", url))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, HttpError]:
        """Write the canned content to dest in chunks, reporting progress.

        Like RealHttpClient, errors writing dest raise OSError.
        """
        self.calls.append(("download", url))

        if url not in self._download_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._download_responses[url]
        if isinstance(response, HttpError):
            return Err(response)

        total = self._content_lengths.get(url, len(response))
        downloaded = 0
        with open(dest, "wb") as f:
            for start in range(0, len(response), self._chunk_size):
                chunk = response[start : start + self._chunk_size]
                f.write(chunk)
                downloaded += len(chunk)
                if progress:
                    progress(downloaded, total)

        return Ok(dest)
