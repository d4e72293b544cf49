"""Tests for toolchain/http.py - HTTP client abstraction."""

from __future__ import annotations

import io
import json
import urllib.error
from pathlib import Path
from typing import Any

import pytest

from dtm.core.result import Err, Ok
from dtm.toolchain import http as http_mod
from dtm.toolchain.http import HttpClient, HttpError, MockHttpClient, RealHttpClient


class FakeResponse:
    """Minimal stand-in for the object returned by urlopen()."""

    def __init__(self, body: bytes, headers: dict[str, str] | None = None) -> None:
        self._stream = io.BytesIO(body)
        self.headers = headers or {}

    def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


def patch_urlopen(monkeypatch: pytest.MonkeyPatch, outcome: Any) -> list[str]:
    seen: list[str] = []

    def fake_urlopen(req: Any, timeout: float, context: Any) -> FakeResponse:
        seen.append(req.full_url)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)
    return seen


# =============================================================================
# HttpError tests
# =============================================================================


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://example.com/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://example.com/api)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://example.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://example.com)"

    def test_is_frozen(self) -> None:
        error = HttpError(url="https://example.com", status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 500  # type: ignore[misc]


# =============================================================================
# MockHttpClient tests
# =============================================================================


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        """MockHttpClient implements HttpClient protocol."""
        assert isinstance(MockHttpClient(), HttpClient)

    def test_get_json_unknown_is_404(self) -> None:
        result = MockHttpClient().get_json("https://api.example.com/unknown")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_download_in_chunks(self, tmp_path: Path) -> None:
        client = MockHttpClient(chunk_size=4)
        client.set_download("https://example.com/a.jar", b"0123456789")
        updates: list[tuple[int, int]] = []

        result = client.download(
            "https://example.com/a.jar",
            tmp_path / "a.jar",
            progress=lambda done, total: updates.append((done, total)),
        )

        assert result == Ok(tmp_path / "a.jar")
        assert (tmp_path / "a.jar").read_bytes() == b"0123456789"
        assert updates == [(4, 10), (8, 10), (10, 10)]

    def test_download_unknown_length(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download("https://example.com/a.jar", b"abc", content_length=0)
        updates: list[tuple[int, int]] = []

        client.download(
            "https://example.com/a.jar",
            tmp_path / "a.jar",
            progress=lambda done, total: updates.append((done, total)),
        )

        assert updates == [(3, 0)]

    def test_download_error_response(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        error = HttpError(url="https://example.com/a.jar", status=500, message="boom")
        client.set_download("https://example.com/a.jar", error)

        result = client.download("https://example.com/a.jar", tmp_path / "a.jar")

        assert result == Err(error)
        assert not (tmp_path / "a.jar").exists()

    def test_download_dest_error_raises(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download("https://example.com/a.jar", b"abc")
        dest = tmp_path / "a.jar"
        dest.mkdir()

        with pytest.raises(OSError):
            client.download("https://example.com/a.jar", dest)


# =============================================================================
# RealHttpClient tests (urlopen patched, no network)
# =============================================================================


class TestRealHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_user_agent_has_version(self) -> None:
        from dtm import __version__

        assert RealHttpClient().user_agent == f"dtm/{__version__}"

    def test_get_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        body = json.dumps({"tag_name": "v1.0.0"}).encode()
        seen = patch_urlopen(monkeypatch, FakeResponse(body))

        result = RealHttpClient().get_json("https://api.example.com/r")

        assert result == Ok({"tag_name": "v1.0.0"})
        assert seen == ["https://api.example.com/r"]

    def test_get_json_rejects_array(self, monkeypatch: pytest.MonkeyPatch) -> None:
        patch_urlopen(monkeypatch, FakeResponse(b"[1, 2]"))
        result = RealHttpClient().get_json("https://api.example.com/r")
        assert isinstance(result, Err)
        assert "Expected JSON object" in result.error.message

    def test_get_json_bad_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        patch_urlopen(monkeypatch, FakeResponse(b"{nope"))
        result = RealHttpClient().get_json("https://api.example.com/r")
        assert isinstance(result, Err)
        assert "JSON parse error" in result.error.message

    def test_http_error_status(self, monkeypatch: pytest.MonkeyPatch) -> None:
        url = "https://api.example.com/r"
        patch_urlopen(
            monkeypatch,
            urllib.error.HTTPError(url, 404, "Not Found", {}, None),  # type: ignore[arg-type]
        )
        result = RealHttpClient().get_json(url)
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_url_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        patch_urlopen(monkeypatch, urllib.error.URLError("Name or service not known"))
        result = RealHttpClient().get_json("https://nowhere.invalid/")
        assert isinstance(result, Err)
        assert result.error.status == 0
        assert "Name or service not known" in result.error.message

    def test_download_streams_with_length(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        body = b"x" * (http_mod.CHUNK_SIZE * 2 + 10)
        patch_urlopen(monkeypatch, FakeResponse(body, {"Content-Length": str(len(body))}))
        updates: list[tuple[int, int]] = []

        result = RealHttpClient().download(
            "https://example.com/a.jar",
            tmp_path / "a.jar",
            progress=lambda done, total: updates.append((done, total)),
        )

        assert result == Ok(tmp_path / "a.jar")
        assert (tmp_path / "a.jar").read_bytes() == body
        assert [done for done, _ in updates] == [
            http_mod.CHUNK_SIZE,
            http_mod.CHUNK_SIZE * 2,
            len(body),
        ]
        assert all(total == len(body) for _, total in updates)

    def test_download_without_length_reports_zero_total(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        patch_urlopen(monkeypatch, FakeResponse(b"abc"))
        updates: list[tuple[int, int]] = []

        RealHttpClient().download(
            "https://example.com/a.jar",
            tmp_path / "a.jar",
            progress=lambda done, total: updates.append((done, total)),
        )

        assert updates == [(3, 0)]

    def test_download_timeout(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        patch_urlopen(monkeypatch, TimeoutError())
        result = RealHttpClient().download("https://example.com/a.jar", tmp_path / "a.jar")
        assert isinstance(result, Err)
        assert result.error.message == "Download timed out"

    def test_download_dest_error_raises(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        patch_urlopen(monkeypatch, FakeResponse(b"abc"))
        dest = tmp_path / "a.jar"
        dest.mkdir()

        with pytest.raises(OSError):
            RealHttpClient().download("https://example.com/a.jar", dest)

    def test_download_read_error_is_err(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        class BrokenResponse(FakeResponse):
            def read(self, size: int = -1) -> bytes:
                raise ConnectionResetError("Connection reset by peer")

        patch_urlopen(monkeypatch, BrokenResponse(b""))

        result = RealHttpClient().download("https://example.com/a.jar", tmp_path / "a.jar")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert "Connection reset" in result.error.message
