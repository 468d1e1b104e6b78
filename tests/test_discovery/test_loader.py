"""Tests for loading discovery documents from files, stdin and URLs."""

from __future__ import annotations

import io
from pathlib import Path

import httpx
import pytest

from discovery_client.discovery import load_document, load_service
from discovery_client.exceptions import DocumentLoadError
from discovery_client.models import DiscoveryVersion


class TestLoadFromFile:
    def test_reads_file(self, tmp_path: Path, adsense_text: str) -> None:
        path = tmp_path / "adsense.json"
        path.write_text(adsense_text, encoding="utf-8")
        assert load_document(str(path)) == adsense_text

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError, match="not found"):
            load_document(str(tmp_path / "missing.json"))

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("  \n", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="empty"):
            load_document(str(path))

    def test_load_service(self, tmp_path: Path, buzz_v0_3_text: str) -> None:
        path = tmp_path / "buzz.json"
        path.write_text(buzz_v0_3_text, encoding="utf-8")
        service = load_service(str(path), DiscoveryVersion.V0_3)
        assert service.name == "buzz"


class TestLoadFromStdin:
    def test_reads_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO('{"name": "x"}'))
        assert load_document("-") == '{"name": "x"}'

    def test_empty_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        with pytest.raises(DocumentLoadError, match="stdin"):
            load_document("-")


class TestLoadFromUrl:
    def _patch_get(self, monkeypatch: pytest.MonkeyPatch, handler) -> None:
        transport = httpx.MockTransport(handler)

        def fake_get(url: str, **kwargs) -> httpx.Response:
            with httpx.Client(transport=transport) as client:
                return client.get(url)

        monkeypatch.setattr(httpx, "get", fake_get)

    def test_fetches_url(self, monkeypatch: pytest.MonkeyPatch, adsense_text: str) -> None:
        self._patch_get(monkeypatch, lambda request: httpx.Response(200, text=adsense_text))
        assert load_document("https://example.com/discovery/v1/apis/adsense") == adsense_text

    def test_http_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._patch_get(monkeypatch, lambda request: httpx.Response(404, text="gone"))
        with pytest.raises(DocumentLoadError, match="HTTP 404"):
            load_document("https://example.com/missing")

    def test_connection_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        self._patch_get(monkeypatch, refuse)
        with pytest.raises(DocumentLoadError, match="Failed to fetch"):
            load_document("http://localhost:1/doc")

    def test_empty_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._patch_get(monkeypatch, lambda request: httpx.Response(200, text=""))
        with pytest.raises(DocumentLoadError, match="Empty"):
            load_document("https://example.com/empty")
