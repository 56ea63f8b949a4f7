# ABOUTME: Unit tests for the dataset HTTP client.
# ABOUTME: Tests the HttpClient protocol, LectioHttpClient retries, BOM handling, and errors.

import httpx
import pytest

from lectio.translations.http import HttpClient, LectioHttpClient, TranslationFetchError


class FakeTransport(httpx.BaseTransport):
    """Fake transport for httpx that returns canned responses."""

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self._responses = list(responses or [])
        self._call_count = 0
        self.urls: list[str] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._call_count += 1
        self.urls.append(str(request.url))
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json=[{"name": "Genesis", "chapters": [["a"]]}])

    @property
    def call_count(self) -> int:
        return self._call_count


class FailingTransport(httpx.BaseTransport):
    """Transport that fails every request at the connection level."""

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)


class TestHttpClientProtocol:
    """Tests for HttpClient protocol compliance."""

    def test_lectio_client_satisfies_protocol(self) -> None:
        client = LectioHttpClient(transport=FakeTransport())
        assert isinstance(client, HttpClient)
        client.close()


class TestLectioHttpClient:
    """Tests for LectioHttpClient."""

    def test_get_json_returns_parsed_body(self) -> None:
        transport = FakeTransport()
        client = LectioHttpClient(transport=transport)
        result = client.get_json("https://example.com/en_kjv.json")
        assert result == [{"name": "Genesis", "chapters": [["a"]]}]
        assert transport.urls == ["https://example.com/en_kjv.json"]

    def test_user_agent_header(self) -> None:
        client = LectioHttpClient(transport=FakeTransport())
        assert "lectio/" in client._client.headers["user-agent"]

    def test_byte_order_mark_is_ignored(self) -> None:
        body = "\ufeff".encode() + '[{"name": "Genèse"}]'.encode()
        transport = FakeTransport([httpx.Response(200, content=body)])
        client = LectioHttpClient(transport=transport)
        assert client.get_json("https://example.com/fr.json") == [{"name": "Genèse"}]

    def test_invalid_json_raises(self) -> None:
        transport = FakeTransport([httpx.Response(200, content=b"<html>")])
        client = LectioHttpClient(transport=transport)
        with pytest.raises(TranslationFetchError, match="Invalid JSON"):
            client.get_json("https://example.com/broken.json")

    def test_http_error_raises_without_retry(self) -> None:
        transport = FakeTransport([httpx.Response(404)])
        client = LectioHttpClient(transport=transport, retry_delay=0.0)
        with pytest.raises(TranslationFetchError, match="404"):
            client.get_json("https://example.com/missing.json")
        assert transport.call_count == 1

    def test_retry_on_503(self) -> None:
        transport = FakeTransport([httpx.Response(503), httpx.Response(200, json=[])])
        client = LectioHttpClient(transport=transport, retry_delay=0.0)
        assert client.get_json("https://example.com/en_kjv.json") == []
        assert transport.call_count == 2

    def test_retry_exhausted_raises(self) -> None:
        transport = FakeTransport([httpx.Response(500)] * 3)
        client = LectioHttpClient(transport=transport, max_retries=2, retry_delay=0.0)
        with pytest.raises(TranslationFetchError, match="after 3 attempts"):
            client.get_json("https://example.com/en_kjv.json")
        assert transport.call_count == 3  # 1 initial + 2 retries

    def test_connection_error_raises(self) -> None:
        client = LectioHttpClient(transport=FailingTransport())
        with pytest.raises(TranslationFetchError, match="Request failed"):
            client.get_json("https://example.com/en_kjv.json")
