# ABOUTME: HTTP client for downloading translation datasets.
# ABOUTME: Retries transient failures with backoff; the transport is injectable for testing.

import json
import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class TranslationFetchError(Exception):
    """Raised when downloading a translation dataset fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for fetching a JSON document over HTTP."""

    def get_json(self, url: str) -> Any: ...


class LectioHttpClient:
    """HTTP client with retry for dataset downloads.

    Wraps httpx.Client with retry logic for transient failures (429, 5xx).
    Datasets are large single files, so the timeout is generous and there
    is no rate limiting between requests.
    """

    def __init__(
        self,
        *,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "lectio/0.1.0"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    def get_json(self, url: str) -> Any:
        """Send a GET request with retry and decode the body as JSON.

        A UTF-8 byte-order mark at the start of the body is ignored.

        Raises:
            TranslationFetchError: On non-retryable HTTP errors, undecodable
                bodies, or exhausted retries.
        """
        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise TranslationFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                return _decode_json(response, url)

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise TranslationFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise TranslationFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    def close(self) -> None:
        self._client.close()


def _decode_json(response: httpx.Response, url: str) -> Any:
    try:
        return json.loads(response.content.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TranslationFetchError(f"Invalid JSON from {url}: {exc}") from exc
