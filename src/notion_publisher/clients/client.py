"""HTTP plumbing shared by the Notion client: retries and status mapping."""

import logging
from abc import ABC, abstractmethod
from time import sleep
from typing import Any

import httpx

from .exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


class Client(ABC):
    """Base class for API clients.

    The httpx client is opened on first request and closed when the
    ``with`` block exits, so each cycle or render gets fresh connections.

    Config keys:
        base_url (required): API root every path is joined to
        timeout: Seconds per request (default: 30)
        retry_attempts: Tries on connect errors and timeouts (default: 3)
        retry_delay: Seconds between tries (default: 1)
        headers: Sent with every request, e.g. auth and API version
    """

    def __init__(self, config: dict):
        if "base_url" not in config:
            raise ValueError("config must include 'base_url'")

        self._config = config
        self._client: httpx.Client | None = None

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"])

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def retry_attempts(self) -> int:
        return int(self._config.get("retry_attempts", 3))

    @property
    def retry_delay(self) -> float:
        return float(self._config.get("retry_delay", 1))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized httpx client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
        return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _error_code(self, response: httpx.Response) -> str | None:
        """Extract the API's error code from a JSON error body, if any."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            code = body.get("code")
            return str(code) if code is not None else None
        return None

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Return a 2xx response unchanged, raise for anything else.

        Raises:
            UnauthorizedError: For 401 responses
            NotFoundError: For 404 responses
            RateLimitError: For 429 responses
            APIError: For other non-2xx responses
        """
        if response.is_success:
            return response

        status_code = response.status_code

        if status_code == 401:
            raise UnauthorizedError(
                f"Unauthorized: {response.url}", code=self._error_code(response)
            )
        elif status_code == 404:
            raise NotFoundError(
                f"Resource not found: {response.url}", code=self._error_code(response)
            )
        elif status_code == 429:
            raise RateLimitError(f"Rate limit exceeded: {response.url}")
        else:
            raise APIError(
                f"API error {status_code}: {response.url}",
                status_code=status_code,
                code=self._error_code(response),
            )

    def _request(
        self,
        method: str,
        path: str,
        **kwargs,
    ) -> httpx.Response:
        """Send a request, retrying only connect errors and timeouts.

        Error statuses are not retried; the next poll cycle is the retry.

        Raises:
            ConnectionError: If every attempt failed at the transport level
            APIError: If the API answered with a non-2xx status
        """
        last_exception: Exception | None = None

        for attempt in range(self.retry_attempts):
            try:
                response = self.client.request(method, path, **kwargs)
                return self._handle_response(response)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                logger.warning(
                    f"{method} {path} failed with {type(e).__name__} "
                    f"(attempt {attempt + 1}/{self.retry_attempts}): {e}"
                )
                if attempt < self.retry_attempts - 1:
                    sleep(self.retry_delay)

        msg = f"Connection failed after {self.retry_attempts} attempts"
        raise ConnectionError(msg) from last_exception

    def get(self, path: str, **kwargs) -> httpx.Response:
        """GET a path under the API root."""
        return self._request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> httpx.Response:
        """POST a JSON body to a path under the API root."""
        return self._request("POST", path, **kwargs)

    @abstractmethod
    def fetch(self, *args, **kwargs) -> Any:
        """Fetch the client's primary resource."""
