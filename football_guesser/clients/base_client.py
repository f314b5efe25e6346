from abc import ABC
from typing import Any, Dict, Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
)

from football_guesser.config.settings import settings

# Define common HTTP status codes that warrant a retry when loading season data
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class ApiClientError(Exception):
    """Custom exception for upstream API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ApiClientError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class RateLimitError(ApiClientError):
    """Exception raised for rate limit errors (429)."""

    def __init__(self, message: str, retry_after: Optional[str] = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, ApiClientError) and not isinstance(exc, AuthenticationError):
        return exc.status_code in RETRYABLE_STATUS_CODES
    return False


class BaseApiClient(ABC):
    """Base class for the JSON APIs the game reads from."""

    source_name: str = "unknown"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout),
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    async def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes a single HTTP request and maps error statuses to exceptions.

        No retries happen here; callers pick their own policy (the badge
        resolver retries 429s per search term, season loading uses
        ``_get_json_with_retry``).
        """
        logger.debug(f"{self.source_name}: {method} {url} params={params}")
        try:
            response = await self.client.request(
                method, url, headers=headers, params=params, **kwargs
            )
        except (httpx.InvalidURL, httpx.StreamError) as e:
            # Neither derives from httpx.HTTPError
            raise ApiClientError(f"{self.source_name}: request to {url} failed: {e}") from e

        if response.status_code in {401, 403}:
            logger.warning(
                f"Authentication error ({response.status_code}) for {self.source_name} at {url}. Check the API token."
            )
            raise AuthenticationError(
                f"Authentication failed ({response.status_code}) for {self.source_name}",
                status_code=response.status_code,
            )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(
                f"Rate limit hit (429) for {self.source_name} at {url}. Retry-After: {retry_after}"
            )
            raise RateLimitError(
                f"Rate limited by {self.source_name}", retry_after=retry_after
            )

        if not response.is_success:
            raise ApiClientError(
                f"{self.source_name} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    async def _get_json(
        self, url: str, params: Optional[Dict[str, Any]] = None, **kwargs
    ) -> Any:
        """GETs ``url`` and decodes the JSON body.

        Raises:
            ApiClientError: on error statuses or a body that is not JSON.
        """
        response = await self._make_request("GET", url, params=params, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise ApiClientError(
                f"{self.source_name} returned a non-JSON body for {url}",
                status_code=response.status_code,
            ) from e

    @retry(
        stop=stop_after_attempt(4),  # 3 retries (4 total attempts)
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(_is_transient),
        reraise=True,  # Reraise the exception after max attempts
    )
    async def _get_json_with_retry(
        self, url: str, params: Optional[Dict[str, Any]] = None, **kwargs
    ) -> Any:
        """Like ``_get_json`` but retries transient failures with exponential backoff."""
        return await self._get_json(url, params=params, **kwargs)

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug(f"Closed HTTP client for {self.source_name}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
