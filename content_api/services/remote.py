"""Upstream content API client: JSON GETs against the configured base URL."""

import logging
from typing import Any

import httpx

from content_api.errors import ConfigurationError, NetworkError

logger = logging.getLogger(__name__)

POSTS_ENDPOINT = "/api/v1/posts"
PORTFOLIO_ENDPOINT = "/api/v1/portfolio"
SERVICES_ENDPOINT = "/api/v1/services"
ABOUT_ENDPOINT = "/api/v1/content/about"
HOMEPAGE_ENDPOINT = "/api/v1/content/homepage"

JSON_HEADERS = {"Accept": "application/json"}


class RemoteFetcher:
    """Fetch raw JSON payloads from the upstream content API.

    The underlying ``httpx.AsyncClient`` is created on first use and lives
    until ``aclose()``.  No retries are attempted here; a failed request
    raises and the caller decides what to do with it.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def build_url(self, endpoint: str) -> str:
        """Resolve *endpoint* against the base URL.

        Raises ConfigurationError when no base URL is configured.
        """
        if not self.base_url:
            raise ConfigurationError("BLOG_API_BASE_URL is not defined")
        return str(httpx.URL(self.base_url).join(endpoint))

    async def get_json(
        self, endpoint: str, params: dict[str, str] | None = None
    ) -> Any:
        """GET *endpoint* and return the decoded JSON body.

        Raises:
            ConfigurationError: No base URL is configured.
            NetworkError: Transport failure, non-2xx status, or a body that
                is not JSON.
        """
        url = self.build_url(endpoint)
        client = self._get_client()
        try:
            resp = await client.get(url, headers=JSON_HEADERS, params=params)
        except httpx.HTTPError as e:
            logger.warning("Content API request failed for %s: %s", url, e)
            raise NetworkError(f"Failed to fetch {endpoint} ({e})", url=url) from e

        if not resp.is_success:
            logger.warning("Content API %d for %s", resp.status_code, url)
            raise NetworkError(
                f"Failed to fetch {endpoint} ({resp.status_code} {resp.reason_phrase})",
                url=url,
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.warning("Content API returned invalid JSON for %s", url)
            raise NetworkError(
                f"Invalid JSON from {endpoint}",
                url=url,
                status_code=resp.status_code,
            ) from e

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
