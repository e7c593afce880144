# ABOUTME: Shared base for MediaWiki API clients: endpoints, timeouts and an injectable httpx client
# ABOUTME: Subclasses build the search, thumbnail and homepage calls on top of _query

import httpx

from osrswiki.config import get_config
from osrswiki.utils.logging import get_logger

# Parameters every MediaWiki query request carries
BASE_QUERY_PARAMS = {"action": "query", "format": "json", "formatversion": "2"}


class BaseWikiClient:
    """Base class for talking to the wiki. Holds the httpx client, the wiki endpoints and the
    request timeout; subclasses add the calls they need."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str | None = None,
        user_agent: str | None = None,
        request_timeout: float | None = None,
    ):
        config = get_config()

        self.base_url = (base_url or config.base_url).rstrip("/")
        self.api_url = f"{self.base_url}/api.php"
        self.article_base_url = f"{self.base_url}/w/"
        self.request_timeout = request_timeout or config.request_timeout

        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": user_agent or config.user_agent},
            timeout=httpx.Timeout(self.request_timeout),
            follow_redirects=True,
        )
        self.logger = get_logger(__name__)

    async def _query(self, params: dict[str, str]) -> httpx.Response:
        """Issue a GET against the MediaWiki query API.

        Transport errors (timeouts, connection failures) propagate as httpx exceptions; status
        handling is left to the caller since each pipeline classifies failures differently.
        """
        query_params = {**BASE_QUERY_PARAMS, **params}

        self.logger.debug("Querying wiki API", api_url=self.api_url, params=query_params)

        return await self.http_client.get(self.api_url, params=query_params, timeout=self.request_timeout)

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
