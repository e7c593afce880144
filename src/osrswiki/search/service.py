# ABOUTME: Search orchestration: query -> list=search -> mapping -> thumbnail batches -> pagination
# ABOUTME: Every call is a fresh fetch; callers discard responses to superseded queries themselves

import asyncio

import httpx
from pydantic import ValidationError

from osrswiki.config import get_config
from osrswiki.search.errors import (
    MalformedResponseError,
    SearchTimeoutError,
    convert_transport_error,
    raise_for_upstream_status,
)
from osrswiki.search.mapper import SearchResultMapper
from osrswiki.search.models import RawSearchPayload, SearchResponse, SearchResult
from osrswiki.search.thumbnails import ThumbnailBatchFetcher
from osrswiki.utils.logging import get_logger, log_api_call, with_operation_context
from osrswiki.wiki.base import BaseWikiClient

SEARCH_PROPS = "snippet|size|wordcount|timestamp"


class SearchService(BaseWikiClient):
    """Full-text search against the wiki's MediaWiki API."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        thumbnail_fetcher: ThumbnailBatchFetcher | None = None,
        resource_timeout: float | None = None,
        **kwargs,
    ):
        super().__init__(client, **kwargs)
        config = get_config()
        self.resource_timeout = resource_timeout or config.resource_timeout
        self.default_limit = config.search_page_size
        self.mapper = SearchResultMapper(self.article_base_url)
        self.thumbnail_fetcher = thumbnail_fetcher or ThumbnailBatchFetcher(
            self.http_client, base_url=self.base_url, request_timeout=self.request_timeout
        )
        self.logger = get_logger(__name__)

    async def search(self, query: str, limit: int | None = None, offset: int = 0) -> SearchResponse:
        """Search the wiki.

        An empty or whitespace-only query returns an empty response without touching the
        network.

        Args:
            query: Free-text query
            limit: Page size (defaults to the configured page size, 50)
            offset: Index of the first result to return

        Returns:
            SearchResponse with globally ranked results and the pagination decision

        Raises:
            NetworkUnavailableError, SearchTimeoutError, RateLimitedError, ServerError,
            MalformedResponseError
        """
        limit = self.default_limit if limit is None else limit
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        if offset < 0:
            raise ValueError(f"offset must not be negative, got {offset}")

        trimmed = query.strip()
        if not trimmed:
            self.logger.debug("Empty query, skipping search")
            return SearchResponse.empty()

        with with_operation_context("search", query=trimmed, limit=limit, offset=offset) as logger:
            response = await self._search(trimmed, limit, offset)

            logger.info(
                "Search complete",
                result_count=len(response.results),
                total_count=response.total_count,
                has_more=response.has_more,
            )
            return response

    async def _search(self, query: str, limit: int, offset: int) -> SearchResponse:
        # One deadline for the whole operation; thumbnails only get what the search left over
        deadline = asyncio.get_running_loop().time() + self.resource_timeout

        try:
            async with asyncio.timeout_at(deadline):
                payload = await self._fetch_search_page(query, limit, offset)
        except TimeoutError as e:
            raise SearchTimeoutError(f"Search exceeded {self.resource_timeout}s") from e

        results = self.mapper.map_page(payload.query.search, offset)
        if results:
            results = await self._attach_thumbnails(results, deadline)

        total_hits = payload.query.searchinfo.totalhits if payload.query.searchinfo else None
        total_count = total_hits if total_hits is not None else len(results)

        return SearchResponse(
            results=results,
            has_more=offset + len(results) < total_count,
            total_count=total_count,
        )

    @log_api_call("search")
    async def _fetch_search_page(self, query: str, limit: int, offset: int) -> RawSearchPayload:
        try:
            response = await self._query(
                {
                    "list": "search",
                    "srsearch": query,
                    "srlimit": str(limit),
                    "sroffset": str(offset),
                    "srprop": SEARCH_PROPS,
                    "srsort": "relevance",
                    "srinfo": "totalhits",
                }
            )
        except httpx.TransportError as e:
            raise convert_transport_error(e) from e

        raise_for_upstream_status(response)

        try:
            return RawSearchPayload.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise MalformedResponseError(f"Unexpected search response: {e}") from e

    async def _attach_thumbnails(self, results: list[SearchResult], deadline: float) -> list[SearchResult]:
        """Merge thumbnail URLs into results by page id.

        Pages larger than one batch are fetched in consecutive batches so no result silently
        loses its thumbnail. Batches still running at the deadline are abandoned and the
        affected results keep ``thumbnail_url=None``.
        """
        ids = [result.id for result in results]
        batch_size = self.thumbnail_fetcher.batch_limit

        thumbnails: dict[str, str] = {}
        try:
            async with asyncio.timeout_at(deadline):
                for start in range(0, len(ids), batch_size):
                    thumbnails.update(await self.thumbnail_fetcher.fetch_batch(ids[start : start + batch_size]))
        except TimeoutError:
            self.logger.warning(
                "Thumbnail fetch exceeded the search deadline, continuing without thumbnails",
                result_count=len(ids),
                thumbnails_found=len(thumbnails),
            )

        return [
            result.model_copy(update={"thumbnail_url": thumbnails[result.id]}) if result.id in thumbnails else result
            for result in results
        ]
