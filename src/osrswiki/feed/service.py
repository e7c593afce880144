# ABOUTME: Homepage feed orchestration: one fetch of the wiki root, four independent extraction passes
# ABOUTME: Produces a fresh WikiFeed per call; a failing section defaults instead of aborting the rest

import asyncio
from collections.abc import Callable
from typing import TypeVar

import httpx

from osrswiki.config import get_config
from osrswiki.feed.errors import DecodingFailedError, FeedTimeoutError, FetchFailedError, InvalidURLError
from osrswiki.feed.extractor import HtmlContentExtractor, clean_html
from osrswiki.feed.models import NewsCategory, NewsItem, WikiFeed
from osrswiki.utils.logging import get_logger, log_api_call, with_operation_context
from osrswiki.wiki.base import BaseWikiClient

T = TypeVar("T")


class FeedService(BaseWikiClient):
    """Builds the homepage feed from the wiki's main page HTML."""

    def __init__(self, client: httpx.AsyncClient | None = None, *, resource_timeout: float | None = None, **kwargs):
        super().__init__(client, **kwargs)
        self.resource_timeout = resource_timeout or get_config().resource_timeout
        self.extractor = HtmlContentExtractor(self.base_url)
        self.logger = get_logger(__name__)

    async def fetch_feed(self) -> WikiFeed:
        """Fetch the wiki homepage and extract every feed section.

        Returns:
            WikiFeed; sections missing from the page are empty (or None for "on this day")

        Raises:
            InvalidURLError: If the wiki URL is not an absolute http(s) URL
            FetchFailedError: If the page could not be fetched (FeedTimeoutError on timeout)
            DecodingFailedError: If the body is not valid UTF-8
        """
        with with_operation_context("fetch_feed", base_url=self.base_url) as logger:
            url = self._homepage_url()

            try:
                async with asyncio.timeout(self.resource_timeout):
                    body = await self._fetch_homepage(url)
            except TimeoutError as e:
                raise FeedTimeoutError(f"Fetching {url} exceeded {self.resource_timeout}s") from e

            try:
                html = body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodingFailedError(f"Homepage body is not valid UTF-8: {e}") from e

            feed = self.parse_feed(html)
            logger.info(
                "Feed fetched",
                recent_updates=len(feed.recent_updates),
                announcements=len(feed.announcements),
                on_this_day=feed.on_this_day is not None,
                popular_pages=len(feed.popular_pages),
            )
            return feed

    def parse_feed(self, html: str) -> WikiFeed:
        """Run the four section extractions over the same HTML."""
        return WikiFeed(
            recent_updates=self._extract_section("recent_updates", self.extractor.parse_recent_updates, html, list),
            announcements=self._extract_section("announcements", self.extractor.parse_announcements, html, list),
            on_this_day=self._extract_section("on_this_day", self.extractor.parse_on_this_day, html, lambda: None),
            popular_pages=self._extract_section("popular_pages", self.extractor.parse_popular_pages, html, list),
        )

    def _extract_section(self, name: str, parser: Callable[[str], T], html: str, default: Callable[[], T]) -> T:
        try:
            return parser(html)
        except Exception as e:
            self.logger.warning(
                "Feed section extraction failed", section=name, error=str(e), error_type=type(e).__name__
            )
            return default()

    def _homepage_url(self) -> str:
        try:
            url = httpx.URL(f"{self.base_url}/")
        except httpx.InvalidURL as e:
            raise InvalidURLError(f"Invalid wiki URL {self.base_url!r}: {e}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURLError(f"Invalid wiki URL {self.base_url!r}")
        return str(url)

    @log_api_call("homepage")
    async def _fetch_homepage(self, url: str) -> bytes:
        try:
            response = await self.http_client.get(url, timeout=self.request_timeout)
        except httpx.TimeoutException as e:
            raise FeedTimeoutError(f"Timed out fetching {url}: {e}") from e
        except httpx.TransportError as e:
            raise FetchFailedError(f"Failed to fetch {url}: {e}") from e

        if not response.is_success:
            raise FetchFailedError(f"Failed to fetch {url}: HTTP {response.status_code}")

        return response.content


def transform_feed_to_news_items(feed: WikiFeed) -> list[NewsItem]:
    """Flatten recent updates and announcements into a single news list."""
    items = [
        NewsItem(
            id=f"update_{index}",
            title=update.title,
            summary=update.snippet,
            image_url=update.image_url or None,
            category=NewsCategory.UPDATE,
            url=update.article_url or None,
        )
        for index, update in enumerate(feed.recent_updates)
    ]

    items.extend(
        NewsItem(
            id=f"announcement_{index}",
            title=f"Wiki News: {announcement.date}",
            summary=clean_html(announcement.content),
            category=NewsCategory.ANNOUNCEMENT,
        )
        for index, announcement in enumerate(feed.announcements)
    )

    return items
