# ABOUTME: Tests for FeedService: homepage fetch, error classification and section independence
# ABOUTME: Also covers flattening a feed into news items

import asyncio

import httpx
import pytest

from osrswiki.feed import (
    AnnouncementItem,
    DecodingFailedError,
    FeedService,
    FeedTimeoutError,
    FetchFailedError,
    InvalidURLError,
    NewsCategory,
    UpdateItem,
    WikiFeed,
    transform_feed_to_news_items,
)

HOMEPAGE_URL = "https://oldschool.runescape.wiki/"


class TestFetchFeed:
    @pytest.mark.asyncio
    async def test_full_homepage(self, httpx_mock, homepage_html):
        httpx_mock.add_response(url=HOMEPAGE_URL, text=homepage_html)

        async with FeedService() as service:
            feed = await service.fetch_feed()

        assert len(feed.recent_updates) == 3
        assert len(feed.announcements) == 2
        assert feed.on_this_day is not None
        assert len(feed.popular_pages) == 3

    @pytest.mark.asyncio
    async def test_sections_are_independent(self, httpx_mock, homepage_factory):
        httpx_mock.add_response(url=HOMEPAGE_URL, text=homepage_factory("on_this_day", "announcements"))

        async with FeedService() as service:
            feed = await service.fetch_feed()

        assert feed.on_this_day is None
        assert feed.announcements == []
        assert feed.recent_updates
        assert feed.popular_pages

    @pytest.mark.asyncio
    async def test_unrecognised_page_gives_empty_feed(self, httpx_mock):
        httpx_mock.add_response(url=HOMEPAGE_URL, text="<html><body>Maintenance</body></html>")

        async with FeedService() as service:
            feed = await service.fetch_feed()

        assert feed == WikiFeed()

    @pytest.mark.asyncio
    async def test_custom_base_url(self, httpx_mock, homepage_html):
        httpx_mock.add_response(url="https://wiki.example.org/", text=homepage_html)

        async with FeedService(base_url="https://wiki.example.org/") as service:
            feed = await service.fetch_feed()

        assert feed.popular_pages[0].page_url == "https://wiki.example.org/w/Grand_Exchange"


class TestSectionFailureIsolation:
    def test_failing_parser_defaults_only_its_section(self, homepage_html, monkeypatch):
        service = FeedService()

        def explode(html):
            raise RuntimeError("template changed")

        monkeypatch.setattr(service.extractor, "parse_announcements", explode)
        monkeypatch.setattr(service.extractor, "parse_on_this_day", explode)

        feed = service.parse_feed(homepage_html)

        assert feed.announcements == []
        assert feed.on_this_day is None
        assert len(feed.recent_updates) == 3
        assert len(feed.popular_pages) == 3


class TestFetchFeedErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("base_url", ["ftp://oldschool.runescape.wiki", "not a url", "https://"])
    async def test_invalid_url(self, httpx_mock, base_url):
        async with FeedService(base_url=base_url) as service:
            with pytest.raises(InvalidURLError):
                await service.fetch_feed()

        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [404, 500, 503])
    async def test_error_status(self, httpx_mock, status_code):
        httpx_mock.add_response(url=HOMEPAGE_URL, status_code=status_code)

        async with FeedService() as service:
            with pytest.raises(FetchFailedError):
                await service.fetch_feed()

    @pytest.mark.asyncio
    async def test_connection_failure(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        async with FeedService() as service:
            with pytest.raises(FetchFailedError):
                await service.fetch_feed()

    @pytest.mark.asyncio
    async def test_request_timeout(self, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("slow"))

        async with FeedService() as service:
            with pytest.raises(FeedTimeoutError):
                await service.fetch_feed()

    @pytest.mark.asyncio
    async def test_resource_timeout(self):
        async def slow_fetch(url):
            await asyncio.sleep(5)

        async with FeedService(resource_timeout=0.01) as service:
            service._fetch_homepage = slow_fetch
            with pytest.raises(FeedTimeoutError):
                await service.fetch_feed()

    @pytest.mark.asyncio
    async def test_invalid_utf8(self, httpx_mock):
        httpx_mock.add_response(url=HOMEPAGE_URL, content=b"<html>\xff\xfe\xfa</html>")

        async with FeedService() as service:
            with pytest.raises(DecodingFailedError):
                await service.fetch_feed()


class TestTransformFeedToNewsItems:
    def test_updates_then_announcements(self):
        feed = WikiFeed(
            recent_updates=[
                UpdateItem(
                    title="Varlamore",
                    snippet="New region",
                    image_url="https://oldschool.runescape.wiki/images/V.png",
                    article_url="https://oldschool.runescape.wiki/w/Update:Varlamore",
                ),
                UpdateItem(title="Poll 82"),
            ],
            announcements=[AnnouncementItem(date="14 October 2026", content="New <b>map</b> &amp; more")],
        )

        items = transform_feed_to_news_items(feed)

        assert [item.id for item in items] == ["update_0", "update_1", "announcement_0"]
        assert items[0].category == NewsCategory.UPDATE
        assert items[0].url == "https://oldschool.runescape.wiki/w/Update:Varlamore"
        assert items[1].image_url is None
        assert items[1].url is None
        assert items[2].category == NewsCategory.ANNOUNCEMENT
        assert items[2].title == "Wiki News: 14 October 2026"
        assert items[2].summary == "New map & more"

    def test_empty_feed(self):
        assert transform_feed_to_news_items(WikiFeed()) == []
