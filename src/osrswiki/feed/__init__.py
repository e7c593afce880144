# ABOUTME: Homepage feed pipeline
# ABOUTME: Wiki root HTML -> recent updates, announcements, "on this day", popular pages

from .errors import DecodingFailedError, FeedError, FeedTimeoutError, FetchFailedError, InvalidURLError
from .extractor import HtmlContentExtractor
from .models import AnnouncementItem, NewsCategory, NewsItem, OnThisDayItem, PopularPageItem, UpdateItem, WikiFeed
from .service import FeedService, transform_feed_to_news_items

__all__ = [
    "AnnouncementItem",
    "DecodingFailedError",
    "FeedError",
    "FeedService",
    "FeedTimeoutError",
    "FetchFailedError",
    "HtmlContentExtractor",
    "InvalidURLError",
    "NewsCategory",
    "NewsItem",
    "OnThisDayItem",
    "PopularPageItem",
    "UpdateItem",
    "WikiFeed",
    "transform_feed_to_news_items",
]
