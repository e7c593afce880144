# ABOUTME: Search pipeline over the wiki's MediaWiki API
# ABOUTME: Query -> ranked results -> batched thumbnail enrichment -> pagination decision

from .errors import (
    MalformedResponseError,
    NetworkUnavailableError,
    RateLimitedError,
    SearchError,
    SearchTimeoutError,
    ServerError,
)
from .mapper import SearchResultMapper, namespace_display_name, strip_html
from .models import SearchResponse, SearchResult
from .service import SearchService
from .thumbnails import ThumbnailBatchFetcher

__all__ = [
    "MalformedResponseError",
    "NetworkUnavailableError",
    "RateLimitedError",
    "SearchError",
    "SearchResponse",
    "SearchResult",
    "SearchResultMapper",
    "SearchService",
    "SearchTimeoutError",
    "ServerError",
    "ThumbnailBatchFetcher",
    "namespace_display_name",
    "strip_html",
]
