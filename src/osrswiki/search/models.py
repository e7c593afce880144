# ABOUTME: Data models for search results and the raw MediaWiki API payloads they come from
# ABOUTME: Raw payload models validate upstream JSON; result models are what consumers receive

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """A single ranked search hit, enriched with its thumbnail once the batch fetch returns."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Upstream page id, unique within one search session")
    title: str = Field(..., description="Page title as returned by the wiki")
    description: str | None = Field(None, description="Snippet with HTML tags and entities removed")
    raw_snippet: str | None = Field(None, description="Unmodified snippet including searchmatch highlight spans")
    url: str = Field(..., description="Canonical article URL")
    thumbnail_url: str | None = Field(None, description="Thumbnail source URL, None when the page has no image")
    namespace_id: int = Field(..., description="MediaWiki namespace number")
    namespace_name: str = Field(..., description="Human readable namespace name")
    rank: int = Field(..., ge=1, description="1-based position within the full relevance ordering")
    size: int | None = Field(None, description="Page size in bytes")
    word_count: int | None = Field(None, description="Page word count")
    last_modified: str | None = Field(None, description="ISO timestamp of the last edit")

    @property
    def display_title(self) -> str:
        return self.title.replace("_", " ")


class SearchResponse(BaseModel):
    """One page of search results plus the pagination decision."""

    results: list[SearchResult] = Field(default_factory=list)
    has_more: bool = False
    total_count: int = 0

    @classmethod
    def empty(cls) -> "SearchResponse":
        return cls(results=[], has_more=False, total_count=0)


# Raw upstream payloads (formatversion=2)


class RawSearchHit(BaseModel):
    ns: int
    pageid: int
    title: str
    snippet: str | None = None
    size: int | None = None
    wordcount: int | None = None
    timestamp: str | None = None


class RawSearchInfo(BaseModel):
    totalhits: int | None = None


class RawSearchQuery(BaseModel):
    search: list[RawSearchHit] = Field(default_factory=list)
    searchinfo: RawSearchInfo | None = None


class RawSearchPayload(BaseModel):
    query: RawSearchQuery


class RawThumbnail(BaseModel):
    source: str
    width: int | None = None
    height: int | None = None


class RawThumbnailPage(BaseModel):
    pageid: int | None = None
    title: str | None = None
    thumbnail: RawThumbnail | None = None


class RawThumbnailQuery(BaseModel):
    pages: list[RawThumbnailPage] = Field(default_factory=list)


class RawThumbnailPayload(BaseModel):
    query: RawThumbnailQuery
