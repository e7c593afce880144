# ABOUTME: Data models for the wiki homepage feed sections
# ABOUTME: Recent updates, announcements, "on this day" and popular pages, plus flattened news items

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class UpdateItem(BaseModel):
    """A recent game update tile. URLs are always absolute."""

    title: str
    snippet: str = ""
    image_url: str = ""
    article_url: str = ""


class AnnouncementItem(BaseModel):
    """A wiki news entry; content is kept as an HTML fragment for rich-text rendering."""

    date: str
    content: str


class OnThisDayItem(BaseModel):
    title: str = "On this day..."
    events: list[str] = Field(default_factory=list, description="HTML fragments, one per event")


class PopularPageItem(BaseModel):
    title: str
    page_url: str


class WikiFeed(BaseModel):
    """Homepage feed. Each section is independently optional."""

    recent_updates: list[UpdateItem] = Field(default_factory=list)
    announcements: list[AnnouncementItem] = Field(default_factory=list)
    on_this_day: OnThisDayItem | None = None
    popular_pages: list[PopularPageItem] = Field(default_factory=list)


class NewsCategory(str, Enum):
    UPDATE = "update"
    ANNOUNCEMENT = "announcement"


class NewsItem(BaseModel):
    """Flattened feed entry for simple list consumers."""

    id: str
    title: str
    summary: str
    content: str | None = None
    image_url: str | None = None
    published_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    category: NewsCategory
    url: str | None = None
