# ABOUTME: Regex-based extraction of feed sections from the wiki homepage HTML
# ABOUTME: Works against the known main-page template; each section parser is independent

import re

from osrswiki.feed.models import AnnouncementItem, OnThisDayItem, PopularPageItem, UpdateItem
from osrswiki.utils.logging import get_logger

logger = get_logger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL

# Recent updates live between these two containers
RECENT_UPDATES_START = re.compile(r'<div[^>]*class="[^"]*mainpage-recent-updates', _FLAGS)
RECENT_UPDATES_END = re.compile(r'<div[^>]*class="[^"]*mainpage-contents', _FLAGS)
TILE_PATTERN = r'<div[^>]*class="[^"]*tile-halves[^"]*"[^>]*>(.*?)</div>\s*</div>'
TILE_TITLE_PATTERN = r'<div[^>]*class="[^"]*tile-bottom[^"]*"[^>]*>.*?<a[^>]*>.*?<h2[^>]*>(.*?)</h2>'
TILE_HREF_PATTERN = r'<div[^>]*class="[^"]*tile-bottom[^"]*"[^>]*>.*?<a[^>]*href="([^"]+)"'
TILE_IMAGE_PATTERN = r'<div[^>]*class="[^"]*tile-top[^"]*"[^>]*>.*?<img[^>]*src="([^"]+)"'
PARAGRAPH_PATTERN = r"<p[^>]*>(.*?)</p>"
MAX_RECENT_UPDATES = 5
PLACEHOLDER_UPDATE_TITLE = "Recent Update"

WIKINEWS_PATTERN = r'<div[^>]*class="[^"]*mainpage-wikinews[^"]*"[^>]*>(.*?)</div>'
DT_PATTERN = r"<dt[^>]*>(.*?)</dt>"
DD_PATTERN = r"<dd[^>]*>(.*?)</dd>"

ONTHISDAY_PATTERN = r'<div[^>]*class="[^"]*mainpage-onthisday[^"]*"[^>]*>(.*?)</div>'
H2_PATTERN = r"<h2[^>]*>(.*?)</h2>"
LI_PATTERN = r"<li[^>]*>(.*?)</li>"
DEFAULT_ONTHISDAY_TITLE = "On this day..."

POPULAR_PATTERN = r'<div[^>]*class="[^"]*mainpage-popular[^"]*"[^>]*>(.*?)</div>'
LINK_PATTERN = r'<a[^>]*href="([^"]+)"[^>]*>(.*?)</a>'

_TAG_PATTERN = re.compile(r"<[^>]+>")

# Homepage text decodes &amp; first (search snippets decode it last)
_FEED_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#8226;", "•"),
    ("&bull;", "•"),
    ("&nbsp;", " "),
    ("&mdash;", "—"),
    ("&ndash;", "–"),
    ("&hellip;", "…"),
)


def extract_first(pattern: str, text: str) -> str | None:
    """Return the first capture group of the first match, or None."""
    match = re.search(pattern, text, _FLAGS)
    return match.group(1) if match else None


def extract_last(pattern: str, text: str) -> str | None:
    """Return the first capture group of the last match, or None."""
    matches = extract_all(pattern, text)
    return matches[-1] if matches else None


def extract_all(pattern: str, text: str) -> list[str]:
    """Return the first capture group of every match, in document order."""
    return [match.group(1) for match in re.finditer(pattern, text, _FLAGS)]


def clean_html(fragment: str) -> str:
    """Strip tags, decode common entities and trim whitespace."""
    cleaned = _TAG_PATTERN.sub("", fragment)
    for entity, replacement in _FEED_ENTITIES:
        cleaned = cleaned.replace(entity, replacement)
    return cleaned.strip()


def resolve_url(href: str, base_url: str) -> str:
    """Resolve root-relative and protocol-relative links against the wiki origin."""
    if href.startswith("//"):
        return f"https:{href}"
    if href.startswith("/"):
        return f"{base_url.rstrip('/')}{href}"
    return href


class HtmlContentExtractor:
    """Extracts the four homepage feed sections from raw HTML."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def parse_recent_updates(self, html: str) -> list[UpdateItem]:
        start = RECENT_UPDATES_START.search(html)
        if not start:
            logger.debug("Recent updates section not found")
            return []

        end = RECENT_UPDATES_END.search(html, start.end())
        container = html[start.start() : end.start()] if end else html[start.start() :]

        tiles = extract_all(TILE_PATTERN, container)
        logger.debug("Found recent update tiles", tile_count=len(tiles))

        updates = []
        for tile in tiles[:MAX_RECENT_UPDATES]:
            title = clean_html(extract_first(TILE_TITLE_PATTERN, tile) or PLACEHOLDER_UPDATE_TITLE)
            if not title or title == PLACEHOLDER_UPDATE_TITLE:
                continue

            # The summary is the tile's final paragraph
            snippet = extract_last(PARAGRAPH_PATTERN, tile)

            updates.append(
                UpdateItem(
                    title=title,
                    snippet=clean_html(snippet) if snippet is not None else "",
                    image_url=resolve_url(extract_first(TILE_IMAGE_PATTERN, tile) or "", self.base_url),
                    article_url=resolve_url(extract_first(TILE_HREF_PATTERN, tile) or "", self.base_url),
                )
            )

        return updates

    def parse_announcements(self, html: str) -> list[AnnouncementItem]:
        announcements = []
        for container in extract_all(WIKINEWS_PATTERN, html):
            dates = extract_all(DT_PATTERN, container)
            contents = extract_all(DD_PATTERN, container)
            announcements.extend(
                AnnouncementItem(date=clean_html(date), content=content) for date, content in zip(dates, contents)
            )
        return announcements

    def parse_on_this_day(self, html: str) -> OnThisDayItem | None:
        for container in extract_all(ONTHISDAY_PATTERN, html):
            events = extract_all(LI_PATTERN, container)
            if events:
                title = clean_html(extract_first(H2_PATTERN, container) or DEFAULT_ONTHISDAY_TITLE)
                return OnThisDayItem(title=title or DEFAULT_ONTHISDAY_TITLE, events=events)
        return None

    def parse_popular_pages(self, html: str) -> list[PopularPageItem]:
        pages = []
        for container in extract_all(POPULAR_PATTERN, html):
            for match in re.finditer(LINK_PATTERN, container, _FLAGS):
                href, text = match.group(1), match.group(2)
                pages.append(PopularPageItem(title=clean_html(text), page_url=resolve_url(href, self.base_url)))
        return pages
