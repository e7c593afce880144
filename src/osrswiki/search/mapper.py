# ABOUTME: Pure mapping from raw MediaWiki search hits to ranked SearchResult records
# ABOUTME: Handles snippet cleanup, namespace naming and canonical article URLs

import re

from osrswiki.search.models import RawSearchHit, SearchResult

NAMESPACE_NAMES: dict[int, str] = {
    0: "Main",
    1: "Talk",
    2: "User",
    3: "User talk",
    4: "Wiki",
    5: "Wiki talk",
    6: "File",
    7: "File talk",
    8: "MediaWiki",
    9: "MediaWiki talk",
    10: "Template",
    11: "Template talk",
    12: "Help",
    13: "Help talk",
    14: "Category",
    15: "Category talk",
}

_TAG_PATTERN = re.compile(r"<[^>]+>")

# &amp; must stay last, otherwise "&amp;quot;" would be unescaped twice
_SNIPPET_ENTITIES = (
    ("&quot;", '"'),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


def strip_html(text: str) -> str:
    """Remove HTML tags from a search snippet and decode the entities MediaWiki emits in it."""
    stripped = _TAG_PATTERN.sub("", text)
    for entity, replacement in _SNIPPET_ENTITIES:
        stripped = stripped.replace(entity, replacement)
    return stripped


def namespace_display_name(namespace_id: int) -> str:
    return NAMESPACE_NAMES.get(namespace_id, f"Namespace {namespace_id}")


def article_url(title: str, article_base_url: str) -> str:
    """Build the canonical article URL, e.g. "Dragon scimitar" -> ".../w/Dragon_scimitar"."""
    return f"{article_base_url}{title.replace(' ', '_')}"


def map_hit(raw_hit: RawSearchHit, position_index: int, offset: int, article_base_url: str) -> SearchResult:
    """Convert one raw hit into a SearchResult.

    Args:
        raw_hit: Hit as returned by list=search
        position_index: 0-based index of the hit within the current page
        offset: Offset the page was requested at
        article_base_url: Article path prefix, e.g. https://oldschool.runescape.wiki/w/

    Returns:
        SearchResult ranked globally as offset + position_index + 1
    """
    description = strip_html(raw_hit.snippet).strip() if raw_hit.snippet else ""

    return SearchResult(
        id=str(raw_hit.pageid),
        title=raw_hit.title,
        description=description or None,
        raw_snippet=raw_hit.snippet,
        url=article_url(raw_hit.title, article_base_url),
        thumbnail_url=None,
        namespace_id=raw_hit.ns,
        namespace_name=namespace_display_name(raw_hit.ns),
        rank=offset + position_index + 1,
        size=raw_hit.size,
        word_count=raw_hit.wordcount,
        last_modified=raw_hit.timestamp,
    )


class SearchResultMapper:
    """Maps pages of raw hits against a fixed article path prefix."""

    def __init__(self, article_base_url: str):
        self.article_base_url = article_base_url

    def map_hit(self, raw_hit: RawSearchHit, position_index: int, offset: int) -> SearchResult:
        return map_hit(raw_hit, position_index, offset, self.article_base_url)

    def map_page(self, raw_hits: list[RawSearchHit], offset: int) -> list[SearchResult]:
        return [self.map_hit(hit, index, offset) for index, hit in enumerate(raw_hits)]
