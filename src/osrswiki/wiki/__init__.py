# ABOUTME: Shared upstream access for the wiki's MediaWiki API and HTML pages
# ABOUTME: Exposes the base client that owns the httpx session, endpoints and timeouts

from .base import BaseWikiClient

__all__ = ["BaseWikiClient"]
