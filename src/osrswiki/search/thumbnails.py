# ABOUTME: Batched thumbnail lookup for search results via prop=pageimages
# ABOUTME: Thumbnails are an enhancement, so every failure degrades to an empty mapping

import httpx

from osrswiki.config import get_config
from osrswiki.search.models import RawThumbnailPayload
from osrswiki.utils.logging import get_logger, log_api_call
from osrswiki.wiki.base import BaseWikiClient

# Upstream limit on page ids per pageimages request
MAX_BATCH_SIZE = 50


class ThumbnailBatchFetcher(BaseWikiClient):
    """Fetches thumbnail URLs for up to 50 pages in a single request."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        thumbnail_size: int | None = None,
        batch_limit: int | None = None,
        **kwargs,
    ):
        super().__init__(client, **kwargs)
        config = get_config()
        self.thumbnail_size = thumbnail_size or config.thumbnail_size
        self.batch_limit = min(batch_limit or config.thumbnail_batch_limit, MAX_BATCH_SIZE)
        self.logger = get_logger(__name__)

    async def fetch_batch(self, ids: list[str]) -> dict[str, str]:
        """Fetch thumbnail sources for the given page ids.

        Only the first ``batch_limit`` ids are requested. Pages without a thumbnail, or missing
        from the response, are omitted from the result. Never raises.

        Args:
            ids: Page ids as strings

        Returns:
            Mapping of page id -> thumbnail source URL
        """
        batch = ids[: self.batch_limit]
        if not batch:
            return {}

        if len(ids) > len(batch):
            self.logger.debug("Truncating thumbnail batch", requested=len(ids), batch_limit=self.batch_limit)

        try:
            return await self._fetch_thumbnails(batch)
        except Exception as e:
            self.logger.warning(
                "Thumbnail batch failed, continuing without thumbnails",
                batch_size=len(batch),
                error=str(e),
                error_type=type(e).__name__,
            )
            return {}

    @log_api_call("pageimages")
    async def _fetch_thumbnails(self, batch: list[str]) -> dict[str, str]:
        response = await self._query(
            {
                "pageids": "|".join(batch),
                "prop": "pageimages",
                "pilicense": "any",
                "pithumbsize": str(self.thumbnail_size),
            }
        )
        response.raise_for_status()

        payload = RawThumbnailPayload.model_validate(response.json())

        thumbnails = {
            str(page.pageid): page.thumbnail.source
            for page in payload.query.pages
            if page.pageid is not None and page.thumbnail is not None
        }

        self.logger.debug("Fetched thumbnails", requested=len(batch), found=len(thumbnails))
        return thumbnails
