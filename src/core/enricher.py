from __future__ import annotations

import asyncio
import logging

from core.discogs_client import year_text
from core.errors import DiscogsAPIError
from core.models import ReleaseDetail

logger = logging.getLogger(__name__)


class DetailEnricher:
    """Fetches year and track count of a single release; failures resolve to defaults."""

    def __init__(self, client):
        self.client = client

    async def fetch_detail(self, release_id: int) -> ReleaseDetail:
        try:
            data = await asyncio.to_thread(self.client.get_release, release_id)
        except DiscogsAPIError as e:
            logger.warning("Release %s detail unavailable: %s", release_id, e)
            return ReleaseDetail()

        tracklist = data.get("tracklist")
        return ReleaseDetail(
            year=year_text(data.get("year")),
            detail_count=len(tracklist) if isinstance(tracklist, list) else 0,
        )
