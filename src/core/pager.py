from __future__ import annotations

import asyncio
import logging

from core.errors import DiscogsAPIError, PaginationError
from core.models import MemberRecord

logger = logging.getLogger(__name__)


class CollectionPager:
    """
    Walks /masters/{id}/versions page by page until the listing is exhausted.

    A page shorter than per_page (or empty) ends the walk, as does the last page
    announced by the response's pagination block. Any failed page aborts the
    whole traversal with PaginationError; no partial list is ever returned.
    """

    def __init__(self, client, per_page: int = 100):
        if per_page < 1:
            raise ValueError("per_page must be >= 1")
        self.client = client
        self.per_page = per_page

    async def fetch_all(self, master_id: int) -> list[MemberRecord]:
        records: list[MemberRecord] = []
        page = 1
        while True:
            try:
                data = await asyncio.to_thread(
                    self.client.get_master_versions, master_id, page, self.per_page
                )
            except DiscogsAPIError as e:
                raise PaginationError(
                    f"Failed to fetch versions page {page}: {e}", status_code=e.status_code
                ) from e

            items = data.get("versions") or []
            try:
                records.extend(MemberRecord.from_api(item) for item in items)
            except (KeyError, TypeError, ValueError) as e:
                raise PaginationError(f"Malformed versions page {page}: {e!r}") from e
            logger.debug("master %s page %d: %d versions", master_id, page, len(items))

            if len(items) < self.per_page:
                break
            pages = (data.get("pagination") or {}).get("pages")
            if isinstance(pages, int) and page >= pages:
                break
            page += 1

        logger.info("master %s: %d versions in %d page(s)", master_id, len(records), page)
        return records
