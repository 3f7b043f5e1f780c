from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from core.models import ViewRow
from core.utils import chunked

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class EnrichmentScheduler:
    """
    Drives a DetailEnricher over the table rows in fixed-size batches.

    All requests of a batch are in flight together and the next batch starts
    only after every one of them resolved plus a pacing delay, so at most
    batch_size requests are ever outstanding. Results go back to the row they
    were read from; rows are never created, removed or reordered here.
    """

    def __init__(self, enricher, table, on_progress: Optional[ProgressCallback] = None):
        self.enricher = enricher
        self.table = table
        self.on_progress = on_progress

    async def enrich(
        self,
        rows: list[ViewRow],
        batch_size: int = 5,
        inter_batch_delay: float = 0.2,
        default_year: str = "",
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")

        rows = list(rows)
        total = len(rows)
        batches = chunked(rows, batch_size)
        done = 0

        for n, batch in enumerate(batches):
            details = await asyncio.gather(
                *(self.enricher.fetch_detail(row.member_id) for row in batch)
            )
            for row, detail in zip(batch, details):
                self.table.update_row(row, detail.year or default_year, detail.detail_count)

            done += len(batch)
            if self.on_progress:
                self.on_progress(done, total)

            if n < len(batches) - 1 and inter_batch_delay > 0:
                await asyncio.sleep(inter_batch_delay)

        logger.debug("enriched %d rows in %d batch(es)", total, len(batches))
