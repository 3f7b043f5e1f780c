from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from core.enricher import DetailEnricher
from core.errors import PaginationError
from core.pager import CollectionPager
from core.scheduler import EnrichmentScheduler
from core.view_model import TableViewModel

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FAILED = "failed"


@dataclass
class PipelineRunState:
    master_id: int | None = None
    status: RunStatus = RunStatus.IDLE
    task: Optional[asyncio.Task] = None
    last_error: str | None = None

    def reset(self, master_id: int | None) -> None:
        self.master_id = master_id
        self.status = RunStatus.IDLE
        self.task = None
        self.last_error = None


class PipelineController:
    """
    Owns the versions table of the displayed master and the run that fills it.

    Each run gets a fresh TableViewModel. Starting a run cancels the previous
    one, so a superseded run never writes into the table that replaced it.
    """

    def __init__(
        self,
        pager: CollectionPager,
        enricher: DetailEnricher,
        year_lookup: Optional[Callable[[int], str]] = None,
        batch_size: int = 5,
        inter_batch_delay: float = 0.2,
    ):
        self.pager = pager
        self.enricher = enricher
        self.year_lookup = year_lookup
        self.batch_size = batch_size
        self.inter_batch_delay = inter_batch_delay

        self.state = PipelineRunState()
        self.table: TableViewModel | None = None

        self._table_listeners: list[Callable[[TableViewModel], None]] = []
        self._status_listeners: list[Callable[[PipelineRunState], None]] = []
        self._progress_listeners: list[Callable[[int, int], None]] = []

    @classmethod
    def from_settings(cls, client, settings) -> "PipelineController":
        return cls(
            pager=CollectionPager(client, per_page=settings.per_page),
            enricher=DetailEnricher(client),
            year_lookup=client.master_year,
            batch_size=settings.batch_size,
            inter_batch_delay=settings.batch_delay_s,
        )

    # ------------------ subscriptions ------------------
    def on_table(self, callback: Callable[[TableViewModel], None]) -> None:
        self._table_listeners.append(callback)

    def on_status(self, callback: Callable[[PipelineRunState], None]) -> None:
        self._status_listeners.append(callback)

    def on_progress(self, callback: Callable[[int, int], None]) -> None:
        self._progress_listeners.append(callback)

    def bind(self, app_state) -> None:
        """Wire the controller to the application signals."""
        app_state.view_changed.connect(self.on_view_changed)
        self.on_table(app_state.table_replaced.emit)
        self.on_progress(app_state.enrich_progress.emit)

        def _status(state: PipelineRunState):
            app_state.status_changed.emit(state.status.value)
            if state.status == RunStatus.FAILED and state.last_error:
                app_state.notify(f"Could not load versions: {state.last_error}", "error")

        self.on_status(_status)

    # ------------------ view changes ------------------
    @property
    def running(self) -> bool:
        return self.state.status == RunStatus.RUNNING

    def on_view_changed(self, master_id: int | None) -> Optional[asyncio.Task]:
        if master_id is None:
            return None
        if master_id == self.state.master_id and self.table is not None:
            # same master, table still shown: keep the running or finished run
            return None
        return self.start(master_id)

    def refresh(self) -> Optional[asyncio.Task]:
        if self.state.master_id is None:
            return None
        return self.start(self.state.master_id)

    def discard_table(self) -> None:
        self._cancel_active()
        self.table = None

    # ------------------ runs ------------------
    def start(self, master_id: int) -> asyncio.Task:
        self._cancel_active()

        table = TableViewModel(master_id)
        self.table = table
        self.state.reset(master_id)
        for cb in self._table_listeners:
            cb(table)

        self._set_status(RunStatus.RUNNING)
        task = asyncio.ensure_future(self._run(master_id, table))
        self.state.task = task
        return task

    def _cancel_active(self) -> None:
        task = self.state.task
        if task is not None and not task.done():
            logger.info("Cancelling run for master %s", self.state.master_id)
            task.cancel()

    async def _run(self, master_id: int, table: TableViewModel) -> None:
        logger.info("Loading versions of master %s", master_id)
        current = asyncio.current_task()
        try:
            try:
                records = await self.pager.fetch_all(master_id)
            except PaginationError as e:
                logger.error("Versions of master %s failed: %s", master_id, e)
                table.show_error(str(e))
                if self.state.task is current:
                    self.state.last_error = str(e)
                    self._set_status(RunStatus.FAILED)
                return

            rows = table.set_rows(records)
            default_year = ""
            if self.year_lookup is not None:
                default_year = await asyncio.to_thread(self.year_lookup, master_id)

            scheduler = EnrichmentScheduler(self.enricher, table, on_progress=self._progress)
            await scheduler.enrich(
                rows,
                batch_size=self.batch_size,
                inter_batch_delay=self.inter_batch_delay,
                default_year=default_year,
            )
            logger.info("Master %s: %d versions enriched", master_id, len(rows))
        except asyncio.CancelledError:
            logger.info("Run for master %s superseded", master_id)
            raise
        finally:
            if self.state.task is current and self.state.status != RunStatus.IDLE:
                self._set_status(RunStatus.IDLE)

    def _set_status(self, status: RunStatus) -> None:
        self.state.status = status
        for cb in self._status_listeners:
            cb(self.state)

    def _progress(self, done: int, total: int) -> None:
        for cb in self._progress_listeners:
            cb(done, total)
