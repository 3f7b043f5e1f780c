"""Shared fakes and fixtures."""

from __future__ import annotations

import asyncio

import pytest

from core.errors import DetailFetchError, DiscogsAPIError
from core.models import MemberRecord, ReleaseDetail


def make_versions(start: int, count: int) -> list[dict]:
    return [
        {"id": i, "title": f"Album {i}", "country": "UK" if i % 2 else "US"}
        for i in range(start, start + count)
    ]


def make_records(n: int) -> list[MemberRecord]:
    return [MemberRecord.from_api(v) for v in make_versions(1, n)]


class FakeDiscogsClient:
    """Serves page sizes from a list; records every call."""

    def __init__(self, page_sizes=(), fail_pages=(), fail_releases=(), with_pagination=False, master_year=""):
        self.page_sizes = list(page_sizes)
        self.fail_pages = set(fail_pages)
        self.fail_releases = set(fail_releases)
        self.with_pagination = with_pagination
        self._master_year = master_year
        self.page_calls: list[int] = []
        self.release_calls: list[int] = []

    def get_master_versions(self, master_id, page=1, per_page=100):
        self.page_calls.append(page)
        if page in self.fail_pages:
            raise DiscogsAPIError(f"HTTP 500 on page {page}", status_code=500)
        size = self.page_sizes[page - 1] if page <= len(self.page_sizes) else 0
        start = sum(self.page_sizes[: page - 1]) + 1
        data = {"versions": make_versions(start, size)}
        if self.with_pagination:
            data["pagination"] = {"page": page, "pages": len(self.page_sizes), "per_page": per_page}
        return data

    def get_release(self, release_id):
        self.release_calls.append(release_id)
        if release_id in self.fail_releases:
            raise DetailFetchError("HTTP 404", status_code=404)
        return {"year": 1990 + release_id % 10, "tracklist": [{}] * (release_id % 12 + 1)}

    def master_year(self, master_id):
        return self._master_year


class FakeEnricher:
    """Async enricher that tracks how many detail requests are in flight."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.in_flight = 0
        self.max_in_flight = 0
        self.events: list[tuple[str, int]] = []
        self.calls: list[int] = []

    async def fetch_detail(self, release_id):
        self.calls.append(release_id)
        self.events.append(("start", release_id))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        # finish in reverse-ish order inside a batch
        for _ in range(20 - release_id % 5):
            await asyncio.sleep(0)
        self.in_flight -= 1
        self.events.append(("end", release_id))
        if release_id in self.failing:
            return ReleaseDetail()
        return ReleaseDetail(year=str(2000 + release_id % 20), detail_count=release_id % 15 + 1)


class FakePager:
    """Async pager; master ids in `gated` wait for their event before answering."""

    def __init__(self, sizes: dict[int, int], fail=(), gated=()):
        self.sizes = sizes
        self.fail = set(fail)
        self.gates = {m: asyncio.Event() for m in gated}
        self.calls: list[int] = []

    async def fetch_all(self, master_id):
        from core.errors import PaginationError

        self.calls.append(master_id)
        if master_id in self.gates:
            await self.gates[master_id].wait()
        if master_id in self.fail:
            raise PaginationError("Failed to fetch versions page 1: HTTP 500", status_code=500)
        return [
            MemberRecord(id=master_id * 1000 + i, title=f"M{master_id} #{i}", country="DE")
            for i in range(self.sizes.get(master_id, 0))
        ]


@pytest.fixture
def qcore_app():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
