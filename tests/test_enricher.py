"""Tests for DetailEnricher."""

from unittest.mock import MagicMock

import pytest

from conftest import FakeDiscogsClient
from core.enricher import DetailEnricher
from core.errors import DetailFetchError
from core.models import ReleaseDetail


@pytest.mark.asyncio
async def test_counts_tracks_and_reads_year():
    client = MagicMock()
    client.get_release.return_value = {"year": 1977, "tracklist": [{}, {}, {}]}

    detail = await DetailEnricher(client).fetch_detail(7)

    assert detail == ReleaseDetail(year="1977", detail_count=3)
    client.get_release.assert_called_once_with(7)


@pytest.mark.asyncio
async def test_missing_fields_default_to_zero_and_empty():
    client = MagicMock()
    client.get_release.return_value = {"year": 0}

    assert await DetailEnricher(client).fetch_detail(1) == ReleaseDetail(year="", detail_count=0)


@pytest.mark.asyncio
async def test_fetch_error_resolves_to_defaults():
    client = FakeDiscogsClient(fail_releases=[5])

    detail = await DetailEnricher(client).fetch_detail(5)

    assert detail == ReleaseDetail(year="", detail_count=0)
    assert client.release_calls == [5]


@pytest.mark.asyncio
async def test_status_error_from_client_is_absorbed():
    client = MagicMock()
    client.get_release.side_effect = DetailFetchError("HTTP 429", status_code=429)

    assert await DetailEnricher(client).fetch_detail(3) == ReleaseDetail()
