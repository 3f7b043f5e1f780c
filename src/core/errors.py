from __future__ import annotations


class DiscogsAPIError(Exception):
    """Transport failure or non-success status from the Discogs API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PaginationError(DiscogsAPIError):
    pass


class DetailFetchError(DiscogsAPIError):
    pass
