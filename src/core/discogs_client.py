from __future__ import annotations

import logging
from typing import Optional

import requests

from core.errors import DetailFetchError, DiscogsAPIError

logger = logging.getLogger(__name__)


class DiscogsClient:
    def __init__(
        self,
        base_url: str = "https://api.discogs.com",
        user_agent: str = "discogs-versions-pyside6/0.1",
        timeout: float = 15,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        # Discogs rejects requests without a User-Agent
        self.session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})

    def _get(self, path: str, params: Optional[dict] = None, error_cls=DiscogsAPIError) -> dict:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise error_cls(f"Network error fetching {path}: {e}") from e

        if r.status_code != 200:
            raise error_cls(f"{path} returned HTTP {r.status_code}", status_code=r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            raise error_cls(f"{path} returned invalid JSON") from e
        return data if isinstance(data, dict) else {}

    def get_master_versions(self, master_id: int, page: int = 1, per_page: int = 100) -> dict:
        # GET /masters/{id}/versions?per_page=&page=
        logger.debug("GET versions master=%s page=%s", master_id, page)
        return self._get(
            f"/masters/{int(master_id)}/versions",
            params={"per_page": int(per_page), "page": int(page)},
        )

    def get_release(self, release_id: int) -> dict:
        return self._get(f"/releases/{int(release_id)}", error_cls=DetailFetchError)

    def get_master(self, master_id: int) -> dict:
        return self._get(f"/masters/{int(master_id)}")

    def master_year(self, master_id: int) -> str:
        """Display year of the master itself; empty when unknown or unreachable."""
        try:
            data = self.get_master(master_id)
        except DiscogsAPIError as e:
            logger.warning("Could not read year of master %s: %s", master_id, e)
            return ""
        return year_text(data.get("year"))

    def close(self) -> None:
        self.session.close()


def year_text(value) -> str:
    # Discogs uses 0 for "unknown year"
    if value in (None, "", 0, "0"):
        return ""
    return str(value)
