# core/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

PENDING_TEXT = "..."
RELEASE_URL = "https://www.discogs.com/release/{id}"


class RecordStatus(str, Enum):
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class MemberRecord:
    id: int
    title: str = ""
    country: str = ""
    year: str | None = None
    detail_count: int | None = None
    status: RecordStatus = RecordStatus.PENDING

    @classmethod
    def from_api(cls, item: dict) -> "MemberRecord":
        # one entry of the versions[] listing
        return cls(
            id=int(item["id"]),
            title=str(item.get("title") or ""),
            country=str(item.get("country") or ""),
        )


@dataclass(frozen=True)
class ReleaseDetail:
    year: str = ""
    detail_count: int = 0


@dataclass(eq=False)
class ViewRow:
    record: MemberRecord
    visible: bool = True
    _cells: list[str] | None = field(default=None, repr=False)

    @property
    def member_id(self) -> int:
        return self.record.id

    @property
    def url(self) -> str:
        return RELEASE_URL.format(id=self.record.id)

    @property
    def pending(self) -> bool:
        return self.record.status == RecordStatus.PENDING

    def cells(self) -> list[str]:
        if self._cells is None:
            r = self.record
            if self.pending:
                year, count = PENDING_TEXT, PENDING_TEXT
            else:
                year = r.year or ""
                count = "" if r.detail_count is None else str(r.detail_count)
            self._cells = [r.title or "Release", r.country, year, count]
        return self._cells

    def cell(self, column: int) -> str:
        return self.cells()[column]

    def apply_detail(self, year: str, detail_count: int) -> None:
        self.record.year = year
        self.record.detail_count = detail_count
        self.record.status = RecordStatus.LOADED
        self._cells = None

    def search_text(self) -> str:
        return " ".join(self.cells()).lower()
