# core/view_model.py
from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Iterable, Optional

from core.models import MemberRecord, ViewRow
from core.utils import parse_leading_int

COLUMNS = ["Release", "Country", "Year", "# Tracks"]

# listener(event, row) with event in "reset" | "before_layout" | "layout" | "row"
Listener = Callable[[str, Optional[ViewRow]], None]


def compare_cells(a: str, b: str) -> int:
    na, nb = parse_leading_int(a), parse_leading_int(b)
    if na is not None and nb is not None:
        a, b = na, nb
    return (a > b) - (a < b)


class TableViewModel:
    """
    Ordered rows of one versions table.

    Sorting physically reorders the rows; filtering only flips ViewRow.visible,
    so row references handed out earlier stay valid under both.
    """

    columns = COLUMNS

    def __init__(self, master_id: int | None = None):
        self.master_id = master_id
        self._rows: list[ViewRow] = []
        self.sort_column: int | None = None
        self.sort_ascending = True
        self.query = ""
        self.error: str | None = None
        self._listeners: list[Listener] = []

    # ------------------ listeners ------------------
    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: str, row: ViewRow | None = None) -> None:
        for listener in list(self._listeners):
            listener(event, row)

    # ------------------ rows ------------------
    @property
    def rows(self) -> list[ViewRow]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def row_at(self, position: int) -> ViewRow | None:
        if position < 0 or position >= len(self._rows):
            return None
        return self._rows[position]

    def position_of(self, row: ViewRow) -> int:
        for i, r in enumerate(self._rows):
            if r is row:
                return i
        return -1

    def visible_rows(self) -> list[ViewRow]:
        return [r for r in self._rows if r.visible]

    def set_rows(self, records: Iterable[MemberRecord]) -> list[ViewRow]:
        self.error = None
        self._rows = [ViewRow(record=r) for r in records]
        for row in self._rows:
            row.visible = self._matches(row)
        if self.sort_column is not None:
            self._apply_sort()
        self._emit("reset")
        return self.rows

    def clear(self) -> None:
        self._rows = []
        self.error = None
        self._emit("reset")

    def show_error(self, message: str) -> None:
        self._rows = []
        self.error = message
        self._emit("reset")

    @property
    def error_text(self) -> str | None:
        return f"Error: {self.error}" if self.error is not None else None

    def update_row(self, row: ViewRow, year: str, detail_count: int) -> None:
        row.apply_detail(year, detail_count)
        row.visible = self._matches(row)
        self._emit("row", row)

    # ------------------ sort ------------------
    def sort_by(self, column: int) -> None:
        if column < 0 or column >= len(self.columns):
            raise IndexError(f"no column {column}")
        if column == self.sort_column:
            self.sort_ascending = not self.sort_ascending
        else:
            self.sort_column = column
            self.sort_ascending = True
        self._emit("before_layout")
        self._apply_sort()
        self._emit("layout")

    def _apply_sort(self) -> None:
        col = self.sort_column
        sign = 1 if self.sort_ascending else -1
        # list.sort is stable: ties keep their current relative order
        self._rows.sort(key=cmp_to_key(lambda a, b: sign * compare_cells(a.cell(col), b.cell(col))))

    # ------------------ filter ------------------
    def filter(self, query: str) -> None:
        self.query = (query or "").lower()
        self._emit("before_layout")
        for row in self._rows:
            row.visible = self._matches(row)
        self._emit("layout")

    def _matches(self, row: ViewRow) -> bool:
        return not self.query or self.query in row.search_text()
