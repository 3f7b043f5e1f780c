# ui/models/release_table_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from core.models import ViewRow
from core.view_model import COLUMNS, TableViewModel

class ReleaseTableModel(QAbstractTableModel):
    """Qt face of a TableViewModel; the view model stays the only owner of rows."""

    def __init__(self, table: TableViewModel | None = None):
        super().__init__()
        self._table: TableViewModel | None = None
        self._moving: list[tuple[QModelIndex, ViewRow | None]] | None = None
        self.set_table(table)

    @property
    def table(self) -> TableViewModel | None:
        return self._table

    def set_table(self, table: TableViewModel | None):
        self.beginResetModel()
        if self._table is not None:
            self._table.remove_listener(self._on_table_event)
        self._table = table
        if table is not None:
            table.add_listener(self._on_table_event)
        self.endResetModel()

    def _on_table_event(self, event: str, row: ViewRow | None):
        if event == "reset":
            self.beginResetModel()
            self.endResetModel()
        elif event == "before_layout":
            self.layoutAboutToBeChanged.emit()
            # remember which row each persistent index points at
            self._moving = [(idx, self._table.row_at(idx.row())) for idx in self.persistentIndexList()]
        elif event == "layout":
            if self._moving is None:
                self.layoutAboutToBeChanged.emit()
                self._moving = []
            old, new = [], []
            for idx, r in self._moving:
                pos = self._table.position_of(r) if r is not None else -1
                old.append(idx)
                new.append(self.index(pos, idx.column()) if pos >= 0 else QModelIndex())
            self.changePersistentIndexList(old, new)
            self._moving = None
            self.layoutChanged.emit()
        elif event == "row" and row is not None:
            pos = self._table.position_of(row)
            if pos >= 0:
                self.dataChanged.emit(self.index(pos, 0), self.index(pos, len(COLUMNS) - 1))

    def is_error(self) -> bool:
        return self._table is not None and self._table.error is not None

    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid() or self._table is None:
            return 0
        if self.is_error():
            return 1
        return len(self._table)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(COLUMNS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return COLUMNS[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid() or self._table is None:
            return None

        if self.is_error():
            if role == Qt.DisplayRole and index.column() == 0:
                return self._table.error_text
            return None

        row = self._table.row_at(index.row())
        if row is None:
            return None

        if role == Qt.DisplayRole:
            return row.cell(index.column())
        if role == Qt.ToolTipRole and index.column() == 0:
            return row.url
        if role == Qt.UserRole:
            return row
        return None

    def sort(self, column: int, order=Qt.AscendingOrder):
        # header clicks toggle direction inside the view model
        if self._table is not None and not self.is_error():
            self._table.sort_by(column)

    def is_row_hidden(self, row: int) -> bool:
        r = self._table.row_at(row) if self._table is not None else None
        return r is not None and not r.visible

    def release_url_at(self, row: int) -> str | None:
        r = self._table.row_at(row) if self._table is not None else None
        return r.url if r is not None else None
