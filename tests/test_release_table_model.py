"""Tests for the Qt table model adapter."""

from PySide6.QtCore import QPersistentModelIndex, Qt

from core.models import MemberRecord
from core.view_model import TableViewModel
from ui.models.release_table_model import ReleaseTableModel


def _table():
    table = TableViewModel(1)
    table.set_rows([MemberRecord(id=10, title="B", country="UK"), MemberRecord(id=11, title="A", country="US")])
    return table


def test_displays_rows_and_headers(qcore_app):
    model = ReleaseTableModel(_table())

    assert model.rowCount() == 2
    assert model.columnCount() == 4
    assert model.headerData(3, Qt.Horizontal) == "# Tracks"
    assert model.data(model.index(0, 0)) == "B"
    assert model.data(model.index(0, 2)) == "..."
    assert model.release_url_at(1) == "https://www.discogs.com/release/11"


def test_row_update_emits_data_changed(qcore_app):
    table = _table()
    model = ReleaseTableModel(table)
    changed = []
    model.dataChanged.connect(lambda tl, br, roles=None: changed.append((tl.row(), br.column())))

    table.update_row(table.row_at(1), "1990", 8)

    assert changed == [(1, 3)]
    assert model.data(model.index(1, 3)) == "8"


def test_sort_and_filter_go_through_view_model(qcore_app):
    table = _table()
    model = ReleaseTableModel(table)

    model.sort(0)
    assert model.data(model.index(0, 0)) == "A"

    table.filter("uk")
    assert model.is_row_hidden(0)
    assert not model.is_row_hidden(1)


def test_error_is_a_single_row(qcore_app):
    table = _table()
    model = ReleaseTableModel(table)
    table.show_error("boom")

    assert model.rowCount() == 1
    assert model.data(model.index(0, 0)) == "Error: boom"
    assert model.data(model.index(0, 1)) is None


def test_replacing_table_detaches_old_one(qcore_app):
    old = _table()
    model = ReleaseTableModel(old)
    model.set_table(None)

    assert model.rowCount() == 0
    old.update_row(old.row_at(0), "1", 1)  # no listener left on the model


def test_persistent_index_follows_row_through_sort(qcore_app):
    table = _table()
    model = ReleaseTableModel(table)
    selected = QPersistentModelIndex(model.index(0, 1))  # row "B"

    model.sort(0)

    assert selected.row() == 1
    assert model.data(model.index(selected.row(), 0)) == "B"

    model.sort(0)
    assert selected.row() == 0
