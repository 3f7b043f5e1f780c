from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLineEdit, QHBoxLayout, QTableView,
    QPushButton, QToolButton, QStyle, QHeaderView, QAbstractItemView, QProgressBar,
)
from PySide6.QtCore import QUrl, QModelIndex
from PySide6.QtGui import QDesktopServices

from core.utils import parse_master_id
from ui.models.release_table_model import ReleaseTableModel

HEADER_TEXT = "Master Versions – Track Counts"


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("Discogs Versions")
        self.resize(900, 600)
        self.app_state = app_state
        self.controller = app_state.controller

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        # --- Top controls (master url + actions) ---
        top_bar = QHBoxLayout()

        self.url_box = QLineEdit()
        self.url_box.setPlaceholderText("Discogs master URL or id, e.g. https://www.discogs.com/master/12345")
        self.url_box.returnPressed.connect(self._on_load_clicked)
        top_bar.addWidget(self.url_box, stretch=1)

        self.btn_load = QPushButton("Load")
        self.btn_load.clicked.connect(self._on_load_clicked)
        top_bar.addWidget(self.btn_load)

        self.btn_refresh = QToolButton()
        self.btn_refresh.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_BrowserReload))
        self.btn_refresh.setToolTip("Reload versions")
        self.btn_refresh.clicked.connect(self._on_refresh_clicked)
        top_bar.addWidget(self.btn_refresh)

        self.btn_close = QToolButton()
        self.btn_close.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_DialogCloseButton))
        self.btn_close.setToolTip("Close table")
        self.btn_close.clicked.connect(self._on_close_clicked)
        top_bar.addWidget(self.btn_close)

        self.layout.addLayout(top_bar)

        # --- Overlay: collapsible header, search, table ---
        self.overlay = QWidget()
        self.overlay.setObjectName("VersionsOverlay")
        overlay_layout = QVBoxLayout(self.overlay)
        overlay_layout.setContentsMargins(10, 10, 10, 10)

        self.btn_header = QPushButton(f"{HEADER_TEXT} (click to collapse)")
        self.btn_header.setObjectName("OverlayHeader")
        self.btn_header.setFlat(True)
        self.btn_header.clicked.connect(self._toggle_collapsed)
        overlay_layout.addWidget(self.btn_header)

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Filter by title, country, year...")
        self.search_box.textChanged.connect(self._on_search_changed)
        overlay_layout.addWidget(self.search_box)

        self.model = ReleaseTableModel()
        self.table_view = QTableView()
        self.table_view.setModel(self.model)
        self.table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table_view.verticalHeader().setVisible(False)
        header = self.table_view.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        header.setSectionsClickable(True)
        header.sectionClicked.connect(self._on_header_clicked)
        self.table_view.doubleClicked.connect(self._open_release)
        overlay_layout.addWidget(self.table_view, stretch=1)

        self.layout.addWidget(self.overlay, stretch=1)
        self.overlay.setVisible(False)

        # --- Enrichment progress ---
        self.progress_bar = QProgressBar()
        self.progress_bar.setTextVisible(True)
        self.progress_bar.setVisible(False)
        self.statusBar().addPermanentWidget(self.progress_bar)

        # --- Model -> row visibility ---
        self.model.modelReset.connect(self._apply_row_visibility)
        self.model.layoutChanged.connect(self._apply_row_visibility)
        self.model.dataChanged.connect(self._on_rows_changed)

        # --- App state signals ---
        self.app_state.table_replaced.connect(self._on_table_replaced)
        self.app_state.enrich_progress.connect(self._on_progress)
        self.app_state.status_changed.connect(self._on_status_changed)
        self.app_state.notification.connect(self._on_notify)

        self.setStyleSheet(self.styleSheet() + """
            QWidget#VersionsOverlay {
                background: #ffffff;
                border: 1px solid #cccccc;
            }
            QPushButton#OverlayHeader {
                font-weight: bold;
                text-align: left;
            }
            """)

        self.show_queued_notifications()

    # ------------------ master selection ------------------
    def _on_load_clicked(self):
        master_id = parse_master_id(self.url_box.text())
        if master_id is None:
            self.app_state.notify("Not a Discogs master URL or id.", "warn")
            return
        self.app_state.show_master(master_id)

    def _on_refresh_clicked(self):
        if self.controller is not None:
            self.controller.refresh()

    def _on_close_clicked(self):
        if self.controller is not None:
            self.controller.discard_table()
        self.model.set_table(None)
        self.overlay.setVisible(False)
        self.progress_bar.setVisible(False)

    def _on_table_replaced(self, table):
        self.model.set_table(table)
        if self.search_box.text():
            table.filter(self.search_box.text())
        self.overlay.setVisible(True)
        self.progress_bar.setValue(0)

    # ------------------ table ------------------
    def _toggle_collapsed(self):
        collapsed = self.table_view.isVisible()
        self.table_view.setVisible(not collapsed)
        self.search_box.setVisible(not collapsed)
        suffix = "click to expand" if collapsed else "click to collapse"
        self.btn_header.setText(f"{HEADER_TEXT} ({suffix})")

    def _on_header_clicked(self, column: int):
        self.model.sort(column)

    def _on_search_changed(self, text: str):
        if self.model.table is not None:
            self.model.table.filter(text)

    def _apply_row_visibility(self):
        if self.model.is_error():
            self.table_view.setRowHidden(0, False)
            self.table_view.setSpan(0, 0, 1, self.model.columnCount())
            return
        self.table_view.clearSpans()
        for i in range(self.model.rowCount()):
            self.table_view.setRowHidden(i, self.model.is_row_hidden(i))

    def _on_rows_changed(self, top_left: QModelIndex, bottom_right: QModelIndex, roles=None):
        for i in range(top_left.row(), bottom_right.row() + 1):
            self.table_view.setRowHidden(i, self.model.is_row_hidden(i))

    def _open_release(self, index: QModelIndex):
        url = self.model.release_url_at(index.row())
        if url:
            QDesktopServices.openUrl(QUrl(url))

    # ------------------ progress + notifications ------------------
    def _on_progress(self, done: int, total: int):
        total = max(int(total), 0)
        if total <= 0:
            self.progress_bar.setVisible(False)
            return
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, total)
        self.progress_bar.setValue(done)
        self.progress_bar.setFormat(f"{done}/{total}")

    def _on_status_changed(self, status: str):
        if status == "running":
            self.statusBar().showMessage("Loading versions…")
        elif status == "idle":
            if not self.model.is_error():
                self.statusBar().showMessage("Done.", 4000)
            self.progress_bar.setVisible(False)

    def _on_notify(self, n):
        # n is core.state.Notify
        kind = (getattr(n, "notify_type", "info") or "info").lower()
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        prefix = "" if kind in ("info", "success") else f"[{kind}] "
        self.statusBar().showMessage(prefix + msg, 5000)

    def show_queued_notifications(self):
        for n in getattr(self.app_state, "queued_notifications", []):
            self._on_notify(n)
        if hasattr(self.app_state, "queued_notifications"):
            self.app_state.queued_notifications.clear()
