from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error

class AppState(QObject):
    notification = Signal(object)     # emits Notify
    status_changed = Signal(str)      # pipeline status text
    view_changed = Signal(object)     # master id (int) or None
    table_replaced = Signal(object)   # fresh TableViewModel of a new run
    enrich_progress = Signal(int, int)  # enriched, total

    def __init__(self):
        super().__init__()
        self.settings = None
        self.client = None
        self.controller = None
        self.current_master_id: int | None = None
        self.queued_notifications: list[Notify] = []

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))

    def show_master(self, master_id: int | None):
        self.current_master_id = master_id
        self.view_changed.emit(master_id)
