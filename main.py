import logging
import os
import sys
from pathlib import Path

from PySide6 import QtAsyncio
from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import Settings
from core.discogs_client import DiscogsClient
from core.pipeline import PipelineController
from core.state import AppState, Notify
from core.utils import parse_master_id
from ui.main_window import MainWindow

logger = logging.getLogger("discogs_versions")

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(getattr(logging, level, logging.INFO))

def load_settings() -> tuple[Settings, Notify | None]:
    try:
        return Settings.from_env(), None
    except ValueError as e:
        return Settings(), Notify(message=f"Invalid configuration, using defaults: {e}", notify_type="warn")

def init_app_state(settings: Settings) -> AppState:
    app_state = AppState()
    app_state.settings = settings
    app_state.client = DiscogsClient(
        base_url=settings.api_base,
        user_agent=settings.user_agent,
        timeout=settings.timeout_s,
    )
    app_state.controller = PipelineController.from_settings(app_state.client, settings)
    app_state.controller.bind(app_state)

    if os.getenv("DISCOGS_DEBUG_SETTINGS") == "1":
        logger.info("Settings: %s", settings)

    return app_state

def bootstrap() -> AppState:
    # logging first, so startup messages are not dropped
    settings, problem = load_settings()
    configure_logging(settings.log_level)

    app_state = init_app_state(settings)
    if problem is not None:
        app_state.queued_notifications.append(problem)
    return app_state

def main() -> int:
    qt_app = QApplication(sys.argv)
    app_state = bootstrap()

    main_window = MainWindow(app_state)
    main_window.show()

    # optional master URL/id on the command line
    master_id = parse_master_id(sys.argv[1]) if len(sys.argv) > 1 else None
    if master_id is not None:
        main_window.url_box.setText(sys.argv[1])
        QTimer.singleShot(0, lambda: app_state.show_master(master_id))

    try:
        QtAsyncio.run(keep_running=True, quit_qapp=True, handle_sigint=True)
    finally:
        app_state.client.close()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
