"""
Booklist GUI app.

Single-window master-detail editor for Authors and their Books, backed by the
local catalog store.
"""

from __future__ import annotations

import sys
from pathlib import Path

from PySide6 import QtAsyncio
from PySide6.QtWidgets import QApplication, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from catalog_engine.controller.booklist import BookListController, controller_for
from catalog_engine.log import get_logger, setup_logging
from catalog_engine.store.api import CatalogService
from catalog_engine.store.sqlite_store import open_catalog_store
from gui.settings_store import load_gui_settings
from gui.views.booklist_view import BookListView

logger = get_logger(__name__)


class AppWindow(QWidget):
    """
    Main window for the booklist GUI.

    Responsibilities
    ----------------
    - Host the booklist view
    - Tear down open dialogs on close
    """

    def __init__(
        self,
        service: CatalogService,
        controller_cls: type[BookListController] = BookListController,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Booklist")
        self.resize(1080, 640)

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        header = QWidget()
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(8, 8, 8, 8)

        title = QLabel("Booklist")
        f = title.font()
        f.setPointSize(16)
        f.setBold(True)
        title.setFont(f)

        subtitle = QLabel("Authors and their books")
        subtitle.setStyleSheet("color: #666;")

        header_layout.addWidget(title)
        header_layout.addSpacing(10)
        header_layout.addWidget(subtitle)
        header_layout.addStretch(1)

        root.addWidget(header)

        self.view = BookListView(service, controller_cls)
        root.addWidget(self.view, 1)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """
        Handle window close by tearing down any loaded dialog.

        Parameters
        ----------
        event:
            Qt close event.
        """
        try:
            self.view.shutdown()
        finally:
            super().closeEvent(event)


def main(data_root: Path | None = None, log_level: str | None = None) -> int:
    """
    Run the booklist GUI application.

    Parameters
    ----------
    data_root:
        Optional override for the booklist data root.
    log_level:
        Optional override for the saved log level.

    Returns
    -------
    int
        Process exit code.
    """
    settings = load_gui_settings(data_root=data_root)
    setup_logging(log_level or settings.log_level)

    root = data_root if data_root is not None else settings.data_root
    service = open_catalog_store(root)
    controller_cls = controller_for(settings.delete_mode)
    logger.info("Opening %s with %s", service.db_path, controller_cls.__name__)

    app = QApplication.instance() or QApplication(sys.argv)
    w = AppWindow(service, controller_cls)
    w.show()
    QtAsyncio.run(w.view.start(), keep_running=True, handle_sigint=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
