"""Qt implementation of the Notifier port."""

from __future__ import annotations

import asyncio
from typing import Final

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QLabel, QMessageBox, QWidget

from catalog_engine.controller.ports import Notifier

TOAST_MS: Final[int] = 3000


class QtNotifier(Notifier):
    """
    Notices for a booklist view.

    Notes
    -----
    - Toasts are shown in a status label and cleared after TOAST_MS.
    - Error and confirmation boxes are window-modal and opened without a
      nested event loop, so pending handlers keep running.
    """

    def __init__(self, parent: QWidget, status: QLabel) -> None:
        self._parent = parent
        self._status = status

    def toast(self, message: str) -> None:
        self._status.setText(message)
        QTimer.singleShot(TOAST_MS, lambda: self._clear_if(message))

    def _clear_if(self, message: str) -> None:
        if self._status.text() == message:
            self._status.setText("")

    def error(self, message: str) -> None:
        box = QMessageBox(
            QMessageBox.Icon.Critical,
            "Error",
            message,
            QMessageBox.StandardButton.Ok,
            self._parent,
        )
        box.finished.connect(box.deleteLater)
        box.open()

    async def confirm(self, message: str) -> bool:
        box = QMessageBox(
            QMessageBox.Icon.Question,
            "Confirm",
            message,
            QMessageBox.StandardButton.Ok | QMessageBox.StandardButton.Cancel,
            self._parent,
        )
        box.setEscapeButton(QMessageBox.StandardButton.Cancel)
        answer: asyncio.Future[bool] = asyncio.get_running_loop().create_future()

        def _on_finished(_result: int) -> None:
            if not answer.done():
                clicked = box.standardButton(box.clickedButton())
                answer.set_result(clicked == QMessageBox.StandardButton.Ok)

        box.finished.connect(_on_finished)
        box.open()
        try:
            return await answer
        finally:
            box.deleteLater()
