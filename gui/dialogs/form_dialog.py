"""
Form dialog base (UI only).

Purpose
-------
- Provide the shared layout for the Author and Book dialogs: a banner, a
  form of named fields and a Confirm/Cancel button row.
- Route Cancel, Esc and the window close button to one cancel callback so the
  controller owns every teardown.

Notes
-----
A FormDialog never closes itself. The controller tears it down through
`QtDialogHandle`, which is the object handed to the dialog registry.
"""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QVBoxLayout,
    QWidget,
)

from catalog_engine.controller.ports import Dialog


class FormDialog(QDialog):
    """
    Modal form with named text fields.

    Parameters
    ----------
    parent:
        Owning widget.
    title:
        Window title text.
    banner:
        Short explanatory text shown above the form.
    confirm_label:
        Text of the accept button.
    on_confirm:
        Called when the accept button is clicked.
    on_cancel:
        Called on Cancel, Esc or window close.
    """

    def __init__(
        self,
        parent: QWidget | None,
        *,
        title: str,
        banner: str,
        confirm_label: str,
        on_confirm: Callable[[], None],
        on_cancel: Callable[[], None],
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.resize(480, 320)

        self._on_confirm = on_confirm
        self._on_cancel = on_cancel
        self._released = False
        self._fields: dict[str, QLineEdit | QPlainTextEdit] = {}

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(10)

        label = QLabel(banner)
        label.setWordWrap(True)
        label.setStyleSheet(
            "background:#2b2b2b; border:1px solid #555; color:#ddd; padding:6px; font-size:12px;"
        )
        root.addWidget(label)

        self._form = QFormLayout()
        root.addLayout(self._form, 1)

        self.buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Cancel)
        self.btn_confirm = self.buttons.addButton(
            confirm_label, QDialogButtonBox.ButtonRole.AcceptRole
        )
        self.buttons.rejected.connect(self.reject)
        self.btn_confirm.clicked.connect(self._confirm_clicked)
        root.addWidget(self.buttons)

    def add_line(self, name: str, label: str, placeholder: str = "") -> QLineEdit:
        edit = QLineEdit()
        edit.setPlaceholderText(placeholder)
        self._form.addRow(label, edit)
        self._fields[name] = edit
        return edit

    def add_text(self, name: str, label: str, placeholder: str = "") -> QPlainTextEdit:
        edit = QPlainTextEdit()
        edit.setPlaceholderText(placeholder)
        edit.setTabChangesFocus(True)
        self._form.addRow(label, edit)
        self._fields[name] = edit
        return edit

    def value(self, name: str) -> str:
        widget = self._fields[name]
        if isinstance(widget, QPlainTextEdit):
            return widget.toPlainText()
        return widget.text()

    def set_value(self, name: str, value: str) -> None:
        widget = self._fields[name]
        if isinstance(widget, QPlainTextEdit):
            widget.setPlainText(value)
        else:
            widget.setText(value)

    def release(self) -> None:
        """Close for real; only called by the controller's teardown."""
        self._released = True
        self.done(QDialog.DialogCode.Rejected)

    def reject(self) -> None:  # type: ignore[override]
        if self._released:
            super().reject()
            return
        self._on_cancel()

    def _confirm_clicked(self) -> None:
        # One confirmation per dialog session.
        self.btn_confirm.setEnabled(False)
        self._on_confirm()


class QtDialogHandle(Dialog):
    """Dialog port over a FormDialog."""

    def __init__(self, widget: FormDialog) -> None:
        self._widget = widget

    def open(self) -> None:
        self._widget.open()

    def close(self) -> None:
        self._widget.release()

    def destroy(self) -> None:
        self._widget.deleteLater()

    def value(self, field: str) -> str:
        return self._widget.value(field)

    def set_value(self, field: str, value: str) -> None:
        self._widget.set_value(field, value)
