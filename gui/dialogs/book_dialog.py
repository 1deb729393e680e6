"""Add Book dialog."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import QWidget

from .form_dialog import FormDialog


class BookDialog(FormDialog):
    """Book form: title, description, stock, price and currency code."""

    def __init__(
        self,
        parent: QWidget | None,
        *,
        on_confirm: Callable[[], None],
        on_cancel: Callable[[], None],
    ) -> None:
        super().__init__(
            parent,
            title="Add Book",
            banner="The book is added to the selected author.",
            confirm_label="Create",
            on_confirm=on_confirm,
            on_cancel=on_cancel,
        )
        self.add_line("title", "Title", "Required")
        self.add_text("descr", "Description")
        self.add_line("stock", "Stock", "Whole number, 0 or more")
        self.add_line("price", "Price", "e.g. 12.50")
        currency = self.add_line("currency", "Currency", "3-letter code, e.g. EUR")
        currency.setMaxLength(3)
