"""Qt implementations of the ListView port.

A view renders whatever its current binding holds after each refresh.
Refreshes of a binding that has since been replaced are ignored.
"""

from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QListWidget, QListWidgetItem, QTableWidget, QTableWidgetItem

from catalog_engine.controller.ports import ListView
from catalog_engine.store.api import EntityContext, ListBinding

_CONTEXT_ROLE = Qt.ItemDataRole.UserRole


class QtAuthorList(ListView):
    """Author master list over a single-selection QListWidget."""

    def __init__(self, widget: QListWidget) -> None:
        self._widget = widget
        self._binding: ListBinding | None = None

    def selected_contexts(self) -> Sequence[EntityContext]:
        return [item.data(_CONTEXT_ROLE) for item in self._widget.selectedItems()]

    def selected_context(self) -> EntityContext | None:
        items = self._widget.selectedItems()
        return items[0].data(_CONTEXT_ROLE) if items else None

    def binding(self) -> ListBinding | None:
        return self._binding

    def bind_items(self, binding: ListBinding) -> None:
        self._binding = binding
        binding.add_listener(self._on_refreshed)
        self._render(binding)

    def unbind_items(self) -> None:
        self._binding = None
        self._widget.clear()

    def _on_refreshed(self, binding: ListBinding) -> None:
        if binding is self._binding:
            self._render(binding)

    def _render(self, binding: ListBinding) -> None:
        # Keep the selected row selected across refreshes without re-emitting
        # selection signals.
        previous = {ctx.key for ctx in self.selected_contexts()}
        self._widget.blockSignals(True)
        try:
            self._widget.clear()
            for ctx in binding.contexts():
                item = QListWidgetItem(str(ctx.get_property("name")))
                item.setData(_CONTEXT_ROLE, ctx)
                item.setToolTip(str(ctx.get_property("bio") or ""))
                self._widget.addItem(item)
                if ctx.key in previous:
                    item.setSelected(True)
        finally:
            self._widget.blockSignals(False)


class QtBookTable(ListView):
    """Book detail table: title, description, stock, price with currency."""

    HEADERS = ("Title", "Description", "Stock", "Price")

    def __init__(self, widget: QTableWidget) -> None:
        self._widget = widget
        self._binding: ListBinding | None = None
        self._widget.setColumnCount(len(self.HEADERS))
        self._widget.setHorizontalHeaderLabels(list(self.HEADERS))

    def selected_contexts(self) -> Sequence[EntityContext]:
        rows = sorted({index.row() for index in self._widget.selectedIndexes()})
        return [self._widget.item(r, 0).data(_CONTEXT_ROLE) for r in rows]

    def selected_context(self) -> EntityContext | None:
        contexts = self.selected_contexts()
        return contexts[0] if contexts else None

    def binding(self) -> ListBinding | None:
        return self._binding

    def bind_items(self, binding: ListBinding) -> None:
        self._binding = binding
        binding.add_listener(self._on_refreshed)
        self._render(binding)

    def unbind_items(self) -> None:
        self._binding = None
        self._widget.setRowCount(0)

    def _on_refreshed(self, binding: ListBinding) -> None:
        if binding is self._binding:
            self._render(binding)

    def _render(self, binding: ListBinding) -> None:
        contexts = binding.contexts()
        self._widget.setRowCount(len(contexts))
        for row, ctx in enumerate(contexts):
            data = ctx.get_object()
            cells = (
                str(data["title"]),
                str(data["descr"]),
                str(data["stock"]),
                f"{data['price']} {data['currency_code']}",
            )
            for col, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsEditable)
                if col >= 2:
                    item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                self._widget.setItem(row, col, item)
            self._widget.item(row, 0).setData(_CONTEXT_ROLE, ctx)
