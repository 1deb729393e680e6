"""
UI-facing ports used by the booklist controllers.

The controllers never touch widgets. A view supplies objects satisfying these
protocols; `gui.adapters` provides the PySide6 implementations and the tests
provide plain fakes.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, Sequence

from ..store.api import EntityContext, ListBinding


class DialogKind(str, Enum):
    """The three dialogs a booklist view can show."""

    ADD_AUTHOR = "add_author"
    EDIT_AUTHOR = "edit_author"
    ADD_BOOK = "add_book"


class ListView(Protocol):
    """A list or table control that can be bound to a ListBinding."""

    def selected_contexts(self) -> Sequence[EntityContext]:
        """Return contexts of every row currently marked selected."""
        raise NotImplementedError

    def selected_context(self) -> EntityContext | None:
        """Return the context of the single selected item, if any."""
        raise NotImplementedError

    def binding(self) -> ListBinding | None:
        """Return the active binding, or None when unbound."""
        raise NotImplementedError

    def bind_items(self, binding: ListBinding) -> None:
        """Replace the active binding."""
        raise NotImplementedError

    def unbind_items(self) -> None:
        """Drop the active binding and clear all rows."""
        raise NotImplementedError


class Dialog(Protocol):
    """A modal form with named text fields."""

    def open(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def destroy(self) -> None:
        """Release the dialog. A destroyed dialog is never reopened."""
        raise NotImplementedError

    def value(self, field: str) -> str:
        raise NotImplementedError

    def set_value(self, field: str, value: str) -> None:
        raise NotImplementedError


class DialogLoader(Protocol):
    """Factory that materializes a dialog on first use."""

    async def load(self, kind: DialogKind) -> Dialog:
        raise NotImplementedError


class Notifier(Protocol):
    """Transient notices, blocking error boxes and OK/Cancel confirmation."""

    def toast(self, message: str) -> None:
        raise NotImplementedError

    def error(self, message: str) -> None:
        raise NotImplementedError

    async def confirm(self, message: str) -> bool:
        """Return True only if the user chose OK."""
        raise NotImplementedError
