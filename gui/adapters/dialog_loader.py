"""Qt implementation of the DialogLoader port.

Dialogs are constructed on first use. The loader only wires the dialog's
Confirm and Cancel buttons to controller handlers supplied by the view; it
never decides when a dialog closes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from PySide6.QtWidgets import QWidget

from catalog_engine.controller.ports import Dialog, DialogKind, DialogLoader
from gui.dialogs.author_dialog import AuthorDialog
from gui.dialogs.book_dialog import BookDialog
from gui.dialogs.form_dialog import FormDialog, QtDialogHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DialogHandlers:
    """Callbacks a view attaches to its dialogs."""

    confirm: dict[DialogKind, Callable[[], None]]
    cancel: Callable[[], None]


class QtDialogLoader(DialogLoader):
    """
    Build FormDialogs parented to a view.

    Parameters
    ----------
    parent:
        Widget that owns every dialog created by this loader.
    handlers:
        Confirm callbacks per dialog kind and the shared cancel callback.
    """

    def __init__(self, parent: QWidget, handlers: DialogHandlers) -> None:
        self._parent = parent
        self._handlers = handlers

    async def load(self, kind: DialogKind) -> Dialog:
        on_confirm = self._handlers.confirm[kind]
        on_cancel = self._handlers.cancel
        widget: FormDialog
        if kind is DialogKind.ADD_BOOK:
            widget = BookDialog(self._parent, on_confirm=on_confirm, on_cancel=on_cancel)
        else:
            widget = AuthorDialog(
                self._parent,
                editing=kind is DialogKind.EDIT_AUTHOR,
                on_confirm=on_confirm,
                on_cancel=on_cancel,
            )
        logger.debug("Loaded %s dialog", kind.value)
        return QtDialogHandle(widget)
