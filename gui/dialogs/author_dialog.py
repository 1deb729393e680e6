"""Author Add/Edit dialog."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import QWidget

from .form_dialog import FormDialog


class AuthorDialog(FormDialog):
    """
    Author form with `name` and `bio` fields.

    Parameters
    ----------
    parent:
        Owning widget.
    editing:
        True for the Edit variant, False for Add.
    on_confirm:
        Called when Create/Save is clicked.
    on_cancel:
        Called on Cancel, Esc or window close.
    """

    def __init__(
        self,
        parent: QWidget | None,
        *,
        editing: bool,
        on_confirm: Callable[[], None],
        on_cancel: Callable[[], None],
    ) -> None:
        super().__init__(
            parent,
            title="Edit Author" if editing else "Add Author",
            banner=(
                "Changes are saved to the selected author when you click Save."
                if editing
                else "Enter the new author's details."
            ),
            confirm_label="Save" if editing else "Create",
            on_confirm=on_confirm,
            on_cancel=on_cancel,
        )
        self.add_line("name", "Name", "Required")
        self.add_text("bio", "Biography")
