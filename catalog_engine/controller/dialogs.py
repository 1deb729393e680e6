"""
Dialog lifecycle management for a booklist view.

Purpose
-------
- Own at most one live dialog per slot (Author dialogs, Book dialog).
- Materialize dialogs lazily through a DialogLoader.
- Guarantee exactly one close-and-destroy per opened dialog.

Lifecycle per slot
------------------
UNLOADED -> LOADED (loaded, prefilled, not yet shown) -> OPEN -> teardown ->
UNLOADED. Teardown always destroys; a closed dialog is never kept for reuse,
so no form state or signal wiring survives from one session to the next.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Final, Mapping

from ..data_models import EntityKey
from ..errors import DialogBusyError, DialogNotOpenError, MissingEditContextError, SelectionError
from ..store.api import EntityContext
from .ports import Dialog, DialogKind, DialogLoader

logger = logging.getLogger(__name__)

AUTHOR_FIELDS: Final[tuple[str, ...]] = ("name", "bio")
BOOK_FIELDS: Final[tuple[str, ...]] = ("title", "descr", "stock", "price", "currency")


class DialogSlot(str, Enum):
    """Ownership slots. Add-Author and Edit-Author share one slot."""

    AUTHOR = "author"
    BOOK = "book"


class DialogState(str, Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"
    OPEN = "open"


SLOT_BY_KIND: Final[Mapping[DialogKind, DialogSlot]] = {
    DialogKind.ADD_AUTHOR: DialogSlot.AUTHOR,
    DialogKind.EDIT_AUTHOR: DialogSlot.AUTHOR,
    DialogKind.ADD_BOOK: DialogSlot.BOOK,
}


@dataclass(frozen=True, slots=True)
class EditSession:
    """
    Target of one Edit-Author dialog.

    Attributes
    ----------
    author_id:
        Key of the Author being edited.
    context:
        Entity context the update is applied to.
    snapshot:
        Field values the dialog was prefilled from.
    """

    author_id: EntityKey
    context: EntityContext
    snapshot: Mapping[str, Any]

    @staticmethod
    def from_context(context: EntityContext) -> "EditSession":
        return EditSession(author_id=context.key, context=context, snapshot=context.get_object())


@dataclass(slots=True)
class DialogSession:
    """
    One opened dialog and the explicit target its confirm handler acts on.

    Attributes
    ----------
    kind:
        Which dialog this is.
    dialog:
        The materialized dialog.
    state:
        Current lifecycle state.
    edit:
        Edit target; set only for EDIT_AUTHOR.
    author_id:
        Owning Author for ADD_BOOK.
    """

    kind: DialogKind
    dialog: Dialog
    state: DialogState = DialogState.LOADED
    edit: EditSession | None = None
    author_id: EntityKey | None = None

    @property
    def slot(self) -> DialogSlot:
        return SLOT_BY_KIND[self.kind]

    def value(self, field: str) -> str:
        return self.dialog.value(field)


class DialogRegistry:
    """
    Per-view registry of live dialogs.

    Notes
    -----
    The registry is owned by exactly one controller and never shared.
    """

    def __init__(self, loader: DialogLoader) -> None:
        self._loader = loader
        self._sessions: dict[DialogSlot, DialogSession] = {}
        self._loading: set[DialogSlot] = set()
        self._confirming: set[DialogSlot] = set()

    def state(self, slot: DialogSlot) -> DialogState:
        session = self._sessions.get(slot)
        return session.state if session is not None else DialogState.UNLOADED

    def session(self, slot: DialogSlot) -> DialogSession | None:
        return self._sessions.get(slot)

    async def open(
        self,
        kind: DialogKind,
        *,
        edit: EditSession | None = None,
        author_id: EntityKey | None = None,
    ) -> DialogSession:
        """
        Load (if needed), prefill and show a dialog.

        Parameters
        ----------
        kind:
            Dialog to open.
        edit:
            Required for EDIT_AUTHOR; its snapshot prefills every field.
        author_id:
            Required for ADD_BOOK; the Author the new Book belongs to.

        Returns
        -------
        DialogSession
            The open session.

        Raises
        ------
        MissingEditContextError
            If EDIT_AUTHOR is requested without a complete edit session.
        SelectionError
            If ADD_BOOK is requested without an Author.
        DialogBusyError
            If the slot is already loading, open or being confirmed.
        """
        if kind is DialogKind.EDIT_AUTHOR:
            if edit is None:
                raise MissingEditContextError("No author is selected for editing.")
            missing = [f for f in AUTHOR_FIELDS if f not in edit.snapshot]
            if missing:
                raise MissingEditContextError(
                    f"Cannot edit author {edit.author_id}: missing {', '.join(missing)}."
                )
        if kind is DialogKind.ADD_BOOK and author_id is None:
            raise SelectionError("Please select an author before adding a book.")

        slot = SLOT_BY_KIND[kind]
        if (
            slot in self._loading
            or slot in self._confirming
            or self.state(slot) is DialogState.OPEN
        ):
            raise DialogBusyError("Another dialog is already open.")
        if slot in self._sessions:
            self.teardown(slot)

        self._loading.add(slot)
        try:
            dialog = await self._loader.load(kind)
        finally:
            self._loading.discard(slot)

        session = DialogSession(kind=kind, dialog=dialog, edit=edit, author_id=author_id)
        self._sessions[slot] = session
        logger.debug("Loaded %s dialog", kind.value)

        try:
            if edit is not None:
                for field in AUTHOR_FIELDS:
                    value = edit.snapshot[field]
                    dialog.set_value(field, "" if value is None else str(value))
            dialog.open()
        except Exception:
            self.teardown(slot)
            raise

        session.state = DialogState.OPEN
        logger.debug("Opened %s dialog", kind.value)
        return session

    def teardown(self, slot: DialogSlot) -> bool:
        """
        Close and destroy the dialog in `slot`.

        Returns
        -------
        bool
            True if a dialog was torn down, False if the slot was already empty.
        """
        session = self._sessions.pop(slot, None)
        if session is None:
            return False
        try:
            if session.state is DialogState.OPEN:
                session.dialog.close()
        finally:
            session.dialog.destroy()
            session.state = DialogState.UNLOADED
            logger.debug("Destroyed %s dialog", session.kind.value)
        return True

    def teardown_all(self) -> int:
        """Tear down every live slot and return how many were torn down."""
        return sum(1 for slot in list(self._sessions) if self.teardown(slot))

    def cancel(self) -> int:
        """
        Tear down every slot the user can still cancel.

        Returns
        -------
        int
            Number of dialogs torn down.

        Notes
        -----
        A slot whose confirmation is awaiting the store is left alone; its
        `confirming()` block tears it down when the call returns.
        """
        torn = 0
        for slot in list(self._sessions):
            if slot in self._confirming:
                logger.debug("Ignored cancel of %s dialog while confirming", slot.value)
                continue
            torn += self.teardown(slot)
        return torn

    @asynccontextmanager
    async def confirming(
        self, slot: DialogSlot, kind: DialogKind | None = None
    ) -> AsyncIterator[DialogSession]:
        """
        Yield the open session in `slot` and tear it down on every exit path.

        Raises
        ------
        DialogNotOpenError
            If no dialog (of `kind`, when given) is open in the slot.
        DialogBusyError
            If the slot is already being confirmed.
        """
        session = self._sessions.get(slot)
        if session is None or session.state is not DialogState.OPEN:
            raise DialogNotOpenError("No dialog is open.")
        if kind is not None and session.kind is not kind:
            raise DialogNotOpenError(f"The open dialog is not {kind.value}.")
        if slot in self._confirming:
            raise DialogBusyError("This dialog is already being confirmed.")

        self._confirming.add(slot)
        try:
            yield session
        finally:
            self._confirming.discard(slot)
            if self._sessions.get(slot) is session:
                self.teardown(slot)
