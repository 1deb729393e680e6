"""
Booklist controllers.

Two peer controllers expose the same no-argument handlers to a view:

- `BookListController` deletes Authors softly (sets `is_deleted`) and hides
  soft-deleted Authors from the master list.
- `SimpleBookListController` deletes Authors permanently.

Notes
-----
Precondition failures (selection, busy dialog, missing edit target) are shown
as toasts and abort the handler before any remote call. Remote failures are
handled inside the CrudOrchestrator.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, ClassVar

from ..data_models import Filter, FilterOperator
from ..errors import DialogError, PreconditionError
from ..store.api import CatalogService, ListBinding
from ..store.errors import StaleContextError
from .crud import CrudOrchestrator, DeletePolicy, Outcome
from .dialogs import DialogRegistry, EditSession
from .ports import DialogKind, DialogLoader, ListView, Notifier
from .selection import SelectionTracker
from .sync import ListSynchronizer

logger = logging.getLogger(__name__)

DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this author?"
NO_AUTHOR_FOR_BOOK_MESSAGE = "Please select an author before adding a book."


class BookListController:
    """
    Master-detail controller for Authors and their Books (soft delete).

    Parameters
    ----------
    service:
        Data service.
    author_list:
        Master list view.
    book_table:
        Detail table view.
    dialog_loader:
        Materializes dialogs on first use.
    notifier:
        Toasts, error boxes and confirmation.
    """

    delete_policy: ClassVar[DeletePolicy] = DeletePolicy.SOFT

    def __init__(
        self,
        service: CatalogService,
        author_list: ListView,
        book_table: ListView,
        dialog_loader: DialogLoader,
        notifier: Notifier,
    ) -> None:
        self._author_list = author_list
        self._notifier = notifier
        self.selection = SelectionTracker()
        self.dialogs = DialogRegistry(dialog_loader)
        self.sync = ListSynchronizer(
            service, author_list, book_table, author_filters=self.author_filters()
        )
        self.crud = CrudOrchestrator(service, self.dialogs, self.sync, notifier)

    @classmethod
    def author_filters(cls) -> tuple[Filter, ...]:
        return (Filter("is_deleted", FilterOperator.NE, True),)

    async def on_init(self) -> ListBinding:
        """Bind and load the Author list."""
        return await self.sync.bind_authors()

    # ---------- Author dialogs ----------
    async def on_add_author(self) -> None:
        try:
            await self.dialogs.open(DialogKind.ADD_AUTHOR)
        except DialogError as exc:
            self._notifier.toast(str(exc))

    async def on_edit_author(self) -> None:
        """Open the Edit dialog prefilled from the single selected Author."""
        try:
            context = self.selection.require_single(self._author_list.selected_contexts(), "edit")
            await self.dialogs.open(DialogKind.EDIT_AUTHOR, edit=EditSession.from_context(context))
        except (PreconditionError, DialogError, StaleContextError) as exc:
            self._notifier.toast(str(exc))

    def on_dialog_cancel(self) -> None:
        """Close any open dialog; a dialog already being confirmed is left to finish."""
        self.dialogs.cancel()

    async def on_add_author_confirm(self) -> Outcome:
        outcome = await self._confirm(self.crud.create_author)
        await self._reconcile_selection()
        return outcome

    async def on_edit_author_confirm(self) -> Outcome:
        outcome = await self._confirm(self.crud.update_author)
        await self._reconcile_selection()
        return outcome

    # ---------- Delete ----------
    async def on_delete_author(self) -> Outcome:
        """
        Delete the single selected Author after an OK/Cancel confirmation.

        Returns
        -------
        Outcome
            REJECTED if the selection was invalid or the user cancelled.
        """
        try:
            context = self.selection.require_single(
                self._author_list.selected_contexts(), "delete"
            )
        except PreconditionError as exc:
            self._notifier.toast(str(exc))
            return Outcome.REJECTED

        if not await self._notifier.confirm(DELETE_CONFIRM_MESSAGE):
            return Outcome.REJECTED

        outcome = await self.crud.delete_author(context, self.delete_policy)
        await self._reconcile_selection()
        return outcome

    # ---------- Selection ----------
    async def on_author_select(self) -> None:
        """Record the selected Author and bind its Books; release them on deselect."""
        item = self._author_list.selected_context()
        if item is None:
            self.selection.clear()
            await self.sync.bind_books(None)
            return

        self.selection.select_author(item.key, item)
        await self.sync.bind_books(item.key)

    # ---------- Books ----------
    async def on_add_book(self) -> None:
        author_id = self.selection.current_author()
        if author_id is None:
            self._notifier.toast(NO_AUTHOR_FOR_BOOK_MESSAGE)
            return
        try:
            self.selection.require_single(self._author_list.selected_contexts(), "add a book to")
            await self.dialogs.open(DialogKind.ADD_BOOK, author_id=author_id)
        except (PreconditionError, DialogError) as exc:
            self._notifier.toast(str(exc))

    async def on_add_book_confirm(self) -> Outcome:
        return await self._confirm(self.crud.create_book)

    # ---------- Helpers ----------
    async def _confirm(self, operation: Callable[[], Awaitable[Outcome]]) -> Outcome:
        try:
            return await operation()
        except DialogError as exc:
            self._notifier.toast(str(exc))
            return Outcome.REJECTED

    async def _reconcile_selection(self) -> None:
        """Drop the selection if the refreshed Author list no longer holds it."""
        author_id = self.selection.current_author()
        if author_id is None:
            return
        binding = self._author_list.binding()
        if binding is None:
            return
        if any(ctx.key == author_id for ctx in binding.contexts()):
            return

        logger.info("Selected author %s left the list; releasing books", author_id)
        self.selection.clear()
        await self.sync.bind_books(None)


class SimpleBookListController(BookListController):
    """Master-detail controller that deletes Authors permanently."""

    delete_policy: ClassVar[DeletePolicy] = DeletePolicy.HARD

    @classmethod
    def author_filters(cls) -> tuple[Filter, ...]:
        return ()


def controller_for(delete_mode: str) -> type[BookListController]:
    """Return the controller class for a configured delete mode."""
    policy = DeletePolicy(delete_mode)
    return BookListController if policy is DeletePolicy.SOFT else SimpleBookListController
