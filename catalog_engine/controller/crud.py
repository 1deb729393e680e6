"""
CRUD orchestration for the booklist controllers.

Every operation follows the same shape:

1. normalize the dialog's raw field values into a payload,
2. issue one data service call and await its acknowledgment,
3. show exactly one success toast or one error box,
4. tear down the dialog and refresh the affected list.

Notes
-----
- Validation failures are reported before any remote call; the dialog is
  still torn down but no list is refreshed.
- Remote failures are followed by a refresh anyway, so the view reconciles
  with whatever the backend actually holds.
- Nothing is retried.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncIterator, Awaitable, Callable, Final, Mapping

from ..data_models import AUTHORS_PATH, BOOKS_PATH
from ..errors import OperationInFlightError, PayloadValidationError
from ..payloads import author_payload, book_payload
from ..store.api import CatalogService, EntityContext
from .dialogs import DialogRegistry, DialogSlot
from .ports import DialogKind, Notifier
from .sync import ListSynchronizer

logger = logging.getLogger(__name__)

DELETE_SUCCESS_MESSAGE: Final[str] = "Author deleted successfully."

_ENTITY_LABELS: Final[Mapping[str, str]] = {AUTHORS_PATH: "author", BOOKS_PATH: "book"}


class Outcome(str, Enum):
    """Result of one orchestrated operation."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REJECTED = "rejected"


class DeletePolicy(str, Enum):
    """How an Author is deleted."""

    SOFT = "soft"
    HARD = "hard"


class InFlightGuard:
    """Allows at most one unacknowledged operation per entity set."""

    def __init__(self) -> None:
        self._busy: set[str] = set()

    def is_busy(self, entity_path: str) -> bool:
        return entity_path in self._busy

    @asynccontextmanager
    async def claim(self, entity_path: str) -> AsyncIterator[None]:
        if entity_path in self._busy:
            label = _ENTITY_LABELS.get(entity_path, entity_path)
            raise OperationInFlightError(f"Another {label} change is still in progress.")
        self._busy.add(entity_path)
        try:
            yield
        finally:
            self._busy.discard(entity_path)


async def soft_delete(context: EntityContext) -> None:
    """Flag the row as deleted; it stays retrievable for history."""
    await context.set_property("is_deleted", True)


async def hard_delete(context: EntityContext) -> None:
    """Remove the row permanently."""
    await context.delete()


_DELETERS: Final[Mapping[DeletePolicy, Callable[[EntityContext], Awaitable[None]]]] = {
    DeletePolicy.SOFT: soft_delete,
    DeletePolicy.HARD: hard_delete,
}


class CrudOrchestrator:
    """
    Turns confirmed dialog input into data service calls.

    Parameters
    ----------
    service:
        Data service receiving creates.
    dialogs:
        Registry owning the dialogs to read from and tear down.
    sync:
        Synchronizer refreshed after each remote call.
    notifier:
        Success toasts and error boxes.
    guard:
        In-flight guard; a fresh one is created when omitted.
    """

    def __init__(
        self,
        service: CatalogService,
        dialogs: DialogRegistry,
        sync: ListSynchronizer,
        notifier: Notifier,
        guard: InFlightGuard | None = None,
    ) -> None:
        self._service = service
        self._dialogs = dialogs
        self._sync = sync
        self._notifier = notifier
        self._guard = guard or InFlightGuard()

    @property
    def guard(self) -> InFlightGuard:
        return self._guard

    async def create_author(self) -> Outcome:
        async with self._dialogs.confirming(DialogSlot.AUTHOR, DialogKind.ADD_AUTHOR) as session:
            try:
                payload = author_payload(session.value("name"), session.value("bio"))
            except PayloadValidationError as exc:
                self._notifier.error(str(exc))
                return Outcome.REJECTED

            async def _create() -> None:
                await self._service.create(AUTHORS_PATH, payload)

            outcome = await self._run(AUTHORS_PATH, _create, "Author created")

        if outcome is not Outcome.REJECTED:
            await self._sync.refresh_authors()
        return outcome

    async def update_author(self) -> Outcome:
        """Apply the Edit dialog's values to the session's Author, field by field."""
        async with self._dialogs.confirming(DialogSlot.AUTHOR, DialogKind.EDIT_AUTHOR) as session:
            edit = session.edit
            assert edit is not None
            try:
                payload = author_payload(session.value("name"), session.value("bio"))
            except PayloadValidationError as exc:
                self._notifier.error(str(exc))
                return Outcome.REJECTED

            async def _update() -> None:
                for name, value in payload.items():
                    await edit.context.set_property(name, value)

            outcome = await self._run(AUTHORS_PATH, _update, "Author updated")

        if outcome is not Outcome.REJECTED:
            await self._sync.refresh_authors()
        return outcome

    async def delete_author(self, context: EntityContext, policy: DeletePolicy) -> Outcome:
        """
        Delete the Author behind `context` according to `policy`.

        Notes
        -----
        Both policies report the same success wording.
        """
        deleter = _DELETERS[policy]

        async def _delete() -> None:
            await deleter(context)

        outcome = await self._run(AUTHORS_PATH, _delete, DELETE_SUCCESS_MESSAGE)
        if outcome is not Outcome.REJECTED:
            await self._sync.refresh_authors()
        return outcome

    async def create_book(self) -> Outcome:
        async with self._dialogs.confirming(DialogSlot.BOOK, DialogKind.ADD_BOOK) as session:
            author_id = session.author_id
            assert author_id is not None
            try:
                payload = book_payload(
                    author_id=author_id,
                    title=session.value("title"),
                    descr=session.value("descr"),
                    stock=session.value("stock"),
                    price=session.value("price"),
                    currency=session.value("currency"),
                )
            except PayloadValidationError as exc:
                self._notifier.error(str(exc))
                return Outcome.REJECTED

            async def _create() -> None:
                await self._service.create(BOOKS_PATH, payload)

            outcome = await self._run(BOOKS_PATH, _create, "Book created")

        if outcome is not Outcome.REJECTED:
            await self._sync.refresh_books()
        return outcome

    async def _run(
        self,
        entity_path: str,
        call: Callable[[], Awaitable[None]],
        success_message: str,
    ) -> Outcome:
        try:
            async with self._guard.claim(entity_path):
                await call()
        except OperationInFlightError as exc:
            self._notifier.toast(str(exc))
            return Outcome.REJECTED
        except Exception as exc:
            logger.warning("%s operation failed: %s", entity_path, exc)
            self._notifier.error(str(exc))
            return Outcome.FAILED

        logger.info("%s operation succeeded: %s", entity_path, success_message)
        self._notifier.toast(success_message)
        return Outcome.SUCCEEDED
