from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from catalog_engine.controller.booklist import (
    DELETE_CONFIRM_MESSAGE,
    BookListController,
    SimpleBookListController,
    controller_for,
)
from catalog_engine.controller.crud import DELETE_SUCCESS_MESSAGE, Outcome
from catalog_engine.data_models import AUTHORS_PATH
from catalog_engine.store.errors import UnknownEntityError
from ui_fakes import make_harness


@pytest.mark.parametrize("controller_cls", [BookListController, SimpleBookListController])
def test_delete_requires_exactly_one_selected_author(
    tmp_path: Path, controller_cls: type[BookListController]
) -> None:
    h = make_harness(tmp_path, controller_cls)

    async def scenario() -> list[Outcome]:
        await h.service.create(AUTHORS_PATH, {"name": "A", "bio": ""})
        await h.service.create(AUTHORS_PATH, {"name": "B", "bio": ""})
        await h.controller.on_init()
        none = await h.controller.on_delete_author()
        h.authors.select(*h.authors.keys())
        both = await h.controller.on_delete_author()
        return [none, both]

    assert asyncio.run(scenario()) == [Outcome.REJECTED, Outcome.REJECTED]
    assert h.notifier.toasts == ["Please select exactly one author to delete."] * 2
    assert h.notifier.confirms == []
    assert len(h.authors.keys()) == 2


def test_cancelled_confirmation_is_a_no_op(tmp_path: Path) -> None:
    h = make_harness(tmp_path)
    h.notifier.answer = False

    async def scenario() -> Outcome:
        created = await h.service.create(AUTHORS_PATH, {"name": "A", "bio": ""})
        await h.controller.on_init()
        h.authors.select(created["id"])
        return await h.controller.on_delete_author()

    assert asyncio.run(scenario()) is Outcome.REJECTED
    assert h.notifier.confirms == [DELETE_CONFIRM_MESSAGE]
    assert h.notifier.toasts == []
    assert len(h.authors.keys()) == 1


def test_soft_delete_flags_row_and_hides_it(tmp_path: Path) -> None:
    h = make_harness(tmp_path, BookListController)

    async def scenario() -> str:
        created = await h.service.create(AUTHORS_PATH, {"name": "X", "bio": ""})
        await h.controller.on_init()
        h.authors.select(created["id"])
        await h.controller.on_author_select()
        outcome = await h.controller.on_delete_author()
        assert outcome is Outcome.SUCCEEDED
        return created["id"]

    author_id = asyncio.run(scenario())

    row = asyncio.run(h.service.fetch(AUTHORS_PATH, author_id))
    assert row["is_deleted"] is True
    assert h.authors.keys() == []
    assert h.notifier.toasts == [DELETE_SUCCESS_MESSAGE]
    assert h.controller.selection.current_author() is None
    assert h.books.binding() is None


def test_hard_delete_removes_row(tmp_path: Path) -> None:
    h = make_harness(tmp_path, SimpleBookListController)

    async def scenario() -> str:
        created = await h.service.create(AUTHORS_PATH, {"name": "X", "bio": ""})
        await h.service.create(AUTHORS_PATH, {"name": "Y", "bio": ""})
        await h.controller.on_init()
        h.authors.select(created["id"])
        outcome = await h.controller.on_delete_author()
        assert outcome is Outcome.SUCCEEDED
        return created["id"]

    author_id = asyncio.run(scenario())

    with pytest.raises(UnknownEntityError):
        asyncio.run(h.service.fetch(AUTHORS_PATH, author_id))
    assert author_id not in h.authors.keys()
    assert len(h.authors.keys()) == 1
    assert h.notifier.toasts == [DELETE_SUCCESS_MESSAGE]


def test_failed_delete_reports_error_and_still_refreshes(tmp_path: Path) -> None:
    h = make_harness(tmp_path, SimpleBookListController)

    async def scenario() -> Outcome:
        created = await h.service.create(AUTHORS_PATH, {"name": "X", "bio": ""})
        await h.controller.on_init()
        h.authors.select(created["id"])

        # Another client removes the row before this one confirms.
        other = h.service.inner.bind_list(AUTHORS_PATH)
        await other.refresh()
        await other.contexts()[0].delete()

        h.count_refreshes(h.authors, "authors")
        return await h.controller.on_delete_author()

    assert asyncio.run(scenario()) is Outcome.FAILED
    assert len(h.notifier.errors) == 1
    assert h.notifier.toasts == []
    assert h.refreshes == ["authors"]


def test_concurrent_delete_is_refused_while_first_is_in_flight(tmp_path: Path) -> None:
    h = make_harness(tmp_path, SimpleBookListController)

    async def scenario() -> tuple[Outcome, Outcome]:
        created = await h.service.create(AUTHORS_PATH, {"name": "X", "bio": ""})
        await h.controller.on_init()
        h.authors.select(created["id"])

        async with h.controller.crud.guard.claim(AUTHORS_PATH):
            blocked = await h.controller.on_delete_author()
        allowed = await h.controller.on_delete_author()
        return blocked, allowed

    blocked, allowed = asyncio.run(scenario())

    assert blocked is Outcome.REJECTED
    assert allowed is Outcome.SUCCEEDED
    assert h.notifier.toasts == [
        "Another author change is still in progress.",
        DELETE_SUCCESS_MESSAGE,
    ]


def test_controller_for_delete_mode() -> None:
    assert controller_for("soft") is BookListController
    assert controller_for("hard") is SimpleBookListController
    with pytest.raises(ValueError):
        controller_for("archive")
