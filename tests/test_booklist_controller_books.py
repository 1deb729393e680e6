from __future__ import annotations

import asyncio
from pathlib import Path

from catalog_engine.controller.booklist import NO_AUTHOR_FOR_BOOK_MESSAGE
from catalog_engine.controller.crud import Outcome
from catalog_engine.data_models import AUTHORS_PATH, BOOKS_PATH
from catalog_engine.store.errors import StoreRejectedError
from ui_fakes import Harness, make_harness


async def _seed_two_authors(h: Harness) -> tuple[str, str]:
    a = await h.service.create(AUTHORS_PATH, {"name": "A", "bio": ""})
    b = await h.service.create(AUTHORS_PATH, {"name": "B", "bio": ""})
    for author, title in ((a, "A1"), (a, "A2"), (b, "B1")):
        await h.service.inner.create(
            BOOKS_PATH,
            {
                "author_id": author["id"],
                "title": title,
                "descr": "",
                "stock": 1,
                "price": "1.00",
                "currency": {"code": "EUR"},
            },
        )
    await h.controller.on_init()
    return a["id"], b["id"]


def test_selecting_a_then_b_shows_only_b_books(tmp_path: Path) -> None:
    h = make_harness(tmp_path)

    async def scenario() -> None:
        a, b = await _seed_two_authors(h)
        h.authors.select(a)
        await h.controller.on_author_select()
        assert [r["title"] for r in h.books.rows()] == ["A1", "A2"]

        h.authors.select(b)
        await h.controller.on_author_select()
        assert [r["title"] for r in h.books.rows()] == ["B1"]
        assert h.controller.selection.current_author() == b

    asyncio.run(scenario())


def test_deselecting_clears_the_book_view(tmp_path: Path) -> None:
    h = make_harness(tmp_path)

    async def scenario() -> None:
        a, _b = await _seed_two_authors(h)
        h.authors.select(a)
        await h.controller.on_author_select()
        h.authors.selected = []
        await h.controller.on_author_select()

    asyncio.run(scenario())

    assert h.books.binding() is None
    assert h.books.rows() == []
    assert h.controller.selection.current_author() is None


def test_add_book_without_author_never_opens(tmp_path: Path) -> None:
    h = make_harness(tmp_path)

    asyncio.run(h.controller.on_add_book())

    assert h.loader.loaded == []
    assert h.notifier.toasts == [NO_AUTHOR_FOR_BOOK_MESSAGE]


def test_add_book_with_cleared_list_selection_is_refused(tmp_path: Path) -> None:
    h = make_harness(tmp_path)

    async def scenario() -> None:
        a, _b = await _seed_two_authors(h)
        h.authors.select(a)
        await h.controller.on_author_select()
        h.authors.selected = []
        await h.controller.on_add_book()

    asyncio.run(scenario())

    assert h.loader.loaded == []
    assert h.notifier.toasts == ["Please select exactly one author to add a book to."]


def test_create_book_for_selected_author(tmp_path: Path) -> None:
    h = make_harness(tmp_path)

    async def scenario() -> tuple[str, Outcome]:
        a, b = await _seed_two_authors(h)
        h.authors.select(b)
        await h.controller.on_author_select()
        h.count_refreshes(h.authors, "authors")
        h.count_refreshes(h.books, "books")

        await h.controller.on_add_book()
        h.loader.last.values.update(
            title=" Dune ", descr=" Spice ", stock="10", price=" 9.99 ", currency="usd"
        )
        return b, await h.controller.on_add_book_confirm()

    b, outcome = asyncio.run(scenario())

    assert outcome is Outcome.SUCCEEDED
    assert h.service.creates[-1] == (
        BOOKS_PATH,
        {
            "author_id": b,
            "title": "Dune",
            "descr": "Spice",
            "stock": 10,
            "price": "9.99",
            "currency": {"code": "USD"},
        },
    )
    assert h.refreshes == ["books"]
    assert [r["title"] for r in h.books.rows()] == ["B1", "Dune"]
    assert h.loader.last.events == ["open", "close", "destroy"]
    assert h.notifier.toasts == ["Book created"]


def test_book_targets_author_captured_at_open(tmp_path: Path) -> None:
    h = make_harness(tmp_path)

    async def scenario() -> str:
        a, b = await _seed_two_authors(h)
        h.authors.select(a)
        await h.controller.on_author_select()
        await h.controller.on_add_book()

        h.authors.select(b)
        await h.controller.on_author_select()

        h.loader.last.values.update(title="T", descr="", stock="1", price="1", currency="EUR")
        await h.controller.on_add_book_confirm()
        return a

    a = asyncio.run(scenario())
    assert h.service.creates[-1][1]["author_id"] == a


def test_non_numeric_stock_is_rejected_without_a_call(tmp_path: Path) -> None:
    h = make_harness(tmp_path)

    async def scenario() -> Outcome:
        a, _b = await _seed_two_authors(h)
        h.authors.select(a)
        await h.controller.on_author_select()
        await h.controller.on_add_book()
        h.loader.last.values.update(title="T", descr="", stock="lots", price="1", currency="EUR")
        return await h.controller.on_add_book_confirm()

    outcome = asyncio.run(scenario())

    assert outcome is Outcome.REJECTED
    assert h.service.creates[2:] == []
    assert len(h.notifier.errors) == 1
    assert "Stock" in h.notifier.errors[0]
    assert h.loader.last.events == ["open", "close", "destroy"]


def test_failing_book_create_tears_down_and_refreshes_only_books(tmp_path: Path) -> None:
    h = make_harness(tmp_path)

    async def scenario() -> Outcome:
        a, _b = await _seed_two_authors(h)
        h.authors.select(a)
        await h.controller.on_author_select()
        h.count_refreshes(h.authors, "authors")
        h.count_refreshes(h.books, "books")

        await h.controller.on_add_book()
        h.loader.last.values.update(title="T", descr="", stock="1", price="1", currency="EUR")
        h.service.fail_with = StoreRejectedError("backend said no")
        return await h.controller.on_add_book_confirm()

    outcome = asyncio.run(scenario())

    assert outcome is Outcome.FAILED
    assert h.notifier.errors == ["backend said no"]
    assert h.notifier.toasts == []
    assert h.loader.last.events == ["open", "close", "destroy"]
    assert h.refreshes == ["books"]
    assert [r["title"] for r in h.books.rows()] == ["A1", "A2"]
