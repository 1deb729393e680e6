from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from catalog_engine.data_models import AUTHORS_PATH, BOOKS_PATH, Author, Book, Filter, FilterOperator
from catalog_engine.store.errors import (
    StaleContextError,
    StoreRejectedError,
    UnknownEntityError,
    UnknownEntitySetError,
)
from catalog_engine.store.sqlite_store import SqliteCatalogService


def _store(tmp_path: Path) -> SqliteCatalogService:
    return SqliteCatalogService(db_path=tmp_path / "catalog.sqlite")


def test_create_author_roundtrip(tmp_path: Path) -> None:
    store = _store(tmp_path)

    async def scenario() -> None:
        created = await store.create(AUTHORS_PATH, {"name": "Jane Doe", "bio": "Writer"})
        fetched = await store.fetch(AUTHORS_PATH, created["id"])
        assert Author.from_row(fetched) == Author(
            id=created["id"], name="Jane Doe", bio="Writer", is_deleted=False
        )

    asyncio.run(scenario())


def test_create_book_flattens_currency_and_keeps_price_text(tmp_path: Path) -> None:
    store = _store(tmp_path)

    async def scenario() -> None:
        author = await store.create(AUTHORS_PATH, {"name": "A", "bio": ""})
        created = await store.create(
            BOOKS_PATH,
            {
                "author_id": author["id"],
                "title": "T",
                "descr": "D",
                "stock": 3,
                "price": "10.10",
                "currency": {"code": "EUR"},
            },
        )
        book = Book.from_row(await store.fetch(BOOKS_PATH, created["id"]))
        assert book.price == "10.10"
        assert book.currency_code == "EUR"
        assert book.stock == 3

    asyncio.run(scenario())


def test_create_book_for_unknown_author_is_rejected(tmp_path: Path) -> None:
    store = _store(tmp_path)
    payload = {
        "author_id": "missing",
        "title": "T",
        "descr": "",
        "stock": 1,
        "price": "1",
        "currency": {"code": "EUR"},
    }
    with pytest.raises(StoreRejectedError):
        asyncio.run(store.create(BOOKS_PATH, payload))


def test_create_rejects_unknown_fields_and_entity_sets(tmp_path: Path) -> None:
    store = _store(tmp_path)
    with pytest.raises(StoreRejectedError):
        asyncio.run(store.create(AUTHORS_PATH, {"name": "A", "nickname": "x"}))
    with pytest.raises(UnknownEntitySetError):
        asyncio.run(store.create("/Publishers", {"name": "P"}))


def test_soft_delete_keeps_row(tmp_path: Path) -> None:
    store = _store(tmp_path)

    async def scenario() -> None:
        created = await store.create(AUTHORS_PATH, {"name": "X", "bio": ""})
        binding = store.bind_list(AUTHORS_PATH)
        await binding.refresh()
        (ctx,) = binding.contexts()
        await ctx.set_property("is_deleted", True)

        fetched = await store.fetch(AUTHORS_PATH, created["id"])
        assert fetched["is_deleted"] is True

        visible = store.bind_list(AUTHORS_PATH, (Filter("is_deleted", FilterOperator.NE, True),))
        await visible.refresh()
        assert visible.contexts() == ()

    asyncio.run(scenario())


def test_hard_delete_removes_row_and_books(tmp_path: Path) -> None:
    store = _store(tmp_path)

    async def scenario() -> None:
        created = await store.create(AUTHORS_PATH, {"name": "X", "bio": ""})
        book = await store.create(
            BOOKS_PATH,
            {
                "author_id": created["id"],
                "title": "T",
                "descr": "",
                "stock": 1,
                "price": "1",
                "currency": {"code": "EUR"},
            },
        )
        binding = store.bind_list(AUTHORS_PATH)
        await binding.refresh()
        (ctx,) = binding.contexts()
        await ctx.delete()

        await binding.refresh()
        assert binding.contexts() == ()
        with pytest.raises(UnknownEntityError):
            await store.fetch(AUTHORS_PATH, created["id"])
        with pytest.raises(UnknownEntityError):
            await store.fetch(BOOKS_PATH, book["id"])
        with pytest.raises(StaleContextError):
            await ctx.set_property("name", "again")

    asyncio.run(scenario())


def test_set_property_on_missing_row_raises(tmp_path: Path) -> None:
    store = _store(tmp_path)

    async def scenario() -> None:
        await store.create(AUTHORS_PATH, {"name": "X", "bio": ""})
        binding = store.bind_list(AUTHORS_PATH)
        await binding.refresh()
        (first,) = binding.contexts()
        await binding.refresh()
        (second,) = binding.contexts()
        await first.delete()
        with pytest.raises(UnknownEntityError):
            await second.set_property("name", "Y")

    asyncio.run(scenario())


def test_bound_list_is_filtered_and_notifies(tmp_path: Path) -> None:
    store = _store(tmp_path)
    seen: list[int] = []

    async def scenario() -> None:
        a = await store.create(AUTHORS_PATH, {"name": "A", "bio": ""})
        b = await store.create(AUTHORS_PATH, {"name": "B", "bio": ""})
        for author, title in ((a, "A1"), (a, "A2"), (b, "B1")):
            await store.create(
                BOOKS_PATH,
                {
                    "author_id": author["id"],
                    "title": title,
                    "descr": "",
                    "stock": 0,
                    "price": "1",
                    "currency": {"code": "EUR"},
                },
            )
        binding = store.bind_list(BOOKS_PATH, (Filter("author_id", FilterOperator.EQ, a["id"]),))
        binding.add_listener(lambda bnd: seen.append(len(bnd.contexts())))
        assert binding.contexts() == ()
        await binding.refresh()
        assert [c.get_property("title") for c in binding.contexts()] == ["A1", "A2"]

    asyncio.run(scenario())
    assert seen == [2]


def test_bind_list_rejects_unknown_filter_field(tmp_path: Path) -> None:
    store = _store(tmp_path)
    with pytest.raises(UnknownEntitySetError):
        store.bind_list(BOOKS_PATH, (Filter("publisher", FilterOperator.EQ, "x"),))
