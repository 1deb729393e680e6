"""
Command-line interface for booklist.

Notes
-----
The CLI is thin. It parses arguments and delegates to the catalog store; the
desktop editor is started with `booklist gui`.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from catalog_engine.data_models import AUTHORS_PATH, BOOKS_PATH, Author, Book, Filter, FilterOperator
from catalog_engine.errors import CatalogError
from catalog_engine.log import DEFAULT_LEVEL, setup_logging
from catalog_engine.paths import DataRootError
from catalog_engine.payloads import author_payload
from catalog_engine.store.api import CatalogService
from catalog_engine.store.sqlite_store import open_catalog_store


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="booklist",
        description="Authors and books catalog",
    )
    parser.add_argument(
        "--data-root",
        default=None,
        help="Override booklist data root (primarily for testing). If omitted, defaults are used.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $BOOKLIST_LOG_LEVEL or INFO).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    init_p = sub.add_parser("init", help="Create the catalog database if it does not exist")
    init_p.add_argument(
        "--print-path",
        action="store_true",
        help="Print the resolved database path after initialization",
    )

    authors_p = sub.add_parser("authors", help="List authors")
    authors_p.add_argument(
        "--include-deleted",
        action="store_true",
        help="Also list soft-deleted authors.",
    )

    books_p = sub.add_parser("books", help="List the books of one author")
    books_p.add_argument("--author", required=True, help="Author id")

    add_p = sub.add_parser("add-author", help="Create an author")
    add_p.add_argument("--name", required=True, help="Display name")
    add_p.add_argument("--bio", default="", help="Biography")

    sub.add_parser("gui", help="Launch the desktop editor")

    return parser


async def _list_authors(service: CatalogService, include_deleted: bool) -> list[Author]:
    filters = () if include_deleted else (Filter("is_deleted", FilterOperator.NE, True),)
    binding = service.bind_list(AUTHORS_PATH, filters)
    await binding.refresh()
    return [Author.from_row(ctx.get_object()) for ctx in binding.contexts()]


async def _list_books(service: CatalogService, author_id: str) -> list[Book]:
    await service.fetch(AUTHORS_PATH, author_id)
    binding = service.bind_list(BOOKS_PATH, (Filter("author_id", FilterOperator.EQ, author_id),))
    await binding.refresh()
    return [Book.from_row(ctx.get_object()) for ctx in binding.contexts()]


def _run(args: argparse.Namespace, data_root: Path | None) -> int:
    if args.command == "gui":
        # Qt is only imported for the desktop editor.
        from gui.app import main as gui_main

        return gui_main(data_root, args.log_level)

    service = open_catalog_store(data_root)

    if args.command == "init":
        if args.print_path:
            print(service.db_path)
        return 0

    if args.command == "authors":
        for author in asyncio.run(_list_authors(service, args.include_deleted)):
            marker = " [deleted]" if author.is_deleted else ""
            print(f"{author.id}\t{author.name}{marker}")
        return 0

    if args.command == "books":
        for book in asyncio.run(_list_books(service, args.author)):
            print(f"{book.id}\t{book.title}\t{book.stock}\t{book.price} {book.currency_code}")
        return 0

    if args.command == "add-author":
        payload = author_payload(args.name, args.bio)
        created = asyncio.run(service.create(AUTHORS_PATH, payload))
        print(created["id"])
        return 0

    return 2


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # The GUI configures logging itself, from its settings unless overridden.
    if args.command != "gui":
        setup_logging(args.log_level or DEFAULT_LEVEL)

    data_root = Path(args.data_root) if args.data_root else None
    try:
        return _run(args, data_root)
    except (CatalogError, DataRootError) as exc:
        print(f"ERROR: {exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
