"""
Typed data models for the Authors/Books catalog.

These are immutable value objects. Rows travel through the data service as
plain mappings (the wire shape); `Author.from_row` and `Book.from_row` give
typed views over them for display and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Mapping

EntityKey = str

AUTHORS_PATH: Final[str] = "/Authors"
BOOKS_PATH: Final[str] = "/Books"


class FilterOperator(str, Enum):
    """Comparison operators supported by list bindings."""

    EQ = "eq"
    NE = "ne"


@dataclass(frozen=True, slots=True)
class Filter:
    """
    A single-field predicate applied to a list binding.

    Attributes
    ----------
    path:
        Field name within the entity set.
    operator:
        Comparison operator.
    value:
        Value the field is compared against.
    """

    path: str
    operator: FilterOperator
    value: Any


@dataclass(frozen=True, slots=True)
class Author:
    """
    An Author row.

    Attributes
    ----------
    id:
        Opaque unique key.
    name:
        Display name.
    bio:
        Free-form biography.
    is_deleted:
        Soft-delete flag. Soft-deleted rows stay in storage.
    """

    id: EntityKey
    name: str
    bio: str
    is_deleted: bool = False

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> "Author":
        return Author(
            id=str(row["id"]),
            name=str(row["name"]),
            bio=str(row["bio"]),
            is_deleted=bool(row.get("is_deleted", False)),
        )


@dataclass(frozen=True, slots=True)
class Book:
    """
    A Book row owned by exactly one Author.

    Attributes
    ----------
    id:
        Opaque unique key.
    author_id:
        Key of the owning Author.
    title:
        Book title.
    descr:
        Description.
    stock:
        Units in stock.
    price:
        Decimal price carried as a string to preserve backend precision.
    currency_code:
        ISO-style three letter currency code, upper case.
    """

    id: EntityKey
    author_id: EntityKey
    title: str
    descr: str
    stock: int
    price: str
    currency_code: str

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> "Book":
        return Book(
            id=str(row["id"]),
            author_id=str(row["author_id"]),
            title=str(row["title"]),
            descr=str(row["descr"]),
            stock=int(row["stock"]),
            price=str(row["price"]),
            currency_code=str(row["currency_code"]),
        )
