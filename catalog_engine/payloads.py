"""
Form input normalization and validation.

This module turns raw dialog field values into the payloads sent to the data
service. It performs no I/O.

Invariants
----------
- Text fields (name, bio, title, descr) are stripped.
- Stock is a base-10, non-negative integer. Blank or non-numeric input is
  rejected, never defaulted.
- Price is validated as a finite, non-negative decimal but sent as the
  stripped input string so the backend keeps its own precision.
- Currency codes are stripped, upper-cased and must be three letters.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from .data_models import EntityKey
from .errors import PayloadValidationError


def _required_text(raw: str, label: str) -> str:
    cleaned = str(raw).strip()
    if not cleaned:
        raise PayloadValidationError(f"{label} must not be empty.")
    return cleaned


def parse_stock(raw: str) -> int:
    """
    Parse a stock count entered by the user.

    Parameters
    ----------
    raw:
        Raw field value.

    Returns
    -------
    int
        Parsed stock count.

    Raises
    ------
    PayloadValidationError
        If the value is blank, not a base-10 integer, or negative.
    """
    cleaned = str(raw).strip()
    if not cleaned:
        raise PayloadValidationError("Stock must not be empty.")
    try:
        value = int(cleaned, 10)
    except ValueError:
        raise PayloadValidationError(f"Stock must be a whole number: {cleaned!r}") from None
    if value < 0:
        raise PayloadValidationError("Stock must not be negative.")
    return value


def normalize_price(raw: str) -> str:
    """
    Validate a price and return it as a stripped string.

    Raises
    ------
    PayloadValidationError
        If the value is not a finite, non-negative decimal.
    """
    cleaned = str(raw).strip()
    if not cleaned:
        raise PayloadValidationError("Price must not be empty.")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise PayloadValidationError(f"Price must be a decimal number: {cleaned!r}") from None
    if not value.is_finite():
        raise PayloadValidationError(f"Price must be a decimal number: {cleaned!r}")
    if value < 0:
        raise PayloadValidationError("Price must not be negative.")
    return cleaned


def normalize_currency(raw: str) -> str:
    """Return an upper-cased three letter currency code."""
    code = str(raw).strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise PayloadValidationError(f"Currency must be a three letter code: {code!r}")
    return code


def author_payload(name: str, bio: str) -> dict[str, Any]:
    """
    Build the create/update payload for an Author.

    Parameters
    ----------
    name:
        Raw name field. Required.
    bio:
        Raw biography field. May be empty.

    Returns
    -------
    dict[str, Any]
        ``{"name": ..., "bio": ...}`` with both values stripped.
    """
    return {"name": _required_text(name, "Name"), "bio": str(bio).strip()}


def book_payload(
    *,
    author_id: EntityKey,
    title: str,
    descr: str,
    stock: str,
    price: str,
    currency: str,
) -> dict[str, Any]:
    """
    Build the create payload for a Book owned by `author_id`.

    Returns
    -------
    dict[str, Any]
        ``{author_id, title, descr, stock, price, currency: {code}}``.

    Raises
    ------
    PayloadValidationError
        If any field violates the module invariants.
    """
    return {
        "author_id": author_id,
        "title": _required_text(title, "Title"),
        "descr": str(descr).strip(),
        "stock": parse_stock(stock),
        "price": normalize_price(price),
        "currency": {"code": normalize_currency(currency)},
    }
