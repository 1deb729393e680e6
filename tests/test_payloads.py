from __future__ import annotations

import pytest

from catalog_engine.errors import PayloadValidationError
from catalog_engine.payloads import (
    author_payload,
    book_payload,
    normalize_currency,
    normalize_price,
    parse_stock,
)


def test_author_payload_strips_whitespace() -> None:
    assert author_payload("  Jane Doe  ", " Writer ") == {"name": "Jane Doe", "bio": "Writer"}


def test_author_payload_allows_empty_bio() -> None:
    assert author_payload("Jane", "   ") == {"name": "Jane", "bio": ""}


def test_author_payload_rejects_blank_name() -> None:
    with pytest.raises(PayloadValidationError):
        author_payload("   ", "Writer")


def test_parse_stock_is_base_ten() -> None:
    assert parse_stock("10") == 10
    assert parse_stock(" 010 ") == 10


@pytest.mark.parametrize("raw", ["", "   ", "ten", "1.5", "0x10", "-3"])
def test_parse_stock_rejects_invalid_input(raw: str) -> None:
    with pytest.raises(PayloadValidationError):
        parse_stock(raw)


def test_normalize_price_keeps_the_string() -> None:
    assert normalize_price(" 12.50 ") == "12.50"
    assert normalize_price("0.3333333333333333333") == "0.3333333333333333333"


@pytest.mark.parametrize("raw", ["", "abc", "NaN", "Infinity", "-1.00"])
def test_normalize_price_rejects_invalid_input(raw: str) -> None:
    with pytest.raises(PayloadValidationError):
        normalize_price(raw)


def test_normalize_currency_upper_cases() -> None:
    assert normalize_currency(" eur ") == "EUR"


@pytest.mark.parametrize("raw", ["", "EU", "EURO", "E1R"])
def test_normalize_currency_rejects_bad_codes(raw: str) -> None:
    with pytest.raises(PayloadValidationError):
        normalize_currency(raw)


def test_book_payload_shape() -> None:
    payload = book_payload(
        author_id="a1",
        title="  Dune ",
        descr=" Spice ",
        stock="10",
        price=" 9.99",
        currency="usd",
    )
    assert payload == {
        "author_id": "a1",
        "title": "Dune",
        "descr": "Spice",
        "stock": 10,
        "price": "9.99",
        "currency": {"code": "USD"},
    }


def test_book_payload_never_defaults_stock_to_zero() -> None:
    with pytest.raises(PayloadValidationError) as excinfo:
        book_payload(author_id="a1", title="Dune", descr="", stock="", price="1", currency="USD")
    assert "Stock" in str(excinfo.value)
