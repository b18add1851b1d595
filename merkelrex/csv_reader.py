"""Reading order book entries from comma-separated text."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from os import PathLike

from merkelrex.order_book_entry import (
    OrderBookEntry,
    OrderBookType,
    string_to_order_book_type,
)

logger = logging.getLogger(__name__)

_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:"
    r"0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
    r"|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
    r"|inf(?:inity)?"
    r"|nan"
    r")",
    re.IGNORECASE,
)


class CSVFormatError(ValueError):
    """Raised when a line or field cannot be turned into an order book entry."""


def tokenise(line: str, separator: str) -> list[str]:
    """Split a line on a single-character separator.

    Leading separators are skipped, and splitting stops at the first
    empty field or at the end of the line.
    """
    if len(separator) != 1:
        raise ValueError("separator must be a single character")
    tokens: list[str] = []
    rest = line.lstrip(separator)
    while rest and not rest.startswith(separator):
        token, found, rest = rest.partition(separator)
        tokens.append(token)
        if not found:
            break
    return tokens


def _parse_double(text: str) -> float:
    """Parse the longest leading number of text, skipping leading whitespace."""
    stripped = text.lstrip()
    match = _FLOAT_PREFIX.match(stripped)
    if match is None:
        raise CSVFormatError(f"bad float: {text!r}")
    literal = match.group(0)
    body = literal.lstrip("+-")
    if body[:2].lower() == "0x":
        value = float.fromhex(literal)
    else:
        value = float(literal)
    if math.isinf(value) and not body.lower().startswith("inf"):
        raise CSVFormatError(f"float out of range: {text!r}")
    return value


def strings_to_entry(
    price: str,
    amount: str,
    timestamp: str,
    product: str,
    order_type: OrderBookType,
) -> OrderBookEntry:
    """Build an entry from textual price and amount."""
    try:
        price_value = _parse_double(price)
        amount_value = _parse_double(amount)
    except CSVFormatError:
        logger.warning("bad float: %r, %r", price, amount)
        raise
    return OrderBookEntry(price_value, amount_value, timestamp, product, order_type)


def tokens_to_entry(tokens: Sequence[str]) -> OrderBookEntry:
    """Build an entry from the five fields timestamp, product, type, price, amount."""
    if len(tokens) != 5:
        raise CSVFormatError(f"expected 5 fields, got {len(tokens)}")
    timestamp, product, type_text, price, amount = tokens
    return strings_to_entry(
        price, amount, timestamp, product, string_to_order_book_type(type_text)
    )


def read_csv(filename: str | PathLike[str]) -> list[OrderBookEntry]:
    """Read all well-formed entries of a file; bad lines are skipped.

    A file that cannot be opened yields no entries.
    """
    entries: list[OrderBookEntry] = []
    try:
        with open(filename, encoding="utf-8") as csv_file:
            for line in csv_file:
                try:
                    entries.append(tokens_to_entry(tokenise(line.rstrip("\n"), ",")))
                except CSVFormatError:
                    logger.warning("bad data: %r", line)
    except OSError as error:
        logger.warning("cannot open %s: %s", filename, error)
    logger.info("read %d entries", len(entries))
    return entries