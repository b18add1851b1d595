"""Merkle roots over order book entries, for spotting changed data."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import zip_longest

from merkelrex.order_book_entry import OrderBookEntry

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK = 0xFFFFFFFFFFFFFFFF


def simple_hash(text: str) -> str:
    """Return a 64-bit, non-cryptographic hash of text as lower-case hex."""
    value = _FNV_OFFSET
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & _MASK
    return format(value, "x")


def _entry_data(entry: OrderBookEntry) -> str:
    return f"{entry.username}{entry.product}{entry.price:f}{entry.amount:f}{entry.timestamp}"


def compute_merkle_root(entries: Iterable[OrderBookEntry]) -> str:
    """Hash entries pairwise up to a single root; an odd hash is carried up.

    No entries give an empty string.
    """
    hashes = [simple_hash(_entry_data(entry)) for entry in entries]
    while len(hashes) > 1:
        hashes = [
            left if right is None else simple_hash(left + right)
            for left, right in zip_longest(hashes[::2], hashes[1::2])
        ]
    return hashes[0] if hashes else ""