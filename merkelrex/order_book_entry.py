"""Order book entries and their order types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OrderBookType(Enum):
    """Kind of an order book entry."""

    BID = "bid"
    ASK = "ask"
    UNKNOWN = "unknown"
    ASKSALE = "asksale"
    BIDSALE = "bidsale"


def string_to_order_book_type(text: str) -> OrderBookType:
    """Map 'ask' or 'bid' to its order type; anything else is UNKNOWN."""
    if text == "ask":
        return OrderBookType.ASK
    if text == "bid":
        return OrderBookType.BID
    return OrderBookType.UNKNOWN


@dataclass
class OrderBookEntry:
    """A single order or sale on the exchange."""

    price: float
    amount: float
    timestamp: str
    product: str
    order_type: OrderBookType
    username: str = "dataset"