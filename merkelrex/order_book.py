"""An order book of asks and bids, with a simple matching engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from os import PathLike

from merkelrex.csv_reader import read_csv
from merkelrex.order_book_entry import OrderBookEntry, OrderBookType

logger = logging.getLogger(__name__)

SIM_USER = "simuser"


def high_price(orders: Sequence[OrderBookEntry]) -> float:
    """Highest price among orders; no orders raise ValueError."""
    if not orders:
        raise ValueError("no orders to take a price from")
    return max(order.price for order in orders)


def low_price(orders: Sequence[OrderBookEntry]) -> float:
    """Lowest price among orders; no orders raise ValueError."""
    if not orders:
        raise ValueError("no orders to take a price from")
    return min(order.price for order in orders)


class OrderBook:
    """Orders kept in timestamp order."""

    def __init__(self, orders: Iterable[OrderBookEntry] = ()) -> None:
        self._orders: list[OrderBookEntry] = list(orders)

    @classmethod
    def from_csv(cls, filename: str | PathLike[str]) -> OrderBook:
        """Build an order book from a data file."""
        return cls(read_csv(filename))

    def __len__(self) -> int:
        return len(self._orders)

    def known_products(self) -> list[str]:
        """All products seen in the book, sorted."""
        return sorted({order.product for order in self._orders})

    def get_orders(
        self, order_type: OrderBookType, product: str, timestamp: str
    ) -> list[OrderBookEntry]:
        """Copies of the orders of one type, product and timestamp."""
        return [
            replace(order)
            for order in self._orders
            if order.order_type is order_type
            and order.product == product
            and order.timestamp == timestamp
        ]

    def earliest_time(self) -> str:
        """Timestamp of the first order; an empty book raises LookupError."""
        if not self._orders:
            raise LookupError("the order book is empty")
        return self._orders[0].timestamp

    def next_time(self, timestamp: str) -> str:
        """First timestamp after the given one, wrapping round to the start."""
        later = next(
            (order.timestamp for order in self._orders if order.timestamp > timestamp),
            "",
        )
        return later or self.earliest_time()

    def insert_order(self, order: OrderBookEntry) -> None:
        """Add an order, keeping the book in timestamp order."""
        self._orders.append(order)
        self._orders.sort(key=lambda entry: entry.timestamp)

    def match_asks_to_bids(self, product: str, timestamp: str) -> list[OrderBookEntry]:
        """Match asks, lowest first, to bids, highest first, and return the sales."""
        asks = self.get_orders(OrderBookType.ASK, product, timestamp)
        bids = self.get_orders(OrderBookType.BID, product, timestamp)
        sales: list[OrderBookEntry] = []
        if not asks or not bids:
            logger.info("no bids or asks for %s at %s", product, timestamp)
            return sales

        asks.sort(key=lambda entry: entry.price)
        bids.sort(key=lambda entry: entry.price, reverse=True)
        logger.debug(
            "max ask %g, min ask %g, max bid %g, min bid %g",
            asks[-1].price,
            asks[0].price,
            bids[0].price,
            bids[-1].price,
        )

        for ask in asks:
            for bid in bids:
                if bid.price < ask.price:
                    continue
                sale = OrderBookEntry(
                    ask.price, 0.0, timestamp, product, OrderBookType.ASKSALE
                )
                if bid.username == SIM_USER:
                    sale.username = SIM_USER
                    sale.order_type = OrderBookType.BIDSALE
                if ask.username == SIM_USER:
                    sale.username = SIM_USER
                    sale.order_type = OrderBookType.ASKSALE

                if bid.amount == ask.amount:
                    sale.amount = ask.amount
                    sales.append(sale)
                    bid.amount = 0.0
                    break
                if bid.amount > ask.amount:
                    sale.amount = ask.amount
                    sales.append(sale)
                    bid.amount -= ask.amount
                    break
                if 0 < bid.amount < ask.amount:
                    sale.amount = bid.amount
                    sales.append(sale)
                    ask.amount -= bid.amount
                    bid.amount = 0.0
        return sales