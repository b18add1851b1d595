"""A wallet holding balances of several currencies."""

from __future__ import annotations

import logging

from merkelrex.csv_reader import tokenise
from merkelrex.order_book_entry import OrderBookEntry, OrderBookType

logger = logging.getLogger(__name__)


def _product_currency(product: str, index: int) -> str:
    currencies = tokenise(product, "/")
    if index >= len(currencies):
        raise ValueError(f"product {product!r} does not name two currencies")
    return currencies[index]


class Wallet:
    """Balances by currency name."""

    def __init__(self) -> None:
        self._currencies: dict[str, float] = {}

    def insert_currency(self, currency: str, amount: float) -> None:
        """Add amount of currency; a negative amount raises ValueError."""
        if amount < 0:
            raise ValueError("cannot insert a negative amount")
        self._currencies[currency] = self._currencies.get(currency, 0.0) + amount

    def remove_currency(self, currency: str, amount: float) -> bool:
        """Take amount of currency out if there is enough; report whether it was taken."""
        if amount < 0 or not self.contains_currency(currency, amount):
            return False
        self._currencies[currency] -= amount
        return True

    def contains_currency(self, currency: str, amount: float) -> bool:
        """Whether the wallet holds at least amount of currency."""
        return currency in self._currencies and self._currencies[currency] >= amount

    def balance(self, currency: str) -> float:
        """Balance of currency, zero when it has never been held."""
        return self._currencies.get(currency, 0.0)

    def can_fulfill_order(self, order: OrderBookEntry) -> bool:
        """Whether the wallet can cover an ask or a bid."""
        if order.order_type is OrderBookType.ASK:
            currency = _product_currency(order.product, 0)
            amount = order.amount
        elif order.order_type is OrderBookType.BID:
            currency = _product_currency(order.product, 1)
            amount = order.amount * order.price
        else:
            return False
        logger.debug("can fulfill order? %s : %s", currency, amount)
        return self.contains_currency(currency, amount)

    def process_sale(self, sale: OrderBookEntry) -> None:
        """Apply a sale made by the wallet's owner to the balances."""
        if sale.order_type is OrderBookType.ASKSALE:
            outgoing = _product_currency(sale.product, 0)
            incoming = _product_currency(sale.product, 1)
            incoming_amount = sale.amount * sale.price
            outgoing_amount = sale.amount
        elif sale.order_type is OrderBookType.BIDSALE:
            incoming = _product_currency(sale.product, 0)
            outgoing = _product_currency(sale.product, 1)
            incoming_amount = sale.amount
            outgoing_amount = sale.amount * sale.price
        else:
            return
        self._currencies[incoming] = self.balance(incoming) + incoming_amount
        self._currencies[outgoing] = self.balance(outgoing) - outgoing_amount

    def __str__(self) -> str:
        return "".join(
            f"{currency} : {amount:f}\n"
            for currency, amount in sorted(self._currencies.items())
        )