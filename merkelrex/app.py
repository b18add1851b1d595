"""The interactive exchange simulation."""

from __future__ import annotations

import argparse
import re
import sys
from typing import TextIO

from merkelrex.csv_reader import CSVFormatError, strings_to_entry, tokenise
from merkelrex.merkle_tree import compute_merkle_root
from merkelrex.order_book import SIM_USER, OrderBook, high_price, low_price
from merkelrex.order_book_entry import OrderBookEntry, OrderBookType
from merkelrex.wallet import Wallet

DEFAULT_DATA_FILE = "20200317.csv"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def parse_user_option(line: str) -> int:
    """Read the leading integer of line; anything unreadable gives 0."""
    match = _INT_PREFIX.match(line)
    if match is None:
        return 0
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        return 0
    return value


class MerkelApp:
    """Menu-driven trading simulation over an order book and a wallet."""

    def __init__(
        self,
        order_book: OrderBook,
        wallet: Wallet | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.order_book = order_book
        if wallet is None:
            wallet = Wallet()
            wallet.insert_currency("BTC", 10)
        self.wallet = wallet
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self.current_time = order_book.earliest_time()

    def _say(self, *parts: object) -> None:
        print(*parts, sep="", file=self._stdout)

    def _read_line(self) -> str | None:
        line = self._stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def run(self) -> None:
        """Show the menu and act on choices until input runs out."""
        while True:
            self.print_menu()
            self._say("Type in 1-6")
            line = self._read_line()
            if line is None:
                break
            option = parse_user_option(line)
            self._say("You chose: ", option)
            self.process_user_option(option)

    def print_menu(self) -> None:
        self._say("1: Print help ")
        self._say("2: Print exchange stats")
        self._say("3: Make an offer ")
        self._say("4: Make a bid ")
        self._say("5: Print wallet ")
        self._say("6: Continue ")
        self._say("============== ")
        self._say("Current time is: ", self.current_time)

    def print_help(self) -> None:
        self._say(
            "Help - your aim is to make money. "
            "Analyse the market and make bids and offers. "
        )

    def print_market_stats(self) -> None:
        for product in self.order_book.known_products():
            self._say("Product: ", product)
            entries = self.order_book.get_orders(
                OrderBookType.ASK, product, self.current_time
            )
            self._say("Asks seen: ", len(entries))
            if entries:
                self._say(f"Max ask: {high_price(entries):g}")
                self._say(f"Min ask: {low_price(entries):g}")

    def _enter_order(self, line: str, order_type: OrderBookType) -> bool:
        tokens = tokenise(line, ",")
        if len(tokens) != 3:
            self._say("Bad input! ", line)
            return False
        product, price, amount = tokens
        try:
            order = strings_to_entry(price, amount, self.current_time, product, order_type)
            order.username = SIM_USER
            fulfillable = self.wallet.can_fulfill_order(order)
        except (CSVFormatError, ValueError):
            self._say("Bad input ")
            return False
        if not fulfillable:
            self._say("Wallet has insufficient funds . ")
            return False
        self._say("Wallet looks good. ")
        self.order_book.insert_order(order)
        return True

    def enter_ask(self, line: str) -> bool:
        """Place an ask given as 'product,price,amount'; report whether it was placed."""
        return self._enter_order(line, OrderBookType.ASK)

    def enter_bid(self, line: str) -> bool:
        """Place a bid given as 'product,price,amount'; report whether it was placed."""
        return self._enter_order(line, OrderBookType.BID)

    def print_wallet(self) -> None:
        self._say(str(self.wallet))

    def goto_next_timeframe(self) -> list[OrderBookEntry]:
        """Match orders for every product, settle own sales and move time on."""
        self._say("Going to next time frame. ")
        root_before = compute_merkle_root(
            self.order_book.get_orders(OrderBookType.ASK, "", self.current_time)
        )
        self._say("Merkle Root before processing: ", root_before)

        all_sales: list[OrderBookEntry] = []
        for product in self.order_book.known_products():
            self._say("matching ", product)
            sales = self.order_book.match_asks_to_bids(product, self.current_time)
            self._say("Sales: ", len(sales))
            for sale in sales:
                self._say(f"Sale price: {sale.price:g} amount {sale.amount:g}")
                if sale.username == SIM_USER:
                    self.wallet.process_sale(sale)
            all_sales.extend(sales)

        root_after = compute_merkle_root(
            self.order_book.get_orders(OrderBookType.ASK, "", self.current_time)
        )
        self._say("Merkle Root after processing: ", root_after)
        if root_before != root_after:
            self._say("Tampering detected in transaction data!")
        else:
            self._say("No tampering detected.")

        self.current_time = self.order_book.next_time(self.current_time)
        return all_sales

    def process_user_option(self, option: int) -> None:
        """Act on one menu choice."""
        if option == 0:
            self._say("Invalid choice. Choose 1-6")
        elif option == 1:
            self.print_help()
        elif option == 2:
            self.print_market_stats()
        elif option == 3:
            self._say(
                "Make an ask - enter the amount: product,price, amount, eg  ETH/BTC,200,0.5"
            )
            self.enter_ask(self._read_line() or "")
        elif option == 4:
            self._say(
                "Make an bid - enter the amount: product,price, amount, eg  ETH/BTC,200,0.5"
            )
            self.enter_bid(self._read_line() or "")
        elif option == 5:
            self.print_wallet()
        elif option == 6:
            self.goto_next_timeframe()


def main(argv: list[str] | None = None) -> int:
    """Start the simulation on an order book data file."""
    parser = argparse.ArgumentParser(description="Trading exchange simulation.")
    parser.add_argument(
        "datafile", nargs="?", default=DEFAULT_DATA_FILE, help="order book CSV file"
    )
    args = parser.parse_args(argv)
    book = OrderBook.from_csv(args.datafile)
    try:
        app = MerkelApp(book)
    except LookupError:
        print(f"No orders could be read from {args.datafile}", file=sys.stderr)
        return 1
    app.run()
    return 0