# merkelrex

merkelrex is a small exchange simulator for the terminal. It loads a day of
historical orders from a CSV file, lets you place your own asks and bids
against them, matches asks to bids one time frame at a time, and keeps a
wallet of the currencies you hold.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the simulator

```
merkelrex [datafile]
```

`datafile` defaults to `20200317.csv` in the current directory. If no orders
can be read from it, the command prints a message to standard error and exits
with status 1.

The wallet starts with 10 BTC. Each turn shows a menu and the current time,
then reads one line:

```
1: Print help
2: Print exchange stats
3: Make an offer
4: Make a bid
5: Print wallet
6: Continue
```

- **1** prints a short help line.
- **2** prints, for every known product, how many asks were seen in the
  current time frame and, when there are any, their highest and lowest price.
- **3** and **4** read a further line of the form `product,price,amount`, for
  example `ETH/BTC,200,0.5`. The order is only placed if the wallet can cover
  it: for an ask, the amount of the first currency of the pair; for a bid,
  price times amount of the second currency.
- **5** prints the wallet, one `currency : amount` line per currency.
- **6** matches asks to bids for every product in the current time frame,
  credits and debits the wallet for any sale that involved your orders, and
  moves to the next timestamp, wrapping back to the first one at the end of
  the data. It also prints a Merkle root before and after matching and says
  whether they differ. These roots are taken over asks of the current time
  frame whose product field is empty, so with ordinary data both are empty.

A line that does not start with a number is reported as an invalid choice;
other numbers outside 1 to 6 are ignored. The simulator stops when its input
runs out.

Diagnostic messages (bad CSV lines, matching details) go to the `logging`
module, not to the menu output.

## Order data

Each line of the CSV file holds five fields:

```
timestamp,product,type,price,amount
2020/03/17 17:01:24.884492,ETH/BTC,bid,0.02187308,7.44564869
```

`type` is `ask` or `bid`; any other word gives an order of unknown type.
Lines that do not have exactly five fields, or whose price or amount does not
start with a number, are skipped. Timestamps are compared as text, so they
must sort correctly as strings.

## Using the library

```python
from merkelrex.order_book import OrderBook, high_price, low_price
from merkelrex.order_book_entry import OrderBookType
from merkelrex.wallet import Wallet
from merkelrex.merkle_tree import compute_merkle_root

book = OrderBook.from_csv("20200317.csv")
now = book.earliest_time()

for product in book.known_products():
    asks = book.get_orders(OrderBookType.ASK, product, now)
    if asks:
        print(product, high_price(asks), low_price(asks))
    for sale in book.match_asks_to_bids(product, now):
        print(sale.price, sale.amount)

wallet = Wallet()
wallet.insert_currency("BTC", 10)
print(wallet.contains_currency("BTC", 5), wallet.balance("BTC"))
print(wallet)

print(compute_merkle_root(book.get_orders(OrderBookType.ASK, "ETH/BTC", now)))
```

- `merkelrex.order_book_entry`: `OrderBookEntry` (a dataclass with `price`,
  `amount`, `timestamp`, `product`, `order_type` and `username`, which
  defaults to `"dataset"`), the `OrderBookType` enum (`BID`, `ASK`,
  `UNKNOWN`, `ASKSALE`, `BIDSALE`) and `string_to_order_book_type`.
- `merkelrex.csv_reader`: `tokenise`, `read_csv`, `tokens_to_entry` and
  `strings_to_entry`; malformed fields raise `CSVFormatError`, a
  `ValueError`. `read_csv` skips bad lines and returns no entries for a file
  it cannot open.
- `merkelrex.order_book`: `OrderBook` with `from_csv`, `known_products`,
  `get_orders` (which returns copies), `earliest_time` (raises `LookupError`
  on an empty book), `next_time`, `insert_order` and `match_asks_to_bids`;
  `high_price` and `low_price` raise `ValueError` on an empty list.
- `merkelrex.wallet`: `Wallet` with `insert_currency` (raises `ValueError`
  for a negative amount), `remove_currency`, `contains_currency`, `balance`,
  `can_fulfill_order` and `process_sale`.
- `merkelrex.merkle_tree`: `simple_hash` and `compute_merkle_root`.
- `merkelrex.app`: `MerkelApp`, which can be given its own input and output
  streams, `parse_user_option` and `main`.

The Merkle root uses a simple, non-cryptographic 64-bit hash. It is meant for
spotting changes within one run, not for security.

## What it does not do

The simulator keeps everything in memory: placed orders and wallet balances
are not saved between runs, and sales only change the wallet, not the orders
left in the book.