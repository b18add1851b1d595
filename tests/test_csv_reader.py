import pytest

from merkelrex.csv_reader import (
    CSVFormatError,
    read_csv,
    strings_to_entry,
    tokenise,
    tokens_to_entry,
)
from merkelrex.order_book_entry import OrderBookType


@pytest.mark.parametrize(
    "line, expected",
    [
        ("a,b,c", ["a", "b", "c"]),
        (",,a,b", ["a", "b"]),
        ("a,b,", ["a", "b"]),
        ("a,,b", ["a"]),
        ("single", ["single"]),
        ("", []),
        (",,,", []),
    ],
)
def test_tokenise_commas(line, expected):
    assert tokenise(line, ",") == expected


def test_tokenise_product_on_slash():
    assert tokenise("ETH/BTC", "/") == ["ETH", "BTC"]


def test_tokenise_rejects_long_separator():
    with pytest.raises(ValueError):
        tokenise("a,b", ",,")


def test_tokens_to_entry_fields():
    tokens = ["2020/03/17 17:01:24.884492", "ETH/BTC", "bid", "0.02187308", "7.44564869"]
    entry = tokens_to_entry(tokens)
    assert entry.timestamp == tokens[0]
    assert entry.product == "ETH/BTC"
    assert entry.order_type is OrderBookType.BID
    assert entry.price == float(tokens[3])
    assert entry.amount == float(tokens[4])
    assert entry.username == "dataset"


def test_tokens_to_entry_unknown_type():
    entry = tokens_to_entry(["t", "ETH/BTC", "sell", "1", "2"])
    assert entry.order_type is OrderBookType.UNKNOWN


@pytest.mark.parametrize("count", [0, 4, 6])
def test_tokens_to_entry_wrong_field_count(count):
    with pytest.raises(CSVFormatError):
        tokens_to_entry(["1"] * count)


def test_tokens_to_entry_bad_float():
    with pytest.raises(CSVFormatError):
        tokens_to_entry(["t", "ETH/BTC", "ask", "abc", "2"])


def test_strings_to_entry_builds_entry():
    entry = strings_to_entry("200", "0.5", "t0", "ETH/BTC", OrderBookType.ASK)
    assert (entry.price, entry.amount) == (200.0, 0.5)
    assert entry.order_type is OrderBookType.ASK
    assert entry.product == "ETH/BTC"


def test_strings_to_entry_accepts_numeric_prefix_and_whitespace():
    entry = strings_to_entry(" 12abc", "3e", "t", "ETH/BTC", OrderBookType.BID)
    assert entry.price == 12.0
    assert entry.amount == 3.0


@pytest.mark.parametrize("bad", ["", "x1", "-", ".", "1e999"])
def test_strings_to_entry_bad_amount(bad):
    with pytest.raises(CSVFormatError):
        strings_to_entry("1", bad, "t", "ETH/BTC", OrderBookType.BID)


def test_csv_format_error_is_value_error():
    with pytest.raises(ValueError):
        strings_to_entry("nope", "1", "t", "ETH/BTC", OrderBookType.BID)


def test_read_csv_skips_bad_lines(tmp_path):
    path = tmp_path / "orders.csv"
    path.write_text(
        "2020/03/17 17:01:24.884492,ETH/BTC,bid,0.02187308,7.44564869\n"
        "broken,line\n"
        "2020/03/17 17:01:24.884492,ETH/BTC,ask,zzz,1\n"
        "2020/03/17 17:01:30.099017,DOGE/BTC,ask,3.1e-07,100\n",
        encoding="utf-8",
    )
    entries = read_csv(path)
    assert [e.product for e in entries] == ["ETH/BTC", "DOGE/BTC"]
    assert [e.order_type for e in entries] == [OrderBookType.BID, OrderBookType.ASK]
    assert entries[1].amount == 100.0


def test_read_csv_missing_file_gives_empty_list(tmp_path):
    assert read_csv(tmp_path / "absent.csv") == []