from decimal import Decimal

from gexmatch.order import Order, Side
from gexmatch.orderbook import OrderBook, OrderKey


def make(seq, price, side):
    return Order(
        order_id=f"o{seq}",
        sequence_id=seq,
        price=Decimal(price),
        qty=Decimal("1"),
        side=side,
        unfilled_qty=Decimal("1"),
    )


def test_bids_sorted_by_price_desc_then_id_asc():
    book = OrderBook(Side.BUY)
    for seq, price in [(3, "100"), (1, "101"), (2, "100"), (4, "99")]:
        book.add(make(seq, price, Side.BUY))
    assert [o.sequence_id for o in book] == [1, 2, 3, 4]
    assert book.best_price() == Decimal("101")


def test_asks_sorted_by_price_asc_then_id_asc():
    book = OrderBook(Side.SELL)
    for seq, price in [(3, "100"), (1, "101"), (2, "100"), (4, "99")]:
        book.add(make(seq, price, Side.SELL))
    assert [o.sequence_id for o in book] == [4, 2, 3, 1]
    assert book.best_price() == Decimal("99")


def test_get_and_remove():
    book = OrderBook(Side.SELL)
    order = make(5, "10.5", Side.SELL)
    book.add(order)
    assert book.get(Decimal("10.50"), 5) is order
    assert book.get(Decimal("10.5"), 6) is None
    assert book.remove(order) is order
    assert len(book) == 0
    assert book.best_price() is None
    assert book.remove(order) is None


def test_remove_key_keeps_rest_in_order():
    book = OrderBook(Side.BUY)
    for seq, price in [(1, "5"), (2, "6"), (3, "7")]:
        book.add(make(seq, price, Side.BUY))
    removed = book.remove_key(OrderKey(Decimal("6"), 2))
    assert removed.sequence_id == 2
    assert [k.sequence_id for k, _ in book.items()] == [3, 1]


def test_add_same_key_replaces():
    book = OrderBook(Side.BUY)
    book.add(make(1, "5", Side.BUY))
    replacement = make(1, "5", Side.BUY)
    book.add(replacement)
    assert len(book) == 1
    assert book.get(Decimal("5"), 1) is replacement


def test_items_is_snapshot_safe_for_removal():
    book = OrderBook(Side.SELL)
    for seq in range(1, 4):
        book.add(make(seq, "1", Side.SELL))
    for key, _ in book.items():
        book.remove_key(key)
    assert len(book) == 0


def test_str_lists_sell_side_from_highest_price():
    book = OrderBook(Side.SELL)
    book.add(make(1, "10", Side.SELL))
    book.add(make(2, "20", Side.SELL))
    lines = str(book).splitlines()
    assert len(lines) == 2
    assert "orderID=o2" in lines[0]
    assert "orderID=o1" in lines[1]
    assert lines[0].startswith("[side=SELL]")