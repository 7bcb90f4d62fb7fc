from decimal import Decimal

import pytest

from gexmatch.depth import DepthHandler, OpType, depth_message
from gexmatch.order import Side, SymbolInfo


@pytest.fixture
def handler():
    symbol = SymbolInfo(symbol_name="BTC_USDT", base_coin_prec=3, quote_coin_prec=2)
    return DepthHandler(symbol, 0)


def test_bids_listed_highest_first(handler):
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.BUY, OpType.ADD, 1)
    handler.update_depth(Decimal("12.00"), Decimal("1.000"), Side.BUY, OpType.ADD, 2)
    depth = handler.get_depth(5)
    assert [p.price for p in depth.bids] == ["12.00", "10.00"]
    assert [p.qty for p in depth.bids] == ["1.000", "1.000"]
    assert [p.amount for p in depth.bids] == [p.price for p in depth.bids]
    assert depth.asks == []


def test_asks_also_listed_highest_first(handler):
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.SELL, OpType.ADD, 1)
    handler.update_depth(Decimal("12.00"), Decimal("1.000"), Side.SELL, OpType.ADD, 2)
    depth = handler.get_depth(5)
    assert [p.price for p in depth.asks] == ["12.00", "10.00"]
    assert depth.bids == []


def test_level_limits_result(handler):
    for price in ("10.00", "11.00", "12.00"):
        handler.update_depth(Decimal(price), Decimal("1.000"), Side.BUY, OpType.ADD, 1)
    assert [p.price for p in handler.get_depth(1).bids] == ["12.00"]
    assert handler.get_depth(0).bids == []


def test_same_price_merges(handler):
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.BUY, OpType.ADD, 1)
    handler.update_depth(Decimal("10.0"), Decimal("1.000"), Side.BUY, OpType.ADD, 2)
    bids = handler.get_depth(5).bids
    assert len(bids) == 1
    assert Decimal(bids[0].qty) == Decimal("2")


def test_delete_full_quantity_removes_level(handler):
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.SELL, OpType.ADD, 1)
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.SELL, OpType.DELETE, 2)
    assert handler.get_depth(5).asks == []
    changes = handler.flush()
    assert [p.price for p in changes.asks] == ["10.00"]
    assert changes.asks[0].qty == "0.000"


def test_delete_of_missing_price_changes_nothing(handler):
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.BUY, OpType.DELETE, 3)
    assert handler.get_depth(5).bids == []
    assert handler.flush() is None
    assert handler.current_version == 3


def test_flush_carries_versions(handler):
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.BUY, OpType.ADD, 7)
    first = handler.flush()
    assert (first.last_version, first.current_version) == (0, 7)
    assert handler.flush() is None
    handler.update_depth(Decimal("11.00"), Decimal("1.000"), Side.SELL, OpType.ADD, 9)
    second = handler.flush()
    assert (second.last_version, second.current_version) == (7, 9)
    assert [p.price for p in second.asks] == ["11.00"]
    assert second.bids == []


def test_get_depth_reports_last_flushed_version(handler):
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.BUY, OpType.ADD, 7)
    assert handler.get_depth(5).current_version == 0
    handler.flush()
    assert handler.get_depth(5).current_version == 7


def test_invalid_op_raises(handler):
    with pytest.raises(ValueError):
        handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.BUY, 3, 1)


def test_depth_message_rows(handler):
    handler.update_depth(Decimal("10.00"), Decimal("1.000"), Side.BUY, OpType.ADD, 7)
    message = depth_message(handler.flush(), "BTC_USDT")
    payload = message["payload"]
    assert "BTC_USDT" in message["topic"]
    assert payload["symbol"] == "BTC_USDT"
    assert payload["lastVersion"] == "0"
    assert payload["currentVersion"] == "7"
    assert payload["bids"] == [["10.00", "1.000", "10.00"]]
    assert payload["asks"] == []