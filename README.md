# gexmatch

In-memory building blocks for a spot exchange market. Prices and quantities
are `decimal.Decimal` throughout.

- `gexmatch.order` defines the enums `Side`, `OrderType` and `OrderStatus`,
  the records `SymbolInfo`, `Order`, `CreateOrderRequest` and `OrderInfo`,
  and two formatters. `format_fixed_bank(value, places)` rounds half to even.
  `cut_precision(value, places)` truncates.
- `gexmatch.orderbook.OrderBook` holds one side of a market in price-time
  priority. Asks are kept by ascending price and bids by descending price.
  Orders at the same price are kept by ascending sequence id. It offers
  `add`, `remove`, `remove_key`, `get`, `best_price`, `items`, iteration and
  `len`.
- `gexmatch.depth.DepthHandler` aggregates resting quantity per price level.
  - `update_depth` applies an `OpType.ADD` or `OpType.DELETE` change.
  - `get_depth(level)` returns a snapshot of the top levels of each side.
  - `flush()` returns the levels changed since the previous flush, or `None`.
  - `depth_message` builds the websocket message for a change set.
- `gexmatch.results` describes a matching round with `MatchResult`,
  `MatchedRecord` and `CancelResp`.
  - `build_match_resp` turns a round into the published `MatchResp` message.
  - `tick_messages` produces one public trade message per fill.
- `gexmatch.linked_list` holds `MatchData`, the figures of one round, and
  `MatchDataList`, a time-ordered list whose head can be advanced.
- `gexmatch.ticker` defines `Ticker`, the 24-hour figures, and its two other
  forms. `TickerRedisData` is the stored form, with `to_json` and `from_json`.
  `TickerWsData` is the pushed form.
- `gexmatch.ticker_handler.TickerHandler` keeps a rolling 24-hour ticker.
  - `update_ticker` folds in a new round.
  - `move_window(now)` drops rounds older than 24 hours.
  - `take_changed()` hands out a copy of the ticker once per change.
- `gexmatch.match_store` stores the fills of a published match result in
  `MatchedOrderStore`.
  - `store_match_result` inserts the fills in one transaction and skips fills
    that are already stored.
  - `match_data_from_result` derives ticker input from a result.
  - `consume_match_resp` runs both steps for one message.

## Install

```
pip install .
pip install ".[test]"
```

## Example

```python
from decimal import Decimal

from gexmatch.depth import DepthHandler, OpType
from gexmatch.linked_list import MatchData
from gexmatch.order import Order, OrderType, Side, SymbolInfo
from gexmatch.orderbook import OrderBook
from gexmatch.ticker_handler import TickerHandler

symbol = SymbolInfo(
    symbol_id=1,
    symbol_name="BTC_USDT",
    base_coin_id=1,
    quote_coin_id=2,
    base_coin_prec=5,
    quote_coin_prec=6,
)

bids = OrderBook(Side.BUY)
bids.add(Order(order_id="lo1-1", sequence_id=1, side=Side.BUY,
               order_type=OrderType.LIMIT, price=Decimal("99"), qty=Decimal("1")))
bids.add(Order(order_id="lo1-2", sequence_id=2, side=Side.BUY,
               order_type=OrderType.LIMIT, price=Decimal("100"), qty=Decimal("1")))
print(bids.best_price())  # 100

depth = DepthHandler(symbol)
depth.update_depth("100", "1", Side.BUY, OpType.ADD, 1)
print(depth.get_depth(5).bids[0])
# Position(qty='1.00000', price='100.000000', amount='100.000000')
print(depth.flush())  # the level changed since the last flush

ticker = TickerHandler(symbol)
ticker.update_ticker(MatchData(
    match_time=1_700_000_000_000_000_000,
    volume=Decimal("100"), amount=Decimal("1"),
    start_price=Decimal("100"), end_price=Decimal("100"),
    low=Decimal("100"), high=Decimal("100"),
))
print(ticker.take_changed().to_ws_data(symbol))
```

## What the package does not do

- It has no matching loop. Nothing here crosses incoming orders against an
  `OrderBook`. The caller builds the `MatchResult` values that `results`,
  `match_store` and `ticker_handler` consume.
- It has no command, server or network interface.
- It does not connect to a message queue, cache or database. `MatchedOrderStore`
  keeps its rows in memory. `TickerRedisData.to_json` only produces the text
  that would be stored.

## Tests

```
pytest
```