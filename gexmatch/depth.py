"""Aggregated order-book depth by price level, with change tracking."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import IntEnum

from gexmatch.order import Side, format_fixed_bank

_ZERO = Decimal(0)

DEPTH_TOPIC_PREFIX = "depth"


class OpType(IntEnum):
    ADD = 1
    DELETE = 2


@dataclass
class Position:
    """One price level as shown to clients, formatted to the coin precisions."""

    qty: str
    price: str
    amount: str

    def as_row(self) -> list[str]:
        """The level as a [price, qty, amount] row."""
        return [self.price, self.qty, self.amount]


@dataclass
class DepthData:
    """A snapshot or a change set of depth levels."""

    asks: list[Position] = field(default_factory=list)
    bids: list[Position] = field(default_factory=list)
    last_version: int = 0
    current_version: int = 0


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal number: {value!r}") from exc


class DepthHandler:
    """Keeps the quantity resting at each price on both sides.

    Both sides are listed from the highest price down. Levels changed since
    the last `flush` are collected so that they can be pushed as one update.
    """

    def __init__(self, symbol_info, version=0):
        self.symbol_info = symbol_info
        self._asks: dict[Decimal, Decimal] = {}
        self._bids: dict[Decimal, Decimal] = {}
        self._changed_asks: dict[Decimal, Position] = {}
        self._changed_bids: dict[Decimal, Position] = {}
        self.current_version = version
        self.last_version = version
        self._lock = threading.Lock()

    def _position(self, price: Decimal, qty: Decimal) -> Position:
        base = self.symbol_info.base_coin_prec
        quote = self.symbol_info.quote_coin_prec
        return Position(
            qty=format_fixed_bank(qty, base),
            price=format_fixed_bank(price, quote),
            amount=format_fixed_bank(price * qty, quote),
        )

    def update_depth(self, price, qty, side, op, version):
        """Add quantity to, or take it from, the level at `price`."""
        price = _as_decimal(price)
        qty = _as_decimal(qty)
        side = Side(side)
        op = OpType(op)
        is_sell = side is Side.SELL
        levels = self._asks if is_sell else self._bids
        changed_map = self._changed_asks if is_sell else self._changed_bids

        with self._lock:
            changed = None
            if op is OpType.ADD:
                changed = levels.get(price, _ZERO) + qty
                levels[price] = changed
            elif price in levels:
                changed = levels[price] - qty
                if changed == _ZERO:
                    del levels[price]
                else:
                    levels[price] = changed
            if changed is not None:
                changed_map[price] = self._position(price, changed)
            self.current_version = version

    def get_depth(self, level):
        """The top `level` price levels of each side, highest price first."""
        count = max(int(level), 0)
        with self._lock:
            asks = [
                self._position(price, self._asks[price])
                for price in sorted(self._asks, reverse=True)[:count]
            ]
            bids = [
                self._position(price, self._bids[price])
                for price in sorted(self._bids, reverse=True)[:count]
            ]
            return DepthData(asks=asks, bids=bids, current_version=self.last_version)

    def flush(self):
        """Return the levels changed since the previous flush, or None."""
        with self._lock:
            if not self._changed_asks and not self._changed_bids:
                return None
            data = DepthData(
                asks=list(self._changed_asks.values()),
                bids=list(self._changed_bids.values()),
                last_version=self.last_version,
                current_version=self.current_version,
            )
            self._changed_asks = {}
            self._changed_bids = {}
            self.last_version = self.current_version
            return data


def depth_message(data, symbol_name):
    """The websocket message announcing a depth change set."""
    return {
        "topic": f"{DEPTH_TOPIC_PREFIX}@{symbol_name}",
        "payload": {
            "lastVersion": str(data.last_version),
            "currentVersion": str(data.current_version),
            "symbol": symbol_name,
            "asks": [position.as_row() for position in data.asks],
            "bids": [position.as_row() for position in data.bids],
        },
    }