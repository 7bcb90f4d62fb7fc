"""One side of the order book, kept in matching priority order."""

from __future__ import annotations

from bisect import bisect_left, insort
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from gexmatch.order import Order, Side


@dataclass(frozen=True)
class OrderKey:
    """Identifies an order in the book by price and sequence id."""

    price: Decimal
    sequence_id: int


class OrderBook:
    """Orders of one side: asks by ascending price, bids by descending price,
    equal prices by ascending sequence id."""

    def __init__(self, side):
        self.side = Side(side)
        self._sort_keys: list[tuple[Decimal, int]] = []
        self._entries: dict[tuple[Decimal, int], tuple[OrderKey, Order]] = {}

    def _sort_key(self, key: OrderKey) -> tuple[Decimal, int]:
        price = -key.price if self.side is Side.BUY else key.price
        return (price, key.sequence_id)

    def add(self, order):
        """Put an order in the book, replacing one with the same key."""
        key = OrderKey(order.price, order.sequence_id)
        sort_key = self._sort_key(key)
        if sort_key not in self._entries:
            insort(self._sort_keys, sort_key)
        self._entries[sort_key] = (key, order)
        return key

    def remove(self, order):
        """Remove an order; returns the removed order or None."""
        return self.remove_key(OrderKey(order.price, order.sequence_id))

    def remove_key(self, key):
        """Remove the order under `key`; returns it or None if absent."""
        sort_key = self._sort_key(key)
        entry = self._entries.pop(sort_key, None)
        if entry is None:
            return None
        del self._sort_keys[bisect_left(self._sort_keys, sort_key)]
        return entry[1]

    def get(self, price, sequence_id):
        """Return the order under the given key, or None."""
        entry = self._entries.get(self._sort_key(OrderKey(price, sequence_id)))
        return entry[1] if entry else None

    def best_price(self):
        """Price of the first order in priority order, or None when empty."""
        if not self._sort_keys:
            return None
        return self._entries[self._sort_keys[0]][0].price

    def items(self):
        """All (key, order) pairs in priority order, as a list."""
        return [self._entries[sort_key] for sort_key in self._sort_keys]

    def __iter__(self) -> Iterator[Order]:
        return iter([order for _, order in self.items()])

    def __len__(self):
        return len(self._sort_keys)

    def __str__(self):
        orders = list(self)
        if self.side is Side.SELL:
            orders.reverse()
        return "".join(
            f"[side={self.side.name}]orderID={o.order_id} Price={o.price:f} "
            f"qty={o.qty:f} unfilledQty={o.unfilled_qty:f} Amount={o.amount:f} "
            f"unfilledAmount={o.unfilled_amount:f}\n"
            for o in orders
        )