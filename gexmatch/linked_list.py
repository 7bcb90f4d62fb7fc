"""Time-ordered match data kept for the rolling 24 hour window."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from decimal import Decimal
from itertools import islice
from typing import Any, Iterator


@dataclass
class MatchData:
    """Aggregated figures of one matching round."""

    match_time: int
    volume: Decimal
    amount: Decimal
    start_price: Decimal
    end_price: Decimal
    low: Decimal
    high: Decimal
    message_id: Any = None


class MatchDataList:
    """Append-only sequence whose head can be advanced to drop old entries."""

    def __init__(self, values=()):
        self._items: deque[MatchData] = deque(values)

    def add(self, *args):
        """Append one or more entries at the end."""
        self._items.extend(args)

    def reset_head(self, index):
        """Drop the first `index` entries; the index must lie within the list."""
        if not 0 <= index < len(self._items):
            raise IndexError("reset head index out of range")
        self._items = deque(islice(self._items, index, None))

    def get(self, index):
        """Return the entry at a non-negative index."""
        if not 0 <= index < len(self._items):
            raise IndexError("list index out of range")
        return self._items[index]

    def clear(self):
        self._items.clear()

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator[MatchData]:
        return iter(self._items)