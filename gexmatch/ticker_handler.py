"""Rolling 24 hour ticker kept up to date from match data."""

from __future__ import annotations

import threading
import time
from dataclasses import replace
from decimal import Decimal

from gexmatch.linked_list import MatchDataList
from gexmatch.ticker import Ticker

_ZERO = Decimal(0)

DAY_NS = 24 * 60 * 60 * 1_000_000_000


class TickerHandler:
    """Maintains the 24 hour ticker of one symbol.

    `history` holds the match data of the last 24 hours in time order. New
    rounds are fed to `update_ticker`, old ones are dropped by `move_window`,
    and `take_changed` hands out the ticker once per change.
    """

    def __init__(self, symbol_info, history=()):
        self.symbol_info = symbol_info
        self.window = MatchDataList(sorted(history, key=lambda md: md.match_time))
        self.ticker = Ticker.zero()
        self.changed = False
        self._lock = threading.Lock()
        self._init_ticker()

    def _refresh_change(self) -> None:
        ticker = self.ticker
        ticker.price_delta = ticker.price - ticker.last24
        ticker.price_range = ticker.price_delta / ticker.last24 if ticker.last24 else _ZERO

    def _init_ticker(self) -> None:
        if not len(self.window):
            self.ticker = Ticker.zero()
            return
        entries = list(self.window)
        head, last = entries[0], entries[-1]
        high = max([_ZERO] + [md.start_price for md in entries])
        low = min(md.start_price for md in entries)
        self.ticker = Ticker(
            volume=sum((md.volume for md in entries), _ZERO),
            high=high,
            low=low,
            last24=head.start_price,
            price=last.start_price,
            amount=sum((md.amount for md in entries), _ZERO),
        )
        self._refresh_change()

    def update_ticker(self, match_data):
        """Fold one matching round into the ticker and the window."""
        with self._lock:
            self._apply(match_data)
            self.window.add(match_data)
            self.changed = True

    def _apply(self, md) -> None:
        ticker = self.ticker
        if ticker.price == _ZERO:
            self.ticker = Ticker(
                time_unix=md.match_time,
                volume=md.volume,
                high=md.high,
                low=md.low,
                last24=md.low,
                price=md.high,
                amount=md.amount,
            )
            return
        if md.high > ticker.high:
            ticker.high = md.high
        if md.low < ticker.low:
            ticker.low = md.low
        ticker.volume += md.volume
        ticker.amount += md.amount
        ticker.price = md.end_price
        ticker.time_unix = md.match_time
        self._refresh_change()

    def move_window(self, now=None):
        """Drop match data older than 24 hours before `now` (nanoseconds)."""
        if now is None:
            now = time.time_ns()
        with self._lock:
            self._move(now)

    def _move(self, now: int) -> None:
        yesterday = now - DAY_NS
        ticker = self.ticker
        high_changed = low_changed = False
        expired = 0
        for md in self.window:
            if md.match_time >= yesterday:
                break
            remaining = ticker.amount - md.amount
            ticker.amount = remaining if remaining > _ZERO else _ZERO
            remaining = ticker.volume - md.volume
            ticker.volume = remaining if remaining > _ZERO else _ZERO
            if md.high >= ticker.high:
                high_changed = True
            if md.low <= ticker.low:
                low_changed = True
            expired += 1

        if expired == 0:
            return
        if expired >= len(self.window):
            self.window.clear()
            self.ticker = Ticker(time_unix=now)
            self.changed = True
            return

        self.window.reset_head(expired)
        entries = list(self.window)
        head = entries[0]
        ticker.last24 = head.start_price
        if high_changed:
            ticker.high = max([_ZERO] + [md.high for md in entries])
        if low_changed:
            ticker.low = min(md.low for md in entries)
        self._refresh_change()
        self.changed = True

    def take_changed(self):
        """A copy of the ticker if it changed since the last call, else None."""
        with self._lock:
            if not self.changed:
                return None
            self.changed = False
            return replace(self.ticker)