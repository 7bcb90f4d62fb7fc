"""24 hour ticker figures and their stored and pushed forms."""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from gexmatch.order import format_fixed_bank

_ZERO = Decimal(0)
_HUNDRED = Decimal(100)


def _plain(value: Decimal) -> str:
    return f"{value:f}"


def _to_decimal(text) -> Decimal:
    try:
        return Decimal(str(text))
    except InvalidOperation:
        return _ZERO


@dataclass
class TickerWsData:
    """Ticker as pushed to websocket subscribers."""

    price: str
    high: str
    low: str
    amount: str
    volume: str
    price_range: str
    last_24_hour_price: str
    symbol: str


@dataclass
class TickerRedisData:
    """Ticker as stored in the shared cache."""

    amount: str = "0"
    time_unix: int = 0
    high: str = "0"
    low: str = "0"
    last24: str = "0"
    price: str = "0"
    volume: str = "0"
    price_range: str = "0"
    symbol: str = ""
    price_delta: str = "0"

    def to_ticker(self) -> "Ticker":
        return Ticker(
            time_unix=self.time_unix,
            volume=_to_decimal(self.volume),
            high=_to_decimal(self.high),
            low=_to_decimal(self.low),
            last24=_to_decimal(self.last24),
            price=_to_decimal(self.price),
            amount=_to_decimal(self.amount),
            price_range=_to_decimal(self.price_range),
            price_delta=_to_decimal(self.price_delta),
        )

    def to_json(self) -> str:
        return json.dumps(
            {
                "amount": self.amount,
                "time": self.time_unix,
                "high": self.high,
                "low": self.low,
                "last24price": self.last24,
                "price": self.price,
                "volume": self.volume,
                "range": self.price_range,
                "symbol": self.symbol,
                "priceDelta": self.price_delta,
            },
            separators=(",", ":"),
        )

    @classmethod
    def from_json(cls, text) -> "TickerRedisData":
        raw = json.loads(text)
        return cls(
            amount=raw.get("amount", ""),
            time_unix=int(raw.get("time", 0)),
            high=raw.get("high", ""),
            low=raw.get("low", ""),
            last24=raw.get("last24price", ""),
            price=raw.get("price", ""),
            volume=raw.get("volume", ""),
            price_range=raw.get("range", ""),
            symbol=raw.get("symbol", ""),
            price_delta=raw.get("priceDelta", ""),
        )


@dataclass
class Ticker:
    """Rolling 24 hour market figures.

    `volume` is the traded quote-coin total, `amount` the base-coin total and
    `price_range` the relative change since `last24` as a fraction.
    """

    time_unix: int = 0
    volume: Decimal = _ZERO
    high: Decimal = _ZERO
    low: Decimal = _ZERO
    last24: Decimal = _ZERO
    price: Decimal = _ZERO
    amount: Decimal = _ZERO
    price_range: Decimal = _ZERO
    price_delta: Decimal = _ZERO

    @classmethod
    def zero(cls) -> "Ticker":
        return cls()

    def to_redis_data(self, symbol_info) -> TickerRedisData:
        return TickerRedisData(
            amount=_plain(self.amount),
            time_unix=self.time_unix,
            high=_plain(self.high),
            low=_plain(self.low),
            last24=_plain(self.last24),
            price=_plain(self.price),
            volume=_plain(self.volume),
            price_range=format_fixed_bank(self.price_range * _HUNDRED, 3),
            symbol=symbol_info.symbol_name,
            price_delta=_plain(self.price_delta),
        )

    def to_ws_data(self, symbol_info) -> TickerWsData:
        quote = symbol_info.quote_coin_prec
        return TickerWsData(
            price=format_fixed_bank(self.price, quote),
            high=format_fixed_bank(self.high, quote),
            low=format_fixed_bank(self.low, quote),
            amount=format_fixed_bank(self.amount, symbol_info.base_coin_prec),
            volume=format_fixed_bank(self.volume, quote),
            price_range=format_fixed_bank(self.price_range * _HUNDRED, 3),
            last_24_hour_price=format_fixed_bank(self.last24, quote),
            symbol=symbol_info.symbol_name,
        )