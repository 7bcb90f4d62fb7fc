"""Order enums, symbol configuration, order records and decimal formatting."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_DOWN, ROUND_HALF_EVEN, Decimal, InvalidOperation
from enum import IntEnum

ZERO = Decimal(0)


class Side(IntEnum):
    BUY = 1
    SELL = 2


class OrderType(IntEnum):
    MARKET = 1
    LIMIT = 2


class OrderStatus(IntEnum):
    NEW_CREATED = 1
    PART_FILLED = 2
    ALL_FILLED = 3
    CANCELED = 4
    WASTED = 5


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal number: {value!r}") from exc


def _quantize(value, places: int, rounding: str) -> str:
    result = _as_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=rounding)
    if result.is_zero():
        result = abs(result)
    return f"{result:f}"


def format_fixed_bank(value, places):
    """Format with exactly `places` decimals, rounding half to even."""
    return _quantize(value, places, ROUND_HALF_EVEN)


def cut_precision(value, places):
    """Truncate a decimal number to `places` decimals."""
    return _quantize(value, places, ROUND_DOWN)


@dataclass
class SymbolInfo:
    """Configuration of one trading pair."""

    symbol_id: int = 0
    symbol_name: str = ""
    base_coin_id: int = 0
    quote_coin_id: int = 0
    base_coin_prec: int = 0
    quote_coin_prec: int = 0

    def base_min_unit(self) -> Decimal:
        """The smallest tradable quantity of the base coin."""
        return Decimal(1).scaleb(-self.base_coin_prec)


@dataclass
class Order:
    """An order as held by the matching engine."""

    order_id: str = ""
    sequence_id: int = 0
    uid: int = 0
    price: Decimal = ZERO
    qty: Decimal = ZERO
    order_type: OrderType = OrderType.LIMIT
    amount: Decimal = ZERO
    side: Side = Side.BUY
    order_status: OrderStatus = OrderStatus.NEW_CREATED
    unfilled_qty: Decimal = ZERO
    filled_qty: Decimal = ZERO
    unfilled_amount: Decimal = ZERO
    filled_amount: Decimal = ZERO
    create_time: int = 0
    is_cancel: bool = False

    def snapshot(self) -> "Order":
        """Return an independent copy of the current state."""
        return replace(self)


@dataclass
class CreateOrderRequest:
    """Parameters of a new order as submitted by a user."""

    symbol_name: str
    price: str = ""
    qty: str = ""
    amount: str = ""
    side: int = 0
    order_type: int = 0


@dataclass
class OrderInfo:
    """An order as listed back to its owner."""

    id: str
    order_id: str
    user_id: int
    symbol_name: str
    price: str
    qty: str
    amount: str
    side: int
    status: int
    order_type: int
    filled_qty: str
    filled_amount: str
    filled_avg_price: str
    created_at: int