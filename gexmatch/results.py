"""Results of a matching round and the messages built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from gexmatch.order import Order, OrderStatus, OrderType, format_fixed_bank

_ZERO = Decimal(0)

TICK_TOPIC_PREFIX = "tick"


def _decimal_string(value: Decimal) -> str:
    """Plain notation without trailing zeros."""
    normalized = value.normalize()
    if normalized.is_zero():
        return "0"
    return f"{normalized:f}"


@dataclass
class MatchedRecord:
    """One fill between the taker and a single maker."""

    price: Decimal
    qty: Decimal
    amount: Decimal
    taker: Order
    maker: Order
    matched_record_id: str = ""


@dataclass
class CancelResp:
    """An order taken out of the book and the funds to release.

    `coin_id` and `qty` are the quote coin for buy orders and the base coin
    for sell orders.
    """

    cancel_id: int
    coin_id: int
    qty: str
    uid: int


@dataclass
class MatchResult:
    """Everything one matching round produced."""

    matched_records: list[MatchedRecord] = field(default_factory=list)
    match_id: str = ""
    cancel_resp: CancelResp | None = None
    match_time: int = 0
    taker_is_buy: bool = False


@dataclass
class OrderResp:
    """State of one order after a fill, as published."""

    order_id: str
    filled_qty: str
    un_filled_qty: str
    filled_amount: str
    un_filled_amount: str
    order_status: OrderStatus
    uid: int
    id: int
    un_frozen_amount: str = ""


@dataclass
class MatchedRecordMessage:
    qty: str
    price: str
    amount: str
    match_sub_id: str
    taker: OrderResp
    maker: OrderResp


@dataclass
class MatchResultMessage:
    symbol_id: int
    symbol_name: str
    base_coin_id: int
    quote_coin_id: int
    match_id: str
    matched_records: list[MatchedRecordMessage]
    begin_price: str
    end_price: str
    match_time: int
    qty: str
    amount: str
    high_price: str
    low_price: str
    taker_is_buy: bool


@dataclass
class MatchResp:
    """The published message: either a match result or a cancellation."""

    message_id: str
    match_result: MatchResultMessage | None = None
    cancel: CancelResp | None = None


def build_match_resp(match_result, symbol_info, message_id):
    """Turn a matching round into the message sent to downstream services."""
    if match_result.cancel_resp is not None:
        return MatchResp(message_id=message_id, cancel=match_result.cancel_resp)

    records = match_result.matched_records
    if not records:
        raise ValueError("a match result without cancel must hold matched records")

    begin_price = _decimal_string(records[0].price)
    end_price = _decimal_string(records[-1].price)
    if match_result.taker_is_buy:
        low_price, high_price = begin_price, end_price
    else:
        low_price, high_price = end_price, begin_price

    total_qty = _ZERO
    total_amount = _ZERO
    taker_unfrozen = _ZERO
    messages = []
    for record in records:
        total_qty += record.qty
        total_amount += record.amount
        taker, maker = record.taker, record.maker
        taker_filled_qty = _decimal_string(taker.filled_qty)
        if taker.order_type is OrderType.LIMIT:
            taker_unfrozen += record.qty * taker.price
            taker_filled_qty = _decimal_string(taker.qty - taker.unfilled_qty)
        else:
            taker_unfrozen = taker.filled_amount

        messages.append(
            MatchedRecordMessage(
                qty=_decimal_string(record.qty),
                price=_decimal_string(record.price),
                amount=_decimal_string(record.amount),
                match_sub_id=record.matched_record_id,
                taker=OrderResp(
                    order_id=taker.order_id,
                    filled_qty=taker_filled_qty,
                    un_filled_qty=_decimal_string(taker.unfilled_qty),
                    filled_amount=_decimal_string(taker.filled_amount),
                    un_filled_amount=_decimal_string(taker.unfilled_amount),
                    order_status=taker.order_status,
                    uid=taker.uid,
                    id=taker.sequence_id,
                    un_frozen_amount=_decimal_string(taker_unfrozen),
                ),
                maker=OrderResp(
                    order_id=maker.order_id,
                    filled_qty=_decimal_string(maker.qty - maker.unfilled_qty),
                    un_filled_qty=_decimal_string(maker.unfilled_qty),
                    filled_amount=_decimal_string(maker.filled_amount),
                    un_filled_amount=_decimal_string(maker.unfilled_amount),
                    order_status=maker.order_status,
                    uid=maker.uid,
                    id=maker.sequence_id,
                ),
            )
        )

    return MatchResp(
        message_id=message_id,
        match_result=MatchResultMessage(
            symbol_id=symbol_info.symbol_id,
            symbol_name=symbol_info.symbol_name,
            base_coin_id=symbol_info.base_coin_id,
            quote_coin_id=symbol_info.quote_coin_id,
            match_id=match_result.match_id,
            matched_records=messages,
            begin_price=begin_price,
            end_price=end_price,
            match_time=match_result.match_time,
            qty=_decimal_string(total_qty),
            amount=_decimal_string(total_amount),
            high_price=high_price,
            low_price=low_price,
            taker_is_buy=match_result.taker_is_buy,
        ),
    )


def _seconds(nanoseconds: int) -> int:
    seconds = abs(nanoseconds) // 1_000_000_000
    return seconds if nanoseconds >= 0 else -seconds


def tick_messages(match_result, symbol_info):
    """One websocket trade message per fill of the round."""
    topic = f"{TICK_TOPIC_PREFIX}@{symbol_info.symbol_name}"
    quote = symbol_info.quote_coin_prec
    base = symbol_info.base_coin_prec
    return [
        {
            "topic": topic,
            "payload": {
                "price": format_fixed_bank(record.price, quote),
                "qty": format_fixed_bank(record.qty, base),
                "amount": format_fixed_bank(record.amount, quote),
                "timestamp": _seconds(match_result.match_time),
                "takerIsBuyer": match_result.taker_is_buy,
            },
        }
        for record in match_result.matched_records
    ]