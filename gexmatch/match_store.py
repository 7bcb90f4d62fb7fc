"""Persisting published match results and deriving ticker input from them."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal

from gexmatch.linked_list import MatchData

logger = logging.getLogger(__name__)

_TWO = Decimal(2)


@dataclass(frozen=True)
class MatchedOrderRow:
    """One fill as stored. `taker_is_buyer` is 1 for a buying taker, else 2."""

    match_id: str
    symbol_id: int
    symbol_name: str
    taker_order_id: str
    maker_order_id: str
    match_sub_id: str
    price: str
    qty: str
    amount: str
    match_time: int
    taker_is_buyer: int


class DuplicateKeyError(Exception):
    """A row with the same fill id is already stored."""


class MatchedOrderStore:
    """Fills keyed by their unique fill id."""

    def __init__(self):
        self._rows: dict[str, MatchedOrderRow] = {}

    def insert(self, row):
        if row.match_sub_id in self._rows:
            raise DuplicateKeyError(row.match_sub_id)
        self._rows[row.match_sub_id] = row

    def rows(self):
        return list(self._rows.values())

    @contextmanager
    def _transaction(self):
        saved = dict(self._rows)
        try:
            yield self
        except BaseException:
            self._rows = saved
            raise


def store_match_result(store, result):
    """Store every fill of a match result in one transaction.

    Fills already stored are skipped. Returns the rows that were inserted.
    """
    taker_is_buyer = 1 if result.taker_is_buy else 2
    inserted = []
    with store._transaction():
        for record in result.matched_records:
            row = MatchedOrderRow(
                match_id=result.match_id,
                symbol_id=result.symbol_id,
                symbol_name=result.symbol_name,
                taker_order_id=record.taker.order_id,
                maker_order_id=record.maker.order_id,
                match_sub_id=record.match_sub_id,
                price=record.price,
                qty=record.qty,
                amount=record.amount,
                match_time=result.match_time,
                taker_is_buyer=taker_is_buyer,
            )
            try:
                store.insert(row)
            except DuplicateKeyError:
                logger.warning("matched order already exists: %s", row.match_sub_id)
                continue
            inserted.append(row)
    return inserted


def match_data_from_result(result):
    """The ticker input for one match result."""
    return MatchData(
        match_time=result.match_time,
        volume=Decimal(result.amount) * _TWO,
        amount=Decimal(result.qty) * _TWO,
        start_price=Decimal(result.begin_price),
        end_price=Decimal(result.end_price),
        low=Decimal(result.low_price),
        high=Decimal(result.high_price),
    )


def consume_match_resp(store, resp):
    """Handle one published message; returns ticker input for match results."""
    result = resp.match_result
    if result is None:
        return None
    try:
        store_match_result(store, result)
    except Exception:
        logger.exception("storing match result %s failed", result.match_id)
    data = match_data_from_result(result)
    data.message_id = resp.message_id
    return data