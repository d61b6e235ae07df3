"""Okex websocket ticker and trade payloads."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from .market import NormalizedQuote, NormalizedTrade
from .okex_pairs import OKEX, OkexTradingPair

logger = logging.getLogger("cexnorm.okex")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EPSILON = sys.float_info.epsilon


def _from_millis(ms: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=ms)


def _str(data: Mapping[str, Any], key: str) -> str:
    try:
        value = data[key]
    except KeyError:
        raise ValueError(f"missing field '{key}'") from None
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string, got {value!r}")
    return value


def _float(data: Mapping[str, Any], key: str) -> float:
    text = _str(data, key)
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"field '{key}': cannot parse '{text}'") from None


def _millis(data: Mapping[str, Any], key: str) -> int:
    text = _str(data, key)
    digits = text[1:] if text.startswith("+") else text
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"field '{key}': '{text}' is not an unsigned integer")
    return int(digits)


def _number_or_none(data: Mapping[str, Any], key: str) -> Optional[float]:
    """A JSON number as float; anything else, or nothing, gives None."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


@dataclass
class OkexTicker:
    """An update from the Okex ``tickers`` channel."""

    pair_type: str
    pair: OkexTradingPair
    last_price: float
    last_size: float
    ask_price: Optional[float]
    ask_amt: Optional[float]
    bid_price: Optional[float]
    bid_amt: Optional[float]
    open_price_24hr: float
    high_price_24h: float
    low_price_24h: float
    vol_currency_24hr: float
    vol_contract_24hr: float
    open_price_utc0: float
    open_price_utc8: float
    timestamp: int

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "OkexTicker":
        """Build from one decoded entry of a ticker message's ``data`` list."""
        return cls(
            pair_type=_str(data, "instType"),
            pair=OkexTradingPair(_str(data, "instId")),
            last_price=_float(data, "last"),
            last_size=_float(data, "lastSz"),
            ask_price=_number_or_none(data, "askPx"),
            ask_amt=_number_or_none(data, "askSz"),
            bid_price=_number_or_none(data, "bidPx"),
            bid_amt=_number_or_none(data, "bidSz"),
            open_price_24hr=_float(data, "open24h"),
            high_price_24h=_float(data, "high24h"),
            low_price_24h=_float(data, "low24h"),
            vol_currency_24hr=_float(data, "volCcy24h"),
            vol_contract_24hr=_float(data, "vol24h"),
            open_price_utc0=_float(data, "sodUtc0"),
            open_price_utc8=_float(data, "sodUtc8"),
            timestamp=_millis(data, "ts"),
        )

    def normalize(self) -> Optional[NormalizedQuote]:
        """The quote, if the ticker carries both best bid and best ask."""
        if None in (self.ask_amt, self.ask_price, self.bid_amt, self.bid_price):
            return None
        return NormalizedQuote(
            exchange=OKEX,
            pair=self.pair.normalize(),
            time=_from_millis(self.timestamp),
            ask_amount=self.ask_amt,
            ask_price=self.ask_price,
            bid_amount=self.bid_amt,
            bid_price=self.bid_price,
            quote_id=None,
        )

    def matches_normalized(self, other: NormalizedQuote) -> bool:
        """True if ``other`` is the quote this ticker describes."""
        equals = (
            other.exchange == OKEX
            and other.pair == self.pair.normalize()
            and other.time == _from_millis(self.timestamp)
            and abs(other.bid_amount - (self.bid_amt or 0.0)) < _EPSILON
            and abs(other.bid_price - (self.bid_price or 0.0)) < _EPSILON
            and abs(other.ask_amount - (self.ask_amt or 0.0)) < _EPSILON
            and abs(other.ask_price - (self.ask_price or 0.0)) < _EPSILON
            and other.quote_id is None
        )
        if not equals:
            logger.warning("okex ticker: %r", self)
            logger.warning("normalized quote: %r", other)
        return equals


@dataclass
class OkexTrade:
    """An update from the Okex ``trades-all`` channel."""

    pair: OkexTradingPair
    price: float
    quantity: float
    trade_id: str
    side: str
    trade_time: int

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "OkexTrade":
        """Build from one decoded entry of a trade message's ``data`` list."""
        return cls(
            pair=OkexTradingPair(_str(data, "instId")),
            price=_float(data, "px"),
            quantity=_float(data, "sz"),
            trade_id=_str(data, "tradeId"),
            side=_str(data, "side"),
            trade_time=_millis(data, "ts"),
        )

    def normalize(self) -> NormalizedTrade:
        return NormalizedTrade(
            exchange=OKEX,
            pair=self.pair.normalize(),
            time=_from_millis(self.trade_time),
            side=self.side.lower(),
            price=self.price,
            amount=self.quantity,
            trade_id=self.trade_id,
        )

    def matches_normalized(self, other: NormalizedTrade) -> bool:
        """True if ``other`` is this trade in normalized form."""
        equals = (
            other.exchange == OKEX
            and other.pair == self.pair.normalize()
            and other.time == _from_millis(self.trade_time)
            and other.side == self.side.lower()
            and other.price == self.price
            and other.amount == self.quantity
            and other.trade_id == self.trade_id
        )
        if not equals:
            logger.warning("okex trade: %r", self)
            logger.warning("normalized trade: %r", other)
        return equals