"""Normalized market data: trades, quotes and order books."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Hashable, Optional

from .pairs import NormalizedTradingPair


@dataclass
class BidAsk:
    """One level of an order book."""

    price: float
    amount: float


@dataclass
class NormalizedQuote:
    """Best bid and ask at a point in time."""

    exchange: Hashable
    pair: NormalizedTradingPair
    time: datetime
    ask_amount: float
    ask_price: float
    bid_amount: float
    bid_price: float
    quote_id: Optional[str] = None


@dataclass
class NormalizedTrade:
    """A single executed trade."""

    exchange: Hashable
    pair: NormalizedTradingPair
    time: datetime
    side: str
    price: float
    amount: float
    trade_id: Optional[str] = None


@dataclass
class NormalizedL2:
    """An order book snapshot or update."""

    exchange: Hashable
    pair: NormalizedTradingPair
    time: datetime
    bids: list[BidAsk] = field(default_factory=list)
    asks: list[BidAsk] = field(default_factory=list)
    update_id: Optional[str] = None

    def get_quote(self) -> Optional[NormalizedQuote]:
        """The best bid and ask among levels with a non-zero amount, if both exist."""
        bids = [b for b in self.bids if b.amount != 0.0]
        asks = [a for a in self.asks if a.amount != 0.0]
        if not bids or not asks:
            return None
        # on equal prices the last bid and the first ask win
        bid = max(reversed(bids), key=lambda level: level.price)
        ask = min(asks, key=lambda level: level.price)
        return NormalizedQuote(
            exchange=self.exchange,
            pair=self.pair,
            time=self.time,
            ask_amount=ask.amount,
            ask_price=ask.price,
            bid_amount=bid.amount,
            bid_price=bid.price,
            quote_id=self.update_id,
        )