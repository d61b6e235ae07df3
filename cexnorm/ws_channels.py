"""Normalized websocket channels and the non-market messages they yield."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Hashable, Iterable, Optional, Union

from .market import NormalizedL2, NormalizedQuote, NormalizedTrade
from .pairs import NormalizedTradingPair, RawTradingPair

DEFAULT_L2_UPDATE_SPEED = 100


class NormalizedWsChannelKind(Enum):
    """The kinds of websocket channel."""

    TRADES = "trades"
    QUOTES = "quotes"
    L2 = "l2"


@dataclass
class NormalizedWsChannel:
    """A websocket channel and the pairs it covers.

    ``depth`` and ``update_speed`` only mean something for L2 channels.
    """

    kind: NormalizedWsChannelKind
    pairs: list[NormalizedTradingPair] = field(default_factory=list)
    depth: Optional[int] = None
    update_speed: int = DEFAULT_L2_UPDATE_SPEED

    @classmethod
    def new_default(cls, kind: NormalizedWsChannelKind) -> "NormalizedWsChannel":
        """An empty channel of ``kind``."""
        return cls(kind)

    @classmethod
    def new_with_pairs(
        cls,
        exchange: Hashable,
        kind: NormalizedWsChannelKind,
        pairs: Iterable[RawTradingPair],
        l2_config: Optional[tuple[Optional[int], int]] = None,
    ) -> "NormalizedWsChannel":
        """A channel of ``kind`` for ``pairs``; ``l2_config`` is (depth, update speed)."""
        normalized = [p.get_normalized_pair(exchange) for p in pairs]
        if kind is NormalizedWsChannelKind.L2:
            depth, update_speed = l2_config if l2_config is not None else (None, DEFAULT_L2_UPDATE_SPEED)
            return cls(kind, normalized, depth, update_speed)
        return cls(kind, normalized)

    def make_many_single(self) -> list["NormalizedWsChannel"]:
        """Split into one channel per pair."""
        return [replace(self, pairs=[pair]) for pair in self.pairs]

    def add_pairs(self, exchange: Hashable, pairs: Iterable[RawTradingPair]) -> None:
        """Add raw pairs, normalized for ``exchange``."""
        self.pairs.extend(p.get_normalized_pair(exchange) for p in pairs)


@dataclass
class WsDisconnect:
    """The stream disconnected."""

    exchange: Hashable
    message: str
    raw_message: str


@dataclass
class WsRemovedPair:
    """A pair was dropped from the subscription."""

    exchange: Hashable
    bad_pair: NormalizedTradingPair
    raw_message: str


@dataclass
class WsOther:
    """Any other message from the stream."""

    exchange: Hashable
    kind: str
    value: str


NormalizedWsData = Union[
    NormalizedTrade,
    list[NormalizedTrade],
    NormalizedQuote,
    list[NormalizedQuote],
    NormalizedL2,
    WsDisconnect,
    WsRemovedPair,
    WsOther,
]