"""Okex websocket channels, subscriptions and messages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar, Union

from .market import NormalizedTrade
from .okex_pairs import OKEX, OkexTradingPair, okex_pair_from_normalized, parse_for_bad_pair
from .okex_ticks import OkexTicker, OkexTrade
from .pairs import NormalizedTradingPair, RawTradingPair
from .ws_channels import (
    NormalizedWsChannel,
    NormalizedWsChannelKind,
    NormalizedWsData,
    WsOther,
    WsRemovedPair,
)

TRADES_ALL_CHANNEL = "trades-all"
TICKERS_CHANNEL = "tickers"

E = TypeVar("E")


class OkexWsChannelKind(Enum):
    """The kinds of Okex websocket channel."""

    TRADES_ALL = "trades-all"
    BOOK_TICKER = "bookTicker"

    @property
    def channel_name(self) -> str:
        """The channel name Okex expects in a subscription."""
        return _CHANNEL_NAMES[self]

    def __str__(self) -> str:
        return self.value


_CHANNEL_NAMES: dict[OkexWsChannelKind, str] = {
    OkexWsChannelKind.TRADES_ALL: TRADES_ALL_CHANNEL,
    OkexWsChannelKind.BOOK_TICKER: TICKERS_CHANNEL,
}


@dataclass
class OkexWsChannel:
    """An Okex websocket channel and the pairs it covers."""

    kind: OkexWsChannelKind
    pairs: list[OkexTradingPair] = field(default_factory=list)

    @classmethod
    def _from_raw(cls, kind: OkexWsChannelKind, pairs: Iterable[RawTradingPair]) -> "OkexWsChannel":
        normalized = [pair.get_normalized_pair(OKEX) for pair in pairs]
        return cls(kind).new_from_normalized(normalized)

    @classmethod
    def new_trade(cls, pairs: Iterable[RawTradingPair]) -> "OkexWsChannel":
        """A trades channel; raises ValueError if a pair cannot be an Okex pair."""
        return cls._from_raw(OkexWsChannelKind.TRADES_ALL, pairs)

    @classmethod
    def new_quote(cls, pairs: Iterable[RawTradingPair]) -> "OkexWsChannel":
        """A ticker channel; raises ValueError if a pair cannot be an Okex pair."""
        return cls._from_raw(OkexWsChannelKind.BOOK_TICKER, pairs)

    def new_from_normalized(self, pairs: Iterable[NormalizedTradingPair]) -> "OkexWsChannel":
        """A channel of the same kind holding ``pairs`` instead."""
        return OkexWsChannel(self.kind, [okex_pair_from_normalized(pair) for pair in pairs])

    def count_entries(self) -> int:
        return len(self.pairs)

    @classmethod
    def from_name(cls, value: str) -> "OkexWsChannel":
        """An empty channel from its Okex name."""
        name = value.lower()
        if name == TRADES_ALL_CHANNEL:
            return cls(OkexWsChannelKind.TRADES_ALL)
        if name == TICKERS_CHANNEL:
            return cls(OkexWsChannelKind.BOOK_TICKER)
        raise ValueError(f"channel is not valid: {value}")

    @classmethod
    def from_normalized_channel(cls, channel: NormalizedWsChannel) -> "OkexWsChannel":
        """The Okex channel for a normalized one; L2 is not supported."""
        if channel.kind is NormalizedWsChannelKind.TRADES:
            kind = OkexWsChannelKind.TRADES_ALL
        elif channel.kind is NormalizedWsChannelKind.QUOTES:
            kind = OkexWsChannelKind.BOOK_TICKER
        else:
            raise NotImplementedError("L2 is not implemented for Okex")
        return cls(kind, [okex_pair_from_normalized(pair) for pair in channel.pairs])

    def __str__(self) -> str:
        return self.kind.channel_name


@dataclass(frozen=True)
class _SubscriptionArg:
    channel: str
    trading_pair: OkexTradingPair


def _channel_args(channel: OkexWsChannel) -> list[_SubscriptionArg]:
    name = str(channel)
    return [_SubscriptionArg(name, pair) for pair in dict.fromkeys(channel.pairs)]


@dataclass
class OkexSubscription:
    """A subscription request for the Okex websocket."""

    op: str = "subscribe"
    args: list[_SubscriptionArg] = field(default_factory=list)

    @classmethod
    def new_single_channel(cls, channel: OkexWsChannel) -> "OkexSubscription":
        return cls(args=_channel_args(channel))

    def needs_business_ws(self) -> bool:
        """True if any channel must go to the business endpoint."""
        return any(arg.channel == TRADES_ALL_CHANNEL for arg in self.args)

    def add_channel(self, channel: OkexWsChannel) -> None:
        """Subscribe to every distinct pair of ``channel``."""
        self.args.extend(_channel_args(channel))

    def remove_pair(self, pair: OkexTradingPair) -> bool:
        """Drop ``pair`` from every channel; True if nothing is left."""
        self.args = [arg for arg in self.args if arg.trading_pair != pair]
        return not self.args

    def to_json(self) -> str:
        """The subscription message as sent on the wire."""
        payload = {
            "op": self.op,
            "args": [{"channel": arg.channel, "instId": arg.trading_pair.value} for arg in self.args],
        }
        return json.dumps(payload, separators=(",", ":"))


class OkexWsMessageKind(Enum):
    """The kinds of message the Okex websocket sends."""

    TRADES_ALL = "trades_all"
    TICKERS = "tickers"
    SUBSCRIBE = "subscribe"
    ERROR = "error"


@dataclass
class OkexWsMessage:
    """A message from the Okex websocket.

    ``data`` holds the trade, the ticker or the raw subscribe confirmation;
    ``error``, ``raw_msg`` and ``bad_pair`` belong to error messages.
    """

    kind: OkexWsMessageKind
    data: Union[OkexTrade, OkexTicker, Mapping[str, Any], None] = None
    error: str = ""
    raw_msg: str = ""
    bad_pair: Optional[OkexTradingPair] = None

    def normalize(self) -> NormalizedWsData:
        if self.kind is OkexWsMessageKind.TRADES_ALL:
            return self.data.normalize()
        if self.kind is OkexWsMessageKind.TICKERS:
            quote = self.data.normalize()
            return [quote] if quote is not None else []
        if self.kind is OkexWsMessageKind.SUBSCRIBE:
            return WsOther(exchange=OKEX, kind="Subscribe", value=repr(self.data))
        if self.bad_pair is not None:
            return WsRemovedPair(
                exchange=OKEX,
                bad_pair=self.bad_pair.normalize(),
                raw_message=f"{self.error} - {self.raw_msg}",
            )
        return WsOther(exchange=OKEX, kind=self.error, value="")

    def make_critical(self, msg: str) -> None:
        """Attach the full raw message to an error, looking for a bad pair in it."""
        if self.kind is not OkexWsMessageKind.ERROR:
            return
        if self.bad_pair is None:
            self.bad_pair = parse_for_bad_pair(msg)
        self.raw_msg = msg

    def matches_normalized(self, other: NormalizedWsData) -> bool:
        """True if ``other`` is what this message normalizes to."""
        if self.kind is OkexWsMessageKind.TRADES_ALL:
            return isinstance(other, NormalizedTrade) and self.data.matches_normalized(other)
        if self.kind is OkexWsMessageKind.TICKERS:
            if not isinstance(other, list):
                return False
            ticker = self.data
            if None in (ticker.ask_amt, ticker.ask_price, ticker.bid_amt, ticker.bid_price):
                return not other
            return len(other) == 1 and ticker.matches_normalized(other[0])
        if self.kind is OkexWsMessageKind.SUBSCRIBE:
            return isinstance(other, WsOther)
        return isinstance(other, (WsOther, WsRemovedPair))


def _field_str(obj: Any, key: str, missing: str, not_str: str) -> str:
    value = obj.get(key) if isinstance(obj, Mapping) else None
    if value is None:
        raise ValueError(missing)
    if not isinstance(value, str):
        raise ValueError(not_str)
    return value


def _first_entry(data: Any, build: Callable[[Mapping[str, Any]], E]) -> E:
    if not isinstance(data, list):
        raise ValueError("'data' field in Okex ws message must be a list")
    entries = []
    for entry in data:
        if not isinstance(entry, Mapping):
            raise ValueError(f"entry {entry!r} in Okex ws message is not an object")
        entries.append(build(entry))
    if not entries:
        raise ValueError("'data' field in Okex ws message is empty")
    return entries[0]


def parse_okex_ws_message(value: Union[str, bytes, Mapping[str, Any]]) -> OkexWsMessage:
    """Parse a websocket message, raw or already decoded; raises ValueError."""
    if isinstance(value, (str, bytes, bytearray)):
        value = json.loads(value)
    if not isinstance(value, Mapping):
        raise ValueError("Okex ws message must be a JSON object")

    if "data" in value:
        arg = value.get("arg")
        if arg is None:
            raise ValueError("Could not find 'arg' field in Okex ws message")
        channel = _field_str(
            arg,
            "channel",
            "Could not find nest 'channel' field in Okex ws message",
            "Could not convert 'channel' field in Okex ws message to &str",
        )
        if channel == TRADES_ALL_CHANNEL:
            return OkexWsMessage(OkexWsMessageKind.TRADES_ALL, _first_entry(value["data"], OkexTrade.from_json))
        if channel == TICKERS_CHANNEL:
            return OkexWsMessage(OkexWsMessageKind.TICKERS, _first_entry(value["data"], OkexTicker.from_json))
        raise ValueError(f"Channel type '{channel}' cannot be deserialized")

    event = _field_str(
        value,
        "event",
        "Could not find 'event' field in Okex ws message",
        "Could not convert 'event' field in Okex ws message to &str",
    )
    if event == "subscribe":
        return OkexWsMessage(OkexWsMessageKind.SUBSCRIBE, dict(value))
    if event == "error":
        msg = _field_str(
            value,
            "msg",
            "Could not find 'msg' (error message) field in Okex ws message",
            "Could not convert 'msg' (error message) field in Okex ws message to &str",
        )
        return OkexWsMessage(OkexWsMessageKind.ERROR, error=msg, raw_msg="", bad_pair=parse_for_bad_pair(msg))
    raise ValueError(f"Event type '{event}' cannot be deserialized")