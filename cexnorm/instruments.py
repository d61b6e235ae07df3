"""Trading types, normalized instruments and instrument filters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Hashable, Optional

from .currencies import NormalizedCurrency
from .filters import ExchangeFilter
from .pairs import NormalizedTradingPair


class NormalizedTradingType(Enum):
    """The kind of market an instrument trades on."""

    SPOT = "Spot"
    PERPETUAL = "Perpetual"
    MARGIN = "Margin"
    FUTURES = "Futures"
    RFQ = "Rfq"
    OPTION = "Option"
    OTHER = "Other"

    def fmt_okex(self) -> Optional[str]:
        """The name the Okex API uses for this type, if it has one."""
        return _OKEX_NAMES.get(self)

    @classmethod
    def parse(cls, value: str) -> "NormalizedTradingType":
        """Parse an exchange's label for a trading type."""
        found = _ALIASES.get(value.lower())
        if found is None:
            raise ValueError(f"'{value}' is not a valid trading type")
        return found

    def __str__(self) -> str:
        return self.value.upper()


_OKEX_NAMES: dict[NormalizedTradingType, str] = {
    NormalizedTradingType.SPOT: "SPOT",
    NormalizedTradingType.PERPETUAL: "SWAP",
    NormalizedTradingType.MARGIN: "MARGIN",
    NormalizedTradingType.FUTURES: "FUTURES",
}

_ALIASES: dict[str, NormalizedTradingType] = {
    "spot": NormalizedTradingType.SPOT,
    "perpetual": NormalizedTradingType.PERPETUAL,
    "perp": NormalizedTradingType.PERPETUAL,
    "swap": NormalizedTradingType.PERPETUAL,
    "linear": NormalizedTradingType.PERPETUAL,
    "inverse": NormalizedTradingType.PERPETUAL,
    "futures": NormalizedTradingType.FUTURES,
    "margin": NormalizedTradingType.MARGIN,
    "option": NormalizedTradingType.OPTION,
}


@dataclass
class NormalizedInstrument:
    """An instrument listed on an exchange."""

    exchange: Hashable
    trading_pair: NormalizedTradingPair
    trading_type: NormalizedTradingType
    base_asset_symbol: str
    quote_asset_symbol: str
    active: bool
    futures_expiry: Optional[date] = None


class InstrumentFilterKind(Enum):
    """What an :class:`InstrumentFilter` looks at."""

    PAIR = "pair"
    BASE_OR_QUOTE = "base_or_quote"
    BASE_AND_QUOTE = "base_and_quote"
    BASE_ONLY = "base_only"
    QUOTE_ONLY = "quote_only"
    ACTIVE = "active"


@dataclass(frozen=True)
class InstrumentFilter(ExchangeFilter[Any]):
    """Filters instruments, and currencies, by pair, symbols or activity."""

    kind: InstrumentFilterKind
    value: Optional[str] = None
    quote: Optional[str] = None

    @classmethod
    def pair(cls, value: str) -> "InstrumentFilter":
        return cls(InstrumentFilterKind.PAIR, value)

    @classmethod
    def base_or_quote(cls, value: str) -> "InstrumentFilter":
        return cls(InstrumentFilterKind.BASE_OR_QUOTE, value)

    @classmethod
    def base_and_quote(cls, base: str, quote: str) -> "InstrumentFilter":
        return cls(InstrumentFilterKind.BASE_AND_QUOTE, base, quote)

    @classmethod
    def base_only(cls, value: str) -> "InstrumentFilter":
        return cls(InstrumentFilterKind.BASE_ONLY, value)

    @classmethod
    def quote_only(cls, value: str) -> "InstrumentFilter":
        return cls(InstrumentFilterKind.QUOTE_ONLY, value)

    @classmethod
    def active(cls) -> "InstrumentFilter":
        return cls(InstrumentFilterKind.ACTIVE)

    def matches(self, val: Any) -> bool:
        """Match a :class:`NormalizedInstrument` or a :class:`NormalizedCurrency`."""
        if isinstance(val, NormalizedCurrency):
            return self._matches_currency(val)
        return self._matches_instrument(val)

    def _matches_instrument(self, val: NormalizedInstrument) -> bool:
        kind = self.kind
        if kind is InstrumentFilterKind.PAIR:
            return val.trading_pair.make_pair() == self.value
        if kind is InstrumentFilterKind.BASE_OR_QUOTE:
            return self.value in (val.base_asset_symbol, val.quote_asset_symbol)
        if kind is InstrumentFilterKind.BASE_AND_QUOTE:
            return val.base_asset_symbol == self.value and val.quote_asset_symbol == self.quote
        if kind is InstrumentFilterKind.BASE_ONLY:
            return val.base_asset_symbol == self.value
        if kind is InstrumentFilterKind.QUOTE_ONLY:
            return val.quote_asset_symbol == self.value
        return val.active

    def _matches_currency(self, val: NormalizedCurrency) -> bool:
        kind = self.kind
        if kind in (
            InstrumentFilterKind.BASE_OR_QUOTE,
            InstrumentFilterKind.BASE_ONLY,
            InstrumentFilterKind.QUOTE_ONLY,
        ):
            return val.symbol == self.value
        if kind in (InstrumentFilterKind.BASE_AND_QUOTE, InstrumentFilterKind.PAIR):
            return False
        return True