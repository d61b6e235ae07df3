"""Okex REST API payloads: instruments, currencies and their responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Hashable, Mapping, Optional, Sequence, TypeVar, Union

from .currencies import BlockchainCurrency, NormalizedCurrency, handle_unwrapped
from .instruments import NormalizedInstrument, NormalizedTradingType
from .okex_pairs import OKEX, OkexTradingPair
from .rest_data import NormalizedRestApiData, NormalizedRestApiRequest

logger = logging.getLogger("cexnorm.okex")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

V = TypeVar("V")


def _required(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field '{key}'") from None


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _required(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string, got {value!r}")
    return value


def _opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string, got {value!r}")
    return value or None


def _u64(text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"'{text}' is not an unsigned integer")
    return int(digits)


def _convert(key: str, text: str, conv: Callable[[str], V]) -> V:
    try:
        return conv(text)
    except ValueError:
        raise ValueError(f"field '{key}': cannot parse '{text}'") from None


def _parsed(data: Mapping[str, Any], key: str, conv: Callable[[str], V]) -> V:
    return _convert(key, _str(data, key), conv)


def _opt_parsed(data: Mapping[str, Any], key: str, conv: Callable[[str], V]) -> Optional[V]:
    text = _opt_str(data, key)
    return None if text is None else _convert(key, text, conv)


@dataclass
class OkexInstrument:
    """An instrument as listed by the Okex public instruments endpoint."""

    alias: str
    base_currency: Optional[str]
    quote_currency: Optional[str]
    instrument_type: NormalizedTradingType
    instrument: OkexTradingPair
    underlying: Optional[str]
    instrument_family: Optional[str]
    settlement_currency: Optional[str]
    contract_value: Optional[float]
    contract_multiplier: Optional[int]
    contract_currency: Optional[str]
    option_type: Optional[str]
    strike_price: Optional[str]
    listing_time: int
    expiry_time: Optional[int]
    leverage: Optional[int]
    tick_size: Optional[float]
    lot_size: float
    minimum_size: float
    contract_type: Optional[str]
    state: str
    max_limit_size: float
    max_market_size: float
    max_limit_amount: float
    max_market_amount: Optional[float]
    max_twap_size: float
    max_iceberg_size: float
    max_trigger_size: float
    max_stop_size: float

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "OkexInstrument":
        """Build from one decoded entry of the API's ``data`` list."""
        return cls(
            alias=_str(data, "alias"),
            base_currency=_opt_str(data, "baseCcy"),
            quote_currency=_opt_str(data, "quoteCcy"),
            instrument_type=NormalizedTradingType.parse(_str(data, "instType")),
            instrument=OkexTradingPair(_str(data, "instId")),
            underlying=_opt_str(data, "uly"),
            instrument_family=_opt_str(data, "instFamily"),
            settlement_currency=_opt_str(data, "settleCcy"),
            contract_value=_opt_parsed(data, "ctVal", float),
            contract_multiplier=_opt_parsed(data, "ctMult", _u64),
            contract_currency=_opt_str(data, "ctValCcy"),
            option_type=_opt_str(data, "optType"),
            strike_price=_opt_str(data, "stk"),
            listing_time=_parsed(data, "listTime", _u64),
            expiry_time=_opt_parsed(data, "expTime", _u64),
            leverage=_opt_parsed(data, "lever", _u64),
            tick_size=_opt_parsed(data, "tickSz", float),
            lot_size=_parsed(data, "lotSz", float),
            minimum_size=_parsed(data, "minSz", float),
            contract_type=_opt_str(data, "ctType"),
            state=_str(data, "state"),
            max_limit_size=_parsed(data, "maxLmtSz", float),
            max_market_size=_parsed(data, "maxMktSz", float),
            max_limit_amount=_parsed(data, "maxLmtAmt", float),
            max_market_amount=_opt_parsed(data, "maxMktAmt", float),
            max_twap_size=_parsed(data, "maxTwapSz", float),
            max_iceberg_size=_parsed(data, "maxIcebergSz", float),
            max_trigger_size=_parsed(data, "maxTriggerSz", float),
            max_stop_size=_parsed(data, "maxStopSz", float),
        )

    def _base_symbol(self) -> str:
        symbol = self.base_currency if self.base_currency is not None else self.contract_currency
        if symbol is None:
            raise ValueError(f"instrument '{self.instrument}' has neither a base nor a contract currency")
        return symbol

    def _quote_symbol(self) -> str:
        symbol = self.quote_currency if self.quote_currency is not None else self.settlement_currency
        if symbol is None:
            raise ValueError(f"instrument '{self.instrument}' has neither a quote nor a settlement currency")
        return symbol

    def normalize(self) -> NormalizedInstrument:
        """The instrument in normalized form."""
        expiry: Optional[date] = None
        if self.expiry_time is not None:
            expiry = (_EPOCH + timedelta(milliseconds=self.expiry_time)).date()
        return NormalizedInstrument(
            exchange=OKEX,
            trading_pair=self.instrument.normalize(),
            trading_type=self.instrument_type,
            base_asset_symbol=self._base_symbol(),
            quote_asset_symbol=self._quote_symbol(),
            active=self.state == "live",
            futures_expiry=expiry,
        )

    def matches_normalized(self, other: NormalizedInstrument) -> bool:
        """True if ``other`` describes this instrument."""
        equals = (
            other.exchange == OKEX
            and other.trading_pair == self.instrument.normalize()
            and other.trading_type == self.instrument_type
            and other.base_asset_symbol == self._base_symbol()
            and other.quote_asset_symbol == self._quote_symbol()
            and other.active == (self.state == "live")
        )
        if not equals:
            logger.warning("okex instrument: %r", self)
            logger.warning("normalized instrument: %r", other)
        return equals


@dataclass
class OkexAllInstruments:
    """The instruments returned by one or more instrument requests."""

    instruments: list[OkexInstrument] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "OkexAllInstruments":
        """Build from a decoded API response with a ``data`` list."""
        entries = _required(data, "data")
        if not isinstance(entries, list):
            raise ValueError("field 'data' must be a list")
        return cls([OkexInstrument.from_json(entry) for entry in entries])

    def normalize(self) -> list[NormalizedInstrument]:
        return [instr.normalize() for instr in self.instruments]

    def matches_normalized(self, other: NormalizedRestApiData) -> bool:
        """True if ``other`` lists these instruments, in any order."""
        if other.request is not NormalizedRestApiRequest.ALL_INSTRUMENTS:
            return False
        ours = sorted(self.instruments, key=lambda i: (i._base_symbol(), i._quote_symbol()))
        theirs = sorted(other.values, key=lambda i: (i.base_asset_symbol, i.quote_asset_symbol))
        return len(ours) == len(theirs) and all(
            mine.matches_normalized(that) for mine, that in zip(ours, theirs)
        )


@dataclass
class OkexCurrency:
    """A currency listed on Okex, taken from a proxy exchange's listing."""

    exchange: Hashable
    symbol: str
    name: str
    display_name: Optional[str] = None
    status: str = ""
    blockchains: list[BlockchainCurrency] = field(default_factory=list)

    @classmethod
    def from_normalized(cls, currency: NormalizedCurrency) -> "OkexCurrency":
        return cls(
            exchange=currency.exchange,
            symbol=currency.symbol,
            name=currency.name,
            display_name=currency.display_name,
            status=currency.status,
            blockchains=list(currency.blockchains),
        )

    def normalize(self) -> NormalizedCurrency:
        return NormalizedCurrency(
            exchange=self.exchange,
            symbol=self.symbol,
            name=self.name,
            display_name=self.display_name,
            status=self.status,
            blockchains=list(self.blockchains),
        )

    def matches_normalized(self, other: NormalizedCurrency) -> bool:
        """True if ``other`` is this currency as listed on Okex."""
        equals = (
            other.exchange == OKEX
            and other.symbol == self.symbol
            and other.name == self.name
            and other.display_name == self.display_name
            and other.status == self.status
            and other.blockchains == self.blockchains
        )
        if not equals:
            logger.warning("okex currency: %r", self)
            logger.warning("normalized currency: %r", other)
        return equals


def _instrument_symbols(instr: OkexInstrument) -> tuple[Optional[str], ...]:
    return (
        instr.base_currency,
        instr.quote_currency,
        instr.contract_currency,
        instr.settlement_currency,
    )


@dataclass
class OkexAllSymbols:
    """The currencies traded on Okex."""

    currencies: list[OkexCurrency] = field(default_factory=list)

    @classmethod
    def from_proxy(
        cls, currencies: Sequence[NormalizedCurrency], instruments: Sequence[OkexInstrument]
    ) -> "OkexAllSymbols":
        """Keep the proxy's currencies that appear in some Okex instrument."""
        kept = []
        for curr in currencies:
            wanted = curr.symbol.upper()
            if any(
                symbol is not None and symbol.upper() == wanted
                for instr in instruments
                for symbol in _instrument_symbols(instr)
            ):
                kept.append(OkexCurrency.from_normalized(replace(curr, exchange=OKEX)))
        return cls(kept)

    def normalize(self) -> list[NormalizedCurrency]:
        """Normalized currencies, with wrapped assets folded into their originals."""
        return handle_unwrapped([curr.normalize() for curr in self.currencies])

    def matches_normalized(self, other: NormalizedRestApiData) -> bool:
        """True for any currency listing, False for anything else."""
        return other.request is NormalizedRestApiRequest.ALL_CURRENCIES


@dataclass
class OkexRestApiResponse:
    """The answer to an Okex REST request: symbols or instruments."""

    data: Union[OkexAllSymbols, OkexAllInstruments]

    def normalize(self) -> NormalizedRestApiData:
        if isinstance(self.data, OkexAllSymbols):
            return NormalizedRestApiData(NormalizedRestApiRequest.ALL_CURRENCIES, self.data.normalize())
        return NormalizedRestApiData(NormalizedRestApiRequest.ALL_INSTRUMENTS, self.data.normalize())

    def take_currencies(self) -> Optional[list[OkexCurrency]]:
        """The currencies, or None if this holds instruments."""
        if isinstance(self.data, OkexAllSymbols):
            return self.data.currencies
        return None

    def take_instruments(self, active_only: bool) -> Optional[list[OkexInstrument]]:
        """The live instruments when ``active_only``; None otherwise or for currencies."""
        if not isinstance(self.data, OkexAllInstruments):
            return None
        if not active_only:
            return None
        return [instr for instr in self.data.instruments if instr.state.lower() == "live"]

    def matches_normalized(self, other: NormalizedRestApiData) -> bool:
        return self.data.matches_normalized(other)