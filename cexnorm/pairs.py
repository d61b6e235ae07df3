"""Normalized and raw trading pairs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional, Union


@dataclass(frozen=True)
class NormalizedTradingPair:
    """A trading pair as seen on one exchange."""

    exchange: Hashable
    pair: Optional[str] = None
    base_quote: Optional[tuple[str, str]] = None
    delimiter: Optional[str] = None

    @classmethod
    def new_base_quote(
        cls,
        exchange: Hashable,
        base: str,
        quote: str,
        delimiter: Optional[str] = None,
        extra_data: Optional[str] = None,
    ) -> "NormalizedTradingPair":
        """Build from base and quote; extra data is e.g. '240201' in 'BTC-USD-240201'."""
        base, quote = base.upper(), quote.upper()
        parts = [base, quote]
        if extra_data is not None:
            parts.append(extra_data.upper())
        pair = (delimiter or "").join(parts)
        return cls(exchange=exchange, pair=pair, base_quote=(base, quote), delimiter=delimiter)

    @classmethod
    def new_no_base_quote(cls, exchange: Hashable, pair: str) -> "NormalizedTradingPair":
        """Build from a raw pair that cannot be split."""
        return cls(exchange=exchange, pair=pair.upper())

    @property
    def base(self) -> Optional[str]:
        return self.base_quote[0] if self.base_quote else None

    @property
    def quote(self) -> Optional[str]:
        return self.base_quote[1] if self.base_quote else None

    def make_pair(self) -> str:
        """The pair as a single string."""
        if self.pair is not None:
            return self.pair
        if self.base_quote is not None:
            base, quote = self.base_quote
            return f"{base.upper()}{self.delimiter or ''}{quote.upper()}"
        raise ValueError("trading pair has neither a pair nor a base and quote")

    def extra_data(self) -> Optional[str]:
        """Whatever follows base and quote in the pair, if anything."""
        if self.pair is None or self.base_quote is None:
            return None
        base, quote = self.base_quote
        if self.delimiter is not None:
            rest = self.pair.replace(f"{base}{self.delimiter}{quote}", "")
            return rest[1:] if rest else None
        rest = self.pair.replace(f"{base}{quote}", "")
        return rest or None

    def __str__(self) -> str:
        return f"{self.make_pair()}\n"


@dataclass(frozen=True)
class SplitPair:
    """A pair given as base and quote, e.g. ('ETH', 'USDC', '241202')."""

    base: str
    quote: str
    extra_data: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", self.base.upper())
        object.__setattr__(self, "quote", self.quote.upper())
        if self.extra_data is not None:
            object.__setattr__(self, "extra_data", self.extra_data.upper())

    def get_normalized_pair(self, exchange: Hashable) -> NormalizedTradingPair:
        return NormalizedTradingPair.new_base_quote(exchange, self.base, self.quote, None, self.extra_data)


@dataclass(frozen=True)
class DelimitedPair:
    """A pair with a delimiter, e.g. ('ETH_USDC', '_')."""

    pair: str
    delimiter: str

    def __post_init__(self) -> None:
        if self.delimiter in ("", "\0"):
            raise ValueError("delimiter cannot be empty/null - use UndelimitedPair instead")
        object.__setattr__(self, "pair", self.pair.upper())

    def get_normalized_pair(self, exchange: Hashable) -> NormalizedTradingPair:
        base, sep, rest = self.pair.partition(self.delimiter)
        if not sep:
            raise ValueError(f"pair '{self.pair}' does not contain delimiter '{self.delimiter}'")
        quote, _, extra = rest.partition(self.delimiter)
        has_extra = rest.count(self.delimiter) > 0
        return NormalizedTradingPair.new_base_quote(
            exchange, base, quote, self.delimiter, extra if has_extra else None
        )


@dataclass(frozen=True)
class UndelimitedPair:
    """A raw pair without a delimiter, e.g. 'ETHUSDC'."""

    pair: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "pair", self.pair.upper())

    def get_normalized_pair(self, exchange: Hashable) -> NormalizedTradingPair:
        return NormalizedTradingPair.new_no_base_quote(exchange, self.pair)


RawTradingPair = Union[SplitPair, DelimitedPair, UndelimitedPair]


def raw_from_normalized(pair: NormalizedTradingPair) -> RawTradingPair:
    """Turn a normalized pair back into its raw form."""
    if pair.base_quote is not None:
        base, quote = pair.base_quote
        return SplitPair(base, quote, pair.extra_data())
    if pair.pair is not None:
        if pair.delimiter is not None:
            return DelimitedPair(pair.pair, pair.delimiter)
        return UndelimitedPair(pair.pair)
    raise ValueError("normalized trading pair has neither a pair nor a base and quote")