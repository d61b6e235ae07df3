"""Okex trading pairs, written as BASE-QUOTE[-EXTRA]."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .pairs import NormalizedTradingPair

OKEX = "Okex"


@dataclass(frozen=True, order=True)
class OkexTradingPair:
    """An Okex instrument id such as 'BTC-USD-240201'."""

    value: str

    def normalize(self) -> NormalizedTradingPair:
        """The pair in normalized form, with '-' as delimiter."""
        base, quote, *extra = self.value.split("-")
        extra_data = "-".join(extra) if extra else None
        return NormalizedTradingPair.new_base_quote(OKEX, base, quote, "-", extra_data)

    def __str__(self) -> str:
        return self.value


def is_valid_okex_pair(text: str) -> bool:
    """True if ``text`` has a '-' and neither '_' nor '/'."""
    return "-" in text and "_" not in text and "/" not in text


def _checked(text: str, uppercase: bool = False) -> OkexTradingPair:
    if not is_valid_okex_pair(text):
        raise ValueError(
            f"INVALID Okex trading pair '{text}' contains either: "
            "1) '_', and/or '/' - OR -  2) no '-'"
        )
    return OkexTradingPair(text.upper() if uppercase else text)


def _attempt(text: str) -> Optional[OkexTradingPair]:
    try:
        return _checked(text)
    except ValueError:
        return None


def parse_for_bad_pair(value: str) -> Optional[OkexTradingPair]:
    """Find the pair named after 'instId:' in an Okex error message."""
    parts = value.split("instId:")
    if len(parts) < 2:
        return None
    candidate = parts[1].split(" ")[0]
    try:
        return _checked(candidate, uppercase=True)
    except ValueError:
        return None


def okex_pair_from_normalized(pair: NormalizedTradingPair) -> OkexTradingPair:
    """Convert a normalized pair into an Okex pair; raises ValueError if impossible."""
    if pair.base_quote is not None:
        base, quote = pair.base_quote
        joined = f"{base}-{quote}"
        if pair.pair is None or len(joined) == len(pair.pair):
            found = _attempt(joined)
            if found is not None:
                return found
        elif pair.delimiter is None:
            rest = pair.pair.replace(f"{base}{quote}", "")
            found = _attempt(f"{joined}-{rest}" if rest else joined)
            if found is not None:
                return found

    raw = pair.pair
    if raw is not None:
        found = _attempt(raw)
        if found is not None:
            return found

        if pair.delimiter:
            parts = raw.split(pair.delimiter)
            if len(parts) >= 2:
                base, quote, extra = parts[0].upper(), parts[1].upper(), parts[2:]
                candidate = f"{base}-{quote}-{'-'.join(extra)}" if extra else f"{base}-{quote}"
                found = _attempt(candidate)
                if found is not None:
                    return found

        found = _attempt(raw.replace("_", "-").replace("/", "-"))
        if found is not None:
            return found

        raise ValueError(f"INVALID Okex trading pair: '{raw}' contains no '-'")

    raise ValueError(f"INVALID Okex trading pair: '{pair!r}'")