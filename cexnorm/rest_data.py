"""Normalized results of REST API requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .currencies import NormalizedCurrency
from .filters import ExchangeFilter
from .instruments import NormalizedInstrument


class NormalizedRestApiRequest(Enum):
    """The REST calls every exchange supports."""

    ALL_CURRENCIES = "AllCurrencies"
    ALL_INSTRUMENTS = "AllInstruments"


@dataclass
class NormalizedRestApiData:
    """The normalized answer to a :class:`NormalizedRestApiRequest`."""

    request: NormalizedRestApiRequest
    values: list[Any] = field(default_factory=list)

    def _take(
        self, kind: NormalizedRestApiRequest, filter: Optional[ExchangeFilter]
    ) -> Optional[list[Any]]:
        if self.request is not kind:
            return None
        vals = list(self.values)
        if filter is not None:
            filter.filter_matches(vals)
        return vals

    def take_currencies(
        self, filter: Optional[ExchangeFilter] = None
    ) -> Optional[list[NormalizedCurrency]]:
        """The currencies that pass ``filter``, or None if this holds instruments."""
        return self._take(NormalizedRestApiRequest.ALL_CURRENCIES, filter)

    def take_instruments(
        self, filter: Optional[ExchangeFilter] = None
    ) -> Optional[list[NormalizedInstrument]]:
        """The instruments that pass ``filter``, or None if this holds currencies."""
        return self._take(NormalizedRestApiRequest.ALL_INSTRUMENTS, filter)