"""Normalized currencies and wrapped-asset merging."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, replace
from typing import Hashable, Optional

from .blockchain import Blockchain


@dataclass
class WrappedCurrency:
    """The wrapped form of a currency."""

    symbol: str
    name: str


@dataclass
class BlockchainCurrency:
    """A currency's presence on one blockchain."""

    blockchain: Blockchain
    address: Optional[str] = None
    is_wrapped: bool = False
    wrapped_currency: Optional[WrappedCurrency] = None


@dataclass
class NormalizedCurrency:
    """A currency listed on an exchange."""

    exchange: Hashable
    symbol: str
    name: str
    display_name: Optional[str] = None
    status: str = ""
    blockchains: list[BlockchainCurrency] = field(default_factory=list)

    @property
    def is_wrapped(self) -> bool:
        return any(b.is_wrapped for b in self.blockchains)

    def has_blockchain(self, chain: Blockchain) -> bool:
        """True if the currency lives on ``chain``."""
        return any(b.blockchain == chain for b in self.blockchains)

    def combine_wrapped_assets(
        self, unwrapped_currencies: list["NormalizedCurrency"]
    ) -> tuple["NormalizedCurrency", Optional["NormalizedCurrency"]]:
        """Merge this wrapped currency into its unwrapped counterpart.

        Returns the merged currency and the unwrapped one it replaces, or a
        copy of this currency and None if no counterpart is found.
        """
        unwrapped_name = self.name.lower().replace("wrapped", "").strip()
        unwrapped_symbol = self.symbol[1:]

        match = next(
            (
                c
                for c in unwrapped_currencies
                if c.name.lower() == unwrapped_name and c.symbol == unwrapped_symbol
            ),
            None,
        )
        if match is None:
            return deepcopy(self), None

        wrapped_chains = deepcopy(self.blockchains)
        for chain in wrapped_chains:
            if chain.is_wrapped:
                chain.wrapped_currency = WrappedCurrency(symbol=self.symbol, name=self.name)

        merged = replace(deepcopy(match), blockchains=deepcopy(match.blockchains) + wrapped_chains)
        return merged, deepcopy(match)


def handle_unwrapped(currencies: list[NormalizedCurrency]) -> list[NormalizedCurrency]:
    """Deduplicate currencies by folding wrapped assets into unwrapped ones."""
    unwrapped = [c for c in currencies if not c.is_wrapped]
    to_remove: list[NormalizedCurrency] = []
    merged: list[NormalizedCurrency] = []

    for curr in currencies:
        if not curr.is_wrapped:
            continue
        new, removed = curr.combine_wrapped_assets(unwrapped)
        if removed is not None:
            to_remove.extend([removed, curr])
            merged.append(new)

    return [c for c in currencies if c not in to_remove] + merged