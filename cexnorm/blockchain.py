"""Blockchains that currencies can live on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

KNOWN_BLOCKCHAINS: tuple[str, ...] = (
    "Bitcoin", "Ethereum", "Solana", "Cardano", "Base", "Akash", "Algorand",
    "Aptos", "Arbitrum", "Cosmos", "Avalanche", "Axelar", "BitcoinCash",
    "Optimism", "Polygon", "Celo", "Dash", "Deso", "Dogecoin", "Polkadot",
    "Elrond", "Eosio", "EthereumClassic", "Filecoin", "Flow", "Flare",
    "Hedera", "Dfinity", "Kava", "Kusama", "Litecoin", "Mina", "Near",
    "Osmosis", "Ronin", "Oasis", "Sei", "Stacks", "Sui", "Celestia", "Noble",
    "Vara", "VeChain", "Stellar", "Ripple", "Tezos", "Zcash", "Horizen",
    "Icp", "Injective", "Tron", "Loki", "Energi", "Monero", "RSK",
    "BinanceSmartChain", "TRTL", "KucoinCommunityChain", "Komodo", "Nix",
    "ThunderCore", "Nimiq", "Coti", "Pivx", "NEM", "Sero", "EOSForce",
)

_ALIASES: dict[str, tuple[str, ...]] = {
    "Ethereum": ("eth", "ethereum", "erc20"),
    "Solana": ("sol", "solana"),
    "Bitcoin": ("btx", "bitcoin", "ordinals - brc20"),
    "Cardano": ("ada", "cardano"),
    "Base": ("base",),
    "Akash": ("akash",),
    "Algorand": ("algo", "algorand"),
    "Aptos": ("apt", "aptos"),
    "Arbitrum": ("arb", "arbitrum"),
    "Cosmos": ("atom", "cosmos"),
    "Avalanche": ("avax", "avacchain", "avalanche", "avalanche c-chain"),
    "Axelar": ("axl", "axelar"),
    "BitcoinCash": ("bch", "bitcoin cash"),
    "Optimism": ("op", "optimism"),
    "Polygon": ("matic", "polygon"),
    "Celo": ("celo",),
    "Dash": ("dash",),
    "Deso": ("deso",),
    "Dogecoin": ("doge", "dogecoin"),
    "Polkadot": ("dot", "polkadot"),
    "Elrond": ("elrond",),
    "Eosio": ("eosio",),
    "EthereumClassic": ("etc", "ethereumclassic", "ethereum classic"),
    "Filecoin": ("fil", "filecoin"),
    "Flow": ("flow",),
    "Flare": ("flare",),
    "Hedera": ("hbar", "hedera"),
    "Dfinity": ("dfinity",),
    "Kava": ("kava",),
    "Kusama": ("ksm", "kusama"),
    "Litecoin": ("ltc", "litecoin"),
    "Mina": ("mina",),
    "Near": ("near",),
    "Osmosis": ("osmo", "osmosis"),
    "Ronin": ("ronin",),
    "Oasis": ("oasis",),
    "Sei": ("sei",),
    "Stacks": ("stacks",),
    "Sui": ("sui", "sui network"),
    "Celestia": ("celestia",),
    "Noble": ("noble",),
    "Vara": ("vara",),
    "VeChain": ("vet", "vechain"),
    "Stellar": ("xlm", "stellar"),
    "Ripple": ("xrp", "ripple"),
    "Tezos": ("xtz", "tezos"),
    "Zcash": ("zec", "zcash"),
    "Horizen": ("zen", "horizen"),
    "Icp": ("icp",),
    "Injective": ("inj", "injective"),
    "Tron": ("trx", "tron20"),
    "Loki": ("loki",),
    "Energi": ("nrg",),
    "Monero": ("xmr",),
    "RSK": ("rbtc",),
    "BinanceSmartChain": ("bep20", "bep2"),
    "TRTL": ("trtl",),
    "KucoinCommunityChain": ("kcc",),
    "Komodo": ("kmd",),
    "Nix": ("nix",),
    "ThunderCore": ("tt",),
    "Nimiq": ("nim",),
    "Coti": ("coti",),
    "Pivx": ("pivx",),
    "NEM": ("nem",),
    "Sero": ("sero",),
    "EOSForce": ("eosc",),
}

_BY_ALIAS: dict[str, str] = {
    alias: name for name, aliases in _ALIASES.items() for alias in aliases
}


@dataclass(frozen=True)
class Blockchain:
    """A blockchain: one of the known chains, or any other named chain."""

    name: str
    other: bool = False

    def __post_init__(self) -> None:
        if not self.other and self.name not in KNOWN_BLOCKCHAINS:
            raise ValueError(f"'{self.name}' is not a known blockchain")

    def __str__(self) -> str:
        return self.name

    def matches(self, val: Any) -> bool:
        """Filter hook: True if the currency ``val`` lives on this chain."""
        return val.has_blockchain(self)


def parse_blockchain(text: str) -> Blockchain:
    """Map an exchange's chain label to a :class:`Blockchain`; never fails."""
    name = _BY_ALIAS.get(text.lower())
    if name is None:
        return Blockchain(text, other=True)
    return Blockchain(name)