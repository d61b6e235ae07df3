import pytest

from cexnorm.currencies import NormalizedCurrency
from cexnorm.filters import AnyOfFilters
from cexnorm.instruments import (
    InstrumentFilter,
    NormalizedInstrument,
    NormalizedTradingType,
)
from cexnorm.pairs import NormalizedTradingPair


def make_instrument(base="ETH", quote="USDC", active=True):
    return NormalizedInstrument(
        exchange="Okex",
        trading_pair=NormalizedTradingPair.new_base_quote("Okex", base, quote, "-", None),
        trading_type=NormalizedTradingType.SPOT,
        base_asset_symbol=base,
        quote_asset_symbol=quote,
        active=active,
    )


@pytest.mark.parametrize(
    "label, expected",
    [
        ("spot", NormalizedTradingType.SPOT),
        ("SPOT", NormalizedTradingType.SPOT),
        ("perp", NormalizedTradingType.PERPETUAL),
        ("swap", NormalizedTradingType.PERPETUAL),
        ("linear", NormalizedTradingType.PERPETUAL),
        ("inverse", NormalizedTradingType.PERPETUAL),
        ("Perpetual", NormalizedTradingType.PERPETUAL),
        ("futures", NormalizedTradingType.FUTURES),
        ("margin", NormalizedTradingType.MARGIN),
        ("option", NormalizedTradingType.OPTION),
    ],
)
def test_parse_aliases(label, expected):
    assert NormalizedTradingType.parse(label) is expected


@pytest.mark.parametrize("label", ["rfq", "other", "", "spots"])
def test_parse_rejects_unknown(label):
    with pytest.raises(ValueError, match="is not a valid trading type"):
        NormalizedTradingType.parse(label)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (NormalizedTradingType.SPOT, "SPOT"),
        (NormalizedTradingType.PERPETUAL, "SWAP"),
        (NormalizedTradingType.MARGIN, "MARGIN"),
        (NormalizedTradingType.FUTURES, "FUTURES"),
        (NormalizedTradingType.RFQ, None),
        (NormalizedTradingType.OPTION, None),
        (NormalizedTradingType.OTHER, None),
    ],
)
def test_fmt_okex(kind, expected):
    assert kind.fmt_okex() == expected


@pytest.mark.parametrize(
    "kind",
    [
        NormalizedTradingType.SPOT,
        NormalizedTradingType.PERPETUAL,
        NormalizedTradingType.MARGIN,
        NormalizedTradingType.FUTURES,
        NormalizedTradingType.OPTION,
    ],
)
def test_display_round_trips(kind):
    text = str(kind)
    assert text == text.upper()
    assert NormalizedTradingType.parse(text) is kind


def test_pair_filter_on_instrument():
    instrument = make_instrument()
    assert InstrumentFilter.pair(instrument.trading_pair.make_pair()).matches(instrument)
    assert not InstrumentFilter.pair("BTC-USDC").matches(instrument)


def test_symbol_filters_on_instrument():
    instrument = make_instrument("ETH", "USDC")
    assert InstrumentFilter.base_or_quote("USDC").matches(instrument)
    assert InstrumentFilter.base_or_quote("ETH").matches(instrument)
    assert not InstrumentFilter.base_or_quote("BTC").matches(instrument)
    assert InstrumentFilter.base_and_quote("ETH", "USDC").matches(instrument)
    assert not InstrumentFilter.base_and_quote("USDC", "ETH").matches(instrument)
    assert InstrumentFilter.base_only("ETH").matches(instrument)
    assert not InstrumentFilter.base_only("USDC").matches(instrument)
    assert InstrumentFilter.quote_only("USDC").matches(instrument)
    assert not InstrumentFilter.quote_only("ETH").matches(instrument)


def test_active_filter_on_instrument():
    assert InstrumentFilter.active().matches(make_instrument(active=True))
    assert not InstrumentFilter.active().matches(make_instrument(active=False))


def test_filters_on_currency():
    currency = NormalizedCurrency(exchange="Okex", symbol="ETH", name="Ethereum")
    assert InstrumentFilter.base_or_quote("ETH").matches(currency)
    assert InstrumentFilter.base_only("ETH").matches(currency)
    assert InstrumentFilter.quote_only("ETH").matches(currency)
    assert not InstrumentFilter.quote_only("BTC").matches(currency)
    assert not InstrumentFilter.base_and_quote("ETH", "USDC").matches(currency)
    assert not InstrumentFilter.pair("ETH").matches(currency)
    assert InstrumentFilter.active().matches(currency)


def test_filter_matches_in_place_with_any_of():
    eth = make_instrument("ETH", "USDC")
    btc = make_instrument("BTC", "USDT")
    sol = make_instrument("SOL", "EUR", active=False)
    vals = [eth, btc, sol]
    AnyOfFilters((InstrumentFilter.base_only("BTC"), InstrumentFilter.quote_only("EUR"))).filter_matches(vals)
    assert vals == [btc, sol]