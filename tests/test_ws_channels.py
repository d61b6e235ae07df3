import pytest

from cexnorm.pairs import DelimitedPair, SplitPair, UndelimitedPair
from cexnorm.ws_channels import NormalizedWsChannel, NormalizedWsChannelKind

RAW = [SplitPair("eth", "usdc"), DelimitedPair("btc-usdt", "-"), UndelimitedPair("solusdc")]


@pytest.mark.parametrize("kind", list(NormalizedWsChannelKind))
def test_new_default_is_empty(kind):
    channel = NormalizedWsChannel.new_default(kind)
    assert channel.kind is kind
    assert channel.pairs == []
    assert channel.depth is None
    assert channel.update_speed == 100


def test_new_with_pairs_normalizes():
    channel = NormalizedWsChannel.new_with_pairs("Okex", NormalizedWsChannelKind.TRADES, RAW)
    assert channel.pairs == [p.get_normalized_pair("Okex") for p in RAW]


def test_new_with_pairs_l2_config():
    channel = NormalizedWsChannel.new_with_pairs("Okex", NormalizedWsChannelKind.L2, RAW[:1], (5, 10))
    assert (channel.depth, channel.update_speed) == (5, 10)
    default = NormalizedWsChannel.new_with_pairs("Okex", NormalizedWsChannelKind.L2, RAW[:1])
    assert (default.depth, default.update_speed) == (None, 100)


def test_non_l2_ignores_l2_config():
    channel = NormalizedWsChannel.new_with_pairs("Okex", NormalizedWsChannelKind.QUOTES, RAW, (5, 10))
    assert channel == NormalizedWsChannel.new_with_pairs("Okex", NormalizedWsChannelKind.QUOTES, RAW)


def test_make_many_single_splits_per_pair():
    channel = NormalizedWsChannel.new_with_pairs("Okex", NormalizedWsChannelKind.L2, RAW, (5, 10))
    singles = channel.make_many_single()
    assert len(singles) == len(RAW)
    assert [s.pairs[0] for s in singles] == channel.pairs
    assert all(len(s.pairs) == 1 for s in singles)
    assert all((s.kind, s.depth, s.update_speed) == (channel.kind, 5, 10) for s in singles)


def test_add_pairs_extends():
    channel = NormalizedWsChannel.new_default(NormalizedWsChannelKind.QUOTES)
    channel.add_pairs("Okex", RAW[:2])
    channel.add_pairs("Okex", RAW[2:])
    assert channel.pairs == [p.get_normalized_pair("Okex") for p in RAW]