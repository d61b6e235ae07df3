import json

import pytest

from cexnorm.okex_pairs import OKEX, OkexTradingPair
from cexnorm.okex_ticks import OkexTicker, OkexTrade
from cexnorm.okex_ws import (
    OkexSubscription,
    OkexWsChannel,
    OkexWsChannelKind,
    OkexWsMessageKind,
    parse_okex_ws_message,
)
from cexnorm.pairs import DelimitedPair, NormalizedTradingPair, SplitPair
from cexnorm.ws_channels import (
    NormalizedWsChannel,
    NormalizedWsChannelKind,
    WsOther,
    WsRemovedPair,
)

BAD_PAIR_MSG = (
    "Wrong URL or channel:tickers,instId:NMR-USDT doesn't exist. Please use the correct URL, "
    "channel and parameters referring to API document."
)


def trade_entry():
    return {
        "instId": "BTC-USDT",
        "px": "42000.5",
        "sz": "0.25",
        "tradeId": "130639474",
        "side": "BUY",
        "ts": "1700000000000",
    }


def ticker_entry(ask_px="42001.0", ask_sz="1.5", bid_px="42000.0", bid_sz="2.0"):
    return {
        "instType": "SPOT",
        "instId": "BTC-USDT",
        "last": "42000.5",
        "lastSz": "0.1",
        "askPx": ask_px,
        "askSz": ask_sz,
        "bidPx": bid_px,
        "bidSz": bid_sz,
        "open24h": "41000",
        "high24h": "43000",
        "low24h": "40000",
        "volCcy24h": "1000",
        "vol24h": "10",
        "sodUtc0": "41500",
        "sodUtc8": "41600",
        "ts": "1700000000000",
    }


def test_channel_from_name():
    assert OkexWsChannel.from_name("trades-all").kind is OkexWsChannelKind.TRADES_ALL
    assert OkexWsChannel.from_name("TICKERS").kind is OkexWsChannelKind.BOOK_TICKER
    with pytest.raises(ValueError, match="channel is not valid"):
        OkexWsChannel.from_name("books")


def test_channel_names():
    assert str(OkexWsChannel(OkexWsChannelKind.TRADES_ALL)) == "trades-all"
    assert str(OkexWsChannel(OkexWsChannelKind.BOOK_TICKER)) == "tickers"
    assert str(OkexWsChannelKind.BOOK_TICKER) == "bookTicker"


def test_new_trade_from_raw_pairs():
    channel = OkexWsChannel.new_trade([DelimitedPair("eth_usdc", "_"), SplitPair("btc", "usdt")])
    assert channel.kind is OkexWsChannelKind.TRADES_ALL
    assert channel.pairs == [OkexTradingPair("ETH-USDC"), OkexTradingPair("BTC-USDT")]
    assert channel.count_entries() == 2


def test_new_quote_kind_and_pairs():
    channel = OkexWsChannel.new_quote([SplitPair("eth", "usdc")])
    assert channel.kind is OkexWsChannelKind.BOOK_TICKER
    assert channel.pairs == [OkexTradingPair("ETH-USDC")]


def test_new_from_normalized_keeps_kind():
    base = OkexWsChannel(OkexWsChannelKind.BOOK_TICKER, [OkexTradingPair("A-B")])
    pair = NormalizedTradingPair.new_base_quote(OKEX, "eth", "usdc", "-", None)
    result = base.new_from_normalized([pair])
    assert result.kind is OkexWsChannelKind.BOOK_TICKER
    assert result.pairs == [OkexTradingPair("ETH-USDC")]


def test_from_normalized_channel():
    trades = NormalizedWsChannel.new_with_pairs(OKEX, NormalizedWsChannelKind.TRADES, [SplitPair("eth", "usdc")])
    quotes = NormalizedWsChannel.new_with_pairs(OKEX, NormalizedWsChannelKind.QUOTES, [SplitPair("eth", "usdc")])
    converted = OkexWsChannel.from_normalized_channel(trades)
    assert converted == OkexWsChannel(OkexWsChannelKind.TRADES_ALL, [OkexTradingPair("ETH-USDC")])
    assert OkexWsChannel.from_normalized_channel(quotes).kind is OkexWsChannelKind.BOOK_TICKER
    with pytest.raises(NotImplementedError):
        OkexWsChannel.from_normalized_channel(NormalizedWsChannel.new_default(NormalizedWsChannelKind.L2))


def test_subscription_deduplicates_and_serializes():
    channel = OkexWsChannel(
        OkexWsChannelKind.BOOK_TICKER, [OkexTradingPair("BTC-USDT"), OkexTradingPair("BTC-USDT")]
    )
    sub = OkexSubscription.new_single_channel(channel)
    assert sub.to_json() == '{"op":"subscribe","args":[{"channel":"tickers","instId":"BTC-USDT"}]}'
    assert not sub.needs_business_ws()


def test_subscription_business_ws():
    sub = OkexSubscription()
    sub.add_channel(OkexWsChannel(OkexWsChannelKind.BOOK_TICKER, [OkexTradingPair("ETH-USDC")]))
    assert not sub.needs_business_ws()
    sub.add_channel(OkexWsChannel(OkexWsChannelKind.TRADES_ALL, [OkexTradingPair("ETH-USDC")]))
    assert sub.needs_business_ws()
    decoded = json.loads(sub.to_json())
    assert [a["channel"] for a in decoded["args"]] == ["tickers", "trades-all"]


def test_subscription_remove_pair():
    sub = OkexSubscription()
    sub.add_channel(
        OkexWsChannel(OkexWsChannelKind.TRADES_ALL, [OkexTradingPair("ETH-USDC"), OkexTradingPair("BTC-USDT")])
    )
    assert sub.remove_pair(OkexTradingPair("ETH-USDC")) is False
    assert len(sub.args) == 1
    assert sub.remove_pair(OkexTradingPair("BTC-USDT")) is True
    assert sub.args == []


def test_parse_trade_message():
    raw = {"arg": {"channel": "trades-all", "instId": "BTC-USDT"}, "data": [trade_entry()]}
    msg = parse_okex_ws_message(raw)
    assert msg.kind is OkexWsMessageKind.TRADES_ALL
    assert msg.data == OkexTrade.from_json(trade_entry())
    normalized = msg.normalize()
    assert normalized == OkexTrade.from_json(trade_entry()).normalize()
    assert msg.matches_normalized(normalized)
    assert not msg.matches_normalized(WsOther(OKEX, "x", ""))


def test_parse_from_json_text_matches_dict():
    raw = {"arg": {"channel": "trades-all"}, "data": [trade_entry()]}
    assert parse_okex_ws_message(json.dumps(raw)) == parse_okex_ws_message(raw)


def test_parse_ticker_with_numbers():
    entry = ticker_entry(ask_px=42001.0, ask_sz=1.5, bid_px=42000.0, bid_sz=2.0)
    msg = parse_okex_ws_message({"arg": {"channel": "tickers"}, "data": [entry]})
    assert msg.kind is OkexWsMessageKind.TICKERS
    quotes = msg.normalize()
    assert quotes == [OkexTicker.from_json(entry).normalize()]
    assert msg.matches_normalized(quotes)
    assert not msg.matches_normalized([])


def test_parse_ticker_with_string_prices_has_no_quote():
    msg = parse_okex_ws_message({"arg": {"channel": "tickers"}, "data": [ticker_entry()]})
    assert msg.normalize() == []
    assert msg.matches_normalized([])


def test_subscribe_event():
    raw = {"event": "subscribe", "arg": {"channel": "tickers", "instId": "BTC-USDT"}}
    msg = parse_okex_ws_message(raw)
    assert msg.kind is OkexWsMessageKind.SUBSCRIBE
    assert msg.data == raw
    normalized = msg.normalize()
    assert isinstance(normalized, WsOther) and normalized.kind == "Subscribe"
    assert msg.matches_normalized(normalized)


def test_error_event_with_bad_pair():
    msg = parse_okex_ws_message({"event": "error", "msg": BAD_PAIR_MSG, "code": "60018"})
    assert msg.kind is OkexWsMessageKind.ERROR
    assert msg.bad_pair == OkexTradingPair("NMR-USDT")
    normalized = msg.normalize()
    assert normalized == WsRemovedPair(OKEX, OkexTradingPair("NMR-USDT").normalize(), f"{BAD_PAIR_MSG} - ")
    assert msg.matches_normalized(normalized)


def test_error_event_without_pair_and_make_critical():
    msg = parse_okex_ws_message({"event": "error", "msg": "boom"})
    assert msg.bad_pair is None
    assert msg.normalize() == WsOther(OKEX, "boom", "")
    critical = f"failed: {BAD_PAIR_MSG}"
    msg.make_critical(critical)
    assert msg.raw_msg == critical
    assert msg.bad_pair == OkexTradingPair("NMR-USDT")
    assert isinstance(msg.normalize(), WsRemovedPair)


@pytest.mark.parametrize(
    "raw, message",
    [
        ({"data": [trade_entry()]}, "Could not find 'arg' field"),
        ({"arg": {}, "data": [trade_entry()]}, "Could not find nest 'channel'"),
        ({"arg": {"channel": 5}, "data": [trade_entry()]}, "Could not convert 'channel'"),
        ({"arg": {"channel": "books"}, "data": []}, "Channel type 'books' cannot be deserialized"),
        ({"arg": {"channel": "trades-all"}, "data": []}, "empty"),
        ({"op": "subscribe"}, "Could not find 'event' field"),
        ({"event": "login"}, "Event type 'login' cannot be deserialized"),
        ({"event": "error"}, "Could not find 'msg'"),
    ],
)
def test_parse_errors(raw, message):
    with pytest.raises(ValueError, match=message):
        parse_okex_ws_message(raw)