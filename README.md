# cexnorm

Data types for centralized crypto exchanges that do not depend on any one
exchange. The package also parses and normalizes OKX REST and websocket
payloads.

## Modules

- `cexnorm.pairs`: `NormalizedTradingPair`, plus the raw forms `SplitPair`,
  `DelimitedPair` and `UndelimitedPair`.
  - Each raw form becomes a normalized pair through
    `get_normalized_pair(exchange)`.
  - `raw_from_normalized` converts in the other direction.
- `cexnorm.blockchain`: `Blockchain` and `parse_blockchain`.
  - `parse_blockchain` maps network labels such as `"erc20"` or `"sol"` to a
    known chain.
  - Any label it does not know becomes an "other" chain.
  - A `Blockchain` also works as a filter over currencies.
- `cexnorm.currencies`: `NormalizedCurrency`, `BlockchainCurrency` and
  `WrappedCurrency`.
  - `handle_unwrapped` folds wrapped assets such as WETH into their unwrapped
    counterpart.
- `cexnorm.instruments`: `NormalizedInstrument` and `NormalizedTradingType`,
  which has `parse` and `fmt_okex`.
  - `InstrumentFilter` filters by pair, base, quote or active state. It works
    on instruments and on currencies.
- `cexnorm.market`: `NormalizedTrade`, `NormalizedQuote`, `BidAsk` and
  `NormalizedL2`.
  - `NormalizedL2.get_quote()` returns the best bid and the best ask among
    levels with a non-zero amount.
- `cexnorm.filters`: `ExchangeFilter`, `EmptyFilter` and `AnyOfFilters`.
  - `AnyOfFilters` keeps a value that matches any one of its filters.
- `cexnorm.rest_data`: `NormalizedRestApiRequest` and
  `NormalizedRestApiData`.
  - `take_currencies(filter)` and `take_instruments(filter)` return the
    matching values.
- `cexnorm.ws_channels`: `NormalizedWsChannel`, `NormalizedWsChannelKind`,
  and the stream messages `WsDisconnect`, `WsRemovedPair` and `WsOther`.
- `cexnorm.okex_pairs`: `OkexTradingPair`, `okex_pair_from_normalized`,
  `is_valid_okex_pair` and `parse_for_bad_pair`.
- `cexnorm.okex_rest`: `OkexInstrument`, `OkexAllInstruments`,
  `OkexCurrency`, `OkexAllSymbols` and `OkexRestApiResponse`.
  - Each has `normalize()` and `matches_normalized()`.
  - `OkexAllSymbols.from_proxy` keeps the currencies of another exchange that
    appear in some OKX instrument.
- `cexnorm.okex_ticks`: `OkexTicker` and `OkexTrade`, each built with
  `from_json`.
- `cexnorm.okex_ws`: `OkexWsChannel`, `OkexWsChannelKind`,
  `OkexSubscription` (with `to_json()` for the subscribe frame) and
  `OkexWsMessage`.
  - `parse_okex_ws_message` accepts a JSON string, bytes, or an
    already-decoded mapping.

Pairs, currencies and instruments that come from OKX carry the exchange name
`"Okex"`.

## Example

```python
from cexnorm.okex_ws import OkexWsChannel, OkexSubscription, parse_okex_ws_message
from cexnorm.pairs import SplitPair

channel = OkexWsChannel.new_quote([SplitPair("eth", "usdc")])
subscription = OkexSubscription.new_single_channel(channel)
print(subscription.to_json())
# {"op":"subscribe","args":[{"channel":"tickers","instId":"ETH-USDC"}]}

message = parse_okex_ws_message({
    "event": "error",
    "msg": "Wrong URL or channel:tickers,instId:NMR-USDT doesn't exist.",
    "code": "60018",
})
print(message.normalize())      # a WsRemovedPair for NMR-USDT
```

Malformed payloads raise `ValueError`.

## What it does not do

The package does no networking. It does not:

- open websocket connections;
- call REST endpoints;
- spread subscriptions across several streams.

You fetch the JSON yourself. Then you pass it to the `from_json`
constructors or to `parse_okex_ws_message`, and you send the text from
`OkexSubscription.to_json()` over your own connection.

## Running the tests

```
pip install -e .[test]
pytest
```