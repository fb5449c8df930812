# emiglio

Building blocks for a cryptocurrency trading bot:

- `emiglio.logger`: a process-wide logger with severity levels.
- `emiglio.jsonparser`: dotted-path access to JSON documents. Each getter takes a default.
- `emiglio.config`: a key/value settings store that can load from and save to JSON.
- `emiglio.market` and `emiglio.display`: text formatting for a live market view with paper trading.

The package uses only the standard library.

## Installation

```
pip install .
```

Install with the test extra to run the tests:

```
pip install .[test]
pytest
```

## Logging

```python
from emiglio.logger import LogLevel, get_logger

log = get_logger()
log.init("/tmp/emiglio.log", LogLevel.DEBUG)
log.info("started")
log.warning("also printed to stderr")
log.close()
```

`get_logger()` always returns the same `Logger`.

**Levels and filtering**

- The levels, in order, are `DEBUG`, `INFO`, `WARNING`, `ERROR` and `CRITICAL`.
- Messages below the minimum level are dropped.
- The minimum level is `INFO` until you change it with `init` or `set_log_level`.

**Entry format.** Each entry starts with a local timestamp to the millisecond, then a fixed-width level tag, then the message.

**Where entries go**

- Before `init` opens a file, and after `close`, entries go to standard output.
- Entries at `WARNING` and above are also written to standard error.

**Opening and closing the file**

- `init` appends to the file and writes a start line. It raises `OSError` if the file cannot be opened.
- `close` writes a closing line and closes the file.

## Reading JSON

```python
from emiglio.jsonparser import JsonParser

parser = JsonParser()
parser.parse('{"exchange": {"name": "binance"}, "klines": [[1, "42.5"]]}')
parser.get_string("exchange.name")               # "binance"
parser.get_nested_array_double("klines", 0, 1)   # 42.5
parser.get_int("missing", 7)                     # 7
parser.to_string(pretty=False)                   # compact JSON text
```

**Key paths.** A key path uses dots to reach into nested objects. The empty path is the root.

**Getters by shape**

| Shape of the value | Getters |
| --- | --- |
| Scalar at a path | `get_string`, `get_int`, `get_int64`, `get_double`, `get_bool` |
| Element of an array | `get_array_*` |
| Element of an array inside an array | `get_nested_array_*` |
| Field of an object inside an array | `get_array_object_*` |

Use `has`, `is_array`, `get_array_size` and `get_nested_array_size` to inspect the structure.

**Defaults and conversion**

- A missing key, an index out of range or a value of the wrong type returns the default you pass.
- The `*_double` getters also read numbers stored as strings, such as `"42.5"`.
- `get_int` only accepts values in the 32-bit range.
- The `*_int64` getters accept 64-bit values.

**Errors**

- `parse` and `parse_file` raise `JsonParseError`, a subclass of `ValueError`, when the text is not valid JSON or the file cannot be read.
- The message is also kept in `parser.error`.

## Configuration

```python
from emiglio.config import get_config

config = get_config()
config.set_int("backtest.days", 30)
config.get_int("backtest.days")      # 30
config.get_string("app.name")        # "Emiglio"
config.save("/tmp/emiglio.json")
```

`get_config()` returns one shared `Config`.

**Keys and values.** Settings are flat dotted keys with string values. The typed getters convert on read and fall back to the default you pass.

**Arrays.** An array is stored as `key.0`, `key.1`, and so on. `get_string_array(key)` returns these values in order.

**Default settings**

- The defaults cover the application name, version, log level, log file, data directory and recipes directory.
- The paths lie under `$HOME/config/settings/Emiglio`, or under `/boot/home` if `HOME` is unset.
- They are also available as `config_dir`, `data_dir`, `recipes_dir` and `log_file`.

**Loading.** `load(path)` reads a JSON object and merges it into the settings, flattening nested objects and arrays into dotted keys.

- If the file cannot be read, it raises `OSError`.
- If the file is not valid JSON, it raises `JsonParseError`.
- In both cases the current values are kept.

**Saving.** `save(path)` writes every setting as one flat JSON object with the keys sorted.

## Live market formatting

`emiglio.market` splits trading pairs and formats the trade feed:

```python
from emiglio.market import TradeFeed, currency_symbol, split_symbol

split_symbol("BTCUSDT")     # ("BTC", "USDT")
split_symbol("ETHBTC")      # ("ETH", "BTC")
currency_symbol("EUR")      # "€"

feed = TradeFeed()          # keeps the 50 newest trades
feed.add("BTCUSDT", 42000.0, 0.5, False, now=1000.0)
row = feed.add("BTCUSDT", 42042.0, 0.1, True, now=1002.5)
row.side, row.spread, row.delay   # ("SELL", "+0.10%", "2.5s")
feed.rows[0] is row               # newest first
feed.clear()
```

**Trade rows**

- A trade whose buyer is the maker is shown as a sell. Any other trade is a buy.
- Each `TradeRow` holds preformatted columns (time, side, price, quantity, total, spread, delay) and a row colour.
- `format_spread`, `format_delay` and `format_trade_row` can also be used on their own.

`emiglio.display` formats the rest of the view:

- `format_ticker` returns `TickerLabels` for the 24h market data panel.
- `format_position_row` returns a `PositionRow` for the open positions table. The row colour follows the sign of the P&L.
- `format_balance_labels` returns `BalanceLabels`. For example, `format_balance_labels(10250, 10400, 400, 4.0).pnl` is `"P&L: +$400.00 (4.00%)"`.
- `validate_order_quantity(text)` reads the leading number of the text. It raises `ValueError` if there is no number or the number is not positive.
- `format_order_confirmation(side, order_type, symbol, quantity, price)` builds the confirmation text for a paper order. It raises `ValueError` while no market price is known (`price <= 0`).
- `order_failure_message(side)` explains why an order could not be executed.

## What this package does not do

The market and display modules only produce text. The package has none of the following:

- a connection to an exchange (no streaming or REST client),
- a paper portfolio that records balances and positions,
- a graphical window,
- credential storage,
- strategy recipes or backtesting,
- a command-line program.

The caller supplies prices, trades and positions, and decides what to do with the formatted text.