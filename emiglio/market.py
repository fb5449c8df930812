"""Symbol handling and formatting of the live trade feed."""

from __future__ import annotations

import time as _time
from collections import deque
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

QUOTE_CURRENCIES = ("USDT", "BUSD", "USDC", "EUR", "GBP", "BTC", "ETH", "BNB")

_CURRENCY_SYMBOLS = {
    "EUR": "€",
    "GBP": "£",
    "BTC": "₿",
    "ETH": "Ξ",
    "BNB": "BNB ",
    "USDT": "$",
    "BUSD": "$",
    "USDC": "$",
}

BUY_COLOR = (220, 255, 220)
SELL_COLOR = (255, 220, 220)
MAX_TRADES = 50


def split_symbol(symbol) -> Tuple[str, str]:
    """Split a pair such as ``"BTCUSDT"`` into ``("BTC", "USDT")``.

    Known quote currencies are tried in priority order; the first
    occurrence must not start the symbol. Otherwise symbols longer than six
    characters lose their last four as the quote, and shorter ones have no
    quote.
    """
    for quote in QUOTE_CURRENCIES:
        position = symbol.find(quote)
        if position > 0:
            return symbol[:position], quote
    if len(symbol) > 6:
        return symbol[:-4], symbol[-4:]
    return symbol, ""


def currency_symbol(currency) -> str:
    """Display prefix for a quote currency; ``"$"`` when unknown."""
    return _CURRENCY_SYMBOLS.get(currency, "$")


def format_spread(price, last_price) -> str:
    """Percentage change from the previous trade, or ``"--"`` without one."""
    if last_price <= 0.0:
        return "--"
    spread = price - last_price
    percent = spread / last_price * 100.0
    sign = "+" if spread > 0 else ""
    return f"{sign}{percent:.2f}%"


def format_delay(seconds) -> str:
    """Time since the previous trade in ms, s, m or h; ``"--"`` for None."""
    if seconds is None:
        return "--"
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.1f}s"
    if seconds < 3600.0:
        return f"{seconds / 60.0:.1f}m"
    return f"{seconds / 3600.0:.1f}h"


def _clock(timestamp: float) -> str:
    return _time.strftime("%H:%M:%S", _time.localtime(timestamp))


@dataclass(frozen=True)
class TradeRow:
    """One displayed trade; every column is already formatted."""

    time: str
    side: str
    price: str
    quantity: str
    total: str
    spread: str
    delay: str
    color: Tuple[int, int, int]

    @property
    def is_buy(self) -> bool:
        return self.side == "BUY"


def format_trade_row(symbol, price, quantity, is_buyer_maker, last_price, delay) -> TradeRow:
    """Build the display row for a trade, stamped with the current local time.

    A trade whose buyer is the maker is a sell; otherwise it is a buy.
    ``delay`` is seconds since the previous trade, or None.
    """
    _, quote = split_symbol(symbol)
    prefix = currency_symbol(quote)
    is_buy = not is_buyer_maker
    return TradeRow(
        time=_clock(_time.time()),
        side="BUY" if is_buy else "SELL",
        price=f"{prefix}{price:.2f}",
        quantity=f"{quantity:.4f}",
        total=f"{prefix}{price * quantity:.2f}",
        spread=format_spread(price, last_price),
        delay=format_delay(delay),
        color=BUY_COLOR if is_buy else SELL_COLOR,
    )


class TradeFeed:
    """Most recent trades, newest first, capped at ``limit`` rows."""

    def __init__(self, limit=MAX_TRADES) -> None:
        self._rows: deque = deque(maxlen=limit)
        self.last_price = 0.0
        self.last_time: Optional[float] = None

    @property
    def rows(self) -> List[TradeRow]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[TradeRow]:
        return iter(self._rows)

    def add(self, symbol, price, quantity, is_buyer_maker, now=None) -> TradeRow:
        """Record a trade at epoch time ``now`` (default: the current time)."""
        if now is None:
            now = _time.time()
        delay = None if self.last_time is None else now - self.last_time
        row = format_trade_row(symbol, price, quantity, is_buyer_maker, self.last_price, delay)
        row = replace(row, time=_clock(now))
        self.last_price = price
        self.last_time = now
        self._rows.appendleft(row)
        return row

    def clear(self) -> None:
        """Forget all trades, as when switching to another symbol."""
        self._rows.clear()
        self.last_price = 0.0
        self.last_time = None