"""Formatting of the live trading panels: ticker, positions, balance and orders."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Tuple

from emiglio.market import BUY_COLOR, SELL_COLOR, currency_symbol, split_symbol

Color = Tuple[int, int, int]

GAIN_TEXT_COLOR: Color = (0, 150, 0)
LOSS_TEXT_COLOR: Color = (200, 0, 0)
PROFIT_ROW_COLOR: Color = BUY_COLOR
LOSS_ROW_COLOR: Color = SELL_COLOR
FLAT_ROW_COLOR: Color = (245, 245, 245)

PAPER_NOTICE = "This is PAPER TRADING. No real money will be used."

_LEADING_DOUBLE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _quote_prefix(symbol: str) -> str:
    _, quote = split_symbol(symbol)
    return currency_symbol(quote)


@dataclass(frozen=True)
class TickerLabels:
    """Texts of the market data panel for one ticker update."""

    price: str
    change: str
    volume: str
    high_low: str
    change_color: Color


@dataclass(frozen=True)
class PositionRow:
    """One row of the open positions table; every column is formatted."""

    symbol: str
    side: str
    entry: str
    current: str
    quantity: str
    pnl: str
    pnl_percent: str
    color: Color


@dataclass(frozen=True)
class BalanceLabels:
    """Texts of the account summary line."""

    balance: str
    equity: str
    pnl: str
    pnl_color: Color


def format_ticker(
    symbol, last_price, price_change, price_change_percent, volume, high_price, low_price
) -> TickerLabels:
    """Format a 24h ticker update using the currency of ``symbol``'s quote.

    A rise is shown with a leading ``+`` in green; anything else is red.
    """
    prefix = _quote_prefix(symbol)
    rising = price_change > 0
    sign = "+" if rising else ""
    return TickerLabels(
        price=f"Price: {prefix}{last_price:.2f}",
        change=f"24h Change: {sign}{price_change_percent:.2f}%",
        volume=f"24h Volume: {volume:.2f}",
        high_low=f"24h High/Low: {prefix}{high_price:.2f} / {prefix}{low_price:.2f}",
        change_color=GAIN_TEXT_COLOR if rising else LOSS_TEXT_COLOR,
    )


def format_position_row(
    symbol, side, entry_price, current_price, quantity, unrealized_pnl, unrealized_pnl_percent
) -> PositionRow:
    """Format an open position; the row colour follows the sign of the P&L."""
    prefix = _quote_prefix(symbol)
    if unrealized_pnl > 0:
        color = PROFIT_ROW_COLOR
    elif unrealized_pnl < 0:
        color = LOSS_ROW_COLOR
    else:
        color = FLAT_ROW_COLOR
    pnl_sign = "+" if unrealized_pnl >= 0 else ""
    percent_sign = "+" if unrealized_pnl_percent >= 0 else ""
    return PositionRow(
        symbol=symbol,
        side=side,
        entry=f"{prefix}{entry_price:.2f}",
        current=f"{prefix}{current_price:.2f}",
        quantity=f"{quantity:.4f}",
        pnl=f"{pnl_sign}{prefix}{unrealized_pnl:.2f}",
        pnl_percent=f"{percent_sign}{unrealized_pnl_percent:.2f}%",
        color=color,
    )


def format_balance_labels(balance, equity, total_pnl, total_pnl_percent) -> BalanceLabels:
    """Format the account summary; a non-negative P&L is green with a ``+``."""
    gaining = total_pnl >= 0
    sign = "+" if gaining else ""
    return BalanceLabels(
        balance=f"Balance: ${balance:.2f}",
        equity=f"Equity: ${equity:.2f}",
        pnl=f"P&L: {sign}${total_pnl:.2f} ({total_pnl_percent:.2f}%)",
        pnl_color=GAIN_TEXT_COLOR if gaining else LOSS_TEXT_COLOR,
    )


def validate_order_quantity(text) -> float:
    """Read the leading number of ``text`` as an order quantity.

    Raises ValueError when no number can be read or it is not positive.
    """
    match = _LEADING_DOUBLE.match(text)
    if not match:
        raise ValueError("Invalid quantity value")
    literal = match.group(1)
    quantity = float(literal)
    if math.isinf(quantity) and "inf" not in literal.lower():
        raise ValueError("Invalid quantity value")
    if quantity <= 0.0:
        raise ValueError("Quantity must be greater than zero")
    return quantity


def format_order_confirmation(side, order_type, symbol, quantity, price) -> str:
    """Text asking the user to confirm a paper order.

    Raises ValueError when no market price is known yet (``price <= 0``).
    """
    if price <= 0.0:
        raise ValueError("No market price available yet")
    prefix = _quote_prefix(symbol)
    return (
        f"Place {side} {order_type} order:\n\n"
        f"Symbol: {symbol}\n"
        f"Quantity: {quantity:g}\n"
        f"Price: {prefix}{price:.2f}"
        f"\n\n{PAPER_NOTICE}"
    )


def order_failure_message(side) -> str:
    """Explanation shown when a paper order could not be executed."""
    hint = "Insufficient balance?" if side == "BUY" else "No position or insufficient quantity?"
    return "Failed to execute paper order.\n" + hint