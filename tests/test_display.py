import math

import pytest

from emiglio.display import (
    FLAT_ROW_COLOR,
    GAIN_TEXT_COLOR,
    LOSS_TEXT_COLOR,
    PAPER_NOTICE,
    BalanceLabels,
    PositionRow,
    TickerLabels,
    format_balance_labels,
    format_order_confirmation,
    format_position_row,
    format_ticker,
    order_failure_message,
    validate_order_quantity,
)
from emiglio.market import BUY_COLOR, SELL_COLOR


def _number_after(text, prefix):
    assert text.startswith(prefix)
    return float(text[len(prefix):])


def test_ticker_price_uses_quote_currency():
    labels = format_ticker("BTCEUR", 43250.25, 10.0, 1.5, 1234.5, 44000.0, 42000.0)
    assert isinstance(labels, TickerLabels)
    assert _number_after(labels.price, "Price: €") == pytest.approx(43250.25)


def test_ticker_price_pinned():
    labels = format_ticker("BTCUSDT", 100.5, 1.0, 1.0, 1.0, 1.0, 1.0)
    assert labels.price == "Price: $100.50"


def test_ticker_rising_change_is_green_with_plus():
    labels = format_ticker("BTCUSDT", 100.0, 5.0, 2.5, 10.0, 110.0, 90.0)
    assert labels.change.startswith("24h Change: +")
    assert labels.change.endswith("%")
    assert labels.change_color == GAIN_TEXT_COLOR
    assert float(labels.change[len("24h Change: +"):-1]) == pytest.approx(2.5)


def test_ticker_falling_change_is_red_without_plus():
    labels = format_ticker("BTCUSDT", 100.0, -5.0, -2.5, 10.0, 110.0, 90.0)
    assert "+" not in labels.change
    assert labels.change_color == LOSS_TEXT_COLOR
    assert float(labels.change[len("24h Change: "):-1]) == pytest.approx(-2.5)


def test_ticker_unchanged_is_red():
    labels = format_ticker("BTCUSDT", 100.0, 0.0, 0.0, 10.0, 110.0, 90.0)
    assert labels.change_color == LOSS_TEXT_COLOR
    assert "+" not in labels.change


def test_ticker_volume_and_high_low():
    labels = format_ticker("ETHBTC", 0.05, 0.0, 0.0, 987.654, 0.06, 0.04)
    assert _number_after(labels.volume, "24h Volume: ") == pytest.approx(987.65)
    high, low = labels.high_low[len("24h High/Low: "):].split(" / ")
    assert high.startswith("₿") and low.startswith("₿")
    assert float(high[1:]) == pytest.approx(0.06)
    assert float(low[1:]) == pytest.approx(0.04)


def test_position_row_profit():
    row = format_position_row("BTCUSDT", "LONG", 100.0, 110.0, 0.5, 5.0, 10.0)
    assert isinstance(row, PositionRow)
    assert row.color == BUY_COLOR
    assert row.symbol == "BTCUSDT"
    assert row.side == "LONG"
    assert _number_after(row.entry, "$") == pytest.approx(100.0)
    assert _number_after(row.current, "$") == pytest.approx(110.0)
    assert _number_after(row.pnl, "+$") == pytest.approx(5.0)
    assert row.pnl_percent.startswith("+") and row.pnl_percent.endswith("%")


def test_position_row_loss():
    row = format_position_row("ETHEUR", "LONG", 100.0, 90.0, 1.0, -10.0, -10.0)
    assert row.color == SELL_COLOR
    assert _number_after(row.pnl, "€") == pytest.approx(-10.0)
    assert not row.pnl_percent.startswith("+")
    assert float(row.pnl_percent[:-1]) == pytest.approx(-10.0)


def test_position_row_flat():
    row = format_position_row("BTCUSDT", "LONG", 100.0, 100.0, 1.0, 0.0, 0.0)
    assert row.color == FLAT_ROW_COLOR
    assert row.pnl.startswith("+$")
    assert row.pnl_percent.startswith("+")


def test_position_quantity_has_four_decimals():
    row = format_position_row("BTCUSDT", "LONG", 1.0, 1.0, 0.123456, 0.0, 0.0)
    whole, decimals = row.quantity.split(".")
    assert len(decimals) == 4
    assert float(row.quantity) == pytest.approx(0.1235)


def test_balance_labels_gain():
    labels = format_balance_labels(9500.0, 10250.0, 250.0, 2.5)
    assert isinstance(labels, BalanceLabels)
    assert _number_after(labels.balance, "Balance: $") == pytest.approx(9500.0)
    assert _number_after(labels.equity, "Equity: $") == pytest.approx(10250.0)
    assert labels.pnl.startswith("P&L: +$")
    assert labels.pnl_color == GAIN_TEXT_COLOR
    amount, percent = labels.pnl[len("P&L: +$"):].split(" (")
    assert float(amount) == pytest.approx(250.0)
    assert float(percent.rstrip("%)")) == pytest.approx(2.5)


def test_balance_labels_loss():
    labels = format_balance_labels(9000.0, 9000.0, -1000.0, -10.0)
    assert labels.pnl.startswith("P&L: $-")
    assert labels.pnl_color == LOSS_TEXT_COLOR


def test_balance_labels_zero_counts_as_gain():
    labels = format_balance_labels(10000.0, 10000.0, 0.0, 0.0)
    assert labels.pnl_color == GAIN_TEXT_COLOR
    assert labels.pnl.startswith("P&L: +$")


@pytest.mark.parametrize("text, expected", [("0.001", 0.001), (" 1e-3", 0.001), ("2.5xyz", 2.5)])
def test_validate_order_quantity_accepts(text, expected):
    assert validate_order_quantity(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["abc", "", "1e999"])
def test_validate_order_quantity_rejects_unreadable(text):
    with pytest.raises(ValueError, match="Invalid quantity value"):
        validate_order_quantity(text)


@pytest.mark.parametrize("text", ["0", "-1", "0.0"])
def test_validate_order_quantity_rejects_non_positive(text):
    with pytest.raises(ValueError, match="Quantity must be greater than zero"):
        validate_order_quantity(text)


def test_order_confirmation_worked_example():
    text = format_order_confirmation("BUY", "MARKET", "BTCUSDT", 0.001, 43250.5)
    assert text == (
        "Place BUY MARKET order:\n\n"
        "Symbol: BTCUSDT\n"
        "Quantity: 0.001\n"
        "Price: $43250.50\n\n"
        "This is PAPER TRADING. No real money will be used."
    )


def test_order_confirmation_uses_quote_currency_and_notice():
    text = format_order_confirmation("SELL", "LIMIT", "ETHEUR", 2.0, 3000.0)
    assert text.startswith("Place SELL LIMIT order:")
    assert "Symbol: ETHEUR\n" in text
    assert "\nPrice: €" in text
    assert text.endswith(PAPER_NOTICE)


def test_order_confirmation_without_price_raises():
    with pytest.raises(ValueError, match="No market price available yet"):
        format_order_confirmation("BUY", "MARKET", "BTCUSDT", 1.0, 0.0)


def test_order_failure_messages():
    assert order_failure_message("BUY").endswith("Insufficient balance?")
    assert order_failure_message("SELL").endswith("No position or insufficient quantity?")
    assert order_failure_message("SELL").startswith("Failed to execute paper order.\n")


def test_validated_quantity_is_finite_for_normal_input():
    assert math.isfinite(validate_order_quantity("3.75"))
    assert validate_order_quantity("3.75") == pytest.approx(3.75)