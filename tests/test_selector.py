"""Tests for candle selection."""

from datetime import datetime, timezone

import pytest

from ledger_enrich.models import Candle
from ledger_enrich.selector import get_selector, select_at_or_after, select_first

TARGET = datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
EPOCH = int(TARGET.timestamp())

# Newest first, the order the exchange returns
CANDLES = [
    Candle(timestamp=EPOCH + 116, close=3.0, volume=1.0),
    Candle(timestamp=EPOCH + 56, close=2.0, volume=1.0),
    Candle(timestamp=EPOCH - 4, close=1.0, volume=1.0),
]


def test_first_ignores_target():
    assert select_first(CANDLES, TARGET) is CANDLES[0]


def test_at_or_after_takes_earliest_bar_not_before_target():
    assert select_at_or_after(CANDLES, TARGET) is CANDLES[1]


def test_at_or_after_accepts_exact_match():
    exact = [Candle(timestamp=EPOCH, close=5.0, volume=1.0)] + CANDLES
    assert select_at_or_after(exact, TARGET).close == 5.0


def test_at_or_after_falls_back_to_first():
    earlier = [Candle(timestamp=EPOCH - 60, close=7.0, volume=1.0)]
    assert select_at_or_after(earlier, TARGET) is earlier[0]


def test_get_selector():
    assert get_selector("first") is select_first
    assert get_selector("at_or_after") is select_at_or_after
    with pytest.raises(ValueError):
        get_selector("nearest")
