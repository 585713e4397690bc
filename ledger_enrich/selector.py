"""Choosing the bar that stands for the price at an instant."""

from datetime import datetime
from typing import Callable, Dict

from ledger_enrich.models import Candle, CandleSeries

Selector = Callable[[CandleSeries, datetime], Candle]


def select_first(candles: CandleSeries, target: datetime) -> Candle:
    """Takes the first bar the service returned, whatever its time."""
    return candles[0]


def select_at_or_after(candles: CandleSeries, target: datetime) -> Candle:
    """Takes the earliest bar starting at or after ``target``, else the first bar."""
    epoch = target.timestamp()
    later = [candle for candle in candles if candle.timestamp >= epoch]
    if not later:
        return candles[0]
    return min(later, key=lambda candle: candle.timestamp)


SELECTORS: Dict[str, Selector] = {
    "first": select_first,
    "at_or_after": select_at_or_after,
}


def get_selector(name: str) -> Selector:
    try:
        return SELECTORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown candle selection '{name}', expected one of: {', '.join(SELECTORS)}"
        ) from None
