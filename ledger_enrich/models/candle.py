from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List


@dataclass(frozen=True)
class Candle:
    """One price bar from the candles endpoint."""
    timestamp: int   # Epoch seconds at the start of the bar
    close: float     # Close price, used as "the price" for the bar
    volume: float

    @property
    def start(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


CandleSeries = List[Candle]
