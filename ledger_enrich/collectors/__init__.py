"""Price data collectors."""

from .coinbase_candles import CoinbaseCandlesClient, product_id, rows_to_candles

__all__ = [
    "CoinbaseCandlesClient",
    "product_id",
    "rows_to_candles",
]
