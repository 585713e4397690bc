# ledger_enrich/utils/__init__.py
"""Utility functions for the ledger_enrich package."""

from .limiter import RequestLimiter, CANDLES_LIMIT_KEY
from .retry import RetryPolicy
from .timeparse import parse_timestamp, format_timestamp

__all__ = [
    "RequestLimiter",
    "CANDLES_LIMIT_KEY",
    "RetryPolicy",
    "parse_timestamp",
    "format_timestamp",
]
