# ledger_enrich/models/__init__.py
"""Data models for the ledger_enrich package."""

from .candle import Candle, CandleSeries
from .record import EnrichedRecord
from .schema import DerivedFields, SchemaVariant, FILLS, HISTORY, SCHEMAS

__all__ = [
    "Candle",
    "CandleSeries",
    "EnrichedRecord",
    "DerivedFields",
    "SchemaVariant",
    "FILLS",
    "HISTORY",
    "SCHEMAS",
]
