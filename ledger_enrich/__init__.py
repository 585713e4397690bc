"""Attach historical USD prices to trade ledgers."""

from .enricher import RecordEnricher
from .pipeline import Pipeline

__all__ = [
    "RecordEnricher",
    "Pipeline",
]
