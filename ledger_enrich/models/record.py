from dataclasses import dataclass
from typing import Tuple

from .candle import Candle


@dataclass(frozen=True)
class EnrichedRecord:
    """A ledger row with the derived price columns spliced in."""
    fields: Tuple[str, ...]
    candle: Candle  # The bar the derived columns were computed from
