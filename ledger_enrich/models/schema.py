"""Column layouts of the supported ledger exports.

Each ledger flavour differs only in where the timestamp, amount and symbol
live, how the USD columns are computed and where they are written. A
``SchemaVariant`` captures all of that so one enrichment routine serves
every flavour.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ledger_enrich.exceptions import MissingColumn
from ledger_enrich.utils.timeparse import format_timestamp

from .candle import Candle


def format_amount(value: float) -> str:
    """Renders a number with six decimals, e.g. ``1050.000000``, or as ``+Inf``, ``-Inf``, ``NaN``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:f}"


def divide(numerator: float, denominator: float) -> float:
    """IEEE division: a zero denominator gives an infinity or NaN instead of raising."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


@dataclass(frozen=True)
class DerivedFields:
    """Values produced for one row: spliced in at the insertion point, then appended."""
    inserted: Tuple[str, ...] = ()
    appended: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SchemaVariant:
    """
    Describes one ledger layout.

    Attributes:
        name: Short name, also used as the CLI command.
        default_input: Input path used when none is given.
        timestamp_column: Index of the trade timestamp.
        amount_column: Index of the traded value or amount.
        symbol_column: Index of the asset symbol.
        secondary_column: Index of the secondary size, if the layout has one.
        insert_at: Position at which ``DerivedFields.inserted`` is spliced.
        inserted_headers: Header names for the spliced columns.
        appended_headers: Header names for the trailing columns.
        derive: Computes the derived values from (amount, secondary, candle).
    """
    name: str
    default_input: str
    timestamp_column: int
    amount_column: int
    symbol_column: int
    derive: Callable[[float, Optional[float], Candle], DerivedFields]
    secondary_column: Optional[int] = None
    insert_at: Optional[int] = None
    inserted_headers: Tuple[str, ...] = ()
    appended_headers: Tuple[str, ...] = ()

    @property
    def required_columns(self) -> int:
        columns = [self.timestamp_column, self.amount_column, self.symbol_column]
        if self.secondary_column is not None:
            columns.append(self.secondary_column)
        return max(columns) + 1

    def check_width(self, row: Sequence[str]) -> None:
        if len(row) < self.required_columns:
            raise MissingColumn(
                f"{self.name} rows need at least {self.required_columns} columns, got {len(row)}"
            )

    def splice(self, row: Sequence[str], derived: DerivedFields) -> List[str]:
        """Returns a new row with ``derived`` placed at the layout's positions."""
        fields = list(row)
        if self.insert_at is not None:
            fields[self.insert_at:self.insert_at] = derived.inserted
        else:
            fields.extend(derived.inserted)
        fields.extend(derived.appended)
        return fields

    def header(self, row: Sequence[str]) -> List[str]:
        return self.splice(row, DerivedFields(self.inserted_headers, self.appended_headers))


def _derive_fills(value: float, size: Optional[float], candle: Candle) -> DerivedFields:
    cost = value * candle.close
    # A zero size is written as +Inf/NaN rather than stopping the run
    size_price = divide(cost, size)
    return DerivedFields(
        inserted=(
            format_amount(candle.close),
            format_amount(cost),
            format_timestamp(candle.start),
        ),
        appended=(
            format_amount(size_price),
            format_amount(size_price * size),
        ),
    )


def _derive_history(amount: float, _secondary: Optional[float], candle: Candle) -> DerivedFields:
    return DerivedFields(
        appended=(
            format_amount(amount * candle.close),
            format_amount(candle.close),
            format_timestamp(candle.start),
        ),
    )


FILLS = SchemaVariant(
    name="fills",
    default_input="fills.csv",
    timestamp_column=3,
    amount_column=4,
    symbol_column=5,
    secondary_column=8,
    insert_at=6,
    inserted_headers=("usd-price", "usd-total", "price-date"),
    appended_headers=("usd-price", "usd-total"),
    derive=_derive_fills,
)

HISTORY = SchemaVariant(
    name="history",
    default_input="history.csv",
    timestamp_column=1,
    amount_column=2,
    symbol_column=4,
    appended_headers=("usd-amount", "usd-price", "price-date"),
    derive=_derive_history,
)

SCHEMAS: Dict[str, SchemaVariant] = {schema.name: schema for schema in (FILLS, HISTORY)}
