"""Per-row enrichment: look up the price at the row's time and derive USD columns."""

import logging
from typing import Optional, Sequence

from ledger_enrich.collectors.coinbase_candles import CoinbaseCandlesClient, product_id
from ledger_enrich.exceptions import FieldParseError, InvalidTimestamp, NoCandles
from ledger_enrich.models import EnrichedRecord, SchemaVariant
from ledger_enrich.selector import Selector, select_first
from ledger_enrich.utils.retry import RetryPolicy
from ledger_enrich.utils.timeparse import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)


def parse_number(value: str, column: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise FieldParseError(f"Column '{column}' is not a number: {value!r}") from None


class RecordEnricher:
    """
    Enriches single ledger rows laid out according to ``schema``.

    Any failure is raised: a row either comes back fully enriched or the
    caller gets an exception. Only rate-limit errors are retried, as the
    retry policy decides.
    """

    def __init__(
        self,
        client: CoinbaseCandlesClient,
        schema: SchemaVariant,
        retry_policy: Optional[RetryPolicy] = None,
        selector: Selector = select_first,
    ):
        self.client = client
        self.schema = schema
        self.retry_policy = retry_policy or RetryPolicy()
        self.selector = selector

    def enrich(self, row: Sequence[str]) -> EnrichedRecord:
        schema = self.schema
        schema.check_width(row)

        amount = parse_number(row[schema.amount_column], "amount")
        secondary = None
        if schema.secondary_column is not None:
            secondary = parse_number(row[schema.secondary_column], "secondary size")

        raw_time = row[schema.timestamp_column]
        instant = parse_timestamp(raw_time)
        if instant is None:
            raise InvalidTimestamp(f"Unrecognized timestamp: {raw_time!r}")

        pair = product_id(row[schema.symbol_column])
        candles = self.retry_policy.call(self.client.fetch_bars, pair, instant)
        if not candles:
            raise NoCandles(f"No usable {pair} candles from {format_timestamp(instant)}")

        candle = self.selector(candles, instant)
        derived = schema.derive(amount, secondary, candle)
        return EnrichedRecord(fields=tuple(schema.splice(row, derived)), candle=candle)
