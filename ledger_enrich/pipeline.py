"""Drives the enricher over a whole ledger."""

import logging
from typing import List, Sequence

from ledger_enrich.enricher import RecordEnricher
from ledger_enrich.exceptions import LookupFailed, PipelineAborted, RecordError

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10


class Pipeline:
    """Enriches every row of a ledger, in order.

    Row 0 is the header and only gets the new column names. The first row
    that cannot be enriched stops the run with PipelineAborted.
    """

    def __init__(self, enricher: RecordEnricher, progress_every: int = PROGRESS_EVERY):
        self.enricher = enricher
        self.progress_every = progress_every

    def run(self, rows: Sequence[Sequence[str]]) -> List[List[str]]:
        """
        Args:
            rows: The ledger rows, header first.

        Returns:
            The output rows, one per input row in the same order.

        Raises:
            PipelineAborted: When a row fails, carrying the rows done before it.
        """
        total = len(rows)
        output: List[List[str]] = []
        for index, row in enumerate(rows):
            if index % self.progress_every == 0:
                logger.info(f"Completed {index}/{total}")
            if index == 0:
                output.append(self.enricher.schema.header(row))
                continue
            try:
                record = self.enricher.enrich(row)
            except (RecordError, LookupFailed) as e:
                logger.error(f"Aborting at row {index}: {e}")
                raise PipelineAborted(index, output, e) from e
            output.append(list(record.fields))

        logger.info(f"Enriched {max(total - 1, 0)} rows.")
        return output
