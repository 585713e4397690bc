"""Errors raised while enriching a ledger."""

from typing import List, Optional


class LedgerEnrichError(Exception):
    """Base class for every error raised by ledger_enrich."""


class LookupFailed(LedgerEnrichError):
    """The price service could not answer a candles request."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RateLimited(LookupFailed):
    """The price service refused the request because of its rate limit."""


class RecordError(LedgerEnrichError):
    """A single ledger row cannot be enriched."""


class MissingColumn(RecordError):
    pass


class FieldParseError(RecordError):
    pass


class InvalidTimestamp(RecordError):
    pass


class NoCandles(RecordError):
    """The lookup succeeded but returned no usable bar."""


class PipelineAborted(LedgerEnrichError):
    """
    Raised when a fatal row stops the run.

    Attributes:
        row_index: Position of the failing row in the input (header is 0).
        completed: Output rows produced before the failing row, header included.
    """

    def __init__(self, row_index: int, completed: List[List[str]], reason: Exception):
        super().__init__(f"Row {row_index} could not be enriched: {reason}")
        self.row_index = row_index
        self.completed = completed
        self.reason = reason
