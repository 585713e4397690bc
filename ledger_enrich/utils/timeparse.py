"""Parsing of the timestamp formats found in exchange ledger exports."""

import re
from datetime import datetime, timezone
from typing import Iterator, Optional

# Tried in order, the first layout that parses wins. All of them are UTC.
LAYOUTS = (
    "%Y-%m-%d %H:%M:%S+00",
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%d %H:%M:%S.%f+00",
)

# Used for candle requests and for the price-date column
REQUEST_LAYOUT = "%Y-%m-%dT%H:%M:%S"

# %f stops at microseconds, longer fractions (e.g. nanoseconds) are truncated
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


def _candidates(layout: str) -> Iterator[str]:
    yield layout
    # Fractional seconds are optional wherever a layout allows them
    if ".%f" in layout:
        yield layout.replace(".%f", "")


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parses a ledger timestamp into an aware UTC datetime.

    Literal double quotes are stripped first. Returns None when no known
    layout matches; callers decide whether that is fatal.
    """
    cleaned = _LONG_FRACTION.sub(r"\1", value.replace('"', ''))
    for layout in LAYOUTS:
        for candidate in _candidates(layout):
            try:
                parsed = datetime.strptime(cleaned, candidate)
            except ValueError:
                continue
            return parsed.replace(tzinfo=timezone.utc)
    return None


def format_timestamp(instant: datetime) -> str:
    """Formats an instant as UTC ``YYYY-MM-DDTHH:MM:SS``."""
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    return instant.strftime(REQUEST_LAYOUT)
