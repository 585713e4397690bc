"""CSV ledger files, read and written as plain rows of strings."""

import csv
import logging
import os
from typing import List, Sequence

import pandas as pd

logger = logging.getLogger(__name__)


def check_field_counts(path: str) -> None:
    """
    Rejects files whose rows do not all have the header's field count.

    pandas only rejects rows that are too long and pads short ones, which
    would add cells that are not in the input.
    """
    with open(path, newline="") as f:
        widths = [len(row) for row in csv.reader(f) if row]
    for number, width in enumerate(widths[1:], start=2):
        if width != widths[0]:
            raise pd.errors.ParserError(
                f"Expected {widths[0]} fields in row {number} of {path}, saw {width}"
            )


def read_rows(path: str) -> List[List[str]]:
    """
    Reads every row of a CSV file, header included, as lists of strings.

    Cells are kept verbatim: no type inference and no NA conversion, so an
    empty cell stays an empty string. An empty file gives no rows.

    Raises:
        pandas.errors.ParserError: If rows have differing field counts.
    """
    check_field_counts(path)
    try:
        df = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"{path} is empty.")
        return []
    rows = df.values.tolist()
    logger.info(f"Read {len(rows)} rows from {path}")
    return rows


def write_rows(path: str, rows: Sequence[Sequence[str]]) -> None:
    """Writes rows to ``path`` as CSV, without adding a header or an index."""
    if not rows:
        open(path, "w").close()
    else:
        pd.DataFrame(list(rows)).to_csv(path, header=False, index=False)
    logger.info(f"Wrote {len(rows)} rows to {path}")


def remove_existing(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)
        logger.info(f"Removed existing {path}")
