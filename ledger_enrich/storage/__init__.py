"""Reading and writing ledger files."""

from .csv_files import read_rows, write_rows, remove_existing

__all__ = [
    "read_rows",
    "write_rows",
    "remove_existing",
]
