"""Export package - writing decoded datasets back to disk.

- write_events_csv: grouped events as CSV, one event per line
- FcsWriter: a fresh single-dataset FCS file with a consistent layout
"""
from .csv_export import write_events_csv
from .writer import FcsWriter, FcsWriterConfig

__all__ = [
    "write_events_csv",
    "FcsWriter",
    "FcsWriterConfig",
]
