"""Ingest package - reading FCS files from disk.

This package handles:
- Reading the whole file into memory
- Slicing header, text and data segments by the header byte ranges
- Delegating decoding to fcs_codec.codec

Key classes:
- FcsReader: Reads one file and returns an FcsFile

Design principle:
- Readers never reinterpret the data; non-fatal findings go to FcsFile.warnings
"""
from .reader import FcsReader, FcsReaderConfig, read_fcs

__all__ = [
    "FcsReader",
    "FcsReaderConfig",
    "read_fcs",
]
