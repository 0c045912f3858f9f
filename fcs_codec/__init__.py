"""FCS codec -- decoding and re-encoding Flow Cytometry Standard files.

An FCS file has three byte-addressed segments:
- HEADER: fixed 58 bytes, version plus byte ranges of the other segments
- TEXT: delimited keyword/value metadata; the first byte is the delimiter
- DATA: raw measurement values, interpreted according to TEXT keywords

This package provides tools for:
- Decoding/encoding the header and text segments (pure, in-memory)
- Decoding list-mode 32-bit float data in either byte order
- Reading whole files and grouping events by $PAR
- Exporting events to CSV and writing consistently laid-out files

Key principles:
- Codecs do no file I/O; they take buffers and return immutable records
- Malformed input raises a typed error (see fcs_codec.errors), never exits
- Non-fatal findings are collected as warnings on the returned records

Main subpackages:
- codec: HeaderCodec, TextCodec, DataDecoder
- models: Header, Text, Data, FcsFile
- ingest: FcsReader
- analysis: event grouping and summaries
- export: CSV export and FcsWriter
- scripts: fcs-tool command line
"""

__version__ = "0.1.0"

__all__ = []
