"""Codec package - pure decode/encode of the three FCS segments.

This package handles:
- Header: fixed 58-byte preamble with segment byte ranges
- Text: delimited keyword/value segment with doubled-delimiter escapes
- Data: list-mode 32-bit float events in either byte order

Design principle:
- Every operation works on buffers already in memory; no file I/O here
- Decoded records are immutable copies, never views into the caller's buffer
"""
from .data import DataDecoder, DataDecoderConfig, decode_data, encode_data, select_dtype
from .header import HEADER_LENGTH, HeaderCodec, decode_header, encode_header
from .text import TextCodec, TextCodecConfig, build_text, decode_text, encode_text, split_fields

__all__ = [
    "DataDecoder",
    "DataDecoderConfig",
    "decode_data",
    "encode_data",
    "select_dtype",
    "HEADER_LENGTH",
    "HeaderCodec",
    "decode_header",
    "encode_header",
    "TextCodec",
    "TextCodecConfig",
    "build_text",
    "decode_text",
    "encode_text",
    "split_fields",
]
