"""Exception hierarchy shared by the codecs, the reader and the CLI.

Every error derives from :class:`FcsError` and from the builtin raised for the
same situation elsewhere in the package (``ValueError`` for malformed content,
``KeyError`` for missing keywords).
"""

from __future__ import annotations


class FcsError(Exception):
    """Base class for all errors raised by fcs_codec."""


# ----------------------------------------------------------------------
# Header
# ----------------------------------------------------------------------


class HeaderError(FcsError, ValueError):
    """The 58-byte header could not be decoded."""


class HeaderLengthError(HeaderError):
    def __init__(self, length: int, expected: int = 58):
        self.length = int(length)
        self.expected = int(expected)
        super().__init__(f"header needs {self.expected} bytes, got {self.length}")


class HeaderFieldError(HeaderError):
    """A numeric header field is not a non-negative decimal integer.

    ``field`` names the failing field (e.g. ``"text_start"``), ``raw`` holds the
    untrimmed field content.
    """

    def __init__(self, field: str, raw: str):
        self.field = field
        self.raw = raw
        super().__init__(f"invalid header field {field}: {raw!r}")


class HeaderEncodeError(HeaderError):
    """A header value does not fit its fixed-width field."""


# ----------------------------------------------------------------------
# Text
# ----------------------------------------------------------------------


class TextParseError(FcsError, ValueError):
    """The text segment does not match the delimited key/value grammar."""


class TextEncodeError(FcsError, ValueError):
    """A key or value cannot be written so that it decodes back unchanged."""


# ----------------------------------------------------------------------
# Data
# ----------------------------------------------------------------------


class DataError(FcsError, ValueError):
    """Base class for data segment errors. ``kind`` identifies the variant."""

    kind = "data"


class UnsupportedModeError(DataError):
    kind = "unsupported_mode"

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"unsupported mode {mode!r}, only list mode (L) is supported")


class UnsupportedDataTypeError(DataError):
    kind = "unsupported_datatype"

    def __init__(self, data_type: str):
        self.data_type = data_type
        super().__init__(f"unsupported data type {data_type!r}, only 32-bit floats (F) are supported")


class UnsupportedByteOrderError(DataError):
    kind = "unsupported_byteorder"

    def __init__(self, byte_order):
        self.byte_order = byte_order
        super().__init__(f"unsupported byte order {byte_order!r}, only 1,2,3,4 and 4,3,2,1 are supported")


class ShortReadError(DataError):
    kind = "short_read"

    def __init__(self, expected: int, got: int):
        self.expected = int(expected)
        self.got = int(got)
        super().__init__(f"data segment could not fill {self.expected} values (got {self.got})")


# ----------------------------------------------------------------------
# Keywords / glue
# ----------------------------------------------------------------------


class KeywordError(FcsError):
    """A keyword needed by the caller is missing or malformed."""


class MissingKeywordError(KeywordError, KeyError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"keyword {key} is missing")

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidKeywordError(KeywordError, ValueError):
    def __init__(self, key: str, value: str, reason: str = "not a valid integer"):
        self.key = key
        self.value = value
        super().__init__(f"keyword {key}={value!r}: {reason}")


class SegmentBoundsError(FcsError, ValueError):
    """A segment range from the header points outside the file."""

    def __init__(self, segment: str, start: int, end: int, size: int):
        self.segment = segment
        self.start = int(start)
        self.end = int(end)
        self.size = int(size)
        super().__init__(f"{segment} segment {start}..={end} exceeds file size {size}")
