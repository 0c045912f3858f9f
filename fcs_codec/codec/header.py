from __future__ import annotations

from typing import Tuple, Union

from fcs_codec.errors import HeaderEncodeError, HeaderFieldError, HeaderLengthError
from fcs_codec.models.segments import Header, SegmentOffsets


HEADER_LENGTH = 58
VERSION_WIDTH = 6
VERSION_PAD = 10
OFFSET_WIDTH = 8
OFFSET_MAX = 10 ** OFFSET_WIDTH - 1

# (name, start, end) with end exclusive
OFFSET_FIELDS: Tuple[Tuple[str, int, int], ...] = (
    ("text_start", 10, 18),
    ("text_end", 18, 26),
    ("data_start", 26, 34),
    ("data_end", 34, 42),
    ("analysis_start", 42, 50),
    ("analysis_end", 50, 58),
)

_BLANK_MEANS_ZERO = frozenset({"analysis_start", "analysis_end"})


def _parse_offset(name: str, raw: bytes) -> int:
    try:
        txt = raw.decode("ascii")
    except UnicodeDecodeError:
        raise HeaderFieldError(name, raw.decode("latin-1")) from None

    digits = txt.lstrip()
    if not digits:
        if name in _BLANK_MEANS_ZERO:
            return 0
        raise HeaderFieldError(name, txt)
    if not digits.isdigit():
        raise HeaderFieldError(name, txt)
    return int(digits)


def decode_header(buf: Union[bytes, bytearray, memoryview, str]) -> Header:
    """
    Decode the fixed-width header.

    Only the first 58 bytes are looked at, so the whole file may be passed.

    Raises
    ------
    HeaderLengthError
        Fewer than 58 bytes.
    HeaderFieldError
        A numeric field is not a non-negative decimal integer. An all-blank
        analysis field is read as 0; every other blank field is an error.
    """
    if isinstance(buf, str):
        raw = buf[:HEADER_LENGTH].encode("latin-1", errors="replace")
    else:
        raw = bytes(buf[:HEADER_LENGTH])
    if len(raw) < HEADER_LENGTH:
        raise HeaderLengthError(len(raw), HEADER_LENGTH)

    version = raw[:VERSION_WIDTH].decode("latin-1")
    values = {name: _parse_offset(name, raw[a:b]) for name, a, b in OFFSET_FIELDS}

    return Header(
        version=version,
        text_offsets=SegmentOffsets(values["text_start"], values["text_end"]),
        data_offsets=SegmentOffsets(values["data_start"], values["data_end"]),
        analysis_offsets=SegmentOffsets(values["analysis_start"], values["analysis_end"]),
    )


def encode_header(header: Header) -> str:
    """
    Format a header as the 58-character string written at the start of the file.

    Raises HeaderEncodeError for a version longer than 6 characters (only six
    are read back) or an offset that does not fit in 8 digits.
    """
    if len(header.version) > VERSION_WIDTH:
        raise HeaderEncodeError(f"version {header.version!r} longer than {VERSION_WIDTH} characters")

    numbers = (
        header.text_offsets.start,
        header.text_offsets.end,
        header.data_offsets.start,
        header.data_offsets.end,
        header.analysis_offsets.start,
        header.analysis_offsets.end,
    )
    for (name, _, _), n in zip(OFFSET_FIELDS, numbers):
        if n < 0 or n > OFFSET_MAX:
            raise HeaderEncodeError(f"{name}={n} does not fit in {OFFSET_WIDTH} digits")

    return f"{header.version:<{VERSION_PAD}}" + "".join(f"{n:>{OFFSET_WIDTH}}" for n in numbers)


class HeaderCodec:
    """Stateless header codec; see :func:`decode_header` and :func:`encode_header`."""

    length = HEADER_LENGTH

    def decode(self, buf: Union[bytes, bytearray, memoryview, str]) -> Header:
        return decode_header(buf)

    def encode(self, header: Header) -> str:
        return encode_header(header)
