from __future__ import annotations

"""Text segment codec.

The segment starts with its own delimiter character; keys and values follow,
separated by single delimiters. A doubled delimiter inside a key or value
stands for one literal delimiter. Because the delimiter is only known at
runtime, fields are split by an explicit left-to-right scan rather than a
fixed grammar.

Runs of delimiters are paired greedily from the left. With delimiter ``,``::

    ab,,,cd   ->  ["ab,", "cd"]     (",," is an escape, the third "," separates)
    a,,,,b    ->  ["a,,b"]

so ``,$KEY1,val,,ue1,$KEY2,,,value2,`` decodes to
``{"$KEY1": "val,ue1", "$KEY2,": "value2"}``.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from fcs_codec.errors import TextEncodeError, TextParseError
from fcs_codec.models.segments import Text


@dataclass(frozen=True)
class TextCodecConfig:
    """
    encoding:
      Used to turn the raw segment bytes into text and back. FCS 3.1 allows
      UTF-8 in values; older files are plain ASCII, which UTF-8 also accepts.
    uppercase_keys:
      Keywords are case-insensitive; they are normalized to uppercase.
    """
    encoding: str = "utf-8"
    uppercase_keys: bool = True


def split_fields(segment: str, delimiter: str) -> List[str]:
    """
    Split the body of a text segment (everything after the leading delimiter)
    into unescaped fields.

    A single delimiter always closes the current field, even an empty one. The
    last field is kept only if it has content, so a trailing delimiter is optional.
    Empty fields are returned as-is; :meth:`TextCodec.decode` rejects them.
    """
    fields: List[str] = []
    current: List[str] = []
    i = 0
    n = len(segment)
    while i < n:
        ch = segment[i]
        if ch != delimiter:
            current.append(ch)
            i += 1
            continue
        # saw one delimiter: a second one right after makes it an escape
        if i + 1 < n and segment[i + 1] == delimiter:
            current.append(delimiter)
            i += 2
            continue
        fields.append("".join(current))
        current = []
        i += 1
    if current:
        fields.append("".join(current))
    return fields


def _escape(s: str, delimiter: str, what: str) -> str:
    if not s:
        raise TextEncodeError(f"empty {what} cannot be encoded")
    if s[0] == delimiter:
        raise TextEncodeError(f"{what} {s!r} starts with the delimiter {delimiter!r}")
    return s.replace(delimiter, delimiter * 2)


class TextCodec:
    """Decode/encode the delimited keyword segment."""

    def __init__(self, config: Optional[TextCodecConfig] = None):
        self.config = config or TextCodecConfig()

    def decode(self, buf: Union[bytes, bytearray, memoryview, str]) -> Text:
        if isinstance(buf, str):
            segment = buf
        else:
            try:
                segment = bytes(buf).decode(self.config.encoding)
            except UnicodeDecodeError:
                raise TextParseError(f"text segment is not valid {self.config.encoding}") from None

        if not segment:
            raise TextParseError("text segment is empty")

        delimiter = segment[0]
        fields = split_fields(segment[1:], delimiter)
        if len(fields) < 2 or len(fields) % 2 != 0:
            raise TextParseError(f"text segment has {len(fields)} fields, expected an even number >= 2")
        if any(not f for f in fields):
            raise TextParseError(f"text segment has an empty field at position {fields.index('')}")

        pairs: Dict[str, str] = {}
        for key, value in zip(fields[0::2], fields[1::2]):
            if self.config.uppercase_keys:
                key = key.upper()
            # duplicates: last one wins
            pairs[key] = value
        return Text(delimiter=delimiter, pairs=pairs)

    def encode(self, text: Text) -> bytes:
        d = text.delimiter
        if len(d) != 1:
            raise TextEncodeError(f"delimiter must be a single character, got {d!r}")
        parts: List[str] = [d]
        for key, value in text.pairs.items():
            parts.append(_escape(key, d, "key"))
            parts.append(d)
            parts.append(_escape(value, d, "value"))
            parts.append(d)
        try:
            return "".join(parts).encode(self.config.encoding)
        except UnicodeEncodeError as e:
            raise TextEncodeError(str(e)) from None


def decode_text(buf: Union[bytes, bytearray, memoryview, str], config: Optional[TextCodecConfig] = None) -> Text:
    return TextCodec(config).decode(buf)


def encode_text(text: Text, config: Optional[TextCodecConfig] = None) -> bytes:
    return TextCodec(config).encode(text)


def build_text(pairs: Iterable, delimiter: str = "/") -> Text:
    """Build a Text from ``(key, value)`` pairs or a mapping, uppercasing keys."""
    items = pairs.items() if hasattr(pairs, "items") else pairs
    return Text(delimiter=delimiter, pairs={str(k).upper(): str(v) for k, v in items})
