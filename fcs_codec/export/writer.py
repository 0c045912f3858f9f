from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from fcs_codec.codec.data import encode_data
from fcs_codec.codec.header import HEADER_LENGTH, encode_header
from fcs_codec.codec.text import TextCodec, TextCodecConfig
from fcs_codec.models.segments import Data, Header, SegmentOffsets, Text


@dataclass(frozen=True)
class FcsWriterConfig:
    """
    Layout of a written file: ``[header][padding][text][data]``.

    text_start:
      Byte offset of the text segment (>= 58).
    version:
      Written into the header when the caller does not pass one.
    update_offset_keywords:
      If the text already carries $BEGINDATA/$ENDDATA, rewrite them so they match
      the layout. Their width changes the text length, so the layout is recomputed
      until it no longer moves (at most ``max_layout_passes`` times).
    """
    text_start: int = 256
    version: str = "FCS3.1"
    padding: bytes = b" "
    encoding: str = "utf-8"
    update_offset_keywords: bool = True
    max_layout_passes: int = 8


class FcsWriter:
    def __init__(self, config: Optional[FcsWriterConfig] = None):
        self.config = config or FcsWriterConfig()
        self._text_codec = TextCodec(TextCodecConfig(encoding=self.config.encoding))

    def layout(self, text: Text, data_length: int, version: Optional[str] = None) -> Tuple[Header, Text, bytes]:
        """Return the header, the (possibly updated) text and the encoded text bytes."""
        cfg = self.config
        if cfg.text_start < HEADER_LENGTH:
            raise ValueError(f"text_start must be >= {HEADER_LENGTH}, got {cfg.text_start}")

        refresh = cfg.update_offset_keywords and ("$BEGINDATA" in text or "$ENDDATA" in text)
        text_bytes = self._text_codec.encode(text)
        for _ in range(max(1, int(cfg.max_layout_passes))):
            text_end = cfg.text_start + len(text_bytes) - 1
            if data_length > 0:
                data_offsets = SegmentOffsets(text_end + 1, text_end + data_length)
            else:
                data_offsets = SegmentOffsets(0, 0)
            if not refresh:
                break
            updated = text.replace_pairs(
                {"$BEGINDATA": str(data_offsets.start), "$ENDDATA": str(data_offsets.end)}
            )
            updated_bytes = self._text_codec.encode(updated)
            text = updated
            if len(updated_bytes) == len(text_bytes):
                text_bytes = updated_bytes
                break
            text_bytes = updated_bytes
        else:
            raise ValueError("text segment layout did not settle")

        header = Header(
            version=version or cfg.version,
            text_offsets=SegmentOffsets(cfg.text_start, cfg.text_start + len(text_bytes) - 1),
            data_offsets=data_offsets,
            analysis_offsets=SegmentOffsets(0, 0),
        )
        return header, text, text_bytes

    def to_bytes(self, text: Text, data: Data, version: Optional[str] = None) -> bytes:
        data_bytes = encode_data(text, data)
        header, _, text_bytes = self.layout(text, len(data_bytes), version=version)

        head = encode_header(header).encode("latin-1")
        pad = (self.config.padding or b" ")[:1]
        out = bytearray(head)
        out += pad * (self.config.text_start - len(out))
        out += text_bytes
        out += data_bytes
        return bytes(out)

    def write(self, file_path: Union[str, Path], text: Text, data: Data, version: Optional[str] = None) -> Path:
        path = Path(file_path).expanduser().resolve()
        path.write_bytes(self.to_bytes(text, data, version=version))
        return path
