from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from fcs_codec.codec.data import DataDecoder
from fcs_codec.codec.header import HEADER_LENGTH, HeaderCodec
from fcs_codec.codec.text import TextCodec, TextCodecConfig
from fcs_codec.errors import KeywordError, SegmentBoundsError
from fcs_codec.models.frames import FcsFile
from fcs_codec.models.segments import SegmentOffsets, Text


@dataclass(frozen=True)
class FcsReaderConfig:
    """
    Reader configuration for single-dataset FCS files.

    encoding:
      Encoding of the text segment (see TextCodecConfig).
    strict_segments:
      - True: a header range that points past the end of the file is an error.
      - False: clip the range to the file and record a warning.
    check_keyword_offsets:
      Compare the header data range with $BEGINDATA/$ENDDATA and warn on mismatch.
      The keywords are never used to locate the data (header overflow is not resolved).
    """
    encoding: str = "utf-8"
    strict_segments: bool = True
    check_keyword_offsets: bool = True


class FcsReader:
    """
    Reads an FCS file into memory and decodes its header, text and data segments.

    All decoding is delegated to the codecs; this class only slices the buffer
    by the header offsets and collects warnings.
    """

    def __init__(self, config: Optional[FcsReaderConfig] = None):
        self.config = config or FcsReaderConfig()
        self._header_codec = HeaderCodec()
        self._text_codec = TextCodec(TextCodecConfig(encoding=self.config.encoding))
        self._data_decoder = DataDecoder()

    def read(self, file_path: Union[str, Path]) -> FcsFile:
        path = Path(file_path).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(str(path))
        return self.read_bytes(path.read_bytes(), source_path=path)

    def read_bytes(self, contents: bytes, source_path: Optional[Path] = None) -> FcsFile:
        warnings: List[str] = []

        header = self._header_codec.decode(contents[:HEADER_LENGTH])

        text_buf = self._slice("text", contents, header.text_offsets, warnings)
        text = self._text_codec.decode(text_buf)

        if header.data_offsets.is_empty:
            warnings.append("header data range is 0..=0; data segment treated as empty")
        data_buf = self._slice("data", contents, header.data_offsets, warnings)
        data = self._data_decoder.decode(text, data_buf)
        warnings.extend(data.warnings)

        if self.config.check_keyword_offsets:
            warnings.extend(self._check_keyword_offsets(text, header.data_offsets))

        try:
            par = text.parameter_count
        except KeywordError as e:
            warnings.append(f"events cannot be grouped: {e}")
        else:
            if len(data) % par:
                warnings.append(
                    f"{len(data)} values do not fill a whole number of events of $PAR={par}; "
                    f"the last {len(data) % par} values form a partial event"
                )

        return FcsFile(
            source_path=source_path,
            header=header,
            text=text,
            data=data,
            warnings=tuple(warnings),
        )

    def _slice(self, name: str, contents: bytes, offsets: SegmentOffsets, warnings: List[str]) -> bytes:
        if offsets.is_empty:
            return b""
        size = len(contents)
        if offsets.end < offsets.start:
            raise SegmentBoundsError(name, offsets.start, offsets.end, size)
        if offsets.end >= size:
            if self.config.strict_segments:
                raise SegmentBoundsError(name, offsets.start, offsets.end, size)
            warnings.append(f"{name} segment {offsets} clipped to file size {size}")
        return contents[offsets.as_slice()]

    @staticmethod
    def _check_keyword_offsets(text: Text, offsets: SegmentOffsets) -> Tuple[str, ...]:
        begin = text.get("$BEGINDATA")
        end = text.get("$ENDDATA")
        if begin is None or end is None:
            return ()
        try:
            kw = (int(begin.strip()), int(end.strip()))
        except ValueError:
            return (f"$BEGINDATA/$ENDDATA are not integers: {begin!r}, {end!r}",)
        if kw == (0, 0) or kw == (offsets.start, offsets.end):
            return ()
        if offsets.is_empty:
            return (f"data range only given in keywords ($BEGINDATA={kw[0]}, $ENDDATA={kw[1]}); not resolved",)
        return (f"header data range {offsets} disagrees with $BEGINDATA/$ENDDATA {kw[0]}..={kw[1]}",)


def read_fcs(file_path: Union[str, Path], config: Optional[FcsReaderConfig] = None) -> FcsFile:
    return FcsReader(config).read(file_path)
