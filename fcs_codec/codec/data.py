from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Dict, List, Optional, Union

import numpy as np

from fcs_codec.errors import (
    ShortReadError,
    UnsupportedByteOrderError,
    UnsupportedDataTypeError,
    UnsupportedModeError,
)
from fcs_codec.models.segments import Data, Text


VALUE_SIZE = 4

# $BYTEORD -> numpy dtype for one 32-bit float
BYTE_ORDERS: Dict[str, np.dtype] = {
    "1,2,3,4": np.dtype("<f4"),
    "4,3,2,1": np.dtype(">f4"),
}


@dataclass(frozen=True)
class DataDecoderConfig:
    """
    chunk_events:
      Number of values pulled from a stream per read() call in :meth:`DataDecoder.read`.
    """
    chunk_events: int = 65536


def select_dtype(text: Text) -> np.dtype:
    """
    Check $MODE, $DATATYPE and $BYTEORD (in that order) and return the dtype
    of one stored value.
    """
    mode = text.get("$MODE", "undefined")
    if mode != "L":
        raise UnsupportedModeError(mode)

    data_type = text.get("$DATATYPE", "undefined")
    if data_type != "F":
        raise UnsupportedDataTypeError(data_type)

    byte_order = text.get("$BYTEORD")
    if byte_order not in BYTE_ORDERS:
        raise UnsupportedByteOrderError(byte_order)
    return BYTE_ORDERS[byte_order]


class DataDecoder:
    """Decode list-mode float32 data according to the keywords of a Text segment."""

    def __init__(self, config: Optional[DataDecoderConfig] = None):
        self.config = config or DataDecoderConfig()

    def decode(
        self,
        text: Text,
        buf: Union[bytes, bytearray, memoryview],
        count: Optional[int] = None,
    ) -> Data:
        """
        Decode ``count`` values from ``buf``.

        count:
          Defaults to ``len(buf) // 4``; trailing bytes that do not form a
          full value are dropped and reported in ``Data.warnings``. An explicit
          count larger than the buffer can hold raises ShortReadError.
        """
        dtype = select_dtype(text)
        raw = memoryview(buf).cast("B")
        available = len(raw) // VALUE_SIZE
        n = available if count is None else int(count)
        if n < 0:
            raise ValueError(f"count must be >= 0, got {n}")
        if n > available:
            raise ShortReadError(n, available)

        events = np.frombuffer(raw, dtype=dtype, count=n) if n else np.empty(0, dtype=dtype)
        dropped = len(raw) - n * VALUE_SIZE
        warnings: List[str] = []
        if dropped and count is None:
            warnings.append(f"dropped {dropped} trailing bytes not forming a full 32-bit value")
        return Data(events=events.astype(np.float32), dropped_bytes=dropped, warnings=tuple(warnings))

    def read(self, text: Text, stream: BinaryIO, count: int) -> Data:
        """
        Read exactly ``count`` values from a binary stream, chunk by chunk.

        An early end of stream raises ShortReadError.
        """
        dtype = select_dtype(text)
        n = int(count)
        if n < 0:
            raise ValueError(f"count must be >= 0, got {n}")
        chunk = max(1, int(self.config.chunk_events))

        out = np.empty(n, dtype=np.float32)
        filled = 0
        pending = b""
        while filled < n:
            want = min(chunk, n - filled) * VALUE_SIZE - len(pending)
            block = stream.read(want)
            if not block:
                raise ShortReadError(n, filled)
            block = pending + block
            usable = len(block) - len(block) % VALUE_SIZE
            pending = block[usable:]
            k = usable // VALUE_SIZE
            if k:
                out[filled:filled + k] = np.frombuffer(block, dtype=dtype, count=k)
                filled += k
        return Data(events=out)


def decode_data(
    text: Text,
    buf: Union[bytes, bytearray, memoryview],
    count: Optional[int] = None,
) -> Data:
    return DataDecoder().decode(text, buf, count=count)


def encode_data(text: Text, data: Data) -> bytes:
    """Serialize events with the dtype selected by the text keywords."""
    dtype = select_dtype(text)
    return np.asarray(data.events, dtype=np.float32).astype(dtype).tobytes()
