from __future__ import annotations

import io
import struct

import numpy as np
import pytest

from fcs_codec.codec.data import DataDecoder, DataDecoderConfig, decode_data, encode_data
from fcs_codec.codec.text import build_text
from fcs_codec.errors import (
    DataError,
    ShortReadError,
    UnsupportedByteOrderError,
    UnsupportedDataTypeError,
    UnsupportedModeError,
)
from fcs_codec.models.segments import Data


def _text(**overrides):
    kw = {"$MODE": "L", "$DATATYPE": "F", "$BYTEORD": "1,2,3,4", "$PAR": "2"}
    kw.update(overrides)
    return build_text({k: v for k, v in kw.items() if v is not None})


LE_1_2 = struct.pack("<2f", 1.0, 2.0)


def test_little_endian() -> None:
    data = decode_data(_text(), LE_1_2)
    assert data.events.tolist() == [1.0, 2.0]
    assert data.events.dtype == np.float32
    assert data.dropped_bytes == 0
    assert data.warnings == ()


def test_big_endian() -> None:
    buf = struct.pack(">3f", 1.5, -2.25, 1e6)
    data = decode_data(_text(**{"$BYTEORD": "4,3,2,1"}), buf)
    np.testing.assert_array_equal(data.events, np.array([1.5, -2.25, 1e6], dtype=np.float32))


def test_byte_order_matters() -> None:
    le = decode_data(_text(), LE_1_2)
    be = decode_data(_text(**{"$BYTEORD": "4,3,2,1"}), LE_1_2)
    assert not np.array_equal(le.events, be.events)


def test_trailing_bytes_dropped() -> None:
    data = decode_data(_text(), LE_1_2 + b"\x01\x02\x03")
    assert len(data) == 2
    assert data.dropped_bytes == 3
    assert any("3 trailing bytes" in w for w in data.warnings)


def test_empty_buffer() -> None:
    data = decode_data(_text(), b"")
    assert len(data) == 0
    assert data.events.shape == (0,)


def test_events_are_a_read_only_copy() -> None:
    buf = bytearray(LE_1_2)
    data = decode_data(_text(), buf)
    buf[:4] = struct.pack("<f", 9.0)
    assert data.events[0] == 1.0
    with pytest.raises(ValueError):
        data.events[0] = 3.0


def test_unsupported_mode() -> None:
    with pytest.raises(UnsupportedModeError) as ei:
        decode_data(_text(**{"$MODE": "H"}), LE_1_2)
    assert ei.value.kind == "unsupported_mode"


def test_missing_mode_is_unsupported() -> None:
    with pytest.raises(UnsupportedModeError) as ei:
        decode_data(_text(**{"$MODE": None}), LE_1_2)
    assert ei.value.mode == "undefined"


def test_unsupported_byte_order() -> None:
    with pytest.raises(UnsupportedByteOrderError):
        decode_data(_text(**{"$BYTEORD": "2,1,4,3"}), LE_1_2)
    with pytest.raises(UnsupportedByteOrderError):
        decode_data(_text(**{"$BYTEORD": None}), LE_1_2)


def test_unsupported_data_type() -> None:
    with pytest.raises(UnsupportedDataTypeError):
        decode_data(_text(**{"$DATATYPE": "I"}), LE_1_2)
    with pytest.raises(UnsupportedDataTypeError):
        decode_data(_text(**{"$DATATYPE": None}), LE_1_2)


def test_dispatch_order() -> None:
    # mode is checked before data type, data type before byte order
    with pytest.raises(UnsupportedModeError):
        decode_data(_text(**{"$MODE": "C", "$DATATYPE": "I", "$BYTEORD": "x"}), LE_1_2)
    with pytest.raises(UnsupportedDataTypeError):
        decode_data(_text(**{"$DATATYPE": "D", "$BYTEORD": "x"}), LE_1_2)


def test_data_errors_share_base() -> None:
    for exc in (UnsupportedModeError, UnsupportedDataTypeError, UnsupportedByteOrderError, ShortReadError):
        assert issubclass(exc, DataError)
        assert issubclass(exc, ValueError)


def test_explicit_count() -> None:
    data = DataDecoder().decode(_text(), LE_1_2, count=1)
    assert data.events.tolist() == [1.0]
    assert data.dropped_bytes == 4
    assert data.warnings == ()


def test_short_read_with_explicit_count() -> None:
    with pytest.raises(ShortReadError) as ei:
        DataDecoder().decode(_text(), LE_1_2, count=3)
    assert ei.value.expected == 3
    assert ei.value.got == 2
    assert ei.value.kind == "short_read"


class TestStreamingRead:
    def test_reads_across_chunks(self) -> None:
        values = np.arange(10, dtype="<f4")
        dec = DataDecoder(DataDecoderConfig(chunk_events=3))
        data = dec.read(_text(), io.BytesIO(values.tobytes()), count=10)
        np.testing.assert_array_equal(data.events, values.astype(np.float32))

    def test_big_endian_stream(self) -> None:
        values = np.array([0.5, -1.0, 3.0], dtype=">f4")
        data = DataDecoder().read(_text(**{"$BYTEORD": "4,3,2,1"}), io.BytesIO(values.tobytes()), count=3)
        assert data.events.tolist() == [0.5, -1.0, 3.0]

    def test_early_eof(self) -> None:
        dec = DataDecoder(DataDecoderConfig(chunk_events=1))
        with pytest.raises(ShortReadError) as ei:
            dec.read(_text(), io.BytesIO(LE_1_2 + b"\x00\x00"), count=3)
        assert ei.value.got == 2

    def test_partial_reads_are_reassembled(self) -> None:
        class Trickle:
            """Returns at most 3 bytes per read, like a slow pipe."""

            def __init__(self, payload: bytes):
                self._buf = io.BytesIO(payload)

            def read(self, n: int = -1) -> bytes:
                return self._buf.read(min(n, 3) if n and n > 0 else 3)

        values = np.array([1.0, 2.0, 3.0, 4.0], dtype="<f4")
        data = DataDecoder().read(_text(), Trickle(values.tobytes()), count=4)
        assert data.events.tolist() == [1.0, 2.0, 3.0, 4.0]


def test_encode_round_trip_both_orders() -> None:
    values = np.array([0.0, -1.5, 123.25, 7.0], dtype=np.float32)
    for order, fmt in (("1,2,3,4", "<4f"), ("4,3,2,1", ">4f")):
        text = _text(**{"$BYTEORD": order})
        raw = encode_data(text, Data(events=values))
        assert raw == struct.pack(fmt, *values.tolist())
        assert decode_data(text, raw) == Data(events=values)
