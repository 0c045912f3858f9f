from __future__ import annotations

import tempfile
from pathlib import Path

import numpy as np
import pytest

from fcs_codec.codec.text import build_text
from fcs_codec.export.writer import FcsWriter
from fcs_codec.ingest.reader import read_fcs
from fcs_codec.models.segments import Data
from fcs_codec.scripts.fcs_tool import main


def _write_sample(path: Path) -> Path:
    text = build_text(
        {
            "$BYTEORD": "1,2,3,4",
            "$DATATYPE": "F",
            "$MODE": "L",
            "$PAR": "2",
            "$TOT": "3",
            "$P1N": "FSC-A",
            "$P2N": "SSC-A",
            "$COM": "a/b",
        },
        delimiter="/",
    )
    events = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.5], dtype=np.float32)
    return FcsWriter().write(path, text, Data(events=events), version="FCS3.0")


def test_csv_command(capsys) -> None:
    with tempfile.TemporaryDirectory() as d:
        src = _write_sample(Path(d) / "in.fcs")
        out = Path(d) / "out.csv"
        assert main(["csv", str(src), str(out)]) == 0
        assert out.read_text().splitlines() == ["1.0,2.0", "3.0,4.0", "5.0,6.5"]
    assert "3 events x 2 parameters" in capsys.readouterr().out


def test_metadata_command(capsys) -> None:
    with tempfile.TemporaryDirectory() as d:
        src = _write_sample(Path(d) / "in.fcs")
        assert main(["metadata", str(src), "--summary"]) == 0
    out = capsys.readouterr().out
    assert "version:  FCS3.0" in out
    assert "$COM" in out and "a/b" in out
    assert "FSC-A" in out


def test_rewrite_command() -> None:
    with tempfile.TemporaryDirectory() as d:
        src = _write_sample(Path(d) / "in.fcs")
        dst = Path(d) / "out.fcs"
        assert main(["rewrite", str(src), str(dst), "--text-start", "58"]) == 0
        a = read_fcs(src)
        b = read_fcs(dst)
        assert b.header.text_offsets.start == 58
        assert b.text == a.text
        np.testing.assert_array_equal(a.data.events, b.data.events)


def _patch_text(path: Path, old: bytes, new: bytes) -> Path:
    """Swap a keyword/value in place; same length keeps every offset valid."""
    assert len(old) == len(new)
    raw = path.read_bytes()
    assert raw.count(old) == 1
    path.write_bytes(raw.replace(old, new))
    return path


def test_errors_become_exit_status(capsys) -> None:
    with tempfile.TemporaryDirectory() as d:
        src = _patch_text(_write_sample(Path(d) / "in.fcs"), b"/$MODE/L/", b"/$MODE/H/")
        assert main(["csv", str(src), str(Path(d) / "out.csv")]) == 1
        assert main(["metadata", str(Path(d) / "missing.fcs")]) == 1
    err = capsys.readouterr().err
    assert "[error] UnsupportedModeError" in err
    assert "[error] FileNotFoundError" in err


def test_zero_parameter_count_is_reported(capsys) -> None:
    with tempfile.TemporaryDirectory() as d:
        src = _patch_text(_write_sample(Path(d) / "in.fcs"), b"/$PAR/2/", b"/$PAR/0/")
        out = Path(d) / "out.csv"
        assert main(["csv", str(src), str(out)]) == 1
        assert not out.exists()
    err = capsys.readouterr().err
    assert "[warn] events cannot be grouped" in err
    assert "[error] InvalidKeywordError" in err
    assert "$PAR" in err


def test_bad_layout_option_is_reported(capsys) -> None:
    with tempfile.TemporaryDirectory() as d:
        src = _write_sample(Path(d) / "in.fcs")
        assert main(["rewrite", str(src), str(Path(d) / "out.fcs"), "--text-start", "40"]) == 1
    assert "[error] ValueError" in capsys.readouterr().err


def test_subcommand_required() -> None:
    with pytest.raises(SystemExit):
        main([])
