from __future__ import annotations

"""Command line tools around the FCS codecs.

Subcommands:

1) ``csv IN OUT``      write the events of IN as CSV, one event per line.
2) ``metadata IN``     print the decoded header and all keywords.
3) ``rewrite IN OUT``  decode IN and write it back with a fresh, consistent layout.
"""

import sys
from pathlib import Path
from typing import Optional, Sequence

from fcs_codec.analysis.events import summarize_events
from fcs_codec.errors import FcsError
from fcs_codec.export.csv_export import write_events_csv
from fcs_codec.export.writer import FcsWriter, FcsWriterConfig
from fcs_codec.ingest.reader import FcsReader, FcsReaderConfig
from fcs_codec.models.frames import FcsFile


def _print_warnings(f: FcsFile) -> None:
    for msg in f.warnings:
        print(f"[warn] {msg}", file=sys.stderr)


def _cmd_csv(ns, reader: FcsReader) -> int:
    f = reader.read(ns.input)
    _print_warnings(f)
    frame = f.to_dataframe()
    out = write_events_csv(frame, ns.output, header=bool(ns.header))
    print(f"[info] wrote {len(frame)} events x {frame.shape[1]} parameters to {out}")
    return 0


def _cmd_metadata(ns, reader: FcsReader) -> int:
    f = reader.read(ns.input)
    _print_warnings(f)
    h = f.header
    print(f"version:  {h.version}")
    print(f"text:     {h.text_offsets}")
    print(f"data:     {h.data_offsets}")
    print(f"analysis: {h.analysis_offsets}")
    print(f"delimiter: {f.text.delimiter!r}")
    width = max((len(k) for k in f.text.keys()), default=0)
    for k, v in f.text.items():
        print(f"  {k:<{width}}  {v}")
    if ns.summary:
        print(summarize_events(f.to_dataframe()).to_string())
    return 0


def _cmd_rewrite(ns, reader: FcsReader) -> int:
    f = reader.read(ns.input)
    _print_warnings(f)
    writer = FcsWriter(FcsWriterConfig(text_start=int(ns.text_start), encoding=reader.config.encoding))
    out = writer.write(ns.output, f.text, f.data, version=f.header.version)
    print(f"[info] wrote {out}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="fcs-tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Inspect and convert single-dataset FCS files.

            Only list-mode 32-bit float data ($MODE=L, $DATATYPE=F) in
            byte order 1,2,3,4 or 4,3,2,1 is supported.
            """
        ),
    )
    p.add_argument("--encoding", default="utf-8", help="Text segment encoding (default: utf-8)")
    p.add_argument("--lenient", action="store_true", help="Clip segment ranges past the end of file instead of failing")
    sub = p.add_subparsers(dest="command", required=True)

    p_csv = sub.add_parser("csv", help="Write events as CSV")
    p_csv.add_argument("input", type=Path)
    p_csv.add_argument("output", type=Path)
    p_csv.add_argument("--header", action="store_true", help="Write $PnN names as first line")
    p_csv.set_defaults(func=_cmd_csv)

    p_meta = sub.add_parser("metadata", help="Print header and keywords")
    p_meta.add_argument("input", type=Path)
    p_meta.add_argument("--summary", action="store_true", help="Also print per-parameter statistics")
    p_meta.set_defaults(func=_cmd_metadata)

    p_rw = sub.add_parser("rewrite", help="Decode and write a fresh file")
    p_rw.add_argument("input", type=Path)
    p_rw.add_argument("output", type=Path)
    p_rw.add_argument("--text-start", type=int, default=256, help="Byte offset of the text segment (default: 256)")
    p_rw.set_defaults(func=_cmd_rewrite)

    ns = p.parse_args(list(argv) if argv is not None else None)

    reader = FcsReader(FcsReaderConfig(encoding=ns.encoding, strict_segments=not ns.lenient))
    # FcsError: malformed input. ValueError: bad layout options such as --text-start.
    try:
        return int(ns.func(ns, reader))
    except (FcsError, ValueError, OSError) as e:
        print(f"[error] {type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
