#!/usr/bin/env python3
"""
Minimal record dumper for WILL containers.

Every ``sections/media/*.protobuf`` entry holds a run of records framed as

    varint  byte_count
    <byte_count bytes of a WacomInkFormat.Path message>

terminated by a zero byte count. This tool walks those records and prints a
compact summary (precision, point count, bounding box) per record so a file
can be eyeballed without rendering it.
"""

from __future__ import annotations

import argparse
import itertools
import sys
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Sequence, Tuple

from willsvg import ArchiveOpenError, iter_stroke_entries, open_archive
from willsvg.layout import max_point, min_point
from willsvg.schema import PathSchemaError, parse_path
from willsvg.stream_io import TruncatedStreamError, iter_records
from willsvg.strokes import StrokeDecodeError, decode_stroke


@dataclass(frozen=True)
class RecordSummary:
    index: int
    size: int
    precision: int | None
    point_count: int
    bbox: Tuple[float, float, float, float] | None
    error: str | None = None


def summarize_records(stream: BinaryIO) -> Iterator[RecordSummary]:
    index = 0
    try:
        for payload in iter_records(stream):
            try:
                record = parse_path(payload)
            except PathSchemaError as exc:
                yield RecordSummary(index, len(payload), None, 0, None, error=str(exc))
                index += 1
                continue
            try:
                points = decode_stroke(record.points, record.decimal_precision)
            except StrokeDecodeError as exc:
                yield RecordSummary(index, len(payload), record.decimal_precision, 0, None, error=str(exc))
                return
            low, high = min_point(points), max_point(points)
            bbox = None if low is None or high is None else (low[0], low[1], high[0], high[1])
            yield RecordSummary(index, len(payload), record.decimal_precision, len(points), bbox)
            index += 1
    except TruncatedStreamError as exc:
        yield RecordSummary(index, 0, None, 0, None, error=str(exc))
    except (zipfile.BadZipFile, zlib.error) as exc:
        yield RecordSummary(index, 0, None, 0, None, error=f"entry data is corrupt: {exc}")


def describe_record(summary: RecordSummary) -> str:
    parts = [f"#{summary.index:04d}", f"size={summary.size}"]
    if summary.precision is not None:
        parts.append(f"precision={summary.precision}")
    parts.append(f"points={summary.point_count}")
    if summary.bbox is not None:
        min_x, min_y, max_x, max_y = summary.bbox
        parts.append(f"bbox=({min_x:.3f},{min_y:.3f})-({max_x:.3f},{max_y:.3f})")
    if summary.error:
        parts.append(f"error={summary.error}")
    return " | ".join(parts)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump stroke records from a WILL container.")
    parser.add_argument("input", type=Path, help="Path to the .will file")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of records to print per entry (default: no limit)",
    )
    parser.add_argument(
        "--entries-only",
        action="store_true",
        help="List matching entry names without decoding their records",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        archive = open_archive(args.input)
    except ArchiveOpenError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    count = 0
    with archive:
        for info in iter_stroke_entries(archive):
            count += 1
            print(f"{info.filename} ({info.file_size} bytes)")
            if args.entries_only:
                continue
            try:
                stream = archive.open(info)
            except (zipfile.BadZipFile, NotImplementedError, RuntimeError, OSError) as exc:
                print(f"  [!] error opening entry: {exc}", file=sys.stderr)
                continue
            with stream:
                summaries = summarize_records(stream)
                if args.limit is not None:
                    summaries = itertools.islice(summaries, args.limit)
                for summary in summaries:
                    print(f"  {describe_record(summary)}")
    if count == 0:
        print("No stroke entries found in the container.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
