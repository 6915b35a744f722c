#!/usr/bin/env python3
"""
Convert a WILL digital-ink file (.will) into an SVG document.

Usage:
    python will_to_svg.py -i INPUT.will [-o OUTPUT.svg]

Exit codes:
    0 -> success
    1 -> the container could not be opened, or the SVG or diagnostics log could not be written
    2 -> bad command line
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, Tuple

from willsvg import ArchiveOpenError, ConversionLog, DocumentWriteError, Layout, Origin, convert_file
from willsvg.layout import Dimensions, PAGE_HEIGHT, PAGE_WIDTH

WILL_MARKER = ".will"


def default_output_path(source: Path) -> Tuple[Path, bool]:
    """
    Derive the SVG path from the input path: everything before the first
    ``.will`` plus ``.svg``. The flag is False when no ``.will`` was found and
    ``.svg`` was simply appended.
    """

    text = str(source)
    cut = text.find(WILL_MARKER)
    if cut == -1:
        return Path(text + ".svg"), False
    return Path(text[:cut] + ".svg"), True


def flush_diagnostics(log: ConversionLog) -> bool:
    try:
        log.flush()
    except OSError as exc:
        print(f"[error] unable to write diagnostics to {log.destination}: {exc}", file=sys.stderr)
        return False
    return True


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a WILL ink file into SVG.")
    parser.add_argument("-i", "--input", type=Path, required=True, help="Path to the source .will file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional SVG destination (defaults to <input without .will>.svg)",
    )
    parser.add_argument(
        "--origin",
        choices=[origin.value for origin in Origin],
        default=Origin.TOP_LEFT.value,
        help="Page corner that maps to (0, 0) (default: top-left)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="Uniform scale applied to every coordinate (default: 1)",
    )
    parser.add_argument(
        "--diagnostics-log",
        type=Path,
        help="Write every skipped entry / bad record to this path",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    output_path = args.output
    if output_path is None:
        output_path, had_marker = default_output_path(args.input)
        if not had_marker:
            print("[i] not a .will file, appending .svg", file=sys.stderr)

    layout = Layout(
        dimensions=Dimensions(PAGE_WIDTH, PAGE_HEIGHT),
        origin=Origin(args.origin),
        scale=args.scale,
    )
    log = ConversionLog(args.diagnostics_log, echo=sys.stderr)
    failed = True
    try:
        document, summary = convert_file(args.input, output_path, layout=layout, log=log)
        failed = False
    except ArchiveOpenError as exc:
        print(f"[error] error opening will file: {exc}", file=sys.stderr)
    except DocumentWriteError as exc:
        print(f"[error] {exc}", file=sys.stderr)
    except OSError as exc:
        print(f"[error] conversion of {args.input} failed: {exc}", file=sys.stderr)
    if not flush_diagnostics(log) or failed:
        return 1

    print(f"[+] Scanned {summary.entries_matched} stroke entries ({summary.entries_skipped} skipped)")
    print(f"[+] Extracted {summary.polylines} polylines")
    if log.diagnostics:
        print(f"[i] {len(log.diagnostics)} problem(s) reported while decoding")
    print(f"[+] SVG written to {document.destination}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
