"""
Walk a ``.will`` container (a zip archive) and turn every stroke entry into
polylines on a ``Document``.

Stroke entries live under ``sections/media`` and end in ``.protobuf``. Each
one is a run of length-prefixed ``Path`` records closed by a zero-length
record. Entries are handled in archive order and records keep their order
within an entry.
"""

from __future__ import annotations

import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, List, Tuple

from .document import Document
from .layout import Layout
from .logging import ENTRY_OPEN, MALFORMED_RECORD, SCHEMA_DECODE, TRUNCATED_RECORD, ConversionLog
from .schema import DEFAULT_DECIMAL_PRECISION, PathRecord, PathSchemaError, parse_path
from .shapes import Polyline
from .stream_io import TruncatedStreamError, iter_records
from .strokes import StrokeDecodeError, stroke_polyline

ENTRY_DIRECTORY = "sections/media"
ENTRY_SUFFIX = ".protobuf"


class ArchiveOpenError(RuntimeError):
    """The input could not be opened as a zip container."""


@dataclass
class ScanSummary:
    entries_matched: int = 0
    entries_skipped: int = 0
    polylines: int = 0


def open_archive(source: Path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(source)
    except zipfile.BadZipFile as exc:
        raise ArchiveOpenError(f"{source} is not a valid zip container: {exc}") from exc
    except OSError as exc:
        raise ArchiveOpenError(f"unable to open {source}: {exc}") from exc


def is_stroke_entry(name: str) -> bool:
    return ENTRY_DIRECTORY in name and name.endswith(ENTRY_SUFFIX)


def iter_stroke_entries(archive: zipfile.ZipFile) -> Iterator[zipfile.ZipInfo]:
    for info in archive.infolist():
        if info.is_dir():
            continue
        if is_stroke_entry(info.filename):
            yield info


def read_entry_polylines(
    stream: BinaryIO,
    entry_name: str,
    *,
    log: ConversionLog | None = None,
) -> List[Polyline]:
    """
    Decode every record of one entry stream into a polyline.

    A record that is not a valid ``Path`` message is logged and rendered as an
    empty polyline. A truncated or malformed record ends the entry; whatever
    was decoded before it is kept.
    """

    log = log if log is not None else ConversionLog()
    polylines: List[Polyline] = []
    try:
        for payload in iter_records(stream):
            try:
                record = parse_path(payload)
            except PathSchemaError as exc:
                log.record(SCHEMA_DECODE, entry_name, str(exc), record=len(polylines))
                record = PathRecord(decimal_precision=DEFAULT_DECIMAL_PRECISION, points=())
            polylines.append(stroke_polyline(record))
    except TruncatedStreamError as exc:
        log.record(TRUNCATED_RECORD, entry_name, str(exc), record=len(polylines))
    except StrokeDecodeError as exc:
        log.record(MALFORMED_RECORD, entry_name, str(exc), record=len(polylines))
    except (zipfile.BadZipFile, zlib.error) as exc:
        log.record(TRUNCATED_RECORD, entry_name, f"entry data is corrupt: {exc}", record=len(polylines))
    return polylines


def scan_archive(
    archive: zipfile.ZipFile,
    document: Document,
    *,
    log: ConversionLog | None = None,
) -> ScanSummary:
    log = log if log is not None else ConversionLog()
    summary = ScanSummary()
    for info in iter_stroke_entries(archive):
        summary.entries_matched += 1
        try:
            stream = archive.open(info)
        except (zipfile.BadZipFile, NotImplementedError, RuntimeError, OSError) as exc:
            # Encrypted entries raise RuntimeError, unknown compression NotImplementedError.
            log.record(ENTRY_OPEN, info.filename, f"error opening entry: {exc}")
            summary.entries_skipped += 1
            continue
        with stream:
            polylines = read_entry_polylines(stream, info.filename, log=log)
        document.extend(polylines)
        summary.polylines += len(polylines)
    return summary


def convert_file(
    source: Path,
    destination: Path,
    *,
    layout: Layout | None = None,
    log: ConversionLog | None = None,
) -> Tuple[Document, ScanSummary]:
    document = Document(destination, layout)
    with open_archive(source) as archive:
        summary = scan_archive(archive, document, log=log)
    document.save()
    return document, summary
