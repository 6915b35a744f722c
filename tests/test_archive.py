"""Tests for scanning WILL containers into documents."""

from __future__ import annotations

import io
import struct
import zipfile

import pytest

from willsvg.archive import (
    ArchiveOpenError,
    convert_file,
    is_stroke_entry,
    iter_stroke_entries,
    open_archive,
    read_entry_polylines,
    scan_archive,
)
from willsvg.document import Document
from willsvg.logging import ENTRY_OPEN, MALFORMED_RECORD, SCHEMA_DECODE, TRUNCATED_RECORD, ConversionLog
from willsvg.schema import encode_path
from willsvg.stream_io import encode_varint, frame_records
from willsvg.strokes import DEFAULT_FILL, DEFAULT_STROKE


@pytest.mark.parametrize(
    "name, expected",
    [
        ("sections/media/ink_0001.protobuf", True),
        ("x/sections/media/deep/ink.protobuf", True),
        ("sections/media/ink.protobuf.bak", False),
        ("sections/media/readme.txt", False),
        ("sections/ink.protobuf", False),
    ],
)
def test_is_stroke_entry(name, expected):
    assert is_stroke_entry(name) is expected


def test_iter_stroke_entries_keeps_archive_order(sample_will):
    with open_archive(sample_will) as archive:
        names = [info.filename for info in iter_stroke_entries(archive)]
    assert names == ["sections/media/ink_0001.protobuf", "sections/media/ink_0003.protobuf"]


class _EndsEarly(io.BytesIO):
    """Behaves like a zip member whose recorded size is larger than its data."""

    def read(self, size=-1):
        data = super().read(size)
        if size and not data:
            raise EOFError
        return data


def _stored_will(path, entries):
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return bytearray(path.read_bytes())


def _patch_first_entry(raw, local_offsets, central_offsets, change):
    """Rewrite little-endian u32 header fields of the first member in place."""

    central = raw.find(b"PK\x01\x02")
    for base, offsets in ((0, local_offsets), (central, central_offsets)):
        for offset in offsets:
            (value,) = struct.unpack_from("<I", raw, base + offset)
            struct.pack_into("<I", raw, base + offset, change(value))
    return bytes(raw)


class TestReadEntryPolylines:
    def test_zero_length_record_ends_entry(self, make_entry):
        stream = io.BytesIO(make_entry((0, [10, 10, 5, -5])))
        polylines = read_entry_polylines(stream, "ink")
        assert len(polylines) == 1
        assert polylines[0].points == ((10.0, 10.0), (15.0, 5.0))
        assert polylines[0].fill == DEFAULT_FILL
        assert polylines[0].stroke == DEFAULT_STROKE

    def test_terminator_only_yields_nothing(self):
        log = ConversionLog()
        assert read_entry_polylines(io.BytesIO(b"\x00"), "ink", log=log) == []
        assert log.diagnostics == []

    def test_record_without_points_yields_empty_polyline(self, make_entry):
        log = ConversionLog()
        polylines = read_entry_polylines(io.BytesIO(make_entry((1, []))), "ink", log=log)
        assert [p.points for p in polylines] == [()]
        assert log.diagnostics == []

    def test_schema_failure_gives_empty_polyline_and_continues(self):
        stream = io.BytesIO(frame_records([b"\x22\x05\x01", encode_path([1, 2], decimal_precision=0)]))
        log = ConversionLog()
        polylines = read_entry_polylines(stream, "ink", log=log)
        assert [p.points for p in polylines] == [(), ((1.0, 2.0),)]
        assert [(d.category, d.record) for d in log.diagnostics] == [(SCHEMA_DECODE, 0)]

    def test_truncated_payload_keeps_earlier_polylines(self):
        data = frame_records([encode_path([1, 1], decimal_precision=0)], terminate=False) + encode_varint(10) + b"abc"
        log = ConversionLog()
        polylines = read_entry_polylines(io.BytesIO(data), "ink", log=log)
        assert [p.points for p in polylines] == [((1.0, 1.0),)]
        assert [(d.category, d.record) for d in log.diagnostics] == [(TRUNCATED_RECORD, 1)]

    def test_missing_terminator_is_reported(self):
        data = frame_records([encode_path([1, 1], decimal_precision=0)], terminate=False)
        log = ConversionLog()
        assert len(read_entry_polylines(io.BytesIO(data), "ink", log=log)) == 1
        assert log.count(TRUNCATED_RECORD) == 1

    def test_odd_point_count_stops_entry(self):
        data = frame_records(
            [
                encode_path([5, 5], decimal_precision=0),
                encode_path([1, 2, 3], decimal_precision=0),
                encode_path([7, 7], decimal_precision=0),
            ]
        )
        log = ConversionLog()
        polylines = read_entry_polylines(io.BytesIO(data), "ink", log=log)
        assert [p.points for p in polylines] == [((5.0, 5.0),)]
        assert [(d.category, d.record) for d in log.diagnostics] == [(MALFORMED_RECORD, 1)]

    def test_bare_eof_from_member_keeps_earlier_polylines(self):
        data = frame_records([encode_path([3, 3], decimal_precision=0)], terminate=False) + encode_varint(200)
        log = ConversionLog()
        polylines = read_entry_polylines(_EndsEarly(data), "ink", log=log)
        assert [p.points for p in polylines] == [((3.0, 3.0),)]
        assert [(d.category, d.record) for d in log.diagnostics] == [(TRUNCATED_RECORD, 1)]


class TestScanArchive:
    def test_entries_and_records_keep_order(self, sample_will, tmp_path):
        document = Document(tmp_path / "out.svg")
        log = ConversionLog()
        with open_archive(sample_will) as archive:
            summary = scan_archive(archive, document, log=log)
        assert summary.entries_matched == 2
        assert summary.entries_skipped == 0
        assert summary.polylines == 3
        assert len(document) == 3
        svg = document.to_svg()
        first = svg.index('points="10,10 15,5 "')
        second = svg.index('points="10,20 "')
        third = svg.index('points="0,0 3,4 "')
        assert first < second < third
        assert 'points="1,1 "' not in svg
        assert log.diagnostics == []

    def test_unopenable_entry_is_skipped(self, make_will, make_entry, tmp_path, monkeypatch):
        source = make_will(
            {
                "sections/media/bad.protobuf": make_entry((0, [9, 9])),
                "sections/media/good.protobuf": make_entry((0, [4, 4])),
            }
        )
        original_open = zipfile.ZipFile.open

        def flaky_open(self, name, *args, **kwargs):
            filename = name.filename if isinstance(name, zipfile.ZipInfo) else name
            if filename.endswith("bad.protobuf"):
                raise zipfile.BadZipFile("Bad magic number for file header")
            return original_open(self, name, *args, **kwargs)

        monkeypatch.setattr(zipfile.ZipFile, "open", flaky_open)
        document = Document(tmp_path / "out.svg")
        log = ConversionLog()
        with open_archive(source) as archive:
            summary = scan_archive(archive, document, log=log)
        assert summary.entries_matched == 2
        assert summary.entries_skipped == 1
        assert summary.polylines == 1
        assert 'points="4,4 "' in document.to_svg()
        assert [(d.category, d.entry) for d in log.diagnostics] == [(ENTRY_OPEN, "sections/media/bad.protobuf")]

    def test_member_with_inflated_size_does_not_stop_scan(self, make_entry, tmp_path):
        source = tmp_path / "inflated.will"
        bad = frame_records([encode_path([9, 9], decimal_precision=0)], terminate=False) + encode_varint(20000)
        raw = _stored_will(
            source,
            {"sections/media/bad.protobuf": bad, "sections/media/good.protobuf": make_entry((0, [4, 4]))},
        )
        source.write_bytes(_patch_first_entry(raw, (18, 22), (20, 24), lambda size: size + 50000))
        document = Document(tmp_path / "out.svg")
        log = ConversionLog()
        with open_archive(source) as archive:
            summary = scan_archive(archive, document, log=log)
        assert summary.entries_matched == 2
        assert 'points="4,4 "' in document.to_svg()
        # Newer zipfile releases refuse the overlapping member at open time.
        assert [d.entry for d in log.diagnostics] == ["sections/media/bad.protobuf"]
        assert log.diagnostics[0].category in (ENTRY_OPEN, TRUNCATED_RECORD)

    def test_member_with_bad_crc_does_not_stop_scan(self, make_entry, tmp_path):
        source = tmp_path / "crc.will"
        raw = _stored_will(
            source,
            {
                "sections/media/bad.protobuf": make_entry((0, [9, 9])),
                "sections/media/good.protobuf": make_entry((0, [4, 4])),
            },
        )
        source.write_bytes(_patch_first_entry(raw, (14,), (16,), lambda crc: crc ^ 0xFFFFFFFF))
        document = Document(tmp_path / "out.svg")
        log = ConversionLog()
        with open_archive(source) as archive:
            summary = scan_archive(archive, document, log=log)
        assert summary.entries_matched == 2
        assert summary.entries_skipped == 0
        assert 'points="4,4 "' in document.to_svg()
        assert [(d.category, d.entry) for d in log.diagnostics] == [(TRUNCATED_RECORD, "sections/media/bad.protobuf")]
        assert "corrupt" in log.diagnostics[0].message


class TestOpenArchive:
    def test_not_a_zip(self, tmp_path):
        source = tmp_path / "broken.will"
        source.write_bytes(b"definitely not a zip container")
        with pytest.raises(ArchiveOpenError) as excinfo:
            open_archive(source)
        assert isinstance(excinfo.value.__cause__, zipfile.BadZipFile)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArchiveOpenError) as excinfo:
            open_archive(tmp_path / "missing.will")
        assert isinstance(excinfo.value.__cause__, OSError)


def test_convert_file_writes_svg(sample_will, tmp_path):
    destination = tmp_path / "note.svg"
    document, summary = convert_file(sample_will, destination)
    assert summary.polylines == 3
    assert destination.read_text(encoding="utf-8") == document.to_svg()
    assert document.to_svg().count("<polyline") == 3


def test_convert_file_bad_container_writes_nothing(tmp_path):
    source = tmp_path / "broken.will"
    source.write_bytes(b"PK but not really")
    destination = tmp_path / "broken.svg"
    with pytest.raises(ArchiveOpenError):
        convert_file(source, destination)
    assert not destination.exists()
