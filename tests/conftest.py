"""Shared test fixtures."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Callable, Sequence, Tuple

import pytest

from willsvg.schema import encode_path
from willsvg.stream_io import frame_records

StrokeSpec = Tuple[int, Sequence[int]]


def stroke_entry(*strokes: StrokeSpec) -> bytes:
    """Frame ``(precision, deltas)`` strokes into one terminated entry stream."""

    return frame_records(encode_path(points, decimal_precision=precision) for precision, points in strokes)


@pytest.fixture
def make_entry() -> Callable[..., bytes]:
    return stroke_entry


@pytest.fixture
def make_will(tmp_path: Path) -> Callable[..., Path]:
    """Write a zip container holding ``entries`` (name -> bytes), in the given order."""

    def _build(entries: dict[str, bytes], name: str = "sample.will") -> Path:
        target = tmp_path / name
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry_name, data in entries.items():
                archive.writestr(entry_name, data)
        return target

    return _build


@pytest.fixture
def sample_will(make_will: Callable[..., Path]) -> Path:
    return make_will(
        {
            "sections/media/ink_0001.protobuf": stroke_entry((0, [10, 10, 5, -5])),
            "sections/media/readme.txt": b"not ink",
            "sections/other/ink_0002.protobuf": stroke_entry((0, [1, 1])),
            "sections/media/ink_0003.protobuf": stroke_entry((1, [100, 200]), (0, [0, 0, 3, 4])),
        },
        name="note.will",
    )
