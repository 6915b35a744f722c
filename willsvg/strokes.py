from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .layout import Point
from .schema import PathRecord
from .shapes import Polyline
from .styles import Color, Fill, Stroke

DEFAULT_FILL = Fill(Color.named("white"))
DEFAULT_STROKE = Stroke(1.0, Color.named("black"))


class StrokeDecodeError(ValueError):
    """A record's point data cannot be turned into a polyline."""


def _check_precision(decimal_precision: int) -> None:
    if decimal_precision < 0:
        raise StrokeDecodeError(f"decimal precision must be non-negative, got {decimal_precision}")


def decode_stroke(points: Sequence[int], decimal_precision: int) -> List[Point]:
    """
    Rebuild absolute coordinates from a delta-encoded point run.

    The first X/Y pair is absolute. Every later pair is an offset from the
    pair before it, so a running sum per axis restores the absolute values.
    The sum is carried in int32 so overflow wraps the same way the encoder's
    arithmetic does. Results are scaled by ``10 ** -decimal_precision``.
    """

    _check_precision(decimal_precision)
    if len(points) % 2:
        raise StrokeDecodeError(f"point data must hold X/Y pairs, got {len(points)} values")
    if not points:
        return []
    deltas = np.asarray(points, dtype=np.int64).astype(np.int32).reshape(-1, 2)
    absolute = np.cumsum(deltas, axis=0, dtype=np.int32)
    try:
        divisor = 10.0 ** decimal_precision
    except OverflowError as exc:
        raise StrokeDecodeError(f"decimal precision {decimal_precision} is out of range") from exc
    scaled = absolute / divisor
    return [(float(x), float(y)) for x, y in scaled]


def encode_stroke(absolute: Sequence[Tuple[int, int]]) -> List[int]:
    """Inverse of the delta step: absolute integer pairs back to the wire layout."""

    if not absolute:
        return []
    pairs = np.asarray(absolute, dtype=np.int64).astype(np.int32).reshape(-1, 2)
    deltas = pairs.copy()
    deltas[1:] = pairs[1:] - pairs[:-1]
    return [int(value) for value in deltas.reshape(-1)]


def stroke_polyline(
    record: PathRecord,
    *,
    fill: Fill = DEFAULT_FILL,
    stroke: Stroke = DEFAULT_STROKE,
) -> Polyline:
    points = decode_stroke(record.points, record.decimal_precision)
    return Polyline(points=tuple(points), fill=fill, stroke=stroke)
