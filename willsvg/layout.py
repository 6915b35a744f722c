from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence, Tuple

Point = Tuple[float, float]

PAGE_WIDTH = 592.0
PAGE_HEIGHT = 864.0


class Origin(enum.Enum):
    TOP_LEFT = "top-left"
    BOTTOM_LEFT = "bottom-left"
    TOP_RIGHT = "top-right"
    BOTTOM_RIGHT = "bottom-right"


@dataclass(frozen=True)
class Dimensions:
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Layout:
    """Page size, scale, origin corner and origin offset of one document."""

    dimensions: Dimensions = Dimensions(PAGE_WIDTH, PAGE_HEIGHT)
    origin: Origin = Origin.TOP_LEFT
    scale: float = 1.0
    origin_offset: Point = (0.0, 0.0)


def translate_x(x: float, layout: Layout) -> float:
    if layout.origin in (Origin.TOP_RIGHT, Origin.BOTTOM_RIGHT):
        return layout.dimensions.width - (x + layout.origin_offset[0]) * layout.scale
    return (layout.origin_offset[0] + x) * layout.scale


def translate_y(y: float, layout: Layout) -> float:
    if layout.origin in (Origin.BOTTOM_LEFT, Origin.BOTTOM_RIGHT):
        return layout.dimensions.height - (y + layout.origin_offset[1]) * layout.scale
    return (layout.origin_offset[1] + y) * layout.scale


def translate_scale(dimension: float, layout: Layout) -> float:
    return dimension * layout.scale


def offset_point(pt: Point, by: Point) -> Point:
    return (pt[0] + by[0], pt[1] + by[1])


def min_point(points: Sequence[Point]) -> Point | None:
    """Per-axis minimum of ``points``; ``None`` when there are no points."""

    if not points:
        return None
    return (min(p[0] for p in points), min(p[1] for p in points))


def max_point(points: Sequence[Point]) -> Point | None:
    if not points:
        return None
    return (max(p[0] for p in points), max(p[1] for p in points))
