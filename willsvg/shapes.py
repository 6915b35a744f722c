"""
Drawable primitives that a ``Document`` accepts.

Every shape is a frozen dataclass exposing the same two operations:

* ``to_svg(layout)`` renders one markup fragment in page coordinates.
* ``offset(by)`` returns a copy moved by ``by`` in user coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence, Tuple, Union
from xml.sax.saxutils import escape

from .layout import (
    Dimensions,
    Layout,
    Point,
    max_point,
    min_point,
    offset_point,
    translate_scale,
    translate_x,
    translate_y,
)
from .styles import Color, Fill, Font, Stroke, attribute, format_number


def elem_start(name: str) -> str:
    return f"\t<{name} "


def elem_end(name: str) -> str:
    return f"</{name}>\n"


def empty_elem_end() -> str:
    return "/>\n"


def _points_attribute(points: Sequence[Point], layout: Layout) -> str:
    body = "".join(
        f"{format_number(translate_x(x, layout))},{format_number(translate_y(y, layout))} " for x, y in points
    )
    return f'points="{body}" '


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float
    fill: Fill = Fill()
    stroke: Stroke = Stroke()

    @classmethod
    def from_diameter(cls, center: Point, diameter: float, fill: Fill = Fill(), stroke: Stroke = Stroke()) -> "Circle":
        return cls(center=center, radius=diameter / 2, fill=fill, stroke=stroke)

    def to_svg(self, layout: Layout) -> str:
        return (
            elem_start("circle")
            + attribute("cx", translate_x(self.center[0], layout))
            + attribute("cy", translate_y(self.center[1], layout))
            + attribute("r", translate_scale(self.radius, layout))
            + self.fill.to_svg(layout)
            + self.stroke.to_svg(layout)
            + empty_elem_end()
        )

    def offset(self, by: Point) -> "Circle":
        return replace(self, center=offset_point(self.center, by))


@dataclass(frozen=True)
class Ellipse:
    center: Point
    radius_x: float
    radius_y: float
    fill: Fill = Fill()
    stroke: Stroke = Stroke()

    @classmethod
    def from_size(
        cls, center: Point, width: float, height: float, fill: Fill = Fill(), stroke: Stroke = Stroke()
    ) -> "Ellipse":
        return cls(center=center, radius_x=width / 2, radius_y=height / 2, fill=fill, stroke=stroke)

    def to_svg(self, layout: Layout) -> str:
        return (
            elem_start("ellipse")
            + attribute("cx", translate_x(self.center[0], layout))
            + attribute("cy", translate_y(self.center[1], layout))
            + attribute("rx", translate_scale(self.radius_x, layout))
            + attribute("ry", translate_scale(self.radius_y, layout))
            + self.fill.to_svg(layout)
            + self.stroke.to_svg(layout)
            + empty_elem_end()
        )

    def offset(self, by: Point) -> "Ellipse":
        return replace(self, center=offset_point(self.center, by))


@dataclass(frozen=True)
class Rectangle:
    edge: Point
    width: float
    height: float
    fill: Fill = Fill()
    stroke: Stroke = Stroke()

    def to_svg(self, layout: Layout) -> str:
        return (
            elem_start("rect")
            + attribute("x", translate_x(self.edge[0], layout))
            + attribute("y", translate_y(self.edge[1], layout))
            + attribute("width", translate_scale(self.width, layout))
            + attribute("height", translate_scale(self.height, layout))
            + self.fill.to_svg(layout)
            + self.stroke.to_svg(layout)
            + empty_elem_end()
        )

    def offset(self, by: Point) -> "Rectangle":
        return replace(self, edge=offset_point(self.edge, by))


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    stroke: Stroke = Stroke()

    def to_svg(self, layout: Layout) -> str:
        # Lines carry no fill attribute.
        return (
            elem_start("line")
            + attribute("x1", translate_x(self.start[0], layout))
            + attribute("y1", translate_y(self.start[1], layout))
            + attribute("x2", translate_x(self.end[0], layout))
            + attribute("y2", translate_y(self.end[1], layout))
            + self.stroke.to_svg(layout)
            + empty_elem_end()
        )

    def offset(self, by: Point) -> "Line":
        return replace(self, start=offset_point(self.start, by), end=offset_point(self.end, by))


@dataclass(frozen=True)
class Polygon:
    points: Tuple[Point, ...] = ()
    fill: Fill = Fill()
    stroke: Stroke = Stroke()

    @classmethod
    def outline(cls, points: Iterable[Point], stroke: Stroke) -> "Polygon":
        return cls(points=tuple(points), fill=Fill(Color.transparent()), stroke=stroke)

    def to_svg(self, layout: Layout) -> str:
        return (
            elem_start("polygon")
            + _points_attribute(self.points, layout)
            + self.fill.to_svg(layout)
            + self.stroke.to_svg(layout)
            + empty_elem_end()
        )

    def offset(self, by: Point) -> "Polygon":
        return replace(self, points=tuple(offset_point(pt, by) for pt in self.points))


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Point, ...] = ()
    fill: Fill = Fill()
    stroke: Stroke = Stroke()

    @classmethod
    def outline(cls, points: Iterable[Point], stroke: Stroke) -> "Polyline":
        return cls(points=tuple(points), fill=Fill(Color.transparent()), stroke=stroke)

    def to_svg(self, layout: Layout) -> str:
        return (
            elem_start("polyline")
            + _points_attribute(self.points, layout)
            + self.fill.to_svg(layout)
            + self.stroke.to_svg(layout)
            + empty_elem_end()
        )

    def offset(self, by: Point) -> "Polyline":
        return replace(self, points=tuple(offset_point(pt, by) for pt in self.points))


@dataclass(frozen=True)
class Text:
    origin: Point
    content: str
    fill: Fill = Fill()
    font: Font = Font()
    stroke: Stroke = Stroke()

    def to_svg(self, layout: Layout) -> str:
        return (
            elem_start("text")
            + attribute("x", translate_x(self.origin[0], layout))
            + attribute("y", translate_y(self.origin[1], layout))
            + self.fill.to_svg(layout)
            + self.stroke.to_svg(layout)
            + self.font.to_svg(layout)
            + ">"
            + escape(self.content)
            + elem_end("text")
        )

    def offset(self, by: Point) -> "Text":
        return replace(self, origin=offset_point(self.origin, by))


@dataclass(frozen=True)
class LineChart:
    """
    Small plotting helper: each series is drawn shifted by ``margin`` with a
    dot on every vertex, followed by an L-shaped axis sized 10% past the
    data extents.
    """

    margin: Dimensions = Dimensions()
    axis_stroke: Stroke = Stroke()
    polylines: Tuple[Polyline, ...] = field(default_factory=tuple)

    def add(self, polyline: Polyline) -> "LineChart":
        if not polyline.points:
            return self
        return replace(self, polylines=self.polylines + (polyline,))

    def extents(self) -> Dimensions | None:
        points = [pt for polyline in self.polylines for pt in polyline.points]
        low = min_point(points)
        high = max_point(points)
        if low is None or high is None:
            return None
        return Dimensions(high[0] - low[0], high[1] - low[1])

    def to_svg(self, layout: Layout) -> str:
        extents = self.extents()
        if extents is None:
            return ""
        parts = [self._series_svg(polyline, extents, layout) for polyline in self.polylines]
        parts.append(self._axis_svg(extents, layout))
        return "".join(parts)

    def offset(self, by: Point) -> "LineChart":
        return replace(self, polylines=tuple(polyline.offset(by) for polyline in self.polylines))

    def _series_svg(self, polyline: Polyline, extents: Dimensions, layout: Layout) -> str:
        shifted = polyline.offset((self.margin.width, self.margin.height))
        marker_fill = Fill(Color.named("black"))
        marker_stroke = Stroke(1.0)
        vertices = [
            Circle.from_diameter(pt, extents.height / 30.0, marker_fill, marker_stroke) for pt in shifted.points
        ]
        return shifted.to_svg(layout) + "".join(vertex.to_svg(layout) for vertex in vertices)

    def _axis_svg(self, extents: Dimensions, layout: Layout) -> str:
        width = extents.width * 1.1
        height = extents.height * 1.1
        left, top = self.margin.width, self.margin.height
        axis = Polyline.outline(
            [(left, top + height), (left, top), (left + width, top)],
            self.axis_stroke,
        )
        return axis.to_svg(layout)


Shape = Union[Circle, Ellipse, Rectangle, Line, Polygon, Polyline, Text, LineChart]
