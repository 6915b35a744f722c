from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
from xml.sax.saxutils import escape

from .layout import Layout, translate_scale

DEFAULT_COLORS: dict[str, Tuple[int, int, int]] = {
    "aqua": (0, 255, 255),
    "black": (0, 0, 0),
    "blue": (0, 0, 255),
    "brown": (165, 42, 42),
    "cyan": (0, 255, 255),
    "fuchsia": (255, 0, 255),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "magenta": (255, 0, 255),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "red": (255, 0, 0),
    "silver": (192, 192, 192),
    "white": (255, 255, 255),
    "yellow": (255, 255, 0),
}


def format_number(value: float) -> str:
    """General format, six significant digits, no trailing zeros."""

    return f"{value:g}"


def attribute(name: str, value: object, unit: str = "") -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = format_number(value)
    elif isinstance(value, str):
        value = escape(value, {'"': "&quot;"})
    return f'{name}="{value}{unit}" '


@dataclass(frozen=True)
class Color:
    """An RGB triple, or transparent when ``rgb`` is ``None``."""

    rgb: Tuple[int, int, int] | None = (0, 0, 0)

    @classmethod
    def named(cls, name: str) -> "Color":
        key = name.lower()
        if key == "transparent":
            return cls.transparent()
        try:
            return cls(DEFAULT_COLORS[key])
        except KeyError:
            raise ValueError(f"Unknown color name: {name!r}") from None

    @classmethod
    def transparent(cls) -> "Color":
        return cls(None)

    @property
    def is_transparent(self) -> bool:
        return self.rgb is None

    def to_svg(self) -> str:
        if self.rgb is None:
            return "transparent"
        red, green, blue = self.rgb
        return f"rgb({red},{green},{blue})"


@dataclass(frozen=True)
class Fill:
    color: Color = Color()

    def to_svg(self, layout: Layout) -> str:
        return attribute("fill", self.color.to_svg())


@dataclass(frozen=True)
class Stroke:
    """Outline style. A negative width means "no stroke" and emits nothing."""

    width: float = -1.0
    color: Color = Color.transparent()

    def to_svg(self, layout: Layout) -> str:
        if self.width < 0:
            return ""
        return attribute("stroke-width", translate_scale(self.width, layout)) + attribute(
            "stroke", self.color.to_svg()
        )


@dataclass(frozen=True)
class Font:
    size: float = 12.0
    family: str = "Verdana"

    def to_svg(self, layout: Layout) -> str:
        return attribute("font-size", translate_scale(self.size, layout)) + attribute(
            "font-family", self.family
        )
