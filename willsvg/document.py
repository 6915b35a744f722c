from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .layout import Layout
from .shapes import Shape, elem_end
from .styles import attribute

XML_PREAMBLE = (
    "<?xml " + attribute("version", "1.0") + attribute("standalone", "no") + "?>\n"
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
)
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
SVG_VERSION = "1.1"


class DocumentWriteError(OSError):
    """The serialized document could not be written to its destination."""


class Document:
    """
    Append-only SVG document bound to one ``Layout``.

    Shapes are rendered the moment they are added, so the document only keeps
    the markup fragments; nothing can be removed or edited afterwards.
    """

    def __init__(self, destination: Path, layout: Layout | None = None) -> None:
        self.destination = Path(destination)
        self.layout = layout or Layout()
        self._fragments: List[str] = []

    def add(self, shape: Shape) -> "Document":
        self._fragments.append(shape.to_svg(self.layout))
        return self

    def extend(self, shapes: Iterable[Shape]) -> "Document":
        for shape in shapes:
            self.add(shape)
        return self

    def __len__(self) -> int:
        return len(self._fragments)

    def to_svg(self) -> str:
        dims = self.layout.dimensions
        header = (
            "<svg "
            + attribute("width", dims.width, "px")
            + attribute("height", dims.height, "px")
            + attribute("xmlns", SVG_NAMESPACE)
            + attribute("version", SVG_VERSION)
            + ">\n"
        )
        return XML_PREAMBLE + header + "".join(self._fragments) + elem_end("svg")

    def save(self) -> Path:
        markup = self.to_svg()
        try:
            self.destination.write_text(markup, encoding="utf-8")
        except OSError as exc:
            raise DocumentWriteError(f"unable to write {self.destination}: {exc}") from exc
        return self.destination
