"""
Core WILL ink-to-SVG conversion utilities split into modules for reuse.
"""

from .archive import (
    ENTRY_DIRECTORY,
    ENTRY_SUFFIX,
    ArchiveOpenError,
    ScanSummary,
    convert_file,
    is_stroke_entry,
    iter_stroke_entries,
    open_archive,
    read_entry_polylines,
    scan_archive,
)
from .document import Document, DocumentWriteError
from .layout import PAGE_HEIGHT, PAGE_WIDTH, Dimensions, Layout, Origin, Point, translate_scale, translate_x, translate_y
from .logging import ConversionLog, Diagnostic
from .schema import DEFAULT_DECIMAL_PRECISION, PathRecord, PathSchemaError, encode_path, parse_path
from .shapes import Circle, Ellipse, Line, LineChart, Polygon, Polyline, Rectangle, Shape, Text
from .stream_io import MAX_VARINT_BYTES, TruncatedStreamError, encode_varint, frame_records, iter_records, read_length, read_payload
from .strokes import DEFAULT_FILL, DEFAULT_STROKE, StrokeDecodeError, decode_stroke, encode_stroke, stroke_polyline
from .styles import Color, Fill, Font, Stroke

__all__ = [
    "ENTRY_DIRECTORY",
    "ENTRY_SUFFIX",
    "ArchiveOpenError",
    "ScanSummary",
    "convert_file",
    "is_stroke_entry",
    "iter_stroke_entries",
    "open_archive",
    "read_entry_polylines",
    "scan_archive",
    "Document",
    "DocumentWriteError",
    "PAGE_WIDTH",
    "PAGE_HEIGHT",
    "Dimensions",
    "Layout",
    "Origin",
    "Point",
    "translate_x",
    "translate_y",
    "translate_scale",
    "ConversionLog",
    "Diagnostic",
    "DEFAULT_DECIMAL_PRECISION",
    "PathRecord",
    "PathSchemaError",
    "encode_path",
    "parse_path",
    "Circle",
    "Ellipse",
    "Line",
    "LineChart",
    "Polygon",
    "Polyline",
    "Rectangle",
    "Shape",
    "Text",
    "MAX_VARINT_BYTES",
    "TruncatedStreamError",
    "encode_varint",
    "frame_records",
    "iter_records",
    "read_length",
    "read_payload",
    "DEFAULT_FILL",
    "DEFAULT_STROKE",
    "StrokeDecodeError",
    "decode_stroke",
    "encode_stroke",
    "stroke_polyline",
    "Color",
    "Fill",
    "Font",
    "Stroke",
]
