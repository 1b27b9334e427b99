"""Domain models for rasterkit.

This module contains the value types shared by every algorithm. All models
are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (batch processing)
- Free of any presentation concerns

Key classes:
- Point: An integer pixel coordinate
- Segment: An ordered pair of points
- Window: An axis-aligned clip rectangle
- Polygon: An implicitly closed vertex loop
- PolygonBuilder: Incremental vertex collection with undo and close
- PixelSet: Ordered, deduplicated pixel output
- Span: A horizontal run of filled pixels
- Trace / TraceRecorder: Structured derivation logs
"""

from rasterkit.domain.geometry import Point, Polygon, PolygonBuilder, Segment, Window
from rasterkit.domain.pixels import PixelSet, Span
from rasterkit.domain.trace import Trace, TraceKind, TraceRecorder, TraceStep

__all__: list[str] = [
    # Enums
    "TraceKind",
    # Geometry
    "Point",
    "Segment",
    "Window",
    "Polygon",
    "PolygonBuilder",
    # Output
    "PixelSet",
    "Span",
    # Trace
    "Trace",
    "TraceStep",
    "TraceRecorder",
]
