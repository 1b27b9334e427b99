"""Scanline polygon fill.

For each integer scanline the filler intersects every non-horizontal edge,
sorts the crossings and fills between consecutive pairs. Edges are tested
on the half-open interval [ymin, ymax) so a vertex shared by two edges is
counted once.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from rasterkit.domain import Point, Polygon, Span, Trace, TraceRecorder
from rasterkit.domain.pixels import PixelSet

ALGORITHM_LABEL = "Scanline Fill"


@dataclass
class FillResult:
    """Spans of a filled polygon plus its derivation trace.

    Attributes:
        spans: Inclusive horizontal runs, bottom scanline first, left to right
        trace: Per-scanline intersections (empty unless requested)
    """

    spans: list[Span]
    trace: Trace = field(default_factory=Trace)

    def pixels(self) -> PixelSet:
        """Expand the spans into an ordered pixel set."""
        return spans_to_pixels(self.spans)

    @property
    def pixel_count(self) -> int:
        return sum(s.length for s in self.spans)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"spans": [s.to_dict() for s in self.spans], "trace": self.trace.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FillResult":
        """Deserialize from dictionary."""
        return cls(
            spans=[Span.from_dict(s) for s in data["spans"]],
            trace=Trace.from_dict(data["trace"]),
        )


def spans_to_pixels(spans: Sequence[Span]) -> PixelSet:
    """Expand spans into an ordered, deduplicated pixel set."""
    pixels = PixelSet()
    for span in spans:
        pixels.extend(span.pixels())
    return pixels


def scanline_intersections(y: int, vertices: Sequence[Point]) -> list[float]:
    """Find where the scanline y crosses the polygon edges.

    Horizontal edges are ignored. An edge counts when y lies in
    [min(a.y, b.y), max(a.y, b.y)), i.e. its lower end is included and its
    upper end excluded.

    Args:
        y: Scanline row
        vertices: Implicitly closed vertex loop

    Returns:
        Unsorted x coordinates of the crossings, in edge order
    """
    xs: list[float] = []
    n = len(vertices)
    for i in range(n):
        a = vertices[i]
        b = vertices[(i + 1) % n]

        if a.y == b.y:
            continue

        if y < min(a.y, b.y) or y >= max(a.y, b.y):
            continue

        t = (y - a.y) / (b.y - a.y)
        xs.append(a.x + t * (b.x - a.x))
    return xs


def spans_for_scanline(y: int, intersections: Sequence[float]) -> list[Span]:
    """Pair sorted crossings left to right into inclusive spans.

    Each pair becomes [ceil(x_start), floor(x_end)]; pairs that cover no
    pixel column are skipped. A trailing crossing without a partner is
    dropped, leaving that stretch unfilled.

    Args:
        y: Scanline row
        intersections: Crossing x coordinates, sorted ascending

    Returns:
        Spans for this scanline, left to right
    """
    spans: list[Span] = []
    for i in range(0, len(intersections) - 1, 2):
        x_start = math.ceil(intersections[i])
        x_end = math.floor(intersections[i + 1])
        if x_start <= x_end:
            spans.append(Span(y=y, x_start=x_start, x_end=x_end))
    return spans


def fill_polygon(polygon: Polygon, trace: bool = False) -> FillResult:
    """Fill a polygon interior with the scanline algorithm.

    Scanlines run from the lowest to the highest vertex row inclusive.
    Sorted crossings are paired left to right and each pair becomes the span
    [ceil(x_start), floor(x_end)]. When a scanline has an odd number of
    crossings the last one has no partner and is left unfilled.

    Args:
        polygon: Polygon to fill (validated to have at least 3 vertices)
        trace: Record per-scanline intersections

    Returns:
        FillResult with spans in scanline order

    Examples:
        >>> square = Polygon((Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)))
        >>> fill_polygon(square).spans[0]
        Span(y=0, x_start=0, x_end=4)
    """
    recorder = TraceRecorder(ALGORITHM_LABEL, enabled=trace)
    _, min_y, _, max_y = polygon.bounding_box()
    recorder.setup("scanline range", ymin=min_y, ymax=max_y, edges=len(polygon))

    spans: list[Span] = []
    for y in range(min_y, max_y + 1):
        xs = sorted(scanline_intersections(y, polygon.vertices))
        row = spans_for_scanline(y, xs)
        spans.extend(row)
        recorder.scanline(
            f"scanline y={y}",
            intersections=xs,
            spans=len(row),
            unpaired=len(xs) % 2 == 1,
        )

    recorder.verdict("filled spans", count=len(spans))
    return FillResult(spans=spans, trace=recorder.build())
