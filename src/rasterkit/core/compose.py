"""Compositions of the basic algorithms.

These helpers cover what a drawing front-end needs on top of the single
algorithms: clipping upstream of line rasterization, window borders and
polygon outlines.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from rasterkit.config import ClipAlgorithm, LineAlgorithm
from rasterkit.core.clipping import (
    DEFAULT_ITERATION_CAP,
    DEFAULT_PARALLEL_EPSILON,
    ClipResult,
    clip_line,
)
from rasterkit.core.line import LineResult, rasterize_dda, rasterize_line
from rasterkit.domain import PixelSet, Point, Polygon, Window


@dataclass
class ClippedLineResult:
    """A clip followed by rasterization of the visible part.

    Attributes:
        clip: Clipping outcome and trace
        line: Rasterized visible segment (None unless the clip accepted)
    """

    clip: ClipResult
    line: LineResult | None = None

    @property
    def accepted(self) -> bool:
        return self.clip.accepted

    @property
    def pixels(self) -> PixelSet:
        return self.line.pixels if self.line is not None else PixelSet()


def clip_and_rasterize(
    p0: Point,
    p1: Point,
    window: Window,
    clip_algorithm: ClipAlgorithm = ClipAlgorithm.COHEN_SUTHERLAND,
    line_algorithm: LineAlgorithm = LineAlgorithm.DDA,
    trace: bool = False,
    iteration_cap: int = DEFAULT_ITERATION_CAP,
    parallel_epsilon: float = DEFAULT_PARALLEL_EPSILON,
) -> ClippedLineResult:
    """Clip a segment to a window, then rasterize whatever is visible.

    Clipped endpoints are rounded to the nearest pixel before rasterizing.

    Args:
        p0: Segment start
        p1: Segment end
        window: Clip window
        clip_algorithm: Clipping variant
        line_algorithm: Line variant for the visible part
        trace: Record the line derivation (the clip always traces)
        iteration_cap: Cohen-Sutherland safety cap
        parallel_epsilon: Liang-Barsky parallel threshold

    Returns:
        ClippedLineResult; line is None when nothing is visible

    Raises:
        DegenerateWindowError: If the window has zero width or height
        UnsupportedGeometryError: If the octant-1 variant cannot draw the
            clipped segment
    """
    clip = clip_line(
        p0,
        p1,
        window,
        clip_algorithm,
        iteration_cap=iteration_cap,
        parallel_epsilon=parallel_epsilon,
    )
    endpoints = clip.rounded_endpoints()
    if not clip.accepted or endpoints is None:
        return ClippedLineResult(clip=clip)

    start, end = endpoints
    return ClippedLineResult(clip=clip, line=rasterize_line(start, end, line_algorithm, trace))


def window_border(window: Window) -> PixelSet:
    """Pixels of the window outline, drawn as four DDA edges.

    Corners are shared by two edges and emitted once.
    """
    x0, y0 = window.x_min, window.y_min
    x1, y1 = window.x_max, window.y_max

    pixels = PixelSet()
    for a, b in (
        (Point(x0, y0), Point(x1, y0)),
        (Point(x1, y0), Point(x1, y1)),
        (Point(x1, y1), Point(x0, y1)),
        (Point(x0, y1), Point(x0, y0)),
    ):
        pixels.extend(rasterize_dda(a, b).pixels)
    return pixels


def polygon_outline(vertices: Polygon | Sequence[Point], closed: bool = True) -> PixelSet:
    """Pixels of a polygon outline, drawn as DDA edges between vertices.

    An open vertex chain (closed=False) skips the closing edge; the closing
    edge is also skipped while fewer than three vertices exist.

    Args:
        vertices: Polygon or vertex chain
        closed: Draw the edge from the last vertex back to the first

    Returns:
        Outline pixels in drawing order
    """
    points = list(vertices.vertices if isinstance(vertices, Polygon) else vertices)

    pixels = PixelSet()
    for a, b in zip(points, points[1:]):
        pixels.extend(rasterize_dda(a, b).pixels)

    if closed and len(points) >= 3:
        pixels.extend(rasterize_dda(points[-1], points[0]).pixels)

    pixels.extend(points)
    return pixels
