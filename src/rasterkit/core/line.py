"""Line scan conversion.

Three classic variants turn a segment between two integer points into an
ordered pixel sequence:

- DDA: floating-point increments rounded to the nearest pixel each step
- Bresenham (octant 1): integer decision parameter, shallow rightward lines only
- Bresenham (all slopes): low/high split with endpoint normalization

All functions are pure; the optional trace is built per call.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from rasterkit.config import LineAlgorithm
from rasterkit.domain import PixelSet, Point, Trace, TraceRecorder
from rasterkit.exceptions import UnsupportedGeometryError

ALGORITHM_LABELS: dict[LineAlgorithm, str] = {
    LineAlgorithm.DDA: "DDA",
    LineAlgorithm.BRESENHAM_OCTANT1: "Bresenham - Octant 1",
    LineAlgorithm.BRESENHAM_ALL_SLOPES: "Bresenham - All Slopes",
}


@dataclass
class LineResult:
    """Pixels of a rasterized segment plus its derivation trace.

    Attributes:
        algorithm: Variant that produced the pixels
        pixels: Ordered pixels from the (normalized) start to the end
        trace: Derivation steps (empty unless requested)
    """

    algorithm: LineAlgorithm
    pixels: PixelSet
    trace: Trace = field(default_factory=Trace)


def rasterize_dda(p0: Point, p1: Point, trace: bool = False) -> LineResult:
    """Rasterize a segment with the Digital Differential Analyzer.

    Steps max(|dx|, |dy|) times with real-valued increments and rounds each
    position to the nearest integer. Rounding error is allowed to accumulate
    over long segments; positions are never re-based to integers.

    Args:
        p0: Start point
        p1: End point
        trace: Record derivation steps

    Returns:
        LineResult with steps + 1 pixels (a single pixel when p0 == p1)

    Examples:
        >>> rasterize_dda(Point(0, 0), Point(4, 0)).pixels.to_tuples()
        [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]
    """
    recorder = TraceRecorder(ALGORITHM_LABELS[LineAlgorithm.DDA], enabled=trace)
    pixels = PixelSet()

    dx = p1.x - p0.x
    dy = p1.y - p0.y
    steps = max(abs(dx), abs(dy))

    if steps == 0:
        recorder.setup("deltas", dx=dx, dy=dy, steps=0)
        pixels.add(p0)
        recorder.step("plot", i=0, x=float(p0.x), y=float(p0.y), px=p0.x, py=p0.y)
        return LineResult(LineAlgorithm.DDA, pixels, recorder.build())

    x_inc = dx / steps
    y_inc = dy / steps
    recorder.setup("deltas", dx=dx, dy=dy, steps=steps)
    recorder.setup("increments", x_inc=x_inc, y_inc=y_inc)

    x = float(p0.x)
    y = float(p0.y)
    for i in range(steps + 1):
        # round() rounds halves to even
        px, py = round(x), round(y)
        pixels.add(Point(px, py))
        recorder.step("plot", i=i, x=x, y=y, px=px, py=py)
        x += x_inc
        y += y_inc

    return LineResult(LineAlgorithm.DDA, pixels, recorder.build())


def rasterize_bresenham_octant1(p0: Point, p1: Point, trace: bool = False) -> LineResult:
    """Rasterize a shallow, rightward segment with textbook Bresenham.

    Only valid when p0.x <= p1.x and 0 <= dy <= dx. The decision parameter
    starts at 2dy - dx; at each unit x step, a positive parameter moves y up
    by one and subtracts 2dx, and 2dy is always added.

    Args:
        p0: Left endpoint
        p1: Right endpoint
        trace: Record derivation steps

    Returns:
        LineResult with dx + 1 pixels

    Raises:
        UnsupportedGeometryError: If the segment is outside octant 1
    """
    label = ALGORITHM_LABELS[LineAlgorithm.BRESENHAM_OCTANT1]
    dx = p1.x - p0.x
    dy = p1.y - p0.y

    if dx < 0:
        raise UnsupportedGeometryError(label, "segment must run left to right (p0.x <= p1.x)")
    if dy < 0 or dy > dx:
        raise UnsupportedGeometryError(label, f"slope {dy}/{dx} is outside 0 <= dy <= dx")

    recorder = TraceRecorder(label, enabled=trace)
    pixels = PixelSet()

    p = 2 * dy - dx
    recorder.setup("deltas", dx=dx, dy=dy)
    recorder.setup("initial decision", p0=p)

    y = p0.y
    for x in range(p0.x, p1.x + 1):
        pixels.add(Point(x, y))
        if p > 0:
            recorder.step("p > 0: y += 1", x=x, y=y, p=p)
            y += 1
            p -= 2 * dx
        else:
            recorder.step("p <= 0: keep y", x=x, y=y, p=p)
        p += 2 * dy

    return LineResult(LineAlgorithm.BRESENHAM_OCTANT1, pixels, recorder.build())


def _bresenham_low(p0: Point, p1: Point, pixels: PixelSet, recorder: TraceRecorder) -> None:
    """Step in x for |dy| < |dx| with p0.x <= p1.x."""
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    yi = 1
    if dy < 0:
        yi = -1
        dy = -dy

    d = 2 * dy - dx
    recorder.setup("deltas", dx=dx, dy=dy * yi, yi=yi)
    recorder.setup("initial decision", d0=d)

    y = p0.y
    for x in range(p0.x, p1.x + 1):
        pixels.add(Point(x, y))
        if d > 0:
            recorder.step("D > 0: y += yi", x=x, y=y, d=d)
            y += yi
            d += 2 * (dy - dx)
        else:
            recorder.step("D <= 0: keep y", x=x, y=y, d=d)
            d += 2 * dy


def _bresenham_high(p0: Point, p1: Point, pixels: PixelSet, recorder: TraceRecorder) -> None:
    """Step in y for |dy| >= |dx| with p0.y <= p1.y."""
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    xi = 1
    if dx < 0:
        xi = -1
        dx = -dx

    d = 2 * dx - dy
    recorder.setup("deltas", dx=dx * xi, dy=dy, xi=xi)
    recorder.setup("initial decision", d0=d)

    x = p0.x
    for y in range(p0.y, p1.y + 1):
        pixels.add(Point(x, y))
        if d > 0:
            recorder.step("D > 0: x += xi", x=x, y=y, d=d)
            x += xi
            d += 2 * (dx - dy)
        else:
            recorder.step("D <= 0: keep x", x=x, y=y, d=d)
            d += 2 * dx


def rasterize_bresenham_all_slopes(p0: Point, p1: Point, trace: bool = False) -> LineResult:
    """Rasterize any segment with integer-only Bresenham.

    Segments with |dy| < |dx| are "low" and driven by x; all others are
    "high" and driven by y. Endpoints are swapped when needed so the driving
    axis increases, which means the first pixel is the normalized start.

    Args:
        p0: Start point
        p1: End point
        trace: Record derivation steps

    Returns:
        LineResult with exactly max(|dx|, |dy|) + 1 pixels
    """
    recorder = TraceRecorder(ALGORITHM_LABELS[LineAlgorithm.BRESENHAM_ALL_SLOPES], enabled=trace)
    pixels = PixelSet()

    if abs(p1.y - p0.y) < abs(p1.x - p0.x):
        swapped = p0.x > p1.x
        recorder.setup("case", driving_axis="x", octant_class="low", swapped=swapped)
        if swapped:
            _bresenham_low(p1, p0, pixels, recorder)
        else:
            _bresenham_low(p0, p1, pixels, recorder)
    else:
        swapped = p0.y > p1.y
        recorder.setup("case", driving_axis="y", octant_class="high", swapped=swapped)
        if swapped:
            _bresenham_high(p1, p0, pixels, recorder)
        else:
            _bresenham_high(p0, p1, pixels, recorder)

    return LineResult(LineAlgorithm.BRESENHAM_ALL_SLOPES, pixels, recorder.build())


_LINE_RASTERIZERS: dict[LineAlgorithm, Callable[[Point, Point, bool], LineResult]] = {
    LineAlgorithm.DDA: rasterize_dda,
    LineAlgorithm.BRESENHAM_OCTANT1: rasterize_bresenham_octant1,
    LineAlgorithm.BRESENHAM_ALL_SLOPES: rasterize_bresenham_all_slopes,
}


def rasterize_line(
    p0: Point,
    p1: Point,
    algorithm: LineAlgorithm = LineAlgorithm.DDA,
    trace: bool = False,
) -> LineResult:
    """Rasterize a segment with the selected variant.

    Args:
        p0: Start point
        p1: End point
        algorithm: Line variant to use
        trace: Record derivation steps

    Returns:
        LineResult for the segment

    Raises:
        UnsupportedGeometryError: If the octant-1 variant gets a segment
            outside its domain
    """
    return _LINE_RASTERIZERS[LineAlgorithm(algorithm)](p0, p1, trace)
