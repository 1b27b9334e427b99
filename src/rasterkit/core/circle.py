"""Midpoint circle scan conversion with 8-way symmetry."""

from dataclasses import dataclass, field

from rasterkit.domain import PixelSet, Point, Trace, TraceRecorder
from rasterkit.exceptions import InvalidRadiusError

ALGORITHM_LABEL = "Midpoint Circle"


@dataclass
class CircleResult:
    """Pixels of a rasterized circle plus its derivation trace.

    Attributes:
        center: Circle center
        radius: Circle radius in pixels
        pixels: Unique pixels in first-emission order
        trace: Derivation steps (empty unless requested)
    """

    center: Point
    radius: int
    pixels: PixelSet
    trace: Trace = field(default_factory=Trace)


def symmetric_points(center: Point, x: int, y: int) -> tuple[Point, ...]:
    """Reflect (x, y) into all eight octants around center.

    Points on a symmetry axis or diagonal reflect onto each other, so the
    returned tuple may contain repeats.
    """
    cx, cy = center.x, center.y
    return (
        Point(cx + x, cy + y),
        Point(cx + y, cy + x),
        Point(cx - y, cy + x),
        Point(cx - x, cy + y),
        Point(cx - x, cy - y),
        Point(cx - y, cy - x),
        Point(cx + y, cy - x),
        Point(cx + x, cy - y),
    )


def rasterize_circle(center: Point, radius: int, trace: bool = False) -> CircleResult:
    """Rasterize a circle with the midpoint algorithm.

    Starts at (0, r) with decision p = 1 - r and walks the second octant
    while x < y. A negative p moves east (p += 2x + 1 with the new x);
    otherwise the step is south-east (y -= 1, p += 2x + 1 - 2y with the new
    x and y). Each visited (x, y) is reflected eight ways and repeats are
    dropped.

    Args:
        center: Circle center
        radius: Radius in pixels (0 emits the center only)
        trace: Record derivation steps

    Returns:
        CircleResult with unique pixels

    Raises:
        InvalidRadiusError: If radius is negative

    Examples:
        >>> rasterize_circle(Point(3, 3), 0).pixels.to_tuples()
        [(3, 3)]
    """
    if radius < 0:
        raise InvalidRadiusError(radius)

    recorder = TraceRecorder(ALGORITHM_LABEL, enabled=trace)
    pixels = PixelSet()

    x = 0
    y = radius
    p = 1 - radius
    recorder.setup("start", r=radius, x=x, y=y, p0=p)

    added = pixels.extend(symmetric_points(center, x, y))
    recorder.step("plot octants", x=x, y=y, p=p, new_pixels=added)

    while x < y:
        x += 1
        if p < 0:
            p += 2 * x + 1
            branch = "p < 0: move E"
        else:
            y -= 1
            p += 2 * x + 1 - 2 * y
            branch = "p >= 0: move SE"
        added = pixels.extend(symmetric_points(center, x, y))
        recorder.step(branch, x=x, y=y, p=p, new_pixels=added)

    recorder.verdict("plotted pixels", count=len(pixels))
    return CircleResult(center=center, radius=radius, pixels=pixels, trace=recorder.build())
