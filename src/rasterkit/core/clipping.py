"""Line clipping against a rectangular window.

Two algorithms decide whether a segment is visible inside a window and,
if so, which part of it:

- Cohen-Sutherland: region outcodes and iterative endpoint re-intersection
- Liang-Barsky: a single pass over the four boundaries on P(t) = P0 + t(P1 - P0)

Both always return a structured trace, since the derivation is part of the
result rather than optional diagnostics.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rasterkit.config import ClipAlgorithm
from rasterkit.domain import Point, Trace, TraceRecorder, Window
from rasterkit.exceptions import DegenerateWindowError

ALGORITHM_LABELS: dict[ClipAlgorithm, str] = {
    ClipAlgorithm.COHEN_SUTHERLAND: "Cohen-Sutherland",
    ClipAlgorithm.LIANG_BARSKY: "Liang-Barsky",
}

DEFAULT_ITERATION_CAP = 16
DEFAULT_PARALLEL_EPSILON = 1e-4

# Outcode bits, one per violated boundary
OUT_LEFT = 1
OUT_RIGHT = 2
OUT_BOTTOM = 4
OUT_TOP = 8

FloatPoint = tuple[float, float]


class ClipVerdict(str, Enum):
    """Outcome of a clip.

    REJECTED is the normal geometric "nothing visible" answer; ITERATION_CAPPED
    means Cohen-Sutherland gave up after its safety cap and is reported apart
    from it so callers can spot numerically troublesome input.
    """

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ITERATION_CAPPED = "iteration_capped"


@dataclass
class ClipResult:
    """Result of clipping one segment against a window.

    Attributes:
        algorithm: Clipping variant used
        verdict: Accept / reject / capped outcome
        p0: Clipped start point (None unless accepted)
        p1: Clipped end point (None unless accepted)
        trace: Step-by-step derivation
    """

    algorithm: ClipAlgorithm
    verdict: ClipVerdict
    p0: FloatPoint | None = None
    p1: FloatPoint | None = None
    trace: Trace = field(default_factory=Trace)

    @property
    def accepted(self) -> bool:
        return self.verdict == ClipVerdict.ACCEPTED

    def rounded_endpoints(self) -> tuple[Point, Point] | None:
        """Round the clipped endpoints to pixel coordinates.

        Returns:
            (start, end) pixels, or None if the segment was not accepted
        """
        if self.p0 is None or self.p1 is None:
            return None
        return (
            Point(round(self.p0[0]), round(self.p0[1])),
            Point(round(self.p1[0]), round(self.p1[1])),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "algorithm": self.algorithm.value,
            "verdict": self.verdict.value,
            "p0": list(self.p0) if self.p0 is not None else None,
            "p1": list(self.p1) if self.p1 is not None else None,
            "trace": self.trace.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClipResult":
        """Deserialize from dictionary."""
        return cls(
            algorithm=ClipAlgorithm(data["algorithm"]),
            verdict=ClipVerdict(data["verdict"]),
            p0=tuple(data["p0"]) if data["p0"] is not None else None,
            p1=tuple(data["p1"]) if data["p1"] is not None else None,
            trace=Trace.from_dict(data["trace"]),
        )


def _check_window(window: Window) -> None:
    if window.is_degenerate():
        raise DegenerateWindowError(window.width, window.height)


def _record_window(recorder: TraceRecorder, window: Window, p0: Point, p1: Point) -> None:
    recorder.setup(
        "window",
        xmin=window.x_min,
        xmax=window.x_max,
        ymin=window.y_min,
        ymax=window.y_max,
    )
    recorder.setup("endpoints", x0=p0.x, y0=p0.y, x1=p1.x, y1=p1.y)


def compute_outcode(x: float, y: float, window: Window) -> int:
    """Compute the 4-bit region outcode of a point.

    Bits are set for boundaries the point lies strictly beyond: LEFT=1,
    RIGHT=2, BOTTOM=4, TOP=8. Points on the boundary get 0 for that side.

    Examples:
        >>> w = Window(Point(0, 0), Point(8, 8))
        >>> compute_outcode(-1, 9, w) == OUT_LEFT | OUT_TOP
        True
    """
    code = 0
    if x < window.x_min:
        code |= OUT_LEFT
    elif x > window.x_max:
        code |= OUT_RIGHT
    if y < window.y_min:
        code |= OUT_BOTTOM
    elif y > window.y_max:
        code |= OUT_TOP
    return code


def outcode_bits(code: int) -> str:
    """Format an outcode as TBRL bits, e.g. 0b1001 -> '1001'."""
    return format(code, "04b")


def clip_cohen_sutherland(
    p0: Point,
    p1: Point,
    window: Window,
    iteration_cap: int = DEFAULT_ITERATION_CAP,
) -> ClipResult:
    """Clip a segment with the Cohen-Sutherland outcode algorithm.

    Each round either trivially accepts (OR of outcodes is 0), trivially
    rejects (AND is non-zero), or moves one outside endpoint onto a single
    violated boundary and recomputes its outcode. Boundaries are tried in
    TOP, BOTTOM, RIGHT, LEFT order.

    Args:
        p0: Segment start
        p1: Segment end
        window: Clip window
        iteration_cap: Maximum number of endpoint re-intersections

    Returns:
        ClipResult; ITERATION_CAPPED if the cap was reached first

    Raises:
        DegenerateWindowError: If the window has zero width or height
    """
    _check_window(window)
    algorithm = ClipAlgorithm.COHEN_SUTHERLAND
    recorder = TraceRecorder(ALGORITHM_LABELS[algorithm])
    _record_window(recorder, window, p0, p1)

    x0, y0 = float(p0.x), float(p0.y)
    x1, y1 = float(p1.x), float(p1.y)
    out0 = compute_outcode(x0, y0, window)
    out1 = compute_outcode(x1, y1, window)

    iteration = 0
    while True:
        recorder.step(
            f"iteration {iteration + 1}",
            out0=outcode_bits(out0),
            out1=outcode_bits(out1),
        )

        if (out0 | out1) == 0:
            recorder.verdict("trivial accept (out0 | out1 == 0)", accepted=True)
            return ClipResult(algorithm, ClipVerdict.ACCEPTED, (x0, y0), (x1, y1), recorder.build())

        if (out0 & out1) != 0:
            recorder.verdict("trivial reject (out0 & out1 != 0)", accepted=False)
            return ClipResult(algorithm, ClipVerdict.REJECTED, trace=recorder.build())

        if iteration >= iteration_cap:
            recorder.verdict("stopped (safety iteration cap)", accepted=False, cap=iteration_cap)
            return ClipResult(algorithm, ClipVerdict.ITERATION_CAPPED, trace=recorder.build())
        iteration += 1

        out = out0 if out0 != 0 else out1
        dx = x1 - x0
        dy = y1 - y0

        # The chosen boundary separates the endpoints, so its axis delta is non-zero
        if out & OUT_TOP:
            y = float(window.y_max)
            x = x0 + dx * (y - y0) / dy
            recorder.boundary("clip to TOP", y=y, x=x)
        elif out & OUT_BOTTOM:
            y = float(window.y_min)
            x = x0 + dx * (y - y0) / dy
            recorder.boundary("clip to BOTTOM", y=y, x=x)
        elif out & OUT_RIGHT:
            x = float(window.x_max)
            y = y0 + dy * (x - x0) / dx
            recorder.boundary("clip to RIGHT", x=x, y=y)
        else:
            x = float(window.x_min)
            y = y0 + dy * (x - x0) / dx
            recorder.boundary("clip to LEFT", x=x, y=y)

        if out == out0:
            x0, y0 = x, y
            out0 = compute_outcode(x0, y0, window)
            recorder.step("update P0", x=x0, y=y0, outcode=outcode_bits(out0))
        else:
            x1, y1 = x, y
            out1 = compute_outcode(x1, y1, window)
            recorder.step("update P1", x=x1, y=y1, outcode=outcode_bits(out1))


def clip_liang_barsky(
    p0: Point,
    p1: Point,
    window: Window,
    parallel_epsilon: float = DEFAULT_PARALLEL_EPSILON,
) -> ClipResult:
    """Clip a segment with the Liang-Barsky parametric algorithm.

    The admissible interval [t0, t1] starts as [0, 1] and every boundary
    narrows it once. For each boundary, p is the direction projected on the
    boundary normal and q the signed distance of P0 from it; a parallel
    direction (|p| < epsilon) rejects only when q < 0.

    Args:
        p0: Segment start
        p1: Segment end
        window: Clip window
        parallel_epsilon: Threshold under which |p| counts as parallel

    Returns:
        ClipResult with endpoints P(t0) and P(t1) when accepted

    Raises:
        DegenerateWindowError: If the window has zero width or height
    """
    _check_window(window)
    algorithm = ClipAlgorithm.LIANG_BARSKY
    recorder = TraceRecorder(ALGORITHM_LABELS[algorithm])
    _record_window(recorder, window, p0, p1)

    x0, y0 = float(p0.x), float(p0.y)
    dx = float(p1.x - p0.x)
    dy = float(p1.y - p0.y)
    recorder.setup("direction", dx=dx, dy=dy)

    t0 = 0.0
    t1 = 1.0
    tests = (
        ("LEFT", -dx, x0 - window.x_min),
        ("RIGHT", dx, window.x_max - x0),
        ("BOTTOM", -dy, y0 - window.y_min),
        ("TOP", dy, window.y_max - y0),
    )

    for name, p, q in tests:
        if abs(p) < parallel_epsilon:
            if q < 0:
                recorder.boundary(f"{name}: parallel and outside", p=p, q=q, t0=t0, t1=t1)
                recorder.verdict("reject", accepted=False)
                return ClipResult(algorithm, ClipVerdict.REJECTED, trace=recorder.build())
            recorder.boundary(f"{name}: parallel and inside", p=p, q=q, t0=t0, t1=t1)
            continue

        r = q / p
        if p < 0:
            if r > t1:
                recorder.boundary(f"{name}: r > t1", p=p, q=q, r=r, t0=t0, t1=t1)
                recorder.verdict("reject", accepted=False)
                return ClipResult(algorithm, ClipVerdict.REJECTED, trace=recorder.build())
            if r > t0:
                t0 = r
            recorder.boundary(f"{name}: entering", p=p, q=q, r=r, t0=t0, t1=t1)
        else:
            if r < t0:
                recorder.boundary(f"{name}: r < t0", p=p, q=q, r=r, t0=t0, t1=t1)
                recorder.verdict("reject", accepted=False)
                return ClipResult(algorithm, ClipVerdict.REJECTED, trace=recorder.build())
            if r < t1:
                t1 = r
            recorder.boundary(f"{name}: leaving", p=p, q=q, r=r, t0=t0, t1=t1)

    if t0 > t1:
        recorder.verdict("t0 > t1: reject", accepted=False, t0=t0, t1=t1)
        return ClipResult(algorithm, ClipVerdict.REJECTED, trace=recorder.build())

    start = (x0 + t0 * dx, y0 + t0 * dy)
    end = (x0 + t1 * dx, y0 + t1 * dy)
    recorder.verdict(
        "accept",
        accepted=True,
        t0=t0,
        t1=t1,
        x0=start[0],
        y0=start[1],
        x1=end[0],
        y1=end[1],
    )
    return ClipResult(algorithm, ClipVerdict.ACCEPTED, start, end, recorder.build())


def clip_line(
    p0: Point,
    p1: Point,
    window: Window,
    algorithm: ClipAlgorithm = ClipAlgorithm.COHEN_SUTHERLAND,
    iteration_cap: int = DEFAULT_ITERATION_CAP,
    parallel_epsilon: float = DEFAULT_PARALLEL_EPSILON,
) -> ClipResult:
    """Clip a segment against a window with the selected algorithm.

    Args:
        p0: Segment start
        p1: Segment end
        window: Clip window
        algorithm: Clipping variant
        iteration_cap: Cohen-Sutherland safety cap
        parallel_epsilon: Liang-Barsky parallel threshold

    Returns:
        ClipResult with verdict, clipped endpoints and trace

    Raises:
        DegenerateWindowError: If the window has zero width or height
    """
    algorithm = ClipAlgorithm(algorithm)
    clippers: dict[ClipAlgorithm, Callable[[], ClipResult]] = {
        ClipAlgorithm.COHEN_SUTHERLAND: lambda: clip_cohen_sutherland(
            p0, p1, window, iteration_cap=iteration_cap
        ),
        ClipAlgorithm.LIANG_BARSKY: lambda: clip_liang_barsky(
            p0, p1, window, parallel_epsilon=parallel_epsilon
        ),
    }
    return clippers[algorithm]()
