"""Human-readable labels and descriptions for every algorithm."""

from rasterkit.config import ClipAlgorithm, LineAlgorithm
from rasterkit.core.circle import ALGORITHM_LABEL as CIRCLE_LABEL
from rasterkit.core.clipping import ALGORITHM_LABELS as CLIP_LABELS
from rasterkit.core.fill import ALGORITHM_LABEL as FILL_LABEL
from rasterkit.core.line import ALGORITHM_LABELS as LINE_LABELS

CIRCLE = "circle"
FILL = "fill"

_DESCRIPTIONS: dict[str, str] = {
    LineAlgorithm.DDA.value: (
        "DDA (Digital Differential Analyzer) steps from the start point to the end point "
        "in small increments. It uses floating-point math and rounds to the nearest pixel "
        "each step. It works for any slope but accumulates rounding error."
    ),
    LineAlgorithm.BRESENHAM_OCTANT1.value: (
        "Bresenham uses only integer math to decide which pixel is closest to the ideal "
        "line. This simplest form only handles left-to-right lines with slope between 0 "
        "and 1; use the all-slopes variant for anything else."
    ),
    LineAlgorithm.BRESENHAM_ALL_SLOPES.value: (
        "Bresenham (All Slopes) handles steep and shallow lines in both directions by "
        "choosing between a low variant stepping in x and a high variant stepping in y."
    ),
    ClipAlgorithm.COHEN_SUTHERLAND.value: (
        "Cohen-Sutherland clips a line against a rectangular window using region "
        "outcodes. It repeatedly moves an outside endpoint onto one window boundary until "
        "the line is trivially accepted or rejected."
    ),
    ClipAlgorithm.LIANG_BARSKY.value: (
        "Liang-Barsky clips a line using its parametric form P(t) = P0 + t(P1 - P0). It "
        "narrows the entry and exit parameters once per boundary without recomputing "
        "intersections."
    ),
    CIRCLE: (
        "The midpoint circle algorithm walks one octant from (0, r) using an integer "
        "decision parameter and mirrors each point into all eight octants."
    ),
    FILL: (
        "Scanline fill intersects every polygon edge with each horizontal scanline, sorts "
        "the crossings and fills between pairs of them."
    ),
}

_LABELS: dict[str, str] = {
    **{a.value: label for a, label in LINE_LABELS.items()},
    **{a.value: label for a, label in CLIP_LABELS.items()},
    CIRCLE: CIRCLE_LABEL,
    FILL: FILL_LABEL,
}


def algorithm_names() -> list[str]:
    """Return every known algorithm identifier."""
    return list(_LABELS)


def algorithm_label(name: str | LineAlgorithm | ClipAlgorithm) -> str:
    """Return the display label of an algorithm.

    Raises:
        KeyError: If the algorithm is unknown
    """
    key = name.value if isinstance(name, (LineAlgorithm, ClipAlgorithm)) else name
    return _LABELS[key]


def describe_algorithm(name: str | LineAlgorithm | ClipAlgorithm) -> str:
    """Return a short explanation of how an algorithm works.

    Raises:
        KeyError: If the algorithm is unknown
    """
    key = name.value if isinstance(name, (LineAlgorithm, ClipAlgorithm)) else name
    return _DESCRIPTIONS[key]
