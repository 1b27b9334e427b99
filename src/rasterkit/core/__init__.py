"""Core rasterization algorithms for rasterkit.

This module contains the core algorithms for:

- Line scan conversion (DDA, Bresenham octant 1, Bresenham all slopes)
- Circle scan conversion (midpoint with 8-way symmetry)
- Line clipping (Cohen-Sutherland, Liang-Barsky)
- Polygon filling (scanline with half-open edge rule)
- Compositions (clip then rasterize, window borders, outlines)

All algorithms are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects, deterministic output)

Key functions:
- rasterize_line: Dispatch over LineAlgorithm variants
- rasterize_circle: Midpoint circle
- clip_line: Dispatch over ClipAlgorithm variants
- fill_polygon: Scanline fill into spans
- clip_and_rasterize: Clip upstream of line rasterization

Key classes:
- RasterProcessor: Runs jobs with logging, statistics and batching
"""

from rasterkit.core.catalog import algorithm_label, algorithm_names, describe_algorithm
from rasterkit.core.circle import CircleResult, rasterize_circle, symmetric_points
from rasterkit.core.clipping import (
    ClipResult,
    ClipVerdict,
    clip_cohen_sutherland,
    clip_liang_barsky,
    clip_line,
    compute_outcode,
)
from rasterkit.core.compose import (
    ClippedLineResult,
    clip_and_rasterize,
    polygon_outline,
    window_border,
)
from rasterkit.core.fill import (
    FillResult,
    fill_polygon,
    scanline_intersections,
    spans_for_scanline,
    spans_to_pixels,
)
from rasterkit.core.line import (
    LineResult,
    rasterize_bresenham_all_slopes,
    rasterize_bresenham_octant1,
    rasterize_dda,
    rasterize_line,
)
from rasterkit.core.processor import JobKind, JobResult, RasterJob, RasterProcessor, process_job

__all__ = [
    # Result classes
    "CircleResult",
    "ClipResult",
    "ClipVerdict",
    "ClippedLineResult",
    "FillResult",
    "LineResult",
    # Processor classes
    "JobKind",
    "JobResult",
    "RasterJob",
    "RasterProcessor",
    # Catalog
    "algorithm_label",
    "algorithm_names",
    # Algorithms
    "clip_and_rasterize",
    "clip_cohen_sutherland",
    "clip_liang_barsky",
    "clip_line",
    "compute_outcode",
    "describe_algorithm",
    "fill_polygon",
    "polygon_outline",
    "process_job",
    "rasterize_bresenham_all_slopes",
    "rasterize_bresenham_octant1",
    "rasterize_circle",
    "rasterize_dda",
    "rasterize_line",
    "scanline_intersections",
    "spans_for_scanline",
    "spans_to_pixels",
    "symmetric_points",
    "window_border",
]
