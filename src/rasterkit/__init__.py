"""RasterKit - Canonical 2D raster-graphics algorithms.

RasterKit scan-converts line segments, circles and polygon interiors into
discrete pixel coordinates, and clips line segments against a rectangular
window before rasterization. Every algorithm can record a structured trace
of its decisions so callers can narrate how the pixels were derived.

Example:
    $ rasterkit line 0,0 5,2 --algorithm bresenham_octant1 --trace

This prints the six pixels of the segment along with the decision parameter
at every step.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
