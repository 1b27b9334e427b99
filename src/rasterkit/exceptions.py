"""Exception hierarchy for RasterKit."""


class RasterKitError(Exception):
    """Base exception for all RasterKit errors."""

    pass


class GeometryError(RasterKitError):
    """Errors related to invalid input geometry."""

    pass


class UnsupportedGeometryError(GeometryError):
    """Algorithm invoked outside the slope/direction domain it supports."""

    def __init__(self, algorithm: str, reason: str) -> None:
        self.algorithm = algorithm
        self.reason = reason
        super().__init__(f"Unsupported geometry for '{algorithm}': {reason}")


class DegenerateWindowError(GeometryError):
    """Clip window has zero width or zero height."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(
            f"Degenerate clip window ({width}x{height}): width and height must be positive"
        )


class InsufficientVerticesError(GeometryError):
    """Polygon has fewer than three vertices."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Polygon needs at least 3 vertices, got {count}")


class InvalidRadiusError(GeometryError):
    """Circle radius is negative."""

    def __init__(self, radius: int) -> None:
        self.radius = radius
        super().__init__(f"Circle radius must be >= 0, got {radius}")


class PolygonClosedError(GeometryError):
    """Polygon builder was modified after being closed."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation} after closing the polygon")


class JobError(RasterKitError):
    """Errors related to processor job handling."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid raster job: {reason}")
