"""Core geometric types for rasterization input.

This module defines the integer geometry consumed by every algorithm:
- Point: An integer pixel coordinate
- Segment: An ordered pair of points
- Window: An axis-aligned clip rectangle
- Polygon: An implicitly closed vertex loop
"""

from dataclasses import dataclass
from typing import Any

from rasterkit.exceptions import GeometryError, InsufficientVerticesError, PolygonClosedError


@dataclass(frozen=True, slots=True)
class Point:
    """An integer point on the pixel grid.

    Immutable and hashable for use in seen-sets and dict keys.

    Attributes:
        x: Column index
        y: Row index
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def translate(self, dx: int, dy: int) -> "Point":
        """Return a copy of this point shifted by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=int(data["x"]), y=int(data["y"]))


@dataclass(frozen=True, slots=True)
class Segment:
    """A line segment between two points.

    Endpoint order is significant for the single-octant Bresenham variant,
    which requires p0 to be the left endpoint.

    Attributes:
        p0: Start point
        p1: End point
    """

    p0: Point
    p1: Point

    @property
    def dx(self) -> int:
        return self.p1.x - self.p0.x

    @property
    def dy(self) -> int:
        return self.p1.y - self.p0.y

    def reversed(self) -> "Segment":
        """Return the segment with its endpoints swapped."""
        return Segment(self.p1, self.p0)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"p0": self.p0.to_dict(), "p1": self.p1.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        """Deserialize from dictionary."""
        return cls(p0=Point.from_dict(data["p0"]), p1=Point.from_dict(data["p1"]))


@dataclass(frozen=True, slots=True)
class Window:
    """Axis-aligned clip rectangle given by its minimum and maximum corners.

    Both corners lie on the window boundary. A window with zero width or
    zero height can be constructed but is refused by the clipper.

    Attributes:
        min: Bottom-left corner (smallest x and y)
        max: Top-right corner (largest x and y)

    Raises:
        GeometryError: If min is not component-wise <= max
    """

    min: Point
    max: Point

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise GeometryError(
                f"Window corners are inverted: min={self.min.to_tuple()} "
                f"max={self.max.to_tuple()}"
            )

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> "Window":
        """Build a window from two opposite corners given in any order.

        Args:
            a: First corner
            b: Second corner

        Returns:
            Window spanning both corners
        """
        return cls(
            min=Point(min(a.x, b.x), min(a.y, b.y)),
            max=Point(max(a.x, b.x), max(a.y, b.y)),
        )

    @property
    def x_min(self) -> int:
        return self.min.x

    @property
    def x_max(self) -> int:
        return self.max.x

    @property
    def y_min(self) -> int:
        return self.min.y

    @property
    def y_max(self) -> int:
        return self.max.y

    @property
    def width(self) -> int:
        return self.max.x - self.min.x

    @property
    def height(self) -> int:
        return self.max.y - self.min.y

    def is_degenerate(self) -> bool:
        """Check whether the window has zero width or zero height."""
        return self.width == 0 or self.height == 0

    def contains(self, x: float, y: float) -> bool:
        """Check if a point lies inside the window or on its boundary."""
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Return the four corners counter-clockwise from the minimum corner."""
        return (
            self.min,
            Point(self.max.x, self.min.y),
            self.max,
            Point(self.min.x, self.max.y),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"min": self.min.to_dict(), "max": self.max.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Window":
        """Deserialize from dictionary."""
        return cls(min=Point.from_dict(data["min"]), max=Point.from_dict(data["max"]))


@dataclass(frozen=True)
class Polygon:
    """An implicitly closed polygon.

    The last vertex connects back to the first. Non-convex and
    self-intersecting vertex loops are allowed; the scanline filler resolves
    them with the parity rule.

    Attributes:
        vertices: Ordered vertex loop (at least three points)

    Raises:
        InsufficientVerticesError: If fewer than three vertices are given
    """

    vertices: tuple[Point, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the polygon stays immutable
        object.__setattr__(self, "vertices", tuple(self.vertices))
        if len(self.vertices) < 3:
            raise InsufficientVerticesError(len(self.vertices))

    def __len__(self) -> int:
        return len(self.vertices)

    def edges(self) -> list[Segment]:
        """Return all edges, including the closing edge back to the first vertex."""
        n = len(self.vertices)
        return [Segment(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Calculate bounding box of the polygon.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"vertices": [v.to_dict() for v in self.vertices]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary."""
        return cls(vertices=tuple(Point.from_dict(v) for v in data["vertices"]))


class PolygonBuilder:
    """Incrementally collects vertices and closes them into a Polygon.

    Vertices can be added and undone while the loop is open. Closing needs
    at least three vertices and freezes the builder.

    Example:
        >>> builder = PolygonBuilder()
        >>> for v in (Point(0, 0), Point(4, 0), Point(0, 4)):
        ...     _ = builder.add(v)
        >>> len(builder.close())
        3
    """

    def __init__(self) -> None:
        self._vertices: list[Point] = []
        self._closed = False

    @property
    def vertices(self) -> tuple[Point, ...]:
        return tuple(self._vertices)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def add(self, vertex: Point) -> "PolygonBuilder":
        """Append a vertex to the open loop.

        Raises:
            PolygonClosedError: If the polygon was already closed
        """
        if self._closed:
            raise PolygonClosedError("add a vertex")
        self._vertices.append(vertex)
        return self

    def undo(self) -> Point | None:
        """Remove and return the last vertex (None if there is none).

        Raises:
            PolygonClosedError: If the polygon was already closed
        """
        if self._closed:
            raise PolygonClosedError("undo")
        if not self._vertices:
            return None
        return self._vertices.pop()

    def close(self) -> Polygon:
        """Close the loop and return the resulting polygon.

        Closing an already closed builder returns the same polygon again.

        Raises:
            InsufficientVerticesError: If fewer than three vertices were added
        """
        polygon = Polygon(vertices=tuple(self._vertices))
        self._closed = True
        return polygon

    def clear(self) -> None:
        """Drop all vertices and reopen the builder."""
        self._vertices.clear()
        self._closed = False
