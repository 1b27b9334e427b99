"""Pixel output containers.

Rasterizers emit pixels through a PixelSet, which keeps first-emission order
and silently drops repeats. The scanline filler emits Span records instead.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from rasterkit.domain.geometry import Point


class PixelSet:
    """Ordered, deduplicated sequence of pixels.

    Uniqueness is tracked with an explicit seen-set keyed by (x, y), so the
    emission order stays deterministic and independent of hashing.

    Example:
        >>> pixels = PixelSet()
        >>> pixels.add(Point(0, 0))
        True
        >>> pixels.add(Point(0, 0))
        False
        >>> len(pixels)
        1
    """

    __slots__ = ("_points", "_seen")

    def __init__(self, points: Iterable[Point] = ()) -> None:
        self._points: list[Point] = []
        self._seen: set[tuple[int, int]] = set()
        self.extend(points)

    def add(self, point: Point) -> bool:
        """Append a pixel unless it was already emitted.

        Args:
            point: Pixel to emit

        Returns:
            True if the pixel was new, False if it was a repeat
        """
        key = (point.x, point.y)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._points.append(point)
        return True

    def extend(self, points: Iterable[Point]) -> int:
        """Append several pixels, returning how many were new."""
        return sum(1 for p in points if self.add(p))

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Point):
            return (item.x, item.y) in self._seen
        if isinstance(item, tuple):
            return item in self._seen
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PixelSet):
            return self._points == other._points
        return NotImplemented

    def __repr__(self) -> str:
        return f"PixelSet({len(self._points)} pixels)"

    @property
    def first(self) -> Point | None:
        return self._points[0] if self._points else None

    @property
    def last(self) -> Point | None:
        return self._points[-1] if self._points else None

    def to_tuples(self) -> list[tuple[int, int]]:
        """Return the pixels as a list of (x, y) tuples in emission order."""
        return [p.to_tuple() for p in self._points]

    def bounding_box(self) -> tuple[int, int, int, int] | None:
        """Return (min_x, min_y, max_x, max_y), or None when empty."""
        if not self._points:
            return None
        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"pixels": [list(p.to_tuple()) for p in self._points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PixelSet":
        """Deserialize from dictionary."""
        return cls(Point(int(x), int(y)) for x, y in data["pixels"])


@dataclass(frozen=True, slots=True)
class Span:
    """A horizontal run of filled pixels, inclusive on both ends.

    Attributes:
        y: Scanline row
        x_start: First filled column
        x_end: Last filled column
    """

    y: int
    x_start: int
    x_end: int

    @property
    def length(self) -> int:
        """Number of pixels covered by the span."""
        return self.x_end - self.x_start + 1

    def pixels(self) -> Iterator[Point]:
        """Iterate the pixels of the span from left to right."""
        for x in range(self.x_start, self.x_end + 1):
            yield Point(x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"y": self.y, "x_start": self.x_start, "x_end": self.x_end}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Span":
        """Deserialize from dictionary."""
        return cls(y=data["y"], x_start=data["x_start"], x_end=data["x_end"])
