"""Structured derivation traces.

Algorithms append tagged records to a TraceRecorder while they run and hand
back the finished, immutable Trace alongside their primary result. Turning a
trace into text is a separate concern (Trace.render) so the algorithms never
deal with presentation formatting.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TraceValue = int | float | str | bool | None


class TraceKind(str, Enum):
    """Category of a trace record."""

    SETUP = "setup"
    STEP = "step"
    BOUNDARY = "boundary"
    SCANLINE = "scanline"
    VERDICT = "verdict"


def _format_value(value: Any) -> str:
    """Format a numeric value the way the derivation text shows it."""
    if isinstance(value, bool) or value is None:
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.3f}".rstrip("0").rstrip(".")
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    return str(value)


@dataclass(frozen=True)
class TraceStep:
    """One entry of a derivation trace.

    Attributes:
        kind: Record category
        label: Short human-readable description
        values: Numeric state relevant to the algorithm at this point
    """

    kind: TraceKind
    label: str
    values: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a recorded value by name."""
        return self.values.get(key, default)

    def render(self) -> str:
        """Render as a single line of text."""
        if not self.values:
            return self.label
        parts = ", ".join(f"{k}={_format_value(v)}" for k, v in self.values.items())
        return f"{self.label}: {parts}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"kind": self.kind.value, "label": self.label, "values": dict(self.values)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TraceStep":
        """Deserialize from dictionary."""
        return cls(
            kind=TraceKind(data["kind"]),
            label=data["label"],
            values=dict(data.get("values", {})),
        )


class Trace:
    """Immutable, ordered log of trace steps."""

    __slots__ = ("_steps", "title")

    def __init__(self, steps: tuple[TraceStep, ...] = (), title: str = "") -> None:
        self._steps = tuple(steps)
        self.title = title

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[TraceStep]:
        return iter(self._steps)

    def __getitem__(self, index: int) -> TraceStep:
        return self._steps[index]

    def __bool__(self) -> bool:
        return bool(self._steps)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Trace):
            return self._steps == other._steps and self.title == other.title
        return NotImplemented

    def __repr__(self) -> str:
        return f"Trace({self.title!r}, {len(self._steps)} steps)"

    @property
    def steps(self) -> tuple[TraceStep, ...]:
        return self._steps

    def of_kind(self, kind: TraceKind) -> list[TraceStep]:
        """Return the steps of one category, in order."""
        return [s for s in self._steps if s.kind == kind]

    def labels(self) -> list[str]:
        return [s.label for s in self._steps]

    def render(self) -> str:
        """Render the whole trace as explanatory text, one step per line."""
        lines = [f"Calculations ({self.title}):"] if self.title else []
        lines.extend(s.render() for s in self._steps)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"title": self.title, "steps": [s.to_dict() for s in self._steps]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Trace":
        """Deserialize from dictionary."""
        return cls(
            steps=tuple(TraceStep.from_dict(s) for s in data.get("steps", [])),
            title=data.get("title", ""),
        )


class TraceRecorder:
    """Append-only builder for a Trace.

    A disabled recorder accepts every call and records nothing, so
    algorithms can record unconditionally.

    Example:
        >>> recorder = TraceRecorder("DDA")
        >>> _ = recorder.setup("deltas", dx=4, dy=0).step("plot", x=0, y=0)
        >>> len(recorder.build())
        2
    """

    def __init__(self, title: str = "", enabled: bool = True) -> None:
        self.title = title
        self.enabled = enabled
        self._steps: list[TraceStep] = []

    def record(self, kind: TraceKind, label: str, **values: Any) -> "TraceRecorder":
        """Append a step of the given kind."""
        if self.enabled:
            self._steps.append(TraceStep(kind=kind, label=label, values=values))
        return self

    def setup(self, label: str, **values: Any) -> "TraceRecorder":
        return self.record(TraceKind.SETUP, label, **values)

    def step(self, label: str, **values: Any) -> "TraceRecorder":
        return self.record(TraceKind.STEP, label, **values)

    def boundary(self, label: str, **values: Any) -> "TraceRecorder":
        return self.record(TraceKind.BOUNDARY, label, **values)

    def scanline(self, label: str, **values: Any) -> "TraceRecorder":
        return self.record(TraceKind.SCANLINE, label, **values)

    def verdict(self, label: str, **values: Any) -> "TraceRecorder":
        return self.record(TraceKind.VERDICT, label, **values)

    def __len__(self) -> int:
        return len(self._steps)

    def build(self) -> Trace:
        """Freeze the recorded steps into a Trace."""
        return Trace(steps=tuple(self._steps), title=self.title)
