"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables, pixel grids, and formatted messages.
"""

from collections.abc import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from rasterkit.domain import PixelSet, Point, Span, Trace, TraceKind

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

GRID_PIXEL = "█"
GRID_BORDER = "+"
GRID_EMPTY = "·"
MAX_GRID_SIZE = 80
MAX_LISTED_PIXELS = 64

_KIND_STYLES = {
    TraceKind.SETUP: "cyan",
    TraceKind.STEP: "white",
    TraceKind.BOUNDARY: "magenta",
    TraceKind.SCANLINE: "white",
    TraceKind.VERDICT: "bold",
}


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]RasterKit[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_pixels(pixels: PixelSet, limit: int = MAX_LISTED_PIXELS) -> None:
    """Print pixel coordinates in emission order.

    Args:
        pixels: Pixels to list
        limit: Maximum number of pixels to list before truncating
    """
    console.print(f"  [green]{len(pixels)}[/green] pixels")
    if not len(pixels):
        return
    shown = [f"({p.x},{p.y})" for p in list(pixels)[:limit]]
    line = " ".join(shown)
    if len(pixels) > limit:
        line += f" {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(pixels) - limit} more)"
    console.print(Text("  " + line))


def print_spans(spans: list[Span]) -> None:
    """Print fill spans, one per line."""
    console.print(f"  [green]{len(spans)}[/green] spans")
    for span in spans:
        console.print(f"  y={span.y}: x {span.x_start}..{span.x_end} ({span.length} px)")


def print_trace(trace: Trace) -> None:
    """Print a derivation trace, colored by step kind.

    Args:
        trace: Trace to print
    """
    if trace.title:
        console.print(f"\n[bold]Calculations ({trace.title})[/bold]")
    for step in trace:
        line = Text("  ")
        line.append(step.render(), style=_KIND_STYLES.get(step.kind, ""))
        console.print(line)


def print_clip_verdict(verdict: str, p0: tuple[float, float] | None, p1: tuple[float, float] | None) -> None:
    """Print the clip outcome.

    Args:
        verdict: ClipVerdict value
        p0: Clipped start point (None unless accepted)
        p1: Clipped end point (None unless accepted)
    """
    if verdict == "accepted" and p0 is not None and p1 is not None:
        console.print(
            f"  [bold green]{SYM_OK} Accepted[/bold green] "
            f"({p0[0]:g}, {p0[1]:g}) {SYM_DOT} ({p1[0]:g}, {p1[1]:g})"
        )
    elif verdict == "iteration_capped":
        console.print(f"  [bold yellow]{SYM_ERR} Stopped[/bold yellow] at the iteration cap")
    else:
        console.print(f"  [bold red]{SYM_ERR} Rejected[/bold red] (segment is outside the window)")


def render_grid(pixels: Iterable[Point], border: Iterable[Point] = ()) -> list[str]:
    """Render pixels as character rows, top row (largest y) first.

    Args:
        pixels: Pixels to draw
        border: Optional pixels to draw as window border underneath

    Returns:
        Rows of the grid; empty when there is nothing to draw or the grid
        would exceed MAX_GRID_SIZE in either direction
    """
    cells: dict[tuple[int, int], str] = {(p.x, p.y): GRID_BORDER for p in border}
    for p in pixels:
        cells[(p.x, p.y)] = GRID_PIXEL
    if not cells:
        return []

    xs = [x for x, _ in cells]
    ys = [y for _, y in cells]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    if max_x - min_x >= MAX_GRID_SIZE or max_y - min_y >= MAX_GRID_SIZE:
        return []

    return [
        "".join(cells.get((x, y), GRID_EMPTY) for x in range(min_x, max_x + 1))
        for y in range(max_y, min_y - 1, -1)
    ]


def print_grid(pixels: Iterable[Point], border: Iterable[Point] = ()) -> None:
    """Print a character grid of the pixels."""
    rows = render_grid(pixels, border)
    if not rows:
        console.print(f"  {SYM_DOT} grid too large or empty, not shown")
        return
    console.print()
    for row in rows:
        console.print(Text("  " + row))


def print_algorithms(rows: list[tuple[str, str, str]]) -> None:
    """Print a table of algorithms.

    Args:
        rows: (identifier, label, description) tuples
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Label")
    table.add_column("Description")
    for name, label, description in rows:
        table.add_row(name, label, description)
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
