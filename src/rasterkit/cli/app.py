"""CLI application entry point for rasterkit.

This module provides the main CLI interface using Typer.
Points are given as "x,y"; put "--" before arguments that start with a
minus sign, e.g. `rasterkit clip --window 0,0,8,8 -- -2,5 10,5`.
"""

from pathlib import Path
from typing import Annotated

import typer

from rasterkit import __version__
from rasterkit.cli.output import (
    console,
    print_algorithms,
    print_clip_verdict,
    print_error,
    print_grid,
    print_header,
    print_pixels,
    print_spans,
    print_step,
    print_trace,
)
from rasterkit.config import (
    ClipAlgorithm,
    LineAlgorithm,
    LogLevel,
    LoggingConfig,
    ProcessingConfig,
    RasterKitSettings,
)
from rasterkit.core import (
    JobResult,
    RasterJob,
    RasterProcessor,
    algorithm_label,
    algorithm_names,
    describe_algorithm,
    window_border,
)
from rasterkit.domain import Point, Window
from rasterkit.exceptions import RasterKitError

# Create the Typer app
app = typer.Typer(
    name="rasterkit",
    help="Rasterize lines, circles and polygons, and clip lines, with step-by-step traces.",
    add_completion=False,
    no_args_is_help=True,
)

TraceOption = Annotated[
    bool,
    typer.Option("--trace", "-t", help="Show the derivation trace"),
]
GridOption = Annotated[
    bool,
    typer.Option("--grid", "-g", help="Draw the pixels as a character grid"),
]
LogLevelOption = Annotated[
    LogLevel,
    typer.Option("--log-level", help="Console logging level", case_sensitive=False),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output, without log records"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]RasterKit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Canonical 2D raster-graphics algorithms."""


def parse_point(value: str) -> Point:
    """Parse an "x,y" argument into a Point.

    Raises:
        typer.BadParameter: If the value is not two comma-separated integers
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(f"expected x,y but got '{value}'")
    try:
        return Point(int(parts[0]), int(parts[1]))
    except ValueError:
        raise typer.BadParameter(f"coordinates must be integers: '{value}'") from None


def parse_window(value: str) -> Window:
    """Parse an "xmin,ymin,xmax,ymax" argument into a Window.

    Corners may be given in any order; they are normalized.

    Raises:
        typer.BadParameter: If the value is not four comma-separated integers
    """
    parts = value.split(",")
    if len(parts) != 4:
        raise typer.BadParameter(f"expected x0,y0,x1,y1 but got '{value}'")
    try:
        x0, y0, x1, y1 = (int(p) for p in parts)
    except ValueError:
        raise typer.BadParameter(f"coordinates must be integers: '{value}'") from None
    return Window.from_corners(Point(x0, y0), Point(x1, y1))


def _build_settings(trace: bool, log_level: LogLevel, log_file: Path | None) -> RasterKitSettings:
    return RasterKitSettings(
        processing=ProcessingConfig(max_workers=1, record_trace=trace),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )


def _run(job: RasterJob, settings: RasterKitSettings, quiet: bool) -> JobResult:
    """Run a job, turning library errors into a clean CLI exit."""
    try:
        return RasterProcessor(settings, quiet=quiet).run(job)
    except RasterKitError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def _report(
    result: JobResult,
    trace: bool,
    grid: bool,
    border: Window | None = None,
) -> None:
    if trace and result.trace:
        print_trace(result.trace)
    if result.spans:
        print_step("Spans")
        print_spans(result.spans)
    print_step("Pixels")
    print_pixels(result.pixels)
    if grid:
        print_grid(result.pixels, window_border(border) if border else ())


@app.command()
def line(
    start: Annotated[str, typer.Argument(help="Start point as x,y", show_default=False)],
    end: Annotated[str, typer.Argument(help="End point as x,y", show_default=False)],
    algorithm: Annotated[
        LineAlgorithm,
        typer.Option("--algorithm", "-a", help="Line algorithm", case_sensitive=False),
    ] = LineAlgorithm.DDA,
    trace: TraceOption = False,
    grid: GridOption = False,
    log_level: LogLevelOption = LogLevel.WARNING,
    log_file: LogFileOption = None,
    quiet: QuietOption = False,
) -> None:
    """Rasterize a line segment.

    Example:
        rasterkit line 0,0 5,2 --algorithm bresenham_octant1 --trace
    """
    p0, p1 = parse_point(start), parse_point(end)
    if not quiet:
        print_header(__version__)
        print_step(f"{algorithm_label(algorithm)}: ({p0.x},{p0.y}) to ({p1.x},{p1.y})")

    settings = _build_settings(trace, log_level, log_file)
    result = _run(RasterJob.line(p0, p1, algorithm), settings, quiet)
    _report(result, trace, grid)


@app.command()
def circle(
    center: Annotated[str, typer.Argument(help="Center as x,y", show_default=False)],
    radius: Annotated[int, typer.Argument(help="Radius in pixels", min=0, show_default=False)],
    trace: TraceOption = False,
    grid: GridOption = False,
    log_level: LogLevelOption = LogLevel.WARNING,
    log_file: LogFileOption = None,
    quiet: QuietOption = False,
) -> None:
    """Rasterize a circle with the midpoint algorithm.

    Example:
        rasterkit circle 0,0 5 --grid
    """
    c = parse_point(center)
    if not quiet:
        print_header(__version__)
        print_step(f"{algorithm_label('circle')}: center ({c.x},{c.y}), r={radius}")

    settings = _build_settings(trace, log_level, log_file)
    result = _run(RasterJob.circle(c, radius), settings, quiet)
    _report(result, trace, grid)


@app.command()
def clip(
    start: Annotated[str, typer.Argument(help="Start point as x,y", show_default=False)],
    end: Annotated[str, typer.Argument(help="End point as x,y", show_default=False)],
    window: Annotated[
        str,
        typer.Option(
            "--window",
            "-w",
            help="Clip window corners as x0,y0,x1,y1",
            show_default=False,
        ),
    ],
    algorithm: Annotated[
        ClipAlgorithm,
        typer.Option("--algorithm", "-a", help="Clipping algorithm", case_sensitive=False),
    ] = ClipAlgorithm.COHEN_SUTHERLAND,
    trace: TraceOption = False,
    grid: GridOption = False,
    log_level: LogLevelOption = LogLevel.WARNING,
    log_file: LogFileOption = None,
    quiet: QuietOption = False,
) -> None:
    """Clip a segment to a window, then rasterize the visible part with DDA.

    Example:
        rasterkit clip 2,5 10,5 --window 0,0,8,8 --algorithm liang_barsky --trace
    """
    p0, p1 = parse_point(start), parse_point(end)
    win = parse_window(window)
    if not quiet:
        print_header(__version__)
        print_step(
            f"{algorithm_label(algorithm)}: ({p0.x},{p0.y}) to ({p1.x},{p1.y}) "
            f"in [{win.x_min},{win.x_max}]x[{win.y_min},{win.y_max}]"
        )

    settings = _build_settings(trace, log_level, log_file)
    result = _run(RasterJob.clip(p0, p1, win, algorithm), settings, quiet)

    if result.clip is not None:
        print_clip_verdict(result.clip.verdict.value, result.clip.p0, result.clip.p1)
    _report(result, trace, grid, border=win)


@app.command()
def fill(
    vertices: Annotated[
        list[str],
        typer.Argument(help="Polygon vertices as x,y (at least three)", show_default=False),
    ],
    trace: TraceOption = False,
    grid: GridOption = False,
    log_level: LogLevelOption = LogLevel.WARNING,
    log_file: LogFileOption = None,
    quiet: QuietOption = False,
) -> None:
    """Fill a polygon with the scanline algorithm.

    Example:
        rasterkit fill 0,0 4,0 4,4 0,4 --grid
    """
    points = [parse_point(v) for v in vertices]
    if not quiet:
        print_header(__version__)
        print_step(f"{algorithm_label('fill')}: {len(points)} vertices")

    settings = _build_settings(trace, log_level, log_file)
    result = _run(RasterJob.fill(points), settings, quiet)
    _report(result, trace, grid)


@app.command()
def algorithms() -> None:
    """List the available algorithms."""
    print_algorithms(
        [(name, algorithm_label(name), describe_algorithm(name)) for name in algorithm_names()]
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
