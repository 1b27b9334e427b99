"""Job orchestration for rasterization requests.

The algorithms themselves are pure functions; this module wraps them in
serializable jobs so a front-end can submit work, get results back with
logging and statistics, and fan batches out over worker processes.

Key components:
- RasterJob: Serializable description of one request
- JobResult: Pixels, spans, clip outcome and trace of one job
- execute_job: Pure dispatch from a job to the matching algorithm
- process_job: Top-level picklable function for parallel execution
- RasterProcessor: Main orchestrator class
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rasterkit.config import ClipAlgorithm, LineAlgorithm, RasterKitSettings
from rasterkit.core.circle import rasterize_circle
from rasterkit.core.clipping import ClipResult
from rasterkit.core.compose import clip_and_rasterize
from rasterkit.core.fill import fill_polygon
from rasterkit.core.line import rasterize_line
from rasterkit.domain import PixelSet, Point, Polygon, Span, Trace, Window
from rasterkit.exceptions import JobError
from rasterkit.utils import JobLogger, ProcessingStats, configure_logging


class JobKind(str, Enum):
    """Operation requested by a job."""

    LINE = "line"
    CIRCLE = "circle"
    CLIP = "clip"
    FILL = "fill"


@dataclass
class RasterJob:
    """Serializable description of a rasterization request.

    Which fields are required depends on the kind:
    - LINE: points=(p0, p1), optional algorithm
    - CIRCLE: points=(center,), radius
    - CLIP: points=(p0, p1), window, optional clip algorithm; the visible
      part is drawn with the configured default line algorithm and the
      result carries the clip trace
    - FILL: points=vertices (at least three)

    Attributes:
        kind: Requested operation
        points: Endpoints, center or polygon vertices
        job_id: Identifier used in logs and results
        algorithm: Line or clip variant name (None = configured default)
        radius: Circle radius
        window: Clip window
    """

    kind: JobKind
    points: tuple[Point, ...]
    job_id: str = "job"
    algorithm: str | None = None
    radius: int | None = None
    window: Window | None = None

    @classmethod
    def line(
        cls, p0: Point, p1: Point, algorithm: LineAlgorithm | None = None, job_id: str = "line"
    ) -> "RasterJob":
        return cls(
            JobKind.LINE,
            (p0, p1),
            job_id=job_id,
            algorithm=LineAlgorithm(algorithm).value if algorithm else None,
        )

    @classmethod
    def circle(cls, center: Point, radius: int, job_id: str = "circle") -> "RasterJob":
        return cls(JobKind.CIRCLE, (center,), job_id=job_id, radius=radius)

    @classmethod
    def clip(
        cls,
        p0: Point,
        p1: Point,
        window: Window,
        algorithm: ClipAlgorithm | None = None,
        job_id: str = "clip",
    ) -> "RasterJob":
        return cls(
            JobKind.CLIP,
            (p0, p1),
            job_id=job_id,
            algorithm=ClipAlgorithm(algorithm).value if algorithm else None,
            window=window,
        )

    @classmethod
    def fill(cls, vertices: Sequence[Point], job_id: str = "fill") -> "RasterJob":
        return cls(JobKind.FILL, tuple(vertices), job_id=job_id)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "kind": self.kind.value,
            "points": [p.to_dict() for p in self.points],
            "job_id": self.job_id,
            "algorithm": self.algorithm,
            "radius": self.radius,
            "window": self.window.to_dict() if self.window else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RasterJob":
        """Deserialize from dictionary.

        Raises:
            JobError: If the payload is malformed
        """
        try:
            return cls(
                kind=JobKind(data["kind"]),
                points=tuple(Point.from_dict(p) for p in data["points"]),
                job_id=data.get("job_id", "job"),
                algorithm=data.get("algorithm"),
                radius=data.get("radius"),
                window=Window.from_dict(data["window"]) if data.get("window") else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise JobError(f"malformed payload ({e})") from e


@dataclass
class JobResult:
    """Output of one job.

    Attributes:
        job_id: Identifier of the job
        kind: Operation performed
        pixels: Ordered pixels (fill jobs expand their spans)
        spans: Fill spans (empty for other kinds)
        clip: Clip outcome (clip jobs only)
        trace: Derivation trace
        duration_ms: Wall time spent in the algorithm
    """

    job_id: str
    kind: JobKind
    pixels: PixelSet = field(default_factory=PixelSet)
    spans: list[Span] = field(default_factory=list)
    clip: ClipResult | None = None
    trace: Trace = field(default_factory=Trace)
    duration_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "job_id": self.job_id,
            "kind": self.kind.value,
            "pixels": self.pixels.to_dict(),
            "spans": [s.to_dict() for s in self.spans],
            "clip": self.clip.to_dict() if self.clip else None,
            "trace": self.trace.to_dict(),
            "duration_ms": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JobResult":
        """Deserialize from dictionary."""
        return cls(
            job_id=data["job_id"],
            kind=JobKind(data["kind"]),
            pixels=PixelSet.from_dict(data["pixels"]),
            spans=[Span.from_dict(s) for s in data["spans"]],
            clip=ClipResult.from_dict(data["clip"]) if data["clip"] else None,
            trace=Trace.from_dict(data["trace"]),
            duration_ms=data.get("duration_ms", 0.0),
        )


def _select_algorithm(enum_cls: type[Enum], name: str | None, default: Enum) -> Any:
    if name is None:
        return default
    try:
        return enum_cls(name)
    except ValueError as e:
        raise JobError(f"unknown algorithm '{name}'") from e


def _require_points(job: RasterJob, count: int) -> None:
    if len(job.points) != count:
        raise JobError(f"{job.kind.value} job needs {count} point(s), got {len(job.points)}")


def execute_job(job: RasterJob, settings: RasterKitSettings) -> JobResult:
    """Run one job with the algorithm it selects.

    Args:
        job: Job to run
        settings: Defaults for algorithm choice, clip tuning and tracing

    Returns:
        JobResult for the job

    Raises:
        JobError: If the job is missing required fields
        GeometryError: If the geometry is invalid for the chosen algorithm
    """
    start_time = time.perf_counter()
    record_trace = settings.processing.record_trace

    if job.kind == JobKind.LINE:
        _require_points(job, 2)
        algorithm = _select_algorithm(LineAlgorithm, job.algorithm, settings.line.default_algorithm)
        line = rasterize_line(job.points[0], job.points[1], algorithm, trace=record_trace)
        result = JobResult(job.job_id, job.kind, pixels=line.pixels, trace=line.trace)

    elif job.kind == JobKind.CIRCLE:
        _require_points(job, 1)
        if job.radius is None:
            raise JobError("circle job needs a radius")
        circle = rasterize_circle(job.points[0], job.radius, trace=record_trace)
        result = JobResult(job.job_id, job.kind, pixels=circle.pixels, trace=circle.trace)

    elif job.kind == JobKind.CLIP:
        _require_points(job, 2)
        if job.window is None:
            raise JobError("clip job needs a window")
        clipped = clip_and_rasterize(
            job.points[0],
            job.points[1],
            job.window,
            clip_algorithm=_select_algorithm(
                ClipAlgorithm, job.algorithm, settings.clip.default_algorithm
            ),
            line_algorithm=settings.line.default_algorithm,
            iteration_cap=settings.clip.iteration_cap,
            parallel_epsilon=settings.clip.parallel_epsilon,
        )
        result = JobResult(
            job.job_id,
            job.kind,
            pixels=clipped.pixels,
            clip=clipped.clip,
            trace=clipped.clip.trace,
        )

    else:
        filled = fill_polygon(Polygon(vertices=job.points), trace=record_trace)
        result = JobResult(
            job.job_id,
            job.kind,
            pixels=filled.pixels(),
            spans=filled.spans,
            trace=filled.trace,
        )

    result.duration_ms = (time.perf_counter() - start_time) * 1000
    return result


def process_job(job_dict: dict[str, Any], settings_dict: dict[str, Any]) -> dict[str, Any]:
    """Process a single serialized job.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. Errors are returned rather than raised so a single
    bad job does not take the batch down.

    Args:
        job_dict: Serialized job (from RasterJob.to_dict())
        settings_dict: Serialized settings (from RasterKitSettings.model_dump())

    Returns:
        Dictionary containing either:
        - Success: {"result": result_dict}
        - Error: {"error": str, "error_type": str, "job_id": str, "traceback": str}
    """
    try:
        job = RasterJob.from_dict(job_dict)
        settings = RasterKitSettings.model_validate(settings_dict)
        return {"result": execute_job(job, settings).to_dict()}
    except Exception as e:
        return {
            "error": str(e),
            "error_type": type(e).__name__,
            "job_id": job_dict.get("job_id", "unknown"),
            "traceback": traceback.format_exc(),
        }


class RasterProcessor:
    """Runs raster jobs with logging and statistics.

    Example:
        settings = RasterKitSettings()
        processor = RasterProcessor(settings)
        result = processor.run(RasterJob.circle(Point(0, 0), 5))
        results, stats = processor.run_batch(jobs, max_workers=4)
    """

    def __init__(self, config: RasterKitSettings, quiet: bool = False) -> None:
        """Initialize processor with configuration.

        Args:
            config: RasterKit settings
            quiet: Suppress console log output
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level.value,
            file_level=config.logging.file_log_level.value,
            quiet=quiet,
        )
        self.job_logger = JobLogger(self.logger)

    @property
    def stats(self) -> ProcessingStats:
        return self.job_logger.stats

    def _record_success(self, result: JobResult) -> None:
        if result.clip is not None:
            self.job_logger.log_clip_verdict(result.job_id, result.clip.verdict.value)
        self.job_logger.log_job_complete(
            job_id=result.job_id,
            pixels=len(result.pixels),
            spans=len(result.spans),
            duration_ms=result.duration_ms,
        )

    def run(self, job: RasterJob) -> JobResult:
        """Run a single job in-process.

        Args:
            job: Job to run

        Returns:
            JobResult for the job

        Raises:
            RasterKitError: If the job is invalid; the error is logged first
        """
        self.job_logger.log_job_start(job.job_id, job.kind.value, job.algorithm)
        try:
            result = execute_job(job, self.config)
        except Exception as e:
            self.job_logger.log_job_error(job.job_id, e, traceback.format_exc())
            raise
        self._record_success(result)
        return result

    def run_batch(
        self,
        jobs: Sequence[RasterJob],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> tuple[list[JobResult | None], ProcessingStats]:
        """Run many jobs, in worker processes unless max_workers is 1.

        Failed jobs are logged and counted; their slot in the returned list
        is None so results stay aligned with the input order.

        Args:
            jobs: Jobs to run
            max_workers: Maximum worker processes (None = configured default)
            progress_callback: Optional callback(completed, total, job_id, success)

        Returns:
            Tuple of (results in input order, statistics for this batch)
        """
        batch_logger = JobLogger(self.logger)
        batch_logger.stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        settings_dict = self.config.model_dump()
        results: list[JobResult | None] = [None] * len(jobs)
        total = len(jobs)

        self.logger.info("Starting batch", job_count=total, max_workers=max_workers)

        def collect(index: int, outcome: dict[str, Any], completed: int) -> None:
            job_id = jobs[index].job_id
            success = "error" not in outcome
            if success:
                result = JobResult.from_dict(outcome["result"])
                results[index] = result
                if result.clip is not None:
                    batch_logger.log_clip_verdict(result.job_id, result.clip.verdict.value)
                batch_logger.log_job_complete(
                    result.job_id, len(result.pixels), len(result.spans), result.duration_ms
                )
            else:
                error = Exception(f"{outcome['error_type']}: {outcome['error']}")
                batch_logger.log_job_error(job_id, error, outcome.get("traceback"))
            if progress_callback is not None:
                progress_callback(completed, total, job_id, success)

        if max_workers == 1:
            for i, job in enumerate(jobs):
                collect(i, process_job(job.to_dict(), settings_dict), i + 1)
        else:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                futures = {
                    executor.submit(process_job, job.to_dict(), settings_dict): i
                    for i, job in enumerate(jobs)
                }
                for completed, future in enumerate(as_completed(futures), start=1):
                    index = futures[future]
                    try:
                        outcome = future.result()
                    except Exception as e:
                        # Executor-level failure (e.g. a worker died)
                        outcome = {
                            "error": str(e),
                            "error_type": type(e).__name__,
                            "traceback": traceback.format_exc(),
                        }
                    collect(index, outcome, completed)

        stats = batch_logger.stats
        stats.end_time = time.time()

        self.logger.info(
            "Batch complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            pixels=stats.pixels_emitted,
        )
        return results, stats
