"""Logging utilities for RasterKit."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class ProcessingStats:
    """Statistics from a processing run."""

    processed_count: int = 0
    error_count: int = 0
    pixels_emitted: int = 0
    spans_emitted: int = 0
    clips_accepted: int = 0
    clips_rejected: int = 0
    clips_capped: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    job_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_job_time_ms(self) -> float | None:
        if not self.job_timings_ms:
            return None
        return sum(self.job_timings_ms) / len(self.job_timings_ms)

    @property
    def min_job_time_ms(self) -> float | None:
        return min(self.job_timings_ms) if self.job_timings_ms else None

    @property
    def max_job_time_ms(self) -> float | None:
        return max(self.job_timings_ms) if self.job_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by an earlier call are removed and closed first, so
    repeated calls replace the configuration instead of stacking handlers.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)
        _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("rasterkit")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class JobLogger:
    """Logger for tracking job progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_job_start(self, job_id: str, kind: str, algorithm: str | None) -> None:
        """Log start of a job."""
        self._logger.debug("Processing job", job=job_id, kind=kind, algorithm=algorithm)

    def log_job_complete(
        self,
        job_id: str,
        pixels: int,
        spans: int,
        duration_ms: float,
    ) -> None:
        """Log successful job processing."""
        self._logger.info(
            "Job processed",
            job=job_id,
            pixels=pixels,
            spans=spans,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.pixels_emitted += pixels
        self._stats.spans_emitted += spans
        self._stats.job_timings_ms.append(duration_ms)

    def log_clip_verdict(self, job_id: str, verdict: str) -> None:
        """Log the verdict of a clipping job."""
        if verdict == "accepted":
            self._stats.clips_accepted += 1
        elif verdict == "iteration_capped":
            self._stats.clips_capped += 1
            self._logger.warning("Clip stopped at iteration cap", job=job_id)
        else:
            self._stats.clips_rejected += 1
        self._logger.debug("Clip verdict", job=job_id, verdict=verdict)

    def log_job_error(
        self,
        job_id: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log job processing error."""
        self._logger.error(
            "Job processing failed",
            job=job_id,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((job_id, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
