"""Tests for job processing orchestration."""

import logging
from unittest.mock import MagicMock, Mock, patch

import pytest

from rasterkit.config import (
    ClipAlgorithm,
    ClipConfig,
    LineAlgorithm,
    LineConfig,
    LogLevel,
    LoggingConfig,
    ProcessingConfig,
    RasterKitSettings,
)
from rasterkit.core.clipping import ClipVerdict
from rasterkit.core.processor import (
    JobKind,
    JobResult,
    RasterJob,
    RasterProcessor,
    execute_job,
    process_job,
)
from rasterkit.domain import Point, Span, Window
from rasterkit.exceptions import JobError, UnsupportedGeometryError
from rasterkit.utils import configure_logging

WINDOW = Window(Point(0, 0), Point(8, 8))


@pytest.fixture
def settings() -> RasterKitSettings:
    """Default settings with in-process batches."""
    return RasterKitSettings(processing=ProcessingConfig(max_workers=1))


@pytest.fixture
def processor(settings: RasterKitSettings) -> RasterProcessor:
    """Processor with logging configuration stubbed out."""
    with patch("rasterkit.core.processor.configure_logging") as mock_logging:
        mock_logging.return_value = Mock()
        return RasterProcessor(settings, quiet=True)


class TestRasterJob:
    """Tests for job construction and serialization."""

    def test_line_job(self) -> None:
        """Line jobs store the algorithm by value."""
        job = RasterJob.line(Point(0, 0), Point(5, 2), LineAlgorithm.BRESENHAM_OCTANT1)
        assert job.kind == JobKind.LINE
        assert job.points == (Point(0, 0), Point(5, 2))
        assert job.algorithm == "bresenham_octant1"

    def test_serialization_roundtrip(self) -> None:
        """Jobs survive the IPC dictionary form."""
        job = RasterJob.clip(Point(-2, 5), Point(10, 5), WINDOW, ClipAlgorithm.LIANG_BARSKY)
        assert RasterJob.from_dict(job.to_dict()) == job

    @pytest.mark.parametrize(
        "payload",
        [
            {"points": []},
            {"kind": "spiral", "points": []},
            {"kind": "line", "points": [{"x": 0}]},
        ],
    )
    def test_malformed_payload(self, payload: dict) -> None:
        """Malformed payloads raise JobError."""
        with pytest.raises(JobError):
            RasterJob.from_dict(payload)


class TestExecuteJob:
    """Tests for dispatching jobs to algorithms."""

    def test_line_uses_configured_default(self) -> None:
        """Without an explicit algorithm the configured default is used."""
        settings = RasterKitSettings(
            line=LineConfig(default_algorithm=LineAlgorithm.BRESENHAM_ALL_SLOPES)
        )
        result = execute_job(RasterJob.line(Point(5, 2), Point(0, 0)), settings)
        assert result.pixels.first == Point(0, 0)

    def test_circle(self, settings: RasterKitSettings) -> None:
        """Circle jobs emit the midpoint circle."""
        result = execute_job(RasterJob.circle(Point(0, 0), 5), settings)
        assert len(result.pixels) == 28
        assert result.spans == []

    def test_circle_without_radius(self, settings: RasterKitSettings) -> None:
        """A circle job must carry a radius."""
        job = RasterJob(JobKind.CIRCLE, (Point(0, 0),))
        with pytest.raises(JobError):
            execute_job(job, settings)

    def test_clip_carries_verdict(self, settings: RasterKitSettings) -> None:
        """Clip jobs return the clip result and the visible pixels."""
        result = execute_job(RasterJob.clip(Point(-2, 5), Point(10, 5), WINDOW), settings)
        assert result.clip is not None
        assert result.clip.verdict == ClipVerdict.ACCEPTED
        assert len(result.pixels) == 9
        assert result.trace == result.clip.trace

    def test_clip_uses_configured_cap(self) -> None:
        """The iteration cap comes from the clip settings."""
        settings = RasterKitSettings(clip=ClipConfig(iteration_cap=1))
        result = execute_job(RasterJob.clip(Point(-2, -2), Point(10, 10), WINDOW), settings)
        assert result.clip is not None
        assert result.clip.verdict == ClipVerdict.ITERATION_CAPPED
        assert len(result.pixels) == 0

    def test_clip_draws_with_configured_line_algorithm(self) -> None:
        """The visible part is drawn with the configured line default."""
        job = RasterJob.clip(Point(10, 5), Point(-2, 5), WINDOW)
        dda = execute_job(job, RasterKitSettings())
        settings = RasterKitSettings(
            line=LineConfig(default_algorithm=LineAlgorithm.BRESENHAM_ALL_SLOPES)
        )
        swapped = execute_job(job, settings)
        assert dda.pixels.first == Point(8, 5)
        assert swapped.pixels.first == Point(0, 5)
        assert swapped.pixels.to_tuples() == dda.pixels.to_tuples()[::-1]

    def test_clip_with_octant1_default_refuses_leftward_part(self) -> None:
        """An octant-1 default still refuses segments it cannot draw."""
        settings = RasterKitSettings(
            line=LineConfig(default_algorithm=LineAlgorithm.BRESENHAM_OCTANT1)
        )
        with pytest.raises(UnsupportedGeometryError):
            execute_job(RasterJob.clip(Point(10, 5), Point(-2, 5), WINDOW), settings)

    def test_fill(self, settings: RasterKitSettings) -> None:
        """Fill jobs return spans and their pixels."""
        job = RasterJob.fill([Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)])
        result = execute_job(job, settings)
        assert result.spans[0] == Span(0, 0, 4)
        assert len(result.pixels) == 20

    def test_unknown_algorithm(self, settings: RasterKitSettings) -> None:
        """Unknown algorithm names raise JobError."""
        job = RasterJob(JobKind.LINE, (Point(0, 0), Point(1, 1)), algorithm="wu")
        with pytest.raises(JobError, match="wu"):
            execute_job(job, settings)

    def test_trace_follows_settings(self) -> None:
        """Rasterizer traces are recorded only when configured."""
        job = RasterJob.line(Point(0, 0), Point(3, 1))
        quiet = execute_job(job, RasterKitSettings())
        traced = execute_job(job, RasterKitSettings(processing=ProcessingConfig(record_trace=True)))
        assert len(quiet.trace) == 0
        assert len(traced.trace) > 0


class TestProcessJob:
    """Tests for the picklable worker entry point."""

    def test_success(self, settings: RasterKitSettings) -> None:
        """Results come back serialized."""
        job = RasterJob.line(Point(0, 0), Point(4, 0), job_id="l1")
        outcome = process_job(job.to_dict(), settings.model_dump())
        assert "error" not in outcome
        result = JobResult.from_dict(outcome["result"])
        assert result.job_id == "l1"
        assert result.pixels.to_tuples() == [(x, 0) for x in range(5)]

    def test_error_returned_not_raised(self, settings: RasterKitSettings) -> None:
        """Geometry errors become error dictionaries."""
        job = RasterJob(JobKind.FILL, (Point(0, 0), Point(1, 1)), job_id="bad")
        outcome = process_job(job.to_dict(), settings.model_dump())
        assert outcome["error_type"] == "InsufficientVerticesError"
        assert outcome["job_id"] == "bad"
        assert "Traceback" in outcome["traceback"]


class TestRasterProcessor:
    """Tests for RasterProcessor."""

    def test_init(self, settings: RasterKitSettings) -> None:
        """Logging is configured from the settings."""
        with patch("rasterkit.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            processor = RasterProcessor(settings, quiet=True)
            assert processor.config == settings
            mock_logging.assert_called_once()
            assert mock_logging.call_args.kwargs["quiet"] is True

    def test_init_passes_configured_levels(self) -> None:
        """Console and file levels come from the logging settings."""
        settings = RasterKitSettings(logging=LoggingConfig(log_level=LogLevel.DEBUG))
        with patch("rasterkit.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            RasterProcessor(settings)
            assert mock_logging.call_args.kwargs["console_level"] == "DEBUG"
            assert mock_logging.call_args.kwargs["file_level"] == "DEBUG"

    def test_repeated_construction_keeps_handler_count(
        self, settings: RasterKitSettings, tmp_path
    ) -> None:
        """Building processors again does not stack root handlers."""
        settings = settings.model_copy(
            update={"logging": LoggingConfig(log_file=tmp_path / "run.log")}
        )
        root = logging.getLogger()
        try:
            RasterProcessor(settings)
            count = len(root.handlers)
            RasterProcessor(settings)
            RasterProcessor(settings)
            assert len(root.handlers) == count
        finally:
            configure_logging(quiet=True)

    def test_run_updates_stats(self, processor: RasterProcessor) -> None:
        """Successful runs are counted with their pixels."""
        processor.run(RasterJob.circle(Point(0, 0), 5))
        processor.run(RasterJob.clip(Point(20, 20), Point(30, 30), WINDOW))
        stats = processor.stats
        assert stats.processed_count == 2
        assert stats.pixels_emitted == 28
        assert stats.clips_rejected == 1
        assert len(stats.job_timings_ms) == 2

    def test_run_reraises_errors(self, processor: RasterProcessor) -> None:
        """Errors are logged, counted and re-raised."""
        job = RasterJob.line(
            Point(0, 0), Point(2, 5), LineAlgorithm.BRESENHAM_OCTANT1, job_id="steep"
        )
        with pytest.raises(UnsupportedGeometryError):
            processor.run(job)
        assert processor.stats.error_count == 1
        assert processor.stats.errors[0][0] == "steep"

    def test_run_batch_sequential(self, processor: RasterProcessor) -> None:
        """Results stay aligned with input; failures leave None."""
        jobs = [
            RasterJob.line(Point(0, 0), Point(4, 0), job_id="a"),
            RasterJob(JobKind.FILL, (Point(0, 0),), job_id="b"),
            RasterJob.circle(Point(0, 0), 0, job_id="c"),
        ]
        progress = MagicMock()
        results, stats = processor.run_batch(jobs, max_workers=1, progress_callback=progress)

        assert [r.job_id if r else None for r in results] == ["a", None, "c"]
        assert stats.processed_count == 2
        assert stats.error_count == 1
        assert stats.pixels_emitted == 6
        assert progress.call_count == 3
        progress.assert_any_call(2, 3, "b", False)

    def test_run_batch_stats_are_per_batch(self, processor: RasterProcessor) -> None:
        """Batch statistics do not leak into single-run statistics."""
        processor.run_batch([RasterJob.circle(Point(0, 0), 5)], max_workers=1)
        assert processor.stats.processed_count == 0

    @patch("rasterkit.core.processor.ProcessPoolExecutor")
    def test_run_batch_parallel(
        self, mock_executor_class: MagicMock, processor: RasterProcessor
    ) -> None:
        """The parallel path collects futures as they complete."""
        mock_executor = MagicMock()
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None

        def submit(fn, job_dict, settings_dict):
            future = MagicMock()
            future.result.return_value = fn(job_dict, settings_dict)
            return future

        mock_executor.submit.side_effect = submit
        mock_executor_class.return_value = mock_executor

        jobs = [
            RasterJob.line(Point(0, 0), Point(4, 0), job_id="a"),
            RasterJob.clip(Point(-2, 5), Point(10, 5), WINDOW, job_id="b"),
        ]
        with patch("rasterkit.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.side_effect = lambda futures: list(reversed(list(futures)))
            results, stats = processor.run_batch(jobs, max_workers=2)

        mock_executor_class.assert_called_once_with(max_workers=2)
        assert [r.job_id for r in results if r] == ["a", "b"]
        assert stats.processed_count == 2
        assert stats.clips_accepted == 1

    @patch("rasterkit.core.processor.ProcessPoolExecutor")
    def test_run_batch_worker_failure(
        self, mock_executor_class: MagicMock, processor: RasterProcessor
    ) -> None:
        """A future that raises counts as a failed job."""
        mock_executor = MagicMock()
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_future = MagicMock()
        mock_future.result.side_effect = RuntimeError("worker died")
        mock_executor.submit.return_value = mock_future
        mock_executor_class.return_value = mock_executor

        with patch("rasterkit.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [mock_future]
            results, stats = processor.run_batch(
                [RasterJob.circle(Point(0, 0), 3)], max_workers=2
            )

        assert results == [None]
        assert stats.error_count == 1
        assert "worker died" in stats.errors[0][1]
