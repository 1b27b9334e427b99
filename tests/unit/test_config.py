"""Tests for settings models and logging utilities."""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from rasterkit.config import (
    ClipAlgorithm,
    ClipConfig,
    LineAlgorithm,
    LogLevel,
    RasterKitSettings,
    get_default_settings,
)
from rasterkit.utils import JobLogger, ProcessingStats, configure_logging


class TestSettings:
    """Tests for RasterKitSettings."""

    def test_defaults(self) -> None:
        """Defaults match the documented algorithm constants."""
        settings = get_default_settings()
        assert settings.line.default_algorithm == LineAlgorithm.DDA
        assert settings.clip.default_algorithm == ClipAlgorithm.COHEN_SUTHERLAND
        assert settings.clip.iteration_cap == 16
        assert settings.clip.parallel_epsilon == 1e-4
        assert settings.processing.record_trace is False
        assert settings.logging.log_file is None
        assert settings.logging.log_level == LogLevel.WARNING

    @pytest.mark.parametrize("cap", [0, 257])
    def test_iteration_cap_bounds(self, cap: int) -> None:
        """The cap must stay in a sensible range."""
        with pytest.raises(ValidationError):
            ClipConfig(iteration_cap=cap)

    def test_epsilon_must_be_positive(self) -> None:
        """A zero epsilon would never detect parallel edges."""
        with pytest.raises(ValidationError):
            ClipConfig(parallel_epsilon=0.0)

    def test_algorithm_from_string(self) -> None:
        """Enum fields accept their string values."""
        config = ClipConfig(default_algorithm="liang_barsky")
        assert config.default_algorithm == ClipAlgorithm.LIANG_BARSKY

    def test_dump_round_trip(self) -> None:
        """Settings survive the dictionary form used by worker processes."""
        settings = RasterKitSettings(clip=ClipConfig(iteration_cap=4))
        assert RasterKitSettings.model_validate(settings.model_dump()) == settings

    def test_unknown_log_level_rejected(self) -> None:
        """Only the known level names are accepted."""
        with pytest.raises(ValidationError):
            RasterKitSettings.model_validate({"logging": {"log_level": "LOUD"}})


class TestJobLogger:
    """Tests for JobLogger statistics."""

    def test_complete_accumulates(self) -> None:
        """Completed jobs add pixels, spans and timings."""
        job_logger = JobLogger(Mock())
        job_logger.log_job_complete("a", pixels=5, spans=0, duration_ms=1.5)
        job_logger.log_job_complete("b", pixels=20, spans=4, duration_ms=0.5)
        stats = job_logger.stats
        assert stats.processed_count == 2
        assert stats.pixels_emitted == 25
        assert stats.spans_emitted == 4
        assert stats.avg_job_time_ms == 1.0
        assert stats.max_job_time_ms == 1.5

    def test_clip_verdicts_counted(self) -> None:
        """Each verdict has its own counter; capped clips warn."""
        logger = Mock()
        job_logger = JobLogger(logger)
        for verdict in ("accepted", "rejected", "iteration_capped", "accepted"):
            job_logger.log_clip_verdict("c", verdict)
        stats = job_logger.stats
        assert (stats.clips_accepted, stats.clips_rejected, stats.clips_capped) == (2, 1, 1)
        logger.warning.assert_called_once()

    def test_error_recorded(self) -> None:
        """Errors are counted with their job id."""
        job_logger = JobLogger(Mock())
        job_logger.log_job_error("bad", ValueError("boom"))
        assert job_logger.stats.error_count == 1
        assert job_logger.stats.errors == [("bad", "boom")]

    def test_empty_stats(self) -> None:
        """Timing summaries are None before any job ran."""
        stats = ProcessingStats()
        assert stats.avg_job_time_ms is None
        assert stats.duration_seconds == 0.0


class TestConfigureLogging:
    """Tests for configure_logging handler management."""

    @pytest.fixture(autouse=True)
    def reset_handlers(self):
        """Remove handlers installed by a test."""
        yield
        configure_logging(quiet=True)

    def test_repeated_calls_do_not_stack_handlers(self, tmp_path: Path) -> None:
        """Each call replaces the handlers of the previous one."""
        root = logging.getLogger()
        configure_logging(log_file=tmp_path / "a.log")
        count = len(root.handlers)
        for _ in range(3):
            configure_logging(log_file=tmp_path / "a.log")
        assert len(root.handlers) == count

    def test_replaced_file_handler_is_closed(self, tmp_path: Path) -> None:
        """The previous log file is released."""
        root = logging.getLogger()
        before = set(root.handlers)
        configure_logging(log_file=tmp_path / "first.log", quiet=True)
        (first,) = [h for h in root.handlers if h not in before]
        configure_logging(log_file=tmp_path / "second.log", quiet=True)
        assert first not in root.handlers
        assert first.stream is None

    def test_quiet_installs_no_console_handler(self) -> None:
        """Quiet mode leaves no rasterkit handlers behind."""
        root = logging.getLogger()
        configure_logging()
        with_console = len(root.handlers)
        configure_logging(quiet=True)
        assert len(root.handlers) == with_console - 1
