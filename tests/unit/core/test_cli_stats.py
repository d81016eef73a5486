"""
Tests for the statistics dataclasses in marginalia.core.cli.
"""
import pytest

from marginalia.core.cli import LintStats, OperationStats, setup_logger


class TestOperationStats:
    def test_defaults(self):
        stats = OperationStats()
        assert stats.files_processed == 0
        assert stats.errors == 0

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError, match="files_processed"):
            OperationStats(files_processed=-1)

    def test_duration_is_cached(self):
        stats = OperationStats()
        assert stats.duration() == stats.duration()


class TestLintStats:
    def test_summary(self):
        stats = LintStats(files_processed=4, errors=1, warnings=2, parse_failures=1)
        summary = stats.summary()
        assert summary.startswith("4 files processed, 1 unparseable, 1 errors, 2 warnings")

    def test_to_dict(self):
        stats = LintStats(files_processed=4, warnings=2)
        data = stats.to_dict()
        assert data["files_processed"] == 4
        assert data["warnings"] == 2
        assert data["parse_failures"] == 0
        assert "duration" in data

    def test_negative_warnings_rejected(self):
        with pytest.raises(ValueError, match="warnings"):
            LintStats(warnings=-1)


def test_setup_logger_uses_operations_dir(tmp_path):
    logger = setup_logger(tmp_path, "lint")
    logger.log_info("started")
    assert (tmp_path / "operations" / "lint.log").exists()
