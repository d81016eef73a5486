"""
Tests for logging_manager module.

Tests MarginaliaLogger file output, handle_cli_error, and the NullLogger /
safe_logger pair that lets library code log without None checks.
"""
import click
import pytest
from unittest.mock import MagicMock

from marginalia.core.exceptions import ConfigError
from marginalia.core.logging_manager import (
    MarginaliaLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


class TestMarginaliaLogger:
    """Tests for the rotating file logger."""

    def test_creates_log_directory(self, tmp_path):
        log_dir = tmp_path / "logs" / "nested"
        MarginaliaLogger(log_dir, "lint")
        assert log_dir.is_dir()

    def test_operation_written_to_component_log(self, tmp_path):
        logger = MarginaliaLogger(tmp_path, "lint")
        logger.log_operation("lint", {"files_checked": 4, "errors": 0})

        content = (tmp_path / "lint.log").read_text(encoding="utf-8")
        assert "OPERATION - lint" in content
        assert '"files_checked": 4' in content

    def test_info_with_details(self, tmp_path):
        logger = MarginaliaLogger(tmp_path, "catalog")
        logger.log_info("Loaded corpus", {"documents": 3})

        content = (tmp_path / "catalog.log").read_text(encoding="utf-8")
        assert 'INFO - Loaded corpus: {"documents": 3}' in content

    def test_errors_go_to_error_log(self, tmp_path):
        logger = MarginaliaLogger(tmp_path, "lint")
        logger.log_error(ValueError("bad date"), {"file": "essay.md"})

        content = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert "ValueError: bad date" in content
        assert "file=essay.md" in content

    def test_debug_not_in_error_log(self, tmp_path):
        logger = MarginaliaLogger(tmp_path, "lint")
        logger.log_debug("checking essay.md")

        assert "checking essay.md" in (tmp_path / "lint.log").read_text(encoding="utf-8")
        assert "checking essay.md" not in (tmp_path / "errors.log").read_text(encoding="utf-8")

    def test_cli_error_message(self, tmp_path):
        logger = MarginaliaLogger(tmp_path, "lint")
        message = logger.log_cli_error(ConfigError("Unknown config key: 'x'"))
        assert message == "❌ ConfigError: Unknown config key: 'x'"

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path):
        MarginaliaLogger(tmp_path, "lint")
        logger = MarginaliaLogger(tmp_path, "lint")
        assert len(logger.main_logger.handlers) == 2
        assert len(logger.error_logger.handlers) == 1


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_exits_with_code_and_message(self, tmp_path, capsys):
        ctx = click.Context(click.Command("lint"))
        ctx.obj = {"logger": MarginaliaLogger(tmp_path, "lint"), "verbose": False}

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, ConfigError("broken"), "load_config", exit_code=2)

        assert exc_info.value.code == 2
        assert "ConfigError: broken" in capsys.readouterr().err
        assert "operation=load_config" in (tmp_path / "errors.log").read_text(encoding="utf-8")

    def test_works_without_context_object(self, capsys):
        ctx = click.Context(click.Command("lint"))

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ConfigError("broken"), "load_config")

        assert "ConfigError: broken" in capsys.readouterr().err


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_all_methods_are_no_ops(self):
        logger = NullLogger()
        logger.log_operation("lint", {"key": "value"})
        logger.log_error(ValueError("test error"), {"context": "test"})
        logger.log_debug("debug message", {"key": "value"})
        logger.log_info("info message", {"key": "value"})
        logger.log_warning("warning message", {"key": "value"})

    def test_log_cli_error_returns_formatted(self):
        result = NullLogger().log_cli_error(ValueError("test error"), {"context": "test"})
        assert "ValueError" in result
        assert "test error" in result


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=MarginaliaLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_returns_shared_null_logger_when_none(self):
        result = safe_logger(None)
        assert isinstance(result, NullLogger)
        assert safe_logger(None) is result

    def test_forwards_calls(self):
        mock_logger = MagicMock(spec=MarginaliaLogger)
        details = {"file": "essay.md", "line": 42}

        safe_logger(mock_logger).log_operation("lint", details)
        mock_logger.log_operation.assert_called_once_with("lint", details)

        safe_logger(None).log_operation("lint", details)
