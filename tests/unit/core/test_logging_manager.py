"""
Tests for logging_manager module.

Tests the MnemosLogger file output, the safe_logger function and
NullLogger class that provide null-safe logging throughout the codebase,
and CLI error reporting.
"""
import click
import pytest
from unittest.mock import MagicMock

from mnemos.core.exceptions import NotFoundError
from mnemos.core.logging_manager import (
    MnemosLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_methods_are_no_ops(self):
        """NullLogger methods accept the MnemosLogger arguments and do nothing."""
        logger = NullLogger()
        logger.log_operation("op", {"key": "value"})
        logger.log_error(ValueError("boom"), {"context": "test"})
        logger.log_debug("debug")
        logger.log_info("info")
        logger.log_warning("warning")

    def test_log_cli_error_returns_formatted(self):
        result = NullLogger().log_cli_error(ValueError("test error"))
        assert result == "Error: ValueError: test error"


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_logger_when_provided(self):
        mock_logger = MagicMock(spec=MnemosLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_returns_null_logger_for_none(self):
        assert isinstance(safe_logger(None), NullLogger)


class TestMnemosLogger:
    """Tests for MnemosLogger file output."""

    def test_writes_component_and_error_logs(self, tmp_dir):
        """Operations go to <component>.log, errors also to errors.log."""
        logger = MnemosLogger(tmp_dir / "logs", component_name="unit")
        try:
            logger.log_operation("create_note_completed", {"id": "n1"})
            try:
                raise NotFoundError("Note not found: n9")
            except NotFoundError as e:
                logger.log_error(e, {"operation": "show"})
        finally:
            logger.close()

        main_log = (tmp_dir / "logs" / "unit.log").read_text()
        error_log = (tmp_dir / "logs" / "errors.log").read_text()
        assert "create_note_completed" in main_log
        assert '"id": "n1"' in main_log
        assert "NotFoundError: Note not found: n9" in error_log
        assert "operation=show" in error_log

    def test_log_cli_error_message(self, tmp_dir):
        logger = MnemosLogger(tmp_dir / "logs", component_name="unit_cli")
        try:
            message = logger.log_cli_error(NotFoundError("Note not found: n1"))
        finally:
            logger.close()
        assert message == "Error: NotFoundError: Note not found: n1"


class TestHandleCliError:
    """Tests for handle_cli_error()."""

    def test_echoes_and_exits(self, capsys):
        """The error is printed to stderr and the process exits non-zero."""
        ctx = click.Context(click.Command("test"), obj={"verbose": False})

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, NotFoundError("Note not found: n1"), "note_show")

        assert exc_info.value.code == 1
        assert "Note not found: n1" in capsys.readouterr().err

    def test_uses_logger_from_context(self):
        mock_logger = MagicMock(spec=MnemosLogger)
        mock_logger.log_cli_error.return_value = "Error: boom"
        ctx = click.Context(click.Command("test"), obj={"logger": mock_logger})

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("boom"), "op", {"note_id": "n1"}, exit_code=2)

        args = mock_logger.log_cli_error.call_args
        assert args[0][1] == {"operation": "op", "note_id": "n1"}
