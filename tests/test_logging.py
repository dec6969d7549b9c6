"""Tests for logging infrastructure."""
import logging
import tempfile
from pathlib import Path

import pytest

from officedays.utils.logging_setup import (
    TRACE,
    SolverLogger,
    get_logger,
    log_constraint,
    log_function_call,
    setup_logging,
)
from officedays.utils.structured_logging import (
    bind_context,
    clear_context,
    configure_structlog,
    get_structured_logger,
)


class TestLoggingSetup:
    """Tests for logging configuration."""

    def test_setup_logging_creates_logger(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "test.log"
            logger = setup_logging(level="DEBUG", log_file=str(log_file))

            assert logger.name == "officedays"
            assert len(logger.handlers) == 2  # Console + file
            for handler in logger.handlers:
                handler.close()

    def test_setup_logging_creates_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "test.log"
        logger = setup_logging(level="DEBUG", log_file=str(log_file))
        logger.info("Test message")

        assert log_file.exists()
        for handler in logger.handlers:
            handler.close()

    def test_setup_logging_no_file(self):
        logger = setup_logging(level="INFO", log_file=None)
        assert len(logger.handlers) == 1  # Console only

    def test_trace_level(self):
        assert TRACE == 5
        assert logging.getLevelName(TRACE) == "TRACE"

    def test_trace_console_level(self):
        logger = setup_logging(level="TRACE", log_file=None)
        assert logger.handlers[0].level == TRACE

    def test_get_logger(self):
        assert get_logger("officedays.solver").name == "officedays.solver"


class TestLogFunctionCall:
    """Tests for function call decorator."""

    def test_decorator_logs_entry_exit(self, caplog):
        @log_function_call
        def add(a, b):
            return a + b

        with caplog.at_level(TRACE):
            assert add(1, 2) == 3
        assert any("add" in r.message for r in caplog.records)

    def test_decorator_reraises(self):
        @log_function_call
        def fail():
            raise ValueError("test error")

        with pytest.raises(ValueError, match="test error"):
            fail()


class TestLogConstraint:
    """Tests for log_constraint."""

    def test_failed_constraint_is_warning(self, caplog):
        logger = logging.getLogger("officedays.test")
        with caplog.at_level(logging.DEBUG, logger="officedays.test"):
            log_constraint(logger, "balance", False, "spread=3")
        assert caplog.records[-1].levelno == logging.WARNING
        assert "balance" in caplog.records[-1].message

    def test_satisfied_constraint_is_debug(self, caplog):
        logger = logging.getLogger("officedays.test")
        with caplog.at_level(logging.DEBUG, logger="officedays.test"):
            log_constraint(logger, "balance", True)
        assert caplog.records[-1].levelno == logging.DEBUG


class TestSolverLogger:
    """Tests for SolverLogger."""

    def test_nesting(self):
        slog = SolverLogger("officedays.test.solver")
        slog.enter("round 1")
        assert slog.indent == 1
        slog.exit("round 1")
        slog.exit()
        assert slog.indent == 0

    def test_phase_and_step(self, caplog):
        slog = SolverLogger("officedays.test.solver")
        with caplog.at_level(logging.DEBUG, logger="officedays.test.solver"):
            slog.phase("Schedule")
            slog.step("working")
        assert len(caplog.records) == 2


class TestStructuredLogging:
    """Tests for the structlog configuration."""

    def test_json_output(self, capsys):
        configure_structlog(json_output=True)
        bind_context(month=6, year=2023)
        try:
            get_structured_logger("officedays.test").info("schedule_generated", employees=3)
        finally:
            clear_context()
        err = capsys.readouterr().err
        assert '"event": "schedule_generated"' in err
        assert '"month": 6' in err

    def test_level_filtering(self, capsys):
        configure_structlog(json_output=True, level=logging.WARNING)
        get_structured_logger("officedays.test").info("hidden")
        assert "hidden" not in capsys.readouterr().err
