"""
Unit tests for structured logging.
"""

import json
import logging

import pytest

from gxaccount.logging import (
    LogLevel,
    StructuredLogger,
    create_audit_logger,
    create_file_logger,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture
def captured():
    logger = logging.getLogger("gxaccount-test-capture")
    logger.handlers = []
    handler = ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, handler


class TestStructuredLogger:

    @pytest.mark.unit
    def test_json_entry(self, captured):
        logger, handler = captured
        structured = StructuredLogger(component="test", logger=logger)

        entry = structured.info("Registered", account="alice", env="production")

        data = json.loads(handler.messages[-1])
        assert data["message"] == "Registered"
        assert data["component"] == "test"
        assert data["account"] == "alice"
        assert data["details"] == {"env": "production"}
        assert "error" not in data
        assert entry.level == "INFO"

    @pytest.mark.unit
    def test_plain_output(self, captured):
        logger, handler = captured
        structured = StructuredLogger(logger=logger, json_output=False)

        structured.warning("Slow faucet", account="alice")

        assert handler.messages[-1] == "[WARNING] Slow faucet account=alice"

    @pytest.mark.unit
    def test_operation_success(self, captured):
        logger, handler = captured
        structured = StructuredLogger(logger=logger)

        with structured.operation("apply_merchant") as op:
            op.set_account("alice")
            op.add_detail("env", "production")

        start, done = (json.loads(m) for m in handler.messages[-2:])
        assert start["message"] == "Starting apply_merchant"
        assert start["level"] == "DEBUG"
        assert done["message"] == "Completed apply_merchant"
        assert done["account"] == "alice"
        assert done["details"] == {"env": "production"}
        assert done["duration_ms"] >= 0

    @pytest.mark.unit
    def test_operation_failure_logs_and_reraises(self, captured):
        logger, handler = captured
        structured = StructuredLogger(logger=logger)

        with pytest.raises(RuntimeError):
            with structured.operation("fetch_merchant"):
                raise RuntimeError("faucet down")

        data = json.loads(handler.messages[-1])
        assert data["level"] == "ERROR"
        assert data["message"] == "Failed fetch_merchant"
        assert data["error"] == "faucet down"

    @pytest.mark.unit
    def test_set_level(self, captured):
        logger, handler = captured
        structured = StructuredLogger(logger=logger)
        structured.set_level(LogLevel.WARNING)

        structured.info("hidden")

        assert handler.messages == []


class TestFactories:

    @pytest.mark.unit
    def test_audit_logger(self):
        entries = []
        structured = create_audit_logger(entries.append, component="gxaccount-audit-test")

        structured.info("Account created", account="alice")

        assert entries[-1]["message"] == "Account created"
        assert entries[-1]["account"] == "alice"

    @pytest.mark.unit
    def test_file_logger(self, tmp_path):
        path = tmp_path / "gxaccount.log"
        structured = create_file_logger(str(path), component="gxaccount-file-test")

        structured.info("Written")
        for handler in structured._logger.handlers:
            handler.flush()

        assert json.loads(path.read_text().splitlines()[-1])["message"] == "Written"
