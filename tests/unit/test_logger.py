"""Tests for structured logging and write traces."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from roadmap_planning.observability.logger import (
    get_logger,
    get_trace_id,
    setup_logging,
    write_trace,
)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestWriteTrace:
    def test_fresh_trace_per_write(self):
        with write_trace("roadmap-1") as first:
            assert get_trace_id() == first
        with write_trace("roadmap-1") as second:
            assert second != first

    def test_restores_previous_trace(self):
        outer = get_trace_id()
        with write_trace("roadmap-1") as inner:
            assert inner != outer
        assert get_trace_id() == outer

    def test_binds_roadmap_id(self):
        with write_trace("roadmap-7"):
            assert structlog.contextvars.get_contextvars()["roadmap_id"] == "roadmap-7"
        assert "roadmap_id" not in structlog.contextvars.get_contextvars()


class TestSetupLogging:
    def test_json_output_carries_trace_id(self, caplog):
        caplog.set_level(logging.INFO)
        setup_logging(level="INFO", format="json")
        with write_trace("roadmap-1") as trace_id:
            get_logger("roadmap_planning.test").info("hello", answer=42)

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "hello"
        assert payload["answer"] == 42
        assert payload["trace_id"] == trace_id
        assert payload["roadmap_id"] == "roadmap-1"
        assert payload["level"] == "info"

    def test_console_format(self):
        setup_logging(level="DEBUG", format="console")
        assert structlog.is_configured()
