"""Tests for elastiq.common.logging -- structlog configuration."""

import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog

from elastiq.common.logging import configure_logging


class TestConfigureLogging:
    def test_json_renderer_by_default(self):
        with patch.dict(os.environ, {"ELASTIQ_LOG_FORMAT": "json"}), patch("structlog.configure") as configure:
            configure_logging("INFO")
        processors = configure.call_args.kwargs["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self):
        with patch("structlog.configure") as configure:
            configure_logging("INFO", log_format="console")
        processors = configure.call_args.kwargs["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_level_falls_back_to_settings(self):
        with patch.dict(os.environ, {"ELASTIQ_LOG_LEVEL": "ERROR"}), patch("structlog.configure") as configure:
            configure_logging()
        wrapper = configure.call_args.kwargs["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(logging.ERROR)

    def test_explicit_arguments_skip_settings(self):
        with (
            patch.dict(os.environ, {"ELASTIQ_LOG_LEVEL": "trace"}),
            patch("elastiq.common.logging.get_settings") as get_settings,
            patch("structlog.configure") as configure,
        ):
            configure_logging("debug", log_format="console")
        get_settings.assert_not_called()
        wrapper = configure.call_args.kwargs["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(logging.DEBUG)

    def test_unknown_level_raises_value_error(self):
        with patch("structlog.configure") as configure, pytest.raises(ValueError, match="Unknown log level: 'chatty'"):
            configure_logging("chatty", log_format="json")
        configure.assert_not_called()

    def test_filters_below_level_and_renders_json(self, capsys):
        configure_logging("WARNING", log_format="json")
        log = structlog.get_logger("test")
        log.info("dropped_event")
        log.warning("kept_event", query_type="mlt")

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["event"] == "kept_event"
        assert record["level"] == "warning"
        assert record["query_type"] == "mlt"
        assert "timestamp" in record
