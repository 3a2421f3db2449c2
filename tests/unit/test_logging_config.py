"""
Unit tests for logging configuration.
"""

import json
import logging

import pytest

from fictioneers.logging_config import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_api_request,
    log_authentication_failure,
    mask_api_key,
    set_correlation_id,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    clear_correlation_id()
    logging.getLogger().handlers.clear()


class TestCorrelationId:
    """Test correlation ID context handling."""

    def test_generated_when_missing(self):
        correlation_id = set_correlation_id()
        assert correlation_id
        assert get_correlation_id() == correlation_id

    def test_explicit_value(self):
        set_correlation_id("req-123")
        assert get_correlation_id() == "req-123"

    def test_clear(self):
        set_correlation_id("req-123")
        clear_correlation_id()
        assert get_correlation_id() is None


class TestSetupLogging:
    """Test setup_logging output."""

    def test_json_output_to_file(self, temp_dir):
        log_file = temp_dir / "logs" / "sdk.log"
        setup_logging(level="DEBUG", log_file=log_file, json_format=True)
        set_correlation_id("req-1")

        get_logger("tests").info("hello", answer=42)
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "hello"
        assert record["answer"] == 42
        assert record["level"] == "info"
        assert record["correlation_id"] == "req-1"
        assert record["logger"] == "fictioneers.tests"

    def test_level_filters(self, temp_dir):
        log_file = temp_dir / "sdk.log"
        setup_logging(level="WARNING", log_file=log_file)

        get_logger("tests").info("hidden")
        get_logger("tests").warning("shown")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert "hidden" not in content
        assert "shown" in content


class TestHelpers:
    """Test logging helpers."""

    def test_get_logger_prefix(self):
        assert get_logger("fictioneers.sdk") is not None
        assert get_logger("other") is not None

    @pytest.mark.parametrize("key, expected", [
        (None, "<none>"),
        ("", "<none>"),
        ("s_short", "***"),
        ("s_live_abcdef123", "s_live..."),
    ])
    def test_mask_api_key(self, key, expected):
        assert mask_api_key(key) == expected

    def test_api_request_levels(self, temp_dir):
        log_file = temp_dir / "sdk.log"
        setup_logging(level="DEBUG", log_file=log_file)
        logger = get_logger("tests")

        log_api_request(logger, "GET", "/users/me", 200, 12.5)
        log_api_request(logger, "GET", "/users/me", 500, 3.0)
        log_authentication_failure(logger, "token_exchange", user_id="u1", reason="401")
        for handler in logging.getLogger().handlers:
            handler.flush()

        records = [json.loads(line) for line in log_file.read_text().strip().splitlines()]
        assert [(r["event"], r["level"]) for r in records] == [
            ("api_request", "debug"),
            ("api_request", "warning"),
            ("authentication_failure", "warning"),
        ]
        assert records[2]["user_id"] == "u1"
