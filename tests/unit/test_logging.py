"""
Unit tests for logging setup.
"""

import json
import logging
import re

import pytest
import structlog

from deribit_http.config.settings import DeribitSettings
from deribit_http.utils.logging_config import get_logger, setup_logging

MILLISECOND_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}$")


@pytest.fixture
def restore_logging():
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            handler.close()
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    """Test handler installation and output format."""

    def test_json_lines_to_file(self, restore_logging, clean_env, temp_dir):
        log_file = temp_dir / "logs" / "client.log"
        settings = DeribitSettings(_env_file=None, log_format="json", log_file=str(log_file), log_level="DEBUG")

        logger = setup_logging(settings)
        logger.debug("Order placed", instrument_name="BTC-PERPETUAL", request_id=7)

        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        placed = [line for line in lines if line["event"] == "Order placed"][0]

        assert placed["instrument_name"] == "BTC-PERPETUAL"
        assert placed["request_id"] == 7
        assert placed["level"] == "debug"
        assert MILLISECOND_TIMESTAMP.match(placed["timestamp"])

    def test_level_filters_records(self, restore_logging, clean_env, temp_dir):
        log_file = temp_dir / "client.log"
        settings = DeribitSettings(_env_file=None, log_format="text", log_file=str(log_file), log_level="WARNING")

        logger = setup_logging(settings)
        logger.info("quiet")
        logger.warning("loud", code=10028)

        content = log_file.read_text(encoding="utf-8")
        assert "quiet" not in content
        assert "loud" in content
        assert "code=10028" in content

    def test_get_logger_without_setup(self, restore_logging):
        structlog.reset_defaults()

        logger = get_logger("deribit_http.test")

        assert structlog.is_configured()
        logger.info("no handlers installed")
