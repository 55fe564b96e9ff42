"""Tests for configuration loading and logging setup."""

import io
import json
import logging

import json_log_formatter
import pytest

from navable.config import InferenceConfig, ObservabilityConfig, get_config, reset_config
from navable.logging_config import setup_logging


class TestConfig:
    def test_defaults(self):
        config = get_config()
        assert config.inference.timeout_seconds == 15.0
        assert config.routing.mode == "walk"
        assert config.gazetteer.file_pattern == "*.txt"
        assert config.gazetteer.data_dir.name == "data"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NAV_INFERENCE_TIMEOUT_SECONDS", "20")
        monkeypatch.setenv("NAV_ROUTING_API_KEY", "geo")
        reset_config()

        config = get_config()
        assert config.inference.timeout_seconds == 20.0
        assert config.routing.api_key == "geo"

    def test_singleton_until_reset(self):
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first

    def test_endpoint(self):
        config = InferenceConfig(base_url="https://example.test/v1beta/", model="m")
        assert config.endpoint == "https://example.test/v1beta/models/m:generateContent"


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_plain_format(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(ObservabilityConfig(level="DEBUG", format="%(levelname)s %(message)s"), stream)

        logging.getLogger("navable.test").info("hello")

        assert stream.getvalue().strip() == "INFO hello"
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_structured_format(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(ObservabilityConfig(structured=True), stream)

        assert isinstance(
            logging.getLogger().handlers[0].formatter,
            json_log_formatter.VerboseJSONFormatter,
        )
        logging.getLogger("navable.test").info("resolved", extra={"score": 0.9})

        record = json.loads(stream.getvalue().strip())
        assert record["message"] == "resolved"
        assert record["score"] == 0.9
