"""
Tests for the structlog-backed logging setup
"""
import json
import logging

import pytest
import structlog

from core import logging as logging_setup
from core.config import settings


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def last_json_line(output: str) -> dict:
    return json.loads(output.strip().splitlines()[-1])


class TestSetupLogging:
    @pytest.mark.unit
    def test_stdlib_logger_renders_json(self, monkeypatch, capsys, restore_logging):
        monkeypatch.setattr(settings, "log_format", "json")
        monkeypatch.setattr(settings, "environment", "development")
        logging_setup.setup_logging()

        logging.getLogger("services.fallback").warning("Model %s overloaded", "image-model-a")

        record = last_json_line(capsys.readouterr().out)
        assert record["event"] == "Model image-model-a overloaded"
        assert record["level"] == "warning"
        assert record["logger"] == "services.fallback"
        assert "timestamp" in record

    @pytest.mark.unit
    def test_exception_included_in_json(self, monkeypatch, capsys, restore_logging):
        monkeypatch.setattr(settings, "log_format", "json")
        monkeypatch.setattr(settings, "environment", "development")
        logging_setup.setup_logging()

        try:
            raise RuntimeError("upstream exploded")
        except RuntimeError:
            logging.getLogger("routers.staging").error("Edit error", exc_info=True)

        record = last_json_line(capsys.readouterr().out)
        assert record["event"] == "Edit error"
        assert "RuntimeError: upstream exploded" in record["exception"]

    @pytest.mark.unit
    def test_level_filters_stdlib_records(self, monkeypatch, capsys, restore_logging):
        monkeypatch.setattr(settings, "log_format", "json")
        monkeypatch.setattr(settings, "log_level", "WARNING")
        monkeypatch.setattr(settings, "environment", "development")
        logging_setup.setup_logging()

        logging.getLogger("services.retry").info("not shown")

        assert "not shown" not in capsys.readouterr().out
