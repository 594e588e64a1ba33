"""Tests for log formatting."""
import json
import logging
from app.logging_config import JSONFormatter, ColoredFormatter, get_logger


def make_record(**extra):
    record = logging.LogRecord(
        name="app.services.game_engine",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Player reached stage %d",
        args=(5,),
        exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for production log lines."""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "app.services.game_engine"
        assert data["message"] == "Player reached stage 5"
        assert data["timestamp"].endswith("Z")

    def test_game_context_fields(self):
        record = make_record(player_id="ems_1", stage_index=4, operation="÷")
        data = json.loads(JSONFormatter().format(record))

        assert data["player_id"] == "ems_1"
        assert data["stage_index"] == 4
        assert data["operation"] == "÷"
        assert "request_id" not in data


class TestColoredFormatter:
    """Tests for development log lines."""

    def test_level_name_restored(self):
        record = make_record()
        output = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert "INFO" in output
        assert record.levelname == "INFO"


def test_get_logger_returns_named_logger():
    assert get_logger("app.test").name == "app.test"
