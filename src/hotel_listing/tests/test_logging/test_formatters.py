import json
import logging

from hotel_listing.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(exc_info=None):
    return logging.LogRecord("hotel_listing", logging.INFO, __file__, 10, "hello %s", ("tester",), exc_info)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.model = "Hotel"
    rec.request_id = "req-1"

    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert data["request_id"] == "req-1"
    assert data["model"] == "Hotel"
    assert "timestamp" in data
    assert "version" in data


def test_json_formatter_non_serializable_extra():
    class X:
        def __repr__(self):
            return "<X>"

    rec = make_record()
    rec.obj = X()

    data = json.loads(JsonFormatter(env="dev").format(rec))

    assert isinstance(data["obj"], str)


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        import sys

        rec = make_record(sys.exc_info())

    data = json.loads(JsonFormatter().format(rec))

    assert "ValueError: bad" in data["exc_info"]


def test_color_formatter_line_layout():
    rec = make_record()
    rec.request_id = "rid-9"

    line = ColorFormatter().format(rec)

    assert "hello tester" in line
    assert "rid-9" in line
    assert "INFO" in line
