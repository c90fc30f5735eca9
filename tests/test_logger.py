import json
import logging

from piechart.utils.logger import (
    ContextLogger,
    PrettyFormatter,
    StructuredFormatter,
    get_logger,
)


def make_record(message="hello", extra_data=None):
    record = logging.LogRecord(
        name="piechart.renderer",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    if extra_data is not None:
        record.extra_data = extra_data
    return record


def test_context_logger_merges_bound_and_call_data():
    adapter = ContextLogger(logging.getLogger("piechart.test"), {"view": "main"})

    _, kwargs = adapter.process("msg", {"extra_data": {"segment": "A"}})

    assert kwargs["extra"] == {"extra_data": {"view": "main", "segment": "A"}}


def test_get_logger_namespaces_under_piechart():
    assert get_logger("renderer").logger.name == "piechart.renderer"


def test_structured_formatter_emits_json_with_extra_fields():
    payload = json.loads(
        StructuredFormatter().format(make_record(extra_data={"segment": "A"}))
    )

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "piechart.renderer"
    assert payload["message"] == "hello"
    assert payload["segment"] == "A"


def test_pretty_formatter_strips_root_name_and_appends_extra():
    line = PrettyFormatter().format(make_record(extra_data={"segment": "A"}))

    assert "renderer" in line
    assert "piechart.renderer" not in line
    assert line.endswith("hello | segment=A")
