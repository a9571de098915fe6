import json
import logging

import pytest

from ddl2sql.common.logger import (
    JsonFormatter,
    SchemaContextFilter,
    configure_logging,
    current_schema,
    get_logger,
    schema_context,
)


@pytest.fixture
def restore_root_handlers():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestStructuredLogging:

    def test_json_formatter_includes_schema(self, restore_root_handlers):
        configure_logging(json_format=True)
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)

        record = logging.LogRecord("ddl2sql.planner", logging.INFO, "path", 1, "planned %d joins", (2,), None)
        with schema_context("abc123def456"):
            handler.filter(record)
            data = json.loads(handler.formatter.format(record))

        assert data["message"] == "planned 2 joins"
        assert data["schema"] == "abc123def456"
        assert data["level"] == "INFO"
        assert data["name"] == "ddl2sql.planner"

    def test_extra_fields_are_serialized(self):
        record = logging.LogRecord("x", logging.WARNING, "path", 1, "msg", (), None)
        record.table_count = 14
        SchemaContextFilter().filter(record)
        data = json.loads(JsonFormatter().format(record))
        assert data["table_count"] == 14
        assert "schema" not in data

    def test_text_format(self, restore_root_handlers):
        configure_logging(level="DEBUG", json_format=False)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert "%(schema)s" in root.handlers[0].formatter._fmt

    def test_schema_context_resets(self):
        assert current_schema() is None
        with schema_context("outer"):
            with schema_context("inner"):
                assert current_schema() == "inner"
            assert current_schema() == "outer"
        assert current_schema() is None

    def test_get_logger_namespace(self):
        assert get_logger("planner").name == "ddl2sql.planner"
