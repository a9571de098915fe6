import logging
import json
import contextvars
from contextlib import contextmanager
from typing import Optional

_schema_ctx = contextvars.ContextVar("schema_fingerprint", default=None)


class SchemaContextFilter(logging.Filter):
    """Injects the active schema fingerprint into the log record."""
    def filter(self, record):
        record.schema = _schema_ctx.get()
        return True


@contextmanager
def schema_context(fingerprint: Optional[str]):
    """Context manager tagging log records with the schema being planned against."""
    token = _schema_ctx.set(fingerprint)
    try:
        yield
    finally:
        _schema_ctx.reset(token)


def current_schema() -> Optional[str]:
    return _schema_ctx.get()


class JsonFormatter(logging.Formatter):
    """Formatter that renders a LogRecord as a single JSON line."""

    _STANDARD_ATTRS = {
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module",
        "msecs", "message", "msg", "name", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "thread", "threadName",
        "taskName", "schema",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Formats the log record as a JSON string.

        Args:
           record (logging.LogRecord): The log record to format.

        Returns:
            str: The JSON-formatted log string.
        """
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if getattr(record, "schema", None):
            log_record["schema"] = record.schema

        for key, value in record.__dict__.items():
            if key not in self._STANDARD_ATTRS and not key.startswith("_"):
                log_record[key] = value

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def configure_logging(level: str = "INFO", json_format: bool = False):
    """Configures the root logger.

    Args:
        level (str): The logging level (default: INFO).
        json_format (bool): Whether to use JSON formatting (default: False).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.addFilter(SchemaContextFilter())

    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        formatter = logging.Formatter(
            "%(asctime)s - [%(schema)s] - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)

    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Gets a named logger under the ``ddl2sql`` namespace.

    Args:
        name (str): The component name.

    Returns:
        logging.Logger: The logger instance.
    """
    return logging.getLogger(f"ddl2sql.{name}")
