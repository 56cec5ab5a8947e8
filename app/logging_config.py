"""
Logging configuration.

Two output formats:
- json: one JSON object per line, suitable for log aggregation
- console: human-readable lines for local development

Access denials are written to the "app.audit" logger with the user id and
the requested scope attached as extra fields.
"""

import json
import logging
import logging.config
from datetime import datetime, timezone

# Attributes every LogRecord has; anything else came in through `extra`
_STANDARD_ATTRS = {
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "lineno", "funcName", "created",
    "msecs", "relativeCreated", "thread", "threadName", "taskName",
    "processName", "process", "exc_info", "exc_text", "stack_info",
    "message",
}


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter.

    Outputs JSON lines with consistent fields:
    - timestamp: ISO 8601 timestamp (UTC)
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - extra: Any extra fields passed to the logger (user_id, scope, ...)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        }
        if extras:
            log_entry["extra"] = extras

        return json.dumps(log_entry, default=str)


def get_logging_config(log_level: str = "INFO", log_format: str = "json") -> dict:
    """
    Build a dictConfig mapping for the application.

    Args:
        log_level: Root level (DEBUG, INFO, WARNING, ERROR)
        log_format: "json" or "console"

    Returns:
        Dict accepted by logging.config.dictConfig
    """
    if log_format == "json":
        formatters = {"default": {"()": "app.logging_config.JsonFormatter"}}
    else:
        formatters = {
            "default": {
                "format": "[{asctime}] {levelname} {name} {message}",
                "style": "{",
            },
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "": {"handlers": ["console"], "level": log_level},
            "app": {"level": log_level},
            "apscheduler": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        },
    }


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Apply the application logging configuration."""
    logging.config.dictConfig(get_logging_config(log_level.upper(), log_format))
