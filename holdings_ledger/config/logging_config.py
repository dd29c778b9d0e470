"""Central logging configuration for API and CLI runtimes.

Plain text records by default, single-line JSON records when `LOG_JSON` is set.
Log messages must not carry account identifiers or balances at INFO level.
"""

import json
import logging
import sys
from typing import Any

_CONFIG_LOG_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _config_json_serial(value: Any) -> str:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


class JsonLogFormatter(logging.Formatter):
    """Format log records as single-line JSON for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S") + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_config_json_serial)


def config_configure_logging(level_name: str = "INFO", use_json: bool = False) -> None:
    """Configure the root logger once for the current process.

    Args:
        level_name: Logging level name such as `INFO`.
        use_json: Emit JSON records instead of plain text when true.

    Returns:
        None: Logging handlers are installed as a side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    level = getattr(logging, level_name.strip().upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Reloads must not stack duplicate handlers.
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_json:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(_CONFIG_LOG_TEXT_FORMAT))
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["JsonLogFormatter", "config_configure_logging"]
