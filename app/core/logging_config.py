"""
Logging setup for the API process.

Everything goes to stdout, one JSON object per record when JSON_LOGS is on
and a single readable line otherwise.
"""

import logging
import sys
from typing import Any, Dict, Iterable
from pythonjsonlogger.json import JsonFormatter

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FIELDS = "%(levelname)s %(name)s %(module)s %(funcName)s %(message)s"


class ApiJsonFormatter(JsonFormatter):
    """
    JSON records keyed as level/logger/function, with a UTC timestamp.

    Warnings and errors also carry the source line and path.
    """

    def __init__(self) -> None:
        super().__init__(
            JSON_FIELDS,
            rename_fields={"levelname": "level", "name": "logger", "funcName": "function"},
            timestamp=True,
        )

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        if record.levelno >= logging.WARNING:
            log_record["line"] = record.lineno
            log_record["pathname"] = record.pathname


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    quiet_loggers: Iterable[str] = (),
) -> None:
    """
    Point the root logger at stdout.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ...)
        json_logs: Emit JSON records instead of plain text
        quiet_loggers: Logger names held at WARNING, e.g. "sqlalchemy.engine"
    """
    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(ApiJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
