"""
Logging setup shared by the pass API and the pass engine.

Every line looks like:
    2026-10-19T10:30:02Z [api] INFO Pass resolved: source=booking matches=1

LOG_LEVEL picks the threshold:
    INFO     requests and resolutions (default)
    DEBUG    which lookup step found candidates, page counts, chosen bookings
    TRACE    every upstream query with its parameters

Call configure_logging() once per process, then use logging.getLogger(__name__)
(or get_logger) in each module.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from datetime import UTC, datetime

# Below DEBUG: upstream request parameters
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS_BY_NAME = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
QUIET_LOGGERS = ("urllib3", "httpx")


def _trace(self: logging.Logger, message: object, *args: object, **kw: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kw)  # type: ignore[arg-type]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """Renders `<UTC timestamp> [source] LEVEL message`, traceback appended."""

    def __init__(self, source: str = "app"):
        super().__init__()
        self.source = source

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        line = f"{stamp} [{self.source}] {record.levelname} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class HealthCheckFilter(logging.Filter):
    """Drop access-log lines for health polls; kiosks and the container runtime hit them constantly.

    DEBUG records always pass.
    """

    HEALTH_PATHS = frozenset({"/health", "/api/health"})
    ACCESS_LINE = re.compile(r'"[A-Z]+ (?P<path>[^ ?"]+)\S* HTTP/[\d.]+"')

    def _request_path(self, record: logging.LogRecord) -> str | None:
        # uvicorn.access args: (client_addr, method, full_path, http_version, status_code)
        if isinstance(record.args, tuple) and len(record.args) == 5:
            return str(record.args[2]).split("?", 1)[0]
        match = self.ACCESS_LINE.search(record.getMessage())
        return match.group("path") if match else None

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno <= logging.DEBUG:
            return True
        return self._request_path(record) not in self.HEALTH_PATHS


def _resolve_level(level: int | None, debug: bool | None) -> int:
    if level is not None:
        return level
    if debug:
        return logging.DEBUG
    return LEVELS_BY_NAME.get(os.getenv("LOG_LEVEL", "").strip().upper(), logging.INFO)


def configure_logging(
    source: str = "app",
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Install one stdout handler on the root logger and route uvicorn through it.

    Args:
        source: Tag shown in brackets on every line (e.g. "api")
        level: Explicit threshold; wins over debug and LOG_LEVEL
        debug: Shorthand for DEBUG when no explicit level is given

    Returns:
        The root logger
    """
    threshold = _resolve_level(level, debug)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(threshold)
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(threshold)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.addHandler(handler)
        server_logger.setLevel(threshold)
        server_logger.propagate = False

    # requests/urllib3 log each connection at DEBUG
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
