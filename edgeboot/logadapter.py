"""Routes records from a standard-library logger into a service logging client."""

from __future__ import annotations

import logging
from typing import Any, Protocol

OPENZITI_LOG_FORMAT = "openziti: %s"
OPENZITI_DEFAULT_LOG_FORMAT = "default openziti: %s"


class LoggingClient(Protocol):
    def debug(self, msg: str) -> Any: ...

    def info(self, msg: str) -> Any: ...

    def warning(self, msg: str) -> Any: ...

    def error(self, msg: str) -> Any: ...


class LoggingClientHandler(logging.Handler):
    """Logging handler that forwards each record to a logging client.

    Debug, info and warning records go to the matching client method; error and
    critical records go to ``error``. Records at any other level are also sent
    to ``error``, with a distinct prefix.
    """

    def __init__(self, logging_client: LoggingClient):
        super().__init__(logging.NOTSET)
        self.logging_client = logging_client

    def format(self, record: logging.LogRecord) -> str:
        """Render a record as ``[level] message`` followed by a newline."""
        return f"[{record.levelname.lower()}] {record.getMessage()}\n"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            client = self.logging_client
            level = record.levelno
            if level == logging.DEBUG:
                client.debug(OPENZITI_LOG_FORMAT % message)
            elif level == logging.INFO:
                client.info(OPENZITI_LOG_FORMAT % message)
            elif level == logging.WARNING:
                client.warning(OPENZITI_LOG_FORMAT % message)
            elif level in (logging.ERROR, logging.CRITICAL):
                client.error(OPENZITI_LOG_FORMAT % message)
            else:
                client.error(OPENZITI_DEFAULT_LOG_FORMAT % message)
        except Exception:  # noqa: BLE001 - a handler must not raise into the caller
            self.handleError(record)


def adapt_logging(logging_client: LoggingClient, logger_name: str) -> LoggingClientHandler:
    """Send the named logger's records to logging_client only, and return the handler used."""
    logger = logging.getLogger(logger_name)
    handler = LoggingClientHandler(logging_client)
    logger.addHandler(handler)
    logger.propagate = False
    return handler