"""Logging helpers: coloured console formatter and the audit event logger."""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

from ..domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..domain.shared.events import DomainEvent

AUDIT_LOGGER_NAME = "permissioned_voting.audit"


class ColoredFormatter(logging.Formatter):
    """Logging formatter that applies ANSI color codes to the levelname field.

    Colors are disabled when the ``NO_COLOR`` environment variable is set or
    when the output stream is not a TTY (e.g. redirected to a file).
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",     # cyan
        logging.INFO: "\033[32m",      # green
        logging.WARNING: "\033[33m",   # yellow
        logging.ERROR: "\033[31m",     # red
        logging.CRITICAL: "\033[1;31m",  # bold red
    }
    RESET = "\033[0m"

    def __init__(self, *args: object, stream: object | None = None, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]
        self._stream = stream

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self._stream or sys.stderr
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if self._use_color():
            color = self.COLORS.get(record.levelno, "")
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class AuditEventLogger:
    """Audit log subscriber writing one INFO line per committed event."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def __call__(self, event: DomainEvent) -> None:
        details = " ".join(f"{key}={value}" for key, value in event.details().items())
        self._logger.info(LogTemplates.AUDIT_EVENT, event.event_type, event.session_id, details)
