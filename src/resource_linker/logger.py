"""Logging for the resource linker: build progress and reported diagnostics."""

import logging
import sys
from typing import Optional

from .errors import Diagnostic, Severity

LOGGER_NAME = "resource_linker"


class DiagnosticFormatter(logging.Formatter):
    """Appends the error kind and subject to diagnostic records."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        kind = getattr(record, "diagnostic_kind", None)
        if kind is None:
            return text
        subject = getattr(record, "diagnostic_subject", None)
        return f"{text} [{kind}{' @ ' + subject if subject else ''}]"


class LinkerLogger:
    """
    Logger of one linker build.

    Progress messages go through ``debug``/``info``/``warning``/``error``;
    construction and validation failures go through ``diagnostic`` so that
    their kind and subject travel with the record.
    """

    def __init__(self, name: str = LOGGER_NAME, level: str = "INFO"):
        self.logger = logging.getLogger(name)
        self.set_level(level)
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(DiagnosticFormatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            self.logger.addHandler(handler)

    def set_level(self, level: str):
        """
        Args:
            level: Logging level name (DEBUG, INFO, WARNING, ERROR)

        Raises:
            ValueError: If the level name is unknown
        """
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level: {level}")
        self.logger.setLevel(value)

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message, **kwargs)

    def diagnostic(self, diagnostic: Diagnostic):
        """Log a reported failure at the level matching its severity."""
        level = logging.ERROR if diagnostic.severity is Severity.ERROR else logging.WARNING
        self.logger.log(level, diagnostic.message, extra={
            "diagnostic_kind": diagnostic.kind.value,
            "diagnostic_subject": diagnostic.subject,
        })


_logger: Optional[LinkerLogger] = None


def get_logger() -> LinkerLogger:
    """Get the shared logger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = LinkerLogger()
    return _logger


def set_log_level(level: str):
    """Set the level of the shared logger."""
    get_logger().set_level(level)
