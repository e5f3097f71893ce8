"""JSON logging configuration for the privx-cli command line."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

LOGGER_NAME = "privx_cli"


class CLIJsonFormatter(JsonFormatter):
    """Keeps timestamp, level, logger, message and exc_info only."""

    _allowed_fields = {"timestamp", "level", "logger", "message", "exc_info"}

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")
        if "name" in log_record:
            log_record["logger"] = log_record.pop("name")

        for key in [key for key in log_record if key not in self._allowed_fields]:
            log_record.pop(key)


def configure_logging(stream, *, verbose: bool = False) -> logging.Logger:
    """Route the package logger to ``stream``, replacing handlers from earlier runs."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        CLIJsonFormatter(
            fmt="%(timestamp)s %(levelname)s %(name)s %(message)s",
            timestamp=True,
        )
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
