# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

"""Logging configuration for harbour.

Modules log through ``logging.getLogger(__name__)``; this module only
attaches a handler to the ``harbour`` package logger at application startup.
"""

from __future__ import annotations

import json
import logging
import sys

from harbour.config import Settings


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings: Settings) -> None:
    """Configure the harbour package logger. Subsequent calls are no-ops."""
    package_logger = logging.getLogger("harbour")
    if package_logger.handlers:
        return

    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="[%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    package_logger.propagate = False
