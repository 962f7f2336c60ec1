# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""Logging setup: structured JSON records or plain text lines on stderr."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger.json import JsonFormatter

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class FinGuardJsonFormatter(JsonFormatter):
    """JSON formatter adding a UTC timestamp, the level and the app name."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["app"] = "smb-finguard"


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name ('DEBUG', 'INFO', ...).
        fmt: 'json' for one JSON object per record, 'text' otherwise.

    Raises:
        ValueError: if the level name is unknown.
    """
    level_name = level.upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise ValueError(f"Unknown logging level: {level!r}")

    root = logging.getLogger()
    root.setLevel(level_name)
    root.handlers.clear()

    # stdout is reserved for the rendered report
    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(FinGuardJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
