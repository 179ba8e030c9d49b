from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

DEFAULT_FORMAT = "%(asctime)s %(threadName)s %(name)s %(levelname)s %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"


def suppress_logger(name: str, level: LogLevel = "WARNING") -> None:
    """Quiet a chatty logger without touching the root level."""
    logging.getLogger(name).setLevel(level)


def setup_logging(level: LogLevel | None = None) -> None:
    resolved = (level or os.environ.get("LOGLEVEL", "INFO")).upper()

    coloredlogs.install(
        level=resolved,
        fmt=DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
    )

    # one line per datagram; only useful when explicitly asked for
    if os.environ.get("DOHOME_TRACE_DATAGRAMS") is None:
        suppress_logger("dohome.core.dispatcher", "INFO")
