"""Logging setup driven by ObservabilityConfig.

Human-readable lines by default; JSON lines (one object per record,
``extra`` fields included) when ``NAV_LOG_STRUCTURED=true``.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

import json_log_formatter

from .config import ObservabilityConfig, get_config

_NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "gradio", "geopy")


def setup_logging(
    config: Optional[ObservabilityConfig] = None, stream: Optional[IO[str]] = None
) -> None:
    """Configure the root logger (stdout unless another stream is given)."""
    config = config or get_config().observability
    level = getattr(logging, config.level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    if config.structured:
        handler.setFormatter(json_log_formatter.VerboseJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
