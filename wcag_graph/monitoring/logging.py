"""Structured logging with context injection.

Features:
- console handler
- optional file handler for a build log
- JSON logs optional (easy ingestion)
- context injection (build_id/stage/document) without needing a big framework
"""

from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "wcag_graph"

_CONTEXT_FIELDS = ("build_id", "stage", "document")

# ---------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k in _CONTEXT_FIELDS:
            if hasattr(record, k):
                base[k] = getattr(record, k)

        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(base, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Format log records as human-readable text."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [record.levelname, record.name]

        ctx = []
        for k in _CONTEXT_FIELDS:
            value = getattr(record, k, None)
            if value:
                ctx.append(f"{k}={value}")

        if ctx:
            parts.append("[" + " ".join(ctx) + "]")

        parts.append(record.getMessage())
        s = " ".join(parts)

        if record.exc_info:
            s += "\n" + self.formatException(record.exc_info)

        return s


# ---------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingOptions:
    """Configure logging behavior for builds."""

    level: str = "INFO"
    json_logs: bool = False

    # console logging
    enable_console: bool = True

    # file logging
    log_file: Path | None = None


def setup_build_logger(options: LoggingOptions | None = None) -> logging.Logger:
    """Configure the package logger; safe to call repeatedly."""
    options = options or LoggingOptions()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, options.level.upper(), logging.INFO))
    logger.propagate = False

    # Reset handlers to avoid duplicate output when reconfigured
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    fmt = JsonFormatter() if options.json_logs else TextFormatter()

    if options.enable_console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(logger.level)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    if options.log_file is not None:
        options.log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(options.log_file, encoding="utf-8")
        fh.setLevel(logger.level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


# ---------------------------------------------------------------------
# Context injection
# ---------------------------------------------------------------------


class ContextAdapter(logging.LoggerAdapter):
    """Inject context fields into log records."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        merged = dict(self.extra)
        merged.update(extra)
        kwargs["extra"] = merged
        return msg, kwargs


def with_context(
    logger: logging.Logger,
    *,
    build_id: str | None = None,
    stage: str | None = None,
    document: str | None = None,
) -> ContextAdapter:
    """Create a context adapter with build, stage, and document info."""
    extra: dict[str, Any] = {}
    if build_id:
        extra["build_id"] = build_id
    if stage:
        extra["stage"] = stage
    if document:
        extra["document"] = document
    return ContextAdapter(logger, extra)
