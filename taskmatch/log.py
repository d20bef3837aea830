"""Logging configuration — a `taskmatch` logger with token redaction."""

import logging
import os
import re
import sys
from pathlib import Path

# Env vars holding the commit and API bearer tokens
TOKEN_ENV_VARS = ("TASKMATCH_COMMIT_TOKEN", "TASKMATCH_API_TOKEN")

_BEARER = re.compile(r"Bearer\s+[A-Za-z0-9_.~+/-]{8,}=*")
REDACTED = "***REDACTED***"


def redact(text: str) -> str:
    """Mask bearer headers and the configured token values in text."""
    text = _BEARER.sub(f"Bearer {REDACTED}", text)
    for var in TOKEN_ENV_VARS:
        token = os.environ.get(var, "")
        if len(token) >= 8:
            text = text.replace(token, REDACTED)
    return text


class SecretFilter(logging.Filter):
    """Handler filter that redacts tokens from the message and its %-args.

    Token values are read from the environment on every record, so tokens
    loaded from .env after logging was set up are still masked.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(redact(a) if isinstance(a, str) else a for a in record.args)
        return True


def _add_handler(logger: logging.Logger, handler: logging.Handler,
                 formatter: logging.Formatter, redact_secrets: bool) -> None:
    handler.setFormatter(formatter)
    if redact_secrets:
        handler.addFilter(SecretFilter())
    logger.addHandler(handler)


def setup_logging(level: str = "INFO", log_file: Path | None = None,
                  redact_secrets: bool = True) -> logging.Logger:
    """Configure the `taskmatch` logger: stderr plus an optional file. Safe to call repeatedly."""
    logger = logging.getLogger("taskmatch")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    _add_handler(logger, logging.StreamHandler(sys.stderr), formatter, redact_secrets)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _add_handler(logger, logging.FileHandler(str(log_file)), formatter, redact_secrets)
    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Child of the `taskmatch` logger. Usage: logger = get_logger(__name__)"""
    return logging.getLogger(f"taskmatch.{module_name}")
