"""
Logging configuration for dayfilter.

The library itself only calls get_logger(); applications embedding it decide
whether to call setup_logging(). JSON output is chosen automatically when
running inside AWS Lambda so CloudWatch Insights can query the extra fields.

Usage:
    from dayfilter.logging_config import setup_logging, get_logger

    setup_logging(level='DEBUG')
    logger = get_logger(__name__)

    logger.info("Resolved business day", extra={'day': '2026-10-16'})
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_FIELDS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'taskName', 'message'
}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _RECORD_FIELDS
    }


class JsonFormatter(logging.Formatter):
    """
    Format log records as a single JSON object per line.

    Output format:
    {
        "timestamp": "2026-10-19T01:30:00.000+00:00",
        "level": "WARNING",
        "logger": "dayfilter.business_day",
        "message": "Holiday lookup failed, using weekend check only",
        "month": 10,
        ...
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(timespec='milliseconds'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for key, value in _extra_fields(record).items():
            if key in log_obj:
                continue
            try:
                json.dumps(value)
                log_obj[key] = value
            except (TypeError, ValueError):
                log_obj[key] = str(value)

        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for terminals.

    Output format:
    2026-10-19 08:30:00 INFO  [business_day] Resolved business day (day=2026-10-16)
    """

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        level = record.levelname.ljust(5)
        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelname, '')
            level = f"{color}{level}{self.RESET}"

        logger_name = record.name
        if logger_name.startswith('dayfilter.'):
            logger_name = logger_name[len('dayfilter.'):]

        extras = [f"{key}={value}" for key, value in _extra_fields(record).items()]
        extra_str = f" ({', '.join(extras)})" if extras else ""

        output = f"{timestamp} {level} [{logger_name}] {record.getMessage()}{extra_str}"

        if record.exc_info:
            output += f"\n{self.formatException(record.exc_info)}"

        return output


def setup_logging(
    json_format: Optional[bool] = None,
    level: Optional[str] = None,
    logger_name: Optional[str] = 'dayfilter'
) -> logging.Logger:
    """
    Configure a logger (the package logger by default).

    Args:
        json_format: Use JSON format (True) or human-readable (False).
                    If None, auto-detects based on AWS_LAMBDA_FUNCTION_NAME.
        level: Log level name. Defaults to LOG_LEVEL env var or INFO.
        logger_name: Logger to configure. None configures the root logger.

    Returns:
        The configured logger
    """
    if json_format is None:
        json_format = 'AWS_LAMBDA_FUNCTION_NAME' in os.environ

    if level is None:
        level = os.getenv('LOG_LEVEL', 'INFO')
    level = level.upper()

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Avoid duplicate output when called more than once
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(getattr(logging, level, logging.INFO))
    handler.setFormatter(JsonFormatter() if json_format else HumanFormatter())
    logger.addHandler(handler)

    if logger_name:
        logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance, typically get_logger(__name__)."""
    return logging.getLogger(name)


def log_api_call(
    logger: logging.Logger,
    api_name: str,
    endpoint: str,
    success: bool,
    duration_ms: Optional[float] = None,
    error: Optional[Exception] = None,
) -> None:
    """Log the outcome of a single outbound API call.

    Only the exception type is logged; the full message of a DecodeError
    contains the response body and belongs at the call site.

    Args:
        logger: Logger instance
        api_name: Name of the API (e.g., "HolidayAPI")
        endpoint: URL or endpoint called
        success: Whether the call succeeded
        duration_ms: Optional duration in milliseconds
        error: Optional exception
    """
    status = "SUCCESS" if success else "FAILED"
    msg = f"API Call: {api_name} -> {endpoint} [{status}]"

    if duration_ms is not None:
        msg += f" ({duration_ms:.0f}ms)"

    if error:
        msg += f" Error: {type(error).__name__}"

    if success:
        logger.debug(msg)
    else:
        logger.warning(msg)
