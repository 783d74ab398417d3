"""Redaction of store credentials and athlete emails in log output.

Supabase and SQLite errors can echo connection details (service keys,
JWTs, auth headers) into messages that end up in ``logger.error(...)``
calls. ``LogSanitizationFilter`` rewrites each record before any handler
formats it.

Usage:
    from running_coach.utils.log_sanitizer import configure_logging

    configure_logging("INFO")  # basicConfig + filter on the root logger
"""

import logging
import re
import sys
from typing import Iterable, List, Optional, Tuple


# Field names whose values are masked in "name=value" / "name: value" text
SECRET_FIELDS = (
    "authorization",
    "apikey",
    "api_key",
    "service_key",
    "secret",
    "password",
)


def _field_pattern(name: str) -> Tuple[re.Pattern, str]:
    return (
        re.compile(rf'({name}["\']?\s*[:=]\s*["\']?)[^"\'&\s,]+', re.IGNORECASE),
        r"\1[REDACTED]",
    )


def build_patterns(fields: Iterable[str] = SECRET_FIELDS) -> List[Tuple[re.Pattern, str]]:
    """Token patterns first, then field patterns, then emails."""
    patterns = [
        (re.compile(r"\bsb_(?:secret|publishable)_[A-Za-z0-9_-]{16,}"), "[REDACTED_SUPABASE_KEY]"),
        # Legacy Supabase anon/service keys are JWTs
        (re.compile(r"\beyJ[\w-]+\.eyJ[\w-]+\.[\w-]+"), "[REDACTED_JWT]"),
        (re.compile(r"\bBearer\s+[\w.\-]+", re.IGNORECASE), "Bearer [REDACTED_TOKEN]"),
    ]
    patterns.extend(_field_pattern(name) for name in fields)
    patterns.append(
        (re.compile(r"\b[\w.%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[REDACTED_EMAIL]")
    )
    return patterns


PATTERNS = build_patterns()


def redact(text: str) -> str:
    """Apply every redaction pattern to text."""
    for pattern, replacement in PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class LogSanitizationFilter(logging.Filter):
    """Rewrites the message and string arguments of each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(self._clean(arg) for arg in record.args)
        elif isinstance(record.args, dict):
            record.args = {key: self._clean(value) for key, value in record.args.items()}
        return True

    @staticmethod
    def _clean(value):
        if isinstance(value, str):
            return redact(value)
        if isinstance(value, BaseException):
            cleaned = redact(str(value))
            return cleaned if cleaned != str(value) else value
        return value


def install_log_sanitizer(logger_name: Optional[str] = None) -> LogSanitizationFilter:
    """
    Attach the filter to a named logger, or to the root logger and its handlers.

    Handlers get it too because filters on the root logger are skipped for
    records propagated from child loggers.
    """
    sanitizer = LogSanitizationFilter()
    target = logging.getLogger(logger_name)
    target.addFilter(sanitizer)
    if logger_name is None:
        for handler in target.handlers:
            handler.addFilter(sanitizer)
    return sanitizer


def sanitize_string(text: str) -> str:
    """Redact text outside of logging, e.g. before printing an error."""
    return redact(text)


def configure_logging(log_level: str = "INFO", stream=None) -> None:
    """
    Configure root logging for command-line use.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream (defaults to stderr)
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=stream or sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )
    install_log_sanitizer()
