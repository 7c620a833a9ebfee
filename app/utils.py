"""Utility helpers for the Trailerflix service."""

from __future__ import annotations

import logging
from urllib.parse import quote


REDACTED = "***"


def redact_secret(text: str, secret: str | None) -> str:
    """Return ``text`` with every occurrence of ``secret`` masked."""

    if not secret or not text:
        return text
    return text.replace(secret, REDACTED)


def quote_path_segment(value: object) -> str:
    """Percent-encode a single URL path segment, slashes included.

    Dot-only segments such as ``..`` come back fully encoded as ``%2E``.
    """

    segment = quote(str(value).strip(), safe="")
    if segment and not segment.strip("."):
        return "%2E" * len(segment)
    return segment


class SecretRedactingFilter(logging.Filter):
    """Scrub a credential from formatted log records and their tracebacks."""

    _formatter = logging.Formatter()

    def __init__(self, secret: str) -> None:
        super().__init__()
        self.secret = secret

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if self.secret in message:
            record.msg = redact_secret(message, self.secret)
            record.args = None
        # Formatter.format reuses a cached exc_text instead of re-rendering.
        if record.exc_info and not record.exc_text:
            record.exc_text = self._formatter.formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = redact_secret(record.exc_text, self.secret)
        if record.stack_info:
            record.stack_info = redact_secret(record.stack_info, self.secret)
        return True


def install_secret_filter(secret: str | None) -> SecretRedactingFilter | None:
    """Attach a redacting filter to every root handler.

    Filters on named loggers do not see records propagated from child
    loggers, so the filter goes on the handlers instead.
    """

    if not secret:
        return None
    secret_filter = SecretRedactingFilter(secret)
    for handler in logging.getLogger().handlers:
        if not any(
            isinstance(existing, SecretRedactingFilter) and existing.secret == secret
            for existing in handler.filters
        ):
            handler.addFilter(secret_filter)
    return secret_filter
