import logging
import sys

from app.utils import (
    REDACTED,
    SecretRedactingFilter,
    install_secret_filter,
    quote_path_segment,
    redact_secret,
)


def test_redact_secret_masks_every_occurrence():
    text = "GET /movie?api_key=abc123&x=abc123"
    assert redact_secret(text, "abc123") == f"GET /movie?api_key={REDACTED}&x={REDACTED}"


def test_redact_secret_without_secret_is_noop():
    assert redact_secret("plain", None) == "plain"
    assert redact_secret("plain", "") == "plain"


def test_quote_path_segment_escapes_slashes():
    assert quote_path_segment("../account") == "..%2Faccount"
    assert quote_path_segment(" 603 ") == "603"
    assert quote_path_segment("..") == "%2E%2E"
    assert quote_path_segment(".") == "%2E"
    assert quote_path_segment("1.5") == "1.5"


def test_filter_rewrites_formatted_record():
    record = logging.LogRecord(
        "httpx", logging.INFO, __file__, 1,
        "HTTP Request: GET %s", ("https://api.example.com/3/movie/1?api_key=abc123",),
        None,
    )

    assert SecretRedactingFilter("abc123").filter(record) is True
    assert "abc123" not in record.getMessage()
    assert REDACTED in record.getMessage()


def test_install_secret_filter_scrubs_captured_logs(caplog):
    caplog.set_level(logging.INFO)
    install_secret_filter("sekrit-value")

    logging.getLogger("httpx").info("HTTP Request: GET /x?api_key=%s", "sekrit-value")

    assert "sekrit-value" not in caplog.text
    assert install_secret_filter(None) is None


def test_filter_scrubs_logged_tracebacks():
    try:
        raise RuntimeError("GET /movie/1?api_key=abc123 failed")
    except RuntimeError:
        record = logging.LogRecord(
            "app.services.dispatcher", logging.ERROR, __file__, 1,
            "Dispatch of %s query failed", ("movie",), sys.exc_info(),
        )

    SecretRedactingFilter("abc123").filter(record)
    rendered = logging.Formatter().format(record)

    assert "abc123" not in rendered
    assert "api_key=***" in rendered
    assert "RuntimeError" in rendered
