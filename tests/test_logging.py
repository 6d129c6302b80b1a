import logging
import sys

from harvest_sdk.logging import LogfmtFormatter, setup_logging


def _record(msg, **extra):
    record = logging.LogRecord("harvest_sdk.client", logging.DEBUG, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_logfmt_includes_known_extras_and_skips_missing():
    line = LogfmtFormatter().format(
        _record("harvest.request", method="GET", status=200, duration_ms=12)
    )
    assert line == (
        "level=debug logger=harvest_sdk.client event=harvest.request "
        "method=GET status=200 duration_ms=12"
    )


def test_logfmt_quotes_values_with_spaces_or_equals():
    line = LogfmtFormatter().format(
        _record("harvest.request", url="https://x/roles?page=2", error="Connect Error")
    )
    assert 'url="https://x/roles?page=2"' in line
    assert 'error="Connect Error"' in line


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG")
    setup_logging("DEBUG")
    logger = logging.getLogger("harvest_sdk")
    formatters = [h for h in logger.handlers if isinstance(h.formatter, LogfmtFormatter)]
    assert len(formatters) == 1
    assert logger.level == logging.DEBUG
    for handler in formatters:
        logger.removeHandler(handler)


def test_logfmt_escapes_quotes_newlines_and_empty_values():
    line = LogfmtFormatter().format(
        _record("harvest.transport_error", error='bad "gateway"\nretry', url="")
    )
    assert 'error="bad \\"gateway\\"\\nretry"' in line
    assert 'url=""' in line


def test_logfmt_appends_exception_type_and_message():
    try:
        raise ConnectionError("refused by peer")
    except ConnectionError:
        record = logging.LogRecord(
            "harvest_sdk.client",
            logging.WARNING,
            __file__,
            1,
            "harvest.transport_error",
            None,
            sys.exc_info(),
        )
    line = LogfmtFormatter().format(record)
    assert line.endswith('exc_type=ConnectionError exc_message="refused by peer"')
