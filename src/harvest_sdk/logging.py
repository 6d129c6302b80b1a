import logging
from typing import Any

LOG_EXTRA_FIELDS = (
    "endpoint",
    "method",
    "url",
    "status",
    "duration_ms",
    "error",
)

_NEEDS_QUOTES = (" ", "=", '"', "\\", "\n", "\t")


class LogfmtFormatter(logging.Formatter):
    """
    One logfmt line per record: level, logger, event, then the SDK extras
    in LOG_EXTRA_FIELDS order. Extras that are absent or None are skipped.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
            f"event={_logfmt_value(record.getMessage())}",
        ]
        parts.extend(
            f"{key}={_logfmt_value(getattr(record, key))}"
            for key in LOG_EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            parts.append(f"exc_type={type(exc).__name__}")
            parts.append(f"exc_message={_logfmt_value(str(exc))}")

        return " ".join(parts)


def _logfmt_value(val: Any) -> str:
    if isinstance(val, (bool, int, float)):
        return str(val)
    s = str(val)
    if s and not any(ch in s for ch in _NEEDS_QUOTES):
        return s
    escaped = (
        s.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def setup_logging(level: str = "INFO", logger_name: str = "harvest_sdk") -> None:
    """Attach a logfmt handler to the SDK logger; calling again replaces it."""

    log = logging.getLogger(logger_name)
    for h in list(log.handlers):
        if isinstance(h.formatter, LogfmtFormatter):
            log.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    log.addHandler(handler)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
