"""Severity-tagged, timestamped log lines on stderr."""

import logging
import sys
from datetime import datetime

ERROR = "ERROR"
WARN = "WARN"
INFO = "INFO"
OK = "OK"

_COLORS = {
    ERROR: "\033[31m",
    WARN: "\033[33m",
    OK: "\033[32m",
}
_RESET = "\033[0m"

# Keep httpx from logging every request next to our own lines
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

_use_color = True


def set_color(enabled: bool) -> None:
    global _use_color
    _use_color = enabled


def timestamp(now: datetime | None = None) -> str:
    """ISO8601 local time with milliseconds."""
    now = now or datetime.now()
    return now.isoformat(timespec="milliseconds")


def format_line(level: str, message: str, color: bool = False) -> str:
    line = f"{timestamp()} {level}: {message}"
    code = _COLORS.get(level)
    if color and code:
        return f"{code}{line}{_RESET}"
    return line


def log(level: str, message: str, stream=None) -> None:
    """Write one log line. Never exits; callers decide what an error means."""
    stream = stream or sys.stderr
    color = _use_color and stream.isatty()
    stream.write(format_line(level, message, color=color) + "\n")
    stream.flush()
