"""
filelog - Process-wide leveled logging to a single append-only file.

Every line records where it came from:

    2026-10-16 09:14:02 [INFO] (4182)worker.py:57 run - picked up job 12

The facility:
1. Opens (and creates, with parent directories) one log file in append mode
2. Formats INFO / WARN / ERR lines with timestamp, pid and caller site
3. Appends each line under a shared lock, flushing immediately

Logging before initialization is silently dropped, and so is any line
whose write fails. Later lines are still attempted.
"""

import enum
import logging
from pathlib import Path

from log_utils import (
    CALLER_DEPTH,
    TIME_FORMAT,
    caller_site,
    log_file_lock as _log_file_lock,
    render_line,
)

logger = logging.getLogger(__name__)


class LogLevel(enum.Enum):
    """Severity of a log line. The value is the tag written to the file."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERR"

    @property
    def tag(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


def _interpolate(fmt: str, args: tuple) -> str:
    """Apply printf-style formatting; never raises."""
    if not args:
        return str(fmt)
    try:
        return fmt % args
    except Exception:
        pass
    try:
        return f"{fmt} {args!r}"
    except Exception:
        return str(fmt)


def _level_tag(level) -> str:
    """Tag for ``level``; anything that is not a level renders as an empty tag."""
    try:
        return LogLevel(level).tag
    except (ValueError, TypeError):
        return ""


class LogFacility:
    """One log file, opened on demand, shared by every caller that holds it.

    Two states: uninitialized (no handle, logging is a no-op) and
    initialized. ``initialize`` may be called again to switch files;
    ``close`` is idempotent.
    """

    time_format = TIME_FORMAT

    def __init__(self):
        self._handle = None
        self._path: Path | None = None

    @property
    def is_initialized(self) -> bool:
        return self._handle is not None

    @property
    def path(self) -> Path | None:
        """Path of the currently open log file, or None."""
        return self._path

    def initialize(self, path) -> None:
        """Open ``path`` for appending, creating it and its directories.

        Raises OSError if the directory or the file cannot be created.
        A previously open file is closed once the new one is open.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(path, "a", encoding="utf-8")

        with _log_file_lock:
            previous, self._handle, self._path = self._handle, handle, path

        if previous is not None:
            try:
                previous.close()
            except OSError as e:
                logger.warning(f"Failed to close previous log file: {e}")
        logger.debug(f"Log file opened: {path}")

    def close(self) -> None:
        """Release the log file. Safe to call when nothing is open."""
        with _log_file_lock:
            handle, self._handle, self._path = self._handle, None, None
        if handle is None:
            return
        handle.close()
        logger.debug("Log file closed")

    def log(self, level: LogLevel, message: str) -> None:
        """Append ``message`` at ``level``, attributed to the caller."""
        self._emit(level, message)

    def info(self, fmt: str, *args) -> None:
        """Log an informational message using printf-style formatting."""
        self._emit(LogLevel.INFO, _interpolate(fmt, args))

    def warn(self, fmt: str, *args) -> None:
        """Log a warning: not fatal, but may need attention."""
        self._emit(LogLevel.WARN, _interpolate(fmt, args))

    def error(self, fmt: str, *args) -> None:
        """Log an error condition or failure."""
        self._emit(LogLevel.ERROR, _interpolate(fmt, args))

    def _emit(self, level: LogLevel, message: str) -> None:
        # Must be called directly from a public entry point.
        if self._handle is None:
            return

        site = caller_site(CALLER_DEPTH)
        line = render_line(_level_tag(level), site, message, time_format=self.time_format) + "\n"

        with _log_file_lock:
            handle = self._handle
            if handle is None:
                return
            try:
                handle.write(line)
                handle.flush()
            except (OSError, ValueError) as e:
                logger.debug(f"Dropped log line: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


# Process-wide default facility
_default = LogFacility()


def get_facility() -> LogFacility:
    """Return the process-wide facility used by the module-level functions."""
    return _default


def init_logger(path) -> None:
    """Initialize the process-wide facility. Raises OSError on failure."""
    _default.initialize(path)


def close() -> None:
    """Close the process-wide facility's log file."""
    _default.close()


def log(level: LogLevel, message: str) -> None:
    """Log a preformatted message at ``level`` on the process-wide facility."""
    _default._emit(level, message)


def info(fmt: str, *args) -> None:
    """Log an informational message using printf-style formatting."""
    _default._emit(LogLevel.INFO, _interpolate(fmt, args))


def warn(fmt: str, *args) -> None:
    """Log a warning: not fatal, but may need attention."""
    _default._emit(LogLevel.WARN, _interpolate(fmt, args))


def error(fmt: str, *args) -> None:
    """Log an error condition or failure."""
    _default._emit(LogLevel.ERROR, _interpolate(fmt, args))
