"""Shared logging utilities for thread-safe log file writes.

All facilities that append to a log file must use this shared lock
so concurrent callers never produce interleaved partial lines.
"""

import os
import sys
import threading
from datetime import datetime
from typing import NamedTuple

# Single shared lock for ALL log file writes across all facilities
log_file_lock = threading.Lock()

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Frames between the caller and the rendering routine:
# rendering routine -> public entry point -> caller
CALLER_DEPTH = 2


class CallerSite(NamedTuple):
    """Where a logging call came from."""

    filename: str
    lineno: int
    function: str


UNKNOWN_SITE = CallerSite("unknown", 0, "unknown")


def short_file(path: str) -> str:
    """Return the last path segment of a source file name."""
    return os.path.basename(path.replace("\\", "/")) or path


def short_func(qualname: str) -> str:
    """Strip enclosing class/function qualifiers: ``Foo.bar`` -> ``bar``."""
    return qualname.rsplit(".", 1)[-1]


def caller_site(depth: int) -> CallerSite:
    """Capture the frame ``depth`` levels above the function calling this one.

    ``depth=0`` is the calling function itself. Returns ``UNKNOWN_SITE``
    when the stack is not that deep.
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return UNKNOWN_SITE

    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    return CallerSite(short_file(code.co_filename), frame.f_lineno, short_func(qualname))


def render_line(tag: str, site: CallerSite, message: str, now: datetime | None = None,
                time_format: str = TIME_FORMAT) -> str:
    """Render one log line, without the trailing newline."""
    now = now or datetime.now()
    return (
        f"{now.strftime(time_format)} [{tag}] ({os.getpid()})"
        f"{site.filename}:{site.lineno} {site.function} - {message}"
    )
