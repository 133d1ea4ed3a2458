"""
Environment-driven setup for the process-wide log facility.

The facility itself reads no environment. Applications that want the log
path to come from the environment (or a .env file) call init_from_env().
"""

import os
import logging
from pathlib import Path

from dotenv import load_dotenv

import filelog

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = "./logs/app.log"


def resolve_log_path() -> Path:
    """Return the log path from FILELOG_PATH, falling back to the default."""
    load_dotenv()
    value = os.getenv("FILELOG_PATH", DEFAULT_LOG_PATH).strip()
    if not value:
        logger.warning(f"FILELOG_PATH is blank, using {DEFAULT_LOG_PATH}")
        value = DEFAULT_LOG_PATH
    return Path(value)


def init_from_env(facility: filelog.LogFacility | None = None) -> Path:
    """Initialize ``facility`` (default: the process-wide one) from the environment.

    Returns the path that was opened. Raises OSError if it cannot be opened.
    """
    path = resolve_log_path()
    (facility or filelog.get_facility()).initialize(path)
    logger.info(f"Logging to {path}")
    return path
