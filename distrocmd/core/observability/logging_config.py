"""
Logging setup for the distrocmd CLI and the API server.

One call to ``setup_logging`` at startup configures the root logger;
engine modules only do ``logger = logging.getLogger(__name__)``.

Console level, highest precedence first:
    --debug / --verbose / --quiet  >  DCMD_LOG_LEVEL  >  WARNING

DCMD_LOG_FILE adds a file handler at DCMD_LOG_FILE_LEVEL (default:
the console level). Generated commands go to stdout, logs to stderr.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV_VAR = "DCMD_LOG_LEVEL"
FILE_ENV_VAR = "DCMD_LOG_FILE"
FILE_LEVEL_ENV_VAR = "DCMD_LOG_FILE_LEVEL"

DEFAULT_LEVEL = "WARNING"

# Console format per level: (threshold, format, datefmt), first match wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# The Flask dev server logs every request at INFO
_NOISY_LOGGERS = ("werkzeug", "urllib3")


def level_from_flags(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str | None:
    """Console level named by CLI flags, or None when no flag is set."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return None


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> int:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name. None reads ``DCMD_LOG_LEVEL``, then
            falls back to WARNING. Unknown names also mean WARNING.
        log_file: Log file path. None reads ``DCMD_LOG_FILE``.
        log_file_level: File level name. None reads
            ``DCMD_LOG_FILE_LEVEL``, then uses the console level.
        quiet_third_party: Hold werkzeug/urllib3 at WARNING unless the
            console is at DEBUG.

    Returns:
        The console level actually applied.
    """
    console_level = _parse_level(level or os.environ.get(LEVEL_ENV_VAR))
    log_file = log_file or os.environ.get(FILE_ENV_VAR)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))
    root_level = console_level

    if log_file:
        file_level_name = log_file_level or os.environ.get(FILE_LEVEL_ENV_VAR)
        file_level = _parse_level(file_level_name) if file_level_name else console_level
        root.addHandler(_file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False
    return console_level


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next((f, d) for threshold, f, d in _CONSOLE_FORMATS if level <= threshold)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def _parse_level(name: str | None) -> int:
    numeric = getattr(logging, (name or DEFAULT_LEVEL).upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
