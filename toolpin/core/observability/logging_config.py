"""
Logging configuration — called once by the CLI group.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  TOOLPIN_LOG_LEVEL  >  WARNING

Below WARNING every record names its logger, so a ``detect --debug``
run shows which module reported each hierarchy hit.  TOOLPIN_LOG_FILE
adds a file copy at TOOLPIN_LOG_FILE_LEVEL (defaults to DEBUG).
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "TOOLPIN_LOG_LEVEL"
FILE_ENV = "TOOLPIN_LOG_FILE"
FILE_LEVEL_ENV = "TOOLPIN_LOG_FILE_LEVEL"

_FMT_PLAIN = "%(message)s"
_FMT_DETAILED = "%(asctime)s %(levelname)-5s %(name)s — %(message)s"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return _level_from_name(os.environ.get(LEVEL_ENV), logging.WARNING)


def setup_logging(debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Install the stderr handler (and the optional file handler) on the root logger.

    Returns:
        The console level in effect.
    """
    level = resolve_level(debug, verbose, quiet)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FMT_PLAIN if level >= logging.WARNING else _FMT_DETAILED))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = level

    log_file = os.environ.get(FILE_ENV)
    if log_file:
        file_level = _level_from_name(os.environ.get(FILE_LEVEL_ENV), logging.DEBUG)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FMT_DETAILED))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    # asyncio's debug chatter only matters when we are debugging too
    logging.getLogger("asyncio").setLevel(logging.DEBUG if debug else logging.WARNING)
    return level


def _level_from_name(name: str | None, default: int) -> int:
    if not name:
        return default
    numeric = logging.getLevelName(name.strip().upper())
    return numeric if isinstance(numeric, int) else default
