"""
Logging Configuration

One stderr handler on the package logger; stdout stays clean for the
scan report and --json payloads.

Extraction passes re-run on every page mutation, so the per-candidate
probe log is kept at INFO even in verbose mode unless probe tracing is
asked for. The HTTP stack below requests only logs warnings.
"""

import logging
import sys
from typing import Dict

PACKAGE_LOGGER = "overseas_reporter"

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"

# Loggers that would otherwise print one line per candidate or request
PROBE_LOGGER = f"{PACKAGE_LOGGER}.extraction.detail_probe"
TRANSPORT_LOGGERS = ("urllib3",)


def logger_levels(verbose: bool = False, quiet: bool = False, trace_probes: bool = False) -> Dict[str, int]:
    """
    Level for each logger touched by setup_logging.

    NOTSET means "inherit from the package logger".
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    levels = {PACKAGE_LOGGER: level}
    levels[PROBE_LOGGER] = logging.INFO if verbose and not trace_probes else logging.NOTSET
    for name in TRANSPORT_LOGGERS:
        levels[name] = logging.WARNING
    return levels


def setup_logging(verbose: bool = False, quiet: bool = False, trace_probes: bool = False) -> None:
    """
    Configure logging for the reporter.

    Args:
        verbose: If True, set level to DEBUG
        quiet: If True, set level to WARNING
        trace_probes: With verbose, also show per-candidate detail probe debug lines
    """
    levels = logger_levels(verbose=verbose, quiet=quiet, trace_probes=trace_probes)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(levels.pop(PACKAGE_LOGGER))

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)

    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
