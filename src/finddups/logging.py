"""Logging setup and run timing for finddups."""

from __future__ import annotations

from contextlib import contextmanager

import logging
import time


def configure_logging(verbose: bool = False, quiet: bool = False, stream=None) -> None:
    """Attach a stderr handler to the ``finddups`` logger.

    Quiet mode still lets per-file warnings through.
    """
    if verbose:
        level, fmt = logging.DEBUG, "%(levelname)s: %(name)s: %(message)s"
    elif quiet:
        level, fmt = logging.WARNING, "%(levelname)s: %(message)s"
    else:
        level, fmt = logging.INFO, "%(message)s"

    logger = logging.getLogger("finddups")
    logger.handlers.clear()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    logger.setLevel(level)
    logger.addHandler(handler)


@contextmanager
def timed(logger: logging.Logger, label: str):
    """Log how long the enclosed block took, in milliseconds."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(f"{label}: {elapsed:.0f} ms")
