"""Shared fixtures for finddups tests."""

import logging
import pathlib

import pytest


@pytest.fixture
def tmp_source(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create an empty temporary directory to scan."""
    source = tmp_path / "source"
    source.mkdir()
    return source


@pytest.fixture
def abcd_tree(tmp_source: pathlib.Path) -> pathlib.Path:
    """a and b hold "X", c holds "Y", d is empty."""
    (tmp_source / "a").write_bytes(b"X")
    (tmp_source / "b").write_bytes(b"X")
    (tmp_source / "c").write_bytes(b"Y")
    (tmp_source / "d").write_bytes(b"")
    return tmp_source


@pytest.fixture(autouse=True)
def reset_finddups_logger():
    """Drop handlers configure_logging() attached during a test."""
    yield
    logger = logging.getLogger("finddups")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
