"""File discovery and size classification."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from finddups.config import Config

import fnmatch
import logging
import os
import pathlib
import stat


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A regular file and the size it had when it was discovered."""

    path: pathlib.Path
    size: int


@dataclass(frozen=True)
class FileError:
    """A file or directory skipped because of an I/O error."""

    path: pathlib.Path
    operation: str
    error: Exception


def _matches_any(name: str, patterns: list[str]) -> bool:
    """Check if name matches any of the glob patterns (case-insensitive)."""
    name_lower = name.lower()
    return any(fnmatch.fnmatch(name_lower, p.lower()) for p in patterns)


def _record(errors: list[FileError] | None, path: pathlib.Path, operation: str, exc: OSError) -> None:
    logger.warning(f"Error during {operation} of {path}: {exc.strerror or exc}; skipping")
    if errors is not None:
        errors.append(FileError(path=path, operation=operation, error=exc))


def walk(root: pathlib.Path, config: Config, errors: list[FileError] | None = None):
    """Yield a FileEntry for every in-bound regular file below *root*.

    Symlinks are neither followed nor reported. Entries that cannot be
    read are logged, recorded in *errors* and skipped.
    """
    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    def onerror(exc: OSError) -> None:
        _record(errors, pathlib.Path(exc.filename or root), "walk", exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        if config.exclude_dir:
            dirnames[:] = [d for d in dirnames if not _matches_any(d, config.exclude_dir)]
        current = pathlib.Path(dirpath)
        for name in filenames:
            if config.include and not _matches_any(name, config.include):
                continue
            if config.exclude and _matches_any(name, config.exclude):
                continue
            path = current / name
            try:
                st = path.lstat()
            except OSError as exc:
                _record(errors, path, "stat", exc)
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            if not config.min_size <= st.st_size <= config.max_size:
                continue
            yield FileEntry(path=path, size=st.st_size)


def size_map(
    root: pathlib.Path,
    config: Config,
    errors: list[FileError] | None = None,
) -> dict[int, list[FileEntry]]:
    """Group all in-bound regular files below *root* by size.

    Raises FileNotFoundError / NotADirectoryError if *root* is unusable.
    """
    sizes: dict[int, list[FileEntry]] = defaultdict(list)
    found = 0
    for entry in walk(root, config, errors):
        sizes[entry.size].append(entry)
        found += 1
    logger.debug(f"size classification: {found} files in {len(sizes)} size bucket(s)")
    return dict(sizes)
