"""2-phase duplicate detection: size buckets, then xxHash64 over mmap'd content."""

from __future__ import annotations

from collections import defaultdict
from concurrent.futures import as_completed
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from finddups.scanner import FileEntry
from finddups.scanner import FileError
from tqdm import tqdm

import logging
import mmap
import pathlib
import xxhash


logger = logging.getLogger(__name__)

EMPTY_HASH: int = xxhash.xxh64_intdigest(b"")


@dataclass
class DuplicateGroup:
    """A group of files with identical content."""

    hash: int
    file_size: int
    paths: list[pathlib.Path]


def hash_file(path: pathlib.Path, size: int) -> int:
    """Compute the xxHash64 of the first *size* bytes of a file.

    The file is mapped read-only; both the mapping and the file handle are
    released before returning or raising. Raises OSError if the file cannot
    be opened or mapped, ValueError if it shrank below *size*.
    """
    if size == 0:
        return EMPTY_HASH
    with path.open("rb") as f:
        with mmap.mmap(f.fileno(), size, access=mmap.ACCESS_READ) as data:
            return xxhash.xxh64_intdigest(data)


def _try_hash(entry: FileEntry) -> tuple[FileEntry, int | None, Exception | None]:
    try:
        return entry, hash_file(entry.path, entry.size), None
    except (OSError, ValueError) as exc:
        return entry, None, exc


def _candidates(sizes: dict[int, list[FileEntry]]) -> list[FileEntry]:
    """Entries worth hashing: members of multi-member, non-empty size buckets."""
    return [
        entry
        for size, group in sizes.items()
        if size > 0 and len(group) > 1
        for entry in group
    ]


def hash_map(
    sizes: dict[int, list[FileEntry]],
    *,
    workers: int = 1,
    progress: bool = False,
    errors: list[FileError] | None = None,
) -> dict[int, list[FileEntry]]:
    """Regroup size buckets by content hash.

    Singleton size buckets are never read. Zero-byte files go straight to
    EMPTY_HASH. A file that fails to open or map is logged, recorded in
    *errors* and left out; the other files are unaffected.
    """
    hashes: dict[int, list[FileEntry]] = defaultdict(list)
    if sizes.get(0):
        hashes[EMPTY_HASH].extend(sizes[0])

    candidates = _candidates(sizes)
    unique_by_size = sum(1 for s, g in sizes.items() if s > 0 and len(g) < 2)
    logger.debug(
        f"phase 1 (size grouping): {unique_by_size} unique by size, "
        f"{len(candidates)} files to hash"
    )

    results: list[tuple[FileEntry, int | None, Exception | None]] = []
    with tqdm(total=len(candidates), desc="Hashing", unit="file", disable=not progress) as bar:
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(_try_hash, entry) for entry in candidates]
                for future in as_completed(futures):
                    results.append(future.result())
                    bar.update()
        else:
            for entry in candidates:
                results.append(_try_hash(entry))
                bar.update()

    # Merge on the calling thread only
    hashed = 0
    for entry, digest, exc in results:
        if exc is not None:
            reason = getattr(exc, "strerror", None) or exc
            logger.warning(f"Error reading {entry.path}: {reason}; skipping")
            if errors is not None:
                errors.append(FileError(path=entry.path, operation="read", error=exc))
            continue
        hashes[digest].append(entry)
        hashed += 1

    logger.debug(f"phase 2 (hashing): {hashed} files hashed into {len(hashes)} bucket(s)")
    return dict(hashes)


def find_duplicates(hashes: dict[int, list[FileEntry]]) -> list[DuplicateGroup]:
    """Turn hash buckets into duplicate groups with two or more files.

    Largest files first; paths within a group are sorted.
    """
    duplicates = [
        DuplicateGroup(
            hash=digest,
            file_size=entries[0].size,
            paths=sorted(e.path for e in entries),
        )
        for digest, entries in hashes.items()
        if len(entries) >= 2
    ]
    duplicates.sort(key=lambda g: (-g.file_size, g.paths[0]))
    return duplicates
