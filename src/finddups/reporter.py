"""Textual rendering of duplicate groups."""

from __future__ import annotations

from finddups.hasher import DuplicateGroup
from finddups.sizes import format_size


def report(groups: list[DuplicateGroup], print_fn=print) -> int:
    """Print each duplicate group and return how many were printed."""
    if not groups:
        print_fn("No duplicates found.")
        return 0

    wasted = sum(g.file_size * (len(g.paths) - 1) for g in groups)
    print_fn(f"Found {len(groups)} duplicate group(s), {format_size(wasted)} reclaimable:\n")
    for i, group in enumerate(groups, 1):
        print_fn(f"  Group {i} ({len(group.paths)} files, {format_size(group.file_size)}):")
        for p in group.paths:
            print_fn(f"    {p}")
        print_fn("")
    return len(groups)
