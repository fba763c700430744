"""Human-readable byte sizes: parsing ("10M") and formatting."""

from __future__ import annotations

import re


_SUFFIXES: dict[str, int] = {
    "": 1,
    "k": 1024,
    "m": 1024 ** 2,
    "g": 1024 ** 3,
    "t": 1024 ** 4,
}

_SIZE_RE = re.compile(r"(\d+)([kmgt]?)", re.IGNORECASE)


def parse_size(text: str) -> int:
    """Parse a size such as ``"512"``, ``"4k"`` or ``"10M"`` into bytes.

    Suffixes are binary (K = 1024). Raises ValueError on anything else.
    """
    match = _SIZE_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid size: {text!r}")
    number, suffix = match.groups()
    return int(number) * _SUFFIXES[suffix.lower()]


def format_size(size_bytes: int) -> str:
    """Format bytes as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 ** 2:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 ** 3:
        return f"{size_bytes / (1024 ** 2):.1f} MB"
    else:
        return f"{size_bytes / (1024 ** 3):.1f} GB"
