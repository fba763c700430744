"""Scan configuration: validation, config file loading and merging."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from finddups.sizes import parse_size

import logging
import os
import pathlib
import sys
import tomllib


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"

_DEFAULTS: dict[str, object] = {
    "min": "0",
    "max": str(sys.maxsize),
    "workers": 1,
    "progress": False,
    "include": [],
    "exclude": [],
    "exclude_dir": [],
}

_SIZE_KEYS = {"min", "max"}
_BOOL_KEYS = {"progress"}
_LIST_KEYS = {"include", "exclude", "exclude_dir"}


class ConfigError(ValueError):
    """Invalid scan configuration."""


@dataclass
class Config:
    """Bounds and filters applied while scanning."""

    min_size: int = 0
    max_size: int = sys.maxsize
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    exclude_dir: list[str] = field(default_factory=list)
    workers: int = 1

    def __post_init__(self) -> None:
        if self.min_size < 0:
            raise ConfigError(f"Minimum file size ({self.min_size}) must not be negative.")
        if self.max_size < self.min_size:
            raise ConfigError(
                f"Maximum file size ({self.max_size}) must be at least "
                f"minimum file size ({self.min_size})."
            )
        if self.workers < 1:
            raise ConfigError(f"Number of workers ({self.workers}) must be at least 1.")


def _config_dir() -> pathlib.Path:
    """Return the finddups config directory."""
    base = pathlib.Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
    return base / "finddups"


def load_config(config_dir: pathlib.Path | None = None) -> dict:
    """Load config.toml and return its contents as a dict.

    Returns {} if no file exists or on parse error.
    """
    if config_dir is None:
        config_dir = _config_dir()
    path = config_dir / CONFIG_FILENAME
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning(f"Ignoring unreadable config file {path}: {exc}")
        return {}


def merge_config_into_args(args, config: dict) -> None:
    """Three-layer merge: CLI > config > hardcoded defaults.

    Mutates *args* in place. Raises ConfigError for malformed pattern lists.
    """
    for key in _SIZE_KEYS:
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        setattr(args, key, str(cfg_val) if cfg_val is not None else _DEFAULTS[key])

    for key in _BOOL_KEYS:
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        setattr(args, key, bool(cfg_val) if cfg_val is not None else _DEFAULTS[key])

    if getattr(args, "workers", None) is None:
        args.workers = config.get("workers", _DEFAULTS["workers"])

    # List fields: merge CLI + config
    for key in _LIST_KEYS:
        cli_val = getattr(args, key, None) or []
        cfg_val = _pattern_list(key, config.get(key))
        setattr(args, key, cli_val + [v for v in cfg_val if v not in cli_val])


def _pattern_list(key: str, value) -> list[str]:
    """Normalize a config pattern value: a single string becomes a one-item list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return value
    raise ConfigError(f"{key} must be a pattern string or a list of pattern strings, got {value!r}")


def config_from_args(args) -> Config:
    """Build a validated Config from merged CLI arguments.

    Both size bounds must parse; raises ConfigError otherwise.
    """
    try:
        min_size = parse_size(args.min)
    except ValueError:
        raise ConfigError(f"Invalid minimum size: {args.min}") from None
    try:
        max_size = parse_size(args.max)
    except ValueError:
        raise ConfigError(f"Invalid maximum size: {args.max}") from None
    try:
        workers = int(args.workers)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid number of workers: {args.workers}") from None
    return Config(
        min_size=min_size,
        max_size=max_size,
        include=list(args.include),
        exclude=list(args.exclude),
        exclude_dir=list(args.exclude_dir),
        workers=workers,
    )
