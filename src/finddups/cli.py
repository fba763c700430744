"""CLI argument parsing and run orchestration."""

from __future__ import annotations

from finddups.config import config_from_args
from finddups.config import ConfigError
from finddups.config import load_config
from finddups.config import merge_config_into_args
from finddups.hasher import find_duplicates
from finddups.hasher import hash_map
from finddups.logging import configure_logging
from finddups.logging import timed
from finddups.reporter import report
from finddups.scanner import FileError
from finddups.scanner import size_map

import argparse
import logging
import pathlib


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Options default to None so the config file can fill them in.
    """
    parser = argparse.ArgumentParser(
        prog="finddups",
        description="Recursively find duplicate files.",
    )
    parser.add_argument(
        "root", type=pathlib.Path, nargs="?", default=pathlib.Path("."),
        help="Directory to scan (default: current directory)",
    )
    parser.add_argument(
        "--min", default=None, metavar="SIZE",
        help="Minimum file size to include, e.g. 512, 4K, 10M (default: 0)",
    )
    parser.add_argument(
        "--max", default=None, metavar="SIZE",
        help="Maximum file size to include (default: unlimited)",
    )
    parser.add_argument(
        "--include", action="append", default=None, metavar="PATTERN",
        help="Only consider file names matching this glob. Repeatable.",
    )
    parser.add_argument(
        "--exclude", action="append", default=None, metavar="PATTERN",
        help="Glob pattern to exclude files (e.g., '*.tmp'). Repeatable.",
    )
    parser.add_argument(
        "--exclude-dir", action="append", default=None, metavar="PATTERN",
        help="Glob pattern to exclude directories (e.g., '.git'). Repeatable.",
    )
    parser.add_argument(
        "--workers", type=int, default=None,
        help="Number of hashing threads (default: 1)",
    )
    parser.add_argument(
        "--progress", action="store_true", default=None,
        help="Show a progress bar while hashing",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and results")
    return parser


def run(args: argparse.Namespace, print_fn=print) -> int:
    """Scan ``args.root`` and report duplicates. Returns an exit status."""
    try:
        config = config_from_args(args)
    except ConfigError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 1
    logger.debug(f"config: {config}")

    errors: list[FileError] = []
    with timed(logger, "Total time"):
        try:
            sizes = size_map(args.root, config, errors)
        except OSError as exc:
            logger.error(str(exc))
            return 1
        logger.debug(f"sizemap size = {len(sizes)}")
        hashes = hash_map(sizes, workers=config.workers, progress=args.progress, errors=errors)
        logger.debug(f"hashmap size = {len(hashes)}")
        report(find_duplicates(hashes), print_fn=print_fn)

    if errors:
        logger.info(f"Skipped {len(errors)} unreadable file(s).")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    try:
        merge_config_into_args(args, load_config())
    except ConfigError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 1
    return run(args)
