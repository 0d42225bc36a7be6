"""Command-line entry point for the asset fixers."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from .config import BYTES_IN_KB, DEFAULT_SIZE_LIMIT_KB, FixerConfig, LogoConfig
from .files import FileService
from .fixers import Service
from .pipeline import run_fixers

logger = logging.getLogger("asset_fixer.cli")

FIXER_NAMES = ("json", "checksum", "logo", "chain-info", "asset-info")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Normalize logos and metadata of an asset repository in place.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=None,
        help="Repository root containing the blockchains directory (default: $ASSETS_ROOT or .)",
    )
    parser.add_argument(
        "--chain",
        dest="chains",
        action="append",
        metavar="HANDLE",
        help="Only fix this chain; may be repeated",
    )
    parser.add_argument(
        "--fixer",
        dest="fixers",
        action="append",
        choices=FIXER_NAMES,
        help="Only run this fixer; may be repeated",
    )
    parser.add_argument(
        "--max-logo-kb",
        type=int,
        default=DEFAULT_SIZE_LIMIT_KB,
        help="Byte budget for logo files in KiB",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def _resolve_root(args: argparse.Namespace) -> Path:
    if args.root is not None:
        return args.root.resolve()
    override = os.getenv("ASSETS_ROOT")
    if override:
        return Path(override).expanduser().resolve()
    return Path.cwd()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    root = _resolve_root(args)
    config = FixerConfig(logo=replace(LogoConfig(), max_file_bytes=args.max_logo_kb * BYTES_IN_KB))
    service = Service(FileService(root), config)

    try:
        report = run_fixers(service, handles=args.chains, only=args.fixers)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    if args.verbose:
        for failure in report.failures:
            logger.debug("Failed %s on %s: %s", failure.fixer, failure.path, failure.error)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
