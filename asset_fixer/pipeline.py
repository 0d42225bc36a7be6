"""High-level orchestration for running fixers over an asset repository."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, List, Optional, Sequence

from . import chains
from .errors import FixerError
from .files import BLOCKCHAINS_DIR
from .fixers import Fixer, Service
from .models import AssetFile, ChainDescriptor

logger = logging.getLogger("asset_fixer")


@dataclass
class FixFailure:
    """A fixer that raised while processing one artifact."""

    path: Path
    fixer: str
    error: str


@dataclass
class FixReport:
    """Outcome of a repository run."""

    files_checked: int = 0
    fixers_run: int = 0
    failures: List[FixFailure] = field(default_factory=list)
    total_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures


def discover_chains(root: Path) -> List[ChainDescriptor]:
    """Return registered chains that have a directory under ``root``."""
    blockchains_dir = Path(root) / BLOCKCHAINS_DIR
    if not blockchains_dir.is_dir():
        raise FileNotFoundError(f"Asset repository has no {BLOCKCHAINS_DIR} directory: {root}")
    discovered: List[ChainDescriptor] = []
    for chain_dir in sorted(blockchains_dir.iterdir()):
        if not chain_dir.is_dir():
            continue
        chain = chains.get_chain_by_handle(chain_dir.name)
        if chain is None:
            logger.warning("Skipping %s: unknown chain", chain_dir.name)
            continue
        discovered.append(chain)
    return discovered


def _selected(service: Service, asset_file: AssetFile, only: Optional[Collection[str]]) -> List[Fixer]:
    fixers = service.fixers_for(asset_file)
    if only is None:
        return fixers
    allowed = {fixer for name, fixer in service.fixers().items() if name in only}
    return [fixer for fixer in fixers if fixer in allowed]


def _apply(service: Service, asset_file: AssetFile, report: FixReport, only: Optional[Collection[str]]) -> None:
    report.files_checked += 1
    for fixer in _selected(service, asset_file, only):
        report.fixers_run += 1
        try:
            fixer(asset_file)
        except FixerError as exc:
            logger.error("%s failed: %s", fixer.__name__, exc)
            report.failures.append(FixFailure(asset_file.path, fixer.__name__, str(exc)))


def fix_chain(
    service: Service,
    chain: ChainDescriptor,
    report: FixReport,
    only: Optional[Collection[str]] = None,
) -> None:
    """Run the fixers over the chain-level files and every asset of ``chain``."""
    file_service = service.file_service
    for asset_file in file_service.iter_chain_files(chain):
        _apply(service, asset_file, report, only)
        file_service.release(asset_file)

    for folder in file_service.iter_asset_folders(chain):
        # Folder fixers may rename the directory; artifacts are looked up afterwards.
        _apply(service, folder, report, only)
        for asset_file in file_service.iter_asset_artifacts(folder):
            _apply(service, asset_file, report, only)
            file_service.release(asset_file)


def run_fixers(
    service: Service,
    handles: Optional[Sequence[str]] = None,
    only: Optional[Collection[str]] = None,
) -> FixReport:
    """Fix every chain of the service's repository, or only ``handles``."""
    root = service.file_service.root
    start = time.perf_counter()
    selected = chains.resolve_handles(handles) if handles else discover_chains(root)

    report = FixReport()
    for chain in selected:
        logger.info("Fixing %s", chain.handle)
        fix_chain(service, chain, report, only)

    report.total_seconds = time.perf_counter() - start
    logger.info(
        "Finished in %.2fs (%d files, %d fixers run, %d failed)",
        report.total_seconds,
        report.files_checked,
        report.fixers_run,
        len(report.failures),
    )
    return report
