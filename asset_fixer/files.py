"""Asset repository layout and the handle cache used across fixers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List

from .models import AssetFile, ChainDescriptor, FileKind

logger = logging.getLogger("asset_fixer.files")

BLOCKCHAINS_DIR = "blockchains"
ASSETS_DIR = "assets"
INFO_DIR = "info"
LOGO_FILE = "logo.png"
INFO_FILE = "info.json"


def build_chain_path(root: Path, chain_handle: str) -> Path:
    return root / BLOCKCHAINS_DIR / chain_handle


def build_asset_path(root: Path, chain_handle: str, identifier: str) -> Path:
    return build_chain_path(root, chain_handle) / ASSETS_DIR / identifier


class FileService:
    """Hands out asset-file handles and keeps them consistent after renames."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self._files: Dict[Path, AssetFile] = {}

    def asset_path(self, chain_handle: str, identifier: str) -> Path:
        return build_asset_path(self.root, chain_handle, identifier)

    def get_asset_file(
        self,
        path: Path,
        chain: ChainDescriptor,
        kind: FileKind,
        asset: str = "",
    ) -> AssetFile:
        path = Path(path)
        cached = self._files.get(path)
        if cached is not None:
            return cached
        asset_file = AssetFile(path=path, chain=chain, asset=asset, kind=kind)
        self._files[path] = asset_file
        return asset_file

    def release(self, asset_file: AssetFile) -> None:
        """Forget a handle that no later rename needs to re-point."""
        if self._files.get(asset_file.path) is asset_file:
            del self._files[asset_file.path]

    def cached_paths(self) -> List[Path]:
        return sorted(self._files)

    def update_file(self, asset_file: AssetFile, identifier: str) -> None:
        """Record that ``asset_file``'s directory was renamed to ``identifier``.

        The handle and every cached handle beneath the old directory are
        re-pointed at the new location.
        """
        old_dir = asset_file.path
        new_dir = self.asset_path(asset_file.chain.handle, identifier)

        moved: List[AssetFile] = [
            handle
            for path, handle in self._files.items()
            if handle is not asset_file and path.is_relative_to(old_dir)
        ]
        self._files.pop(old_dir, None)
        for handle in moved:
            self._files.pop(handle.path, None)

        asset_file.replace_identifier(identifier, new_dir)
        self._files[new_dir] = asset_file
        for handle in moved:
            handle.replace_identifier(identifier, new_dir / handle.path.relative_to(old_dir))
            self._files[handle.path] = handle

    def iter_chain_files(self, chain: ChainDescriptor) -> Iterator[AssetFile]:
        """Yield the chain-level artifacts of ``chain`` that exist on disk."""
        chain_dir = build_chain_path(self.root, chain.handle)
        info_dir = chain_dir / INFO_DIR
        if (info_dir / LOGO_FILE).is_file():
            yield self.get_asset_file(info_dir / LOGO_FILE, chain, FileKind.CHAIN_LOGO)
        if (info_dir / INFO_FILE).is_file():
            yield self.get_asset_file(info_dir / INFO_FILE, chain, FileKind.CHAIN_INFO)
        if chain_dir.is_dir():
            for json_path in sorted(chain_dir.glob("*.json")):
                yield self.get_asset_file(json_path, chain, FileKind.CHAIN_JSON)

    def iter_asset_folders(self, chain: ChainDescriptor) -> Iterator[AssetFile]:
        assets_dir = build_chain_path(self.root, chain.handle) / ASSETS_DIR
        if not assets_dir.is_dir():
            return
        for asset_dir in sorted(assets_dir.iterdir()):
            if not asset_dir.is_dir():
                continue
            yield self.get_asset_file(asset_dir, chain, FileKind.ASSET_FOLDER, asset=asset_dir.name)

    def iter_asset_artifacts(self, folder: AssetFile) -> Iterator[AssetFile]:
        """Yield the logo and info handles of an asset folder at its current path."""
        logo_path = folder.path / LOGO_FILE
        if logo_path.is_file():
            yield self.get_asset_file(logo_path, folder.chain, FileKind.ASSET_LOGO, asset=folder.asset)
        info_path = folder.path / INFO_FILE
        if info_path.is_file():
            yield self.get_asset_file(info_path, folder.chain, FileKind.ASSET_INFO, asset=folder.asset)
