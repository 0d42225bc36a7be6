"""Idempotent fixers that normalize asset artifacts in place."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Optional

from . import chains, checksum, images, jsonfile
from .config import FixerConfig
from .errors import ChecksumComputeError, RenameError, URLResolutionError
from .files import FileService
from .models import AssetFile, AssetInfo, ChainInfo, FileKind

logger = logging.getLogger("asset_fixer.fixers")

Fixer = Callable[[AssetFile], None]


class Service:
    """Exposes every fixer as a method taking one asset file."""

    def __init__(self, file_service: FileService, config: Optional[FixerConfig] = None) -> None:
        self.file_service = file_service
        self.config = config or FixerConfig()

    def fixers(self) -> Dict[str, Fixer]:
        """Return all fixers keyed by their command-line name."""
        return {
            "json": self.fix_json,
            "checksum": self.fix_eth_address_checksum,
            "logo": self.fix_logo,
            "chain-info": self.fix_chain_info_json,
            "asset-info": self.fix_asset_info,
        }

    def fixers_for(self, asset_file: AssetFile) -> List[Fixer]:
        by_kind: Dict[FileKind, List[Fixer]] = {
            FileKind.ASSET_FOLDER: [self.fix_eth_address_checksum],
            FileKind.ASSET_LOGO: [self.fix_logo],
            FileKind.CHAIN_LOGO: [self.fix_logo],
            FileKind.ASSET_INFO: [self.fix_asset_info],
            FileKind.CHAIN_INFO: [self.fix_chain_info_json],
            FileKind.CHAIN_JSON: [self.fix_json],
        }
        return by_kind.get(asset_file.kind, [])

    def fix_json(self, asset_file: AssetFile) -> None:
        jsonfile.format_json_file(asset_file.path)

    def fix_eth_address_checksum(self, asset_file: AssetFile) -> None:
        if not chains.is_evm(asset_file.chain.id):
            return

        asset_dir = asset_file.path.name
        problem = checksum.validate_address_checksum(asset_file.chain, asset_dir)
        if problem is None:
            return

        try:
            checksum_address = checksum.compute_checksum(asset_dir)
        except ChecksumComputeError as exc:
            raise ChecksumComputeError(exc.operation, asset_file.path, exc.message) from exc
        new_path = self.file_service.asset_path(asset_file.chain.handle, checksum_address)

        # os.rename replaces an empty target directory on POSIX.
        if new_path.exists() and not new_path.samefile(asset_file.path):
            raise RenameError("rename asset", asset_file.path, f"target already exists: {new_path}")
        try:
            os.rename(asset_file.path, new_path)
        except OSError as exc:
            raise RenameError("rename asset", asset_file.path, f"failed to rename dir: {exc}") from exc

        self.file_service.update_file(asset_file, checksum_address)
        logger.debug("Renamed asset from %s to %s (%s)", asset_dir, checksum_address, problem)

    def fix_logo(self, asset_file: AssetFile) -> None:
        logo = self.config.logo
        path = asset_file.path
        image = images.decode_png(path)
        width, height = image.size

        if width > logo.medium_width or height > logo.medium_height:
            logger.debug("Fixing too large image %s (%dx%d)", path, width, height)
            target_w, target_h = images.calculate_target_dimension(width, height, logo.medium_width)
            image = images.resize_image(image, target_w, target_h, path=path)
            images.write_png(path, images.encode_png(image, path=path))

        if images.validate_logo_file_size(path, logo.max_file_bytes):
            return

        logger.debug("Fixing logo file size %s", path)
        level = images.compress_to_budget(image, path, logo.max_file_bytes, logo.compression_levels)
        logger.debug("Recompressed %s at level %d", path, level)

    def fix_chain_info_json(self, asset_file: AssetFile) -> None:
        chain_info = ChainInfo.from_dict(jsonfile.read_json_file(asset_file.path))

        if chain_info.type == chains.COIN_TYPE:
            return

        chain_info.type = chains.COIN_TYPE
        data = jsonfile.prepare_json_data(chain_info.to_dict())
        jsonfile.create_json_file(asset_file.path, data)
        logger.debug("Set chain type of %s to %s", asset_file.path, chains.COIN_TYPE)

    def fix_asset_info(self, asset_file: AssetFile) -> None:
        asset_info = AssetInfo.from_dict(jsonfile.read_json_file(asset_file.path))
        chain = asset_file.chain
        is_modified = False

        asset_type = asset_info.type or ""
        # An empty or garbled type must not block the fix, so parse failures mean "no chain".
        type_chain = chains.chain_from_type_or_none(asset_type)
        type_chain_id = type_chain.id if type_chain is not None else None

        expected_type, found = chains.get_token_type(chain.id, asset_file.asset)
        if not found:
            expected_type = asset_type.upper()

        if chain.id not in self.config.asset_info.exempt_chain_ids:
            if type_chain_id != chain.id or asset_type.casefold() != expected_type.casefold():
                asset_info.type = expected_type
                is_modified = True

        if asset_info.id != asset_file.asset:
            asset_info.id = asset_file.asset
            is_modified = True

        # The explorer is resolved from the type as read, before any correction above.
        try:
            expected_explorer = chains.get_explorer_url(chain, asset_file.asset, asset_type)
        except URLResolutionError as exc:
            raise URLResolutionError(exc.operation, asset_file.path, exc.message) from exc

        if asset_info.explorer is None or asset_info.explorer.casefold() != expected_explorer.casefold():
            asset_info.explorer = expected_explorer
            is_modified = True

        if not is_modified:
            return

        data = jsonfile.prepare_json_data(asset_info.to_dict())
        jsonfile.create_json_file(asset_file.path, data)
        logger.debug("Fixed asset info %s", asset_file.path)
