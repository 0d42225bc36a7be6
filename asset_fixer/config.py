"""Configuration objects and constants for the fixers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

BYTES_IN_KB = 1024
DEFAULT_SIZE_LIMIT_KB = 100

# zlib levels understood by Pillow's PNG encoder, best compression first.
DEFAULT_COMPRESSION_LEVELS: Tuple[int, ...] = tuple(range(9, -1, -1))

CRONOS_CHAIN_ID = 10000025
CRYPTOORG_CHAIN_ID = 394

# Cronos and Crypto.org share asset type conventions the general type rule
# misclassifies, so their asset types are left alone.
DEFAULT_EXEMPT_CHAIN_IDS: FrozenSet[int] = frozenset({CRONOS_CHAIN_ID, CRYPTOORG_CHAIN_ID})


@dataclass(frozen=True)
class LogoConfig:
    """Pixel and byte constraints applied to logo images."""

    max_width: int = 512
    max_height: int = 512
    medium_width: int = 256
    medium_height: int = 256
    min_width: int = 128
    min_height: int = 128
    max_file_bytes: int = DEFAULT_SIZE_LIMIT_KB * BYTES_IN_KB
    compression_levels: Tuple[int, ...] = DEFAULT_COMPRESSION_LEVELS


@dataclass(frozen=True)
class AssetInfoConfig:
    exempt_chain_ids: FrozenSet[int] = DEFAULT_EXEMPT_CHAIN_IDS


@dataclass(frozen=True)
class FixerConfig:
    """Top-level settings handed to the fixer service."""

    logo: LogoConfig = field(default_factory=LogoConfig)
    asset_info: AssetInfoConfig = field(default_factory=AssetInfoConfig)
