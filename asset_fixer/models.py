"""Data models shared by the fixers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Tuple


@dataclass(frozen=True)
class ChainDescriptor:
    """Static metadata describing one blockchain."""

    id: int
    handle: str
    name: str
    is_evm: bool = False


class FileKind(str, Enum):
    ASSET_FOLDER = "asset_folder"
    ASSET_LOGO = "asset_logo"
    ASSET_INFO = "asset_info"
    CHAIN_LOGO = "chain_logo"
    CHAIN_INFO = "chain_info"
    CHAIN_JSON = "chain_json"


@dataclass
class AssetFile:
    """Handle to a single artifact of an asset or chain directory."""

    path: Path
    chain: ChainDescriptor
    asset: str = ""
    kind: FileKind = FileKind.ASSET_FOLDER

    def replace_identifier(self, identifier: str, path: Path) -> None:
        """Point the handle at a renamed asset."""
        self.asset = identifier
        self.path = path


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass
class _InfoDocument:
    """JSON object with a few normalized string fields.

    Fields that are not normalized are kept in ``extras`` so that a rewrite
    preserves them along with their original key order.
    """

    FIELDS: ClassVar[Tuple[str, ...]] = ()

    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        values = {name: _optional_str(data.get(name)) for name in cls.FIELDS}
        return cls(extras=dict(data), **values)

    def to_dict(self) -> Dict[str, Any]:
        document = dict(self.extras)
        for name in self.FIELDS:
            value = getattr(self, name)
            if value is not None:
                document[name] = value
        return document


@dataclass
class ChainInfo(_InfoDocument):
    """Chain-level ``info/info.json`` document."""

    FIELDS: ClassVar[Tuple[str, ...]] = ("type",)

    type: Optional[str] = None


@dataclass
class AssetInfo(_InfoDocument):
    """Asset-level ``assets/<id>/info.json`` document."""

    FIELDS: ClassVar[Tuple[str, ...]] = ("type", "id", "explorer")

    type: Optional[str] = None
    id: Optional[str] = None
    explorer: Optional[str] = None
