"""Exceptions raised by the fixers and their collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class FixerError(Exception):
    """Base error carrying the failed operation and the artifact path."""

    def __init__(self, operation: str, path: Optional[PathLike], message: str) -> None:
        self.operation = operation
        self.path = Path(path) if path is not None else None
        self.message = message
        if self.path is not None:
            super().__init__(f"{operation} {self.path}: {message}")
        else:
            super().__init__(f"{operation}: {message}")


class ReadError(FixerError):
    pass


class WriteError(FixerError):
    pass


class DecodeError(FixerError):
    pass


class EncodeError(FixerError):
    pass


class ResizeError(FixerError):
    pass


class CompressionBudgetExceeded(FixerError):
    """No compression level brings the image within the byte budget."""

    def __init__(self, path: PathLike, budget: int, smallest: int) -> None:
        self.budget = budget
        self.smallest = smallest
        super().__init__(
            "compress logo",
            path,
            f"unable to compress the image to {budget} bytes (smallest encoding was {smallest} bytes)",
        )


class ChecksumComputeError(FixerError):
    pass


class RenameError(FixerError):
    pass


class URLResolutionError(FixerError):
    pass


class UnknownAssetTypeError(ValueError):
    """Raised when an asset type string does not map to any chain."""

    def __init__(self, asset_type: str) -> None:
        self.asset_type = asset_type
        super().__init__(f"unknown asset type: {asset_type!r}")
