"""PNG decoding, resizing and recompression utilities."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

from filetype import guess
from PIL import Image, UnidentifiedImageError

from .errors import CompressionBudgetExceeded, DecodeError, EncodeError, ReadError, ResizeError, WriteError
from .utils import write_atomic

logger = logging.getLogger("asset_fixer.images")


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def decode_png(path: Path) -> Image.Image:
    """Load a PNG file fully into memory."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise DecodeError("decode logo", path, str(exc)) from exc

    detected = detect_image_format(data)
    if detected != "png":
        raise DecodeError("decode logo", path, f"expected a PNG image, found {detected or 'unknown data'}")

    try:
        with Image.open(io.BytesIO(data)) as raw_image:
            raw_image.load()
            image = raw_image.copy()
    except (UnidentifiedImageError, OSError, SyntaxError, Image.DecompressionBombError) as exc:
        raise DecodeError("decode logo", path, f"failed to decode image: {exc}") from exc

    width, height = image.size
    if width <= 0 or height <= 0:
        raise DecodeError("decode logo", path, f"invalid dimensions {width}x{height}")
    return image


def calculate_target_dimension(width: int, height: int, target_edge: int) -> Tuple[int, int]:
    """Scale ``width`` x ``height`` so the longest edge equals ``target_edge``.

    The aspect ratio is kept and each side is floored, never below one pixel.
    """
    longest_edge = max(width, height)
    return (
        max(1, width * target_edge // longest_edge),
        max(1, height * target_edge // longest_edge),
    )


def resize_image(image: Image.Image, width: int, height: int, path: Optional[Path] = None) -> Image.Image:
    try:
        return image.resize((width, height), Image.Resampling.LANCZOS)
    except (ValueError, OSError) as exc:
        raise ResizeError(
            "resize logo", path, f"failed to resize {image.width}x{image.height} to {width}x{height}: {exc}"
        ) from exc


def encode_png(image: Image.Image, compress_level: Optional[int] = None, path: Optional[Path] = None) -> bytes:
    """Encode an image as PNG bytes, optionally at a given zlib level (0-9)."""
    buffer = io.BytesIO()
    params = {} if compress_level is None else {"compress_level": compress_level}
    try:
        image.save(buffer, format="PNG", **params)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError("encode logo", path, f"failed to encode image: {exc}") from exc
    return buffer.getvalue()


def write_png(path: Path, data: bytes) -> None:
    try:
        write_atomic(path, data)
    except OSError as exc:
        raise WriteError("write logo", path, str(exc)) from exc


def validate_logo_file_size(path: Path, max_bytes: int) -> bool:
    """Return whether the logo at ``path`` fits within ``max_bytes``."""
    try:
        size = Path(path).stat().st_size
    except OSError as exc:
        raise ReadError("check logo size", path, str(exc)) from exc
    return size <= max_bytes


def compress_to_budget(
    image: Image.Image,
    path: Path,
    max_bytes: int,
    levels: Sequence[int],
) -> int:
    """Write the first encoding of ``image`` that fits ``max_bytes``.

    ``levels`` are tried in order, so the best compression should come first.
    Returns the level that was written. Nothing is written when no level fits.
    """
    smallest: Optional[int] = None
    for level in levels:
        data = encode_png(image, level, path=path)
        size = len(data)
        logger.debug("Encoded %s at level %d: %d bytes", path, level, size)
        if size <= max_bytes:
            write_png(path, data)
            return level
        if smallest is None or size < smallest:
            smallest = size
    raise CompressionBudgetExceeded(path, max_bytes, smallest if smallest is not None else 0)
