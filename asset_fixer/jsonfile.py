"""Reading and canonical writing of JSON documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .errors import ReadError, WriteError
from .utils import write_atomic

logger = logging.getLogger("asset_fixer.jsonfile")

JSON_INDENT = 4


def read_json_file(path: Path) -> Dict[str, Any]:
    """Load a JSON object from disk."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError("read json", path, str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise ReadError("read json", path, f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ReadError("read json", path, f"expected an object, got {type(data).__name__}")
    return data


def prepare_json_data(document: Any) -> bytes:
    """Serialize a document in the repository's canonical layout."""
    try:
        text = json.dumps(document, indent=JSON_INDENT, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise WriteError("prepare json", None, str(exc)) from exc
    return (text + "\n").encode("utf-8")


def create_json_file(path: Path, data: bytes) -> None:
    try:
        write_atomic(path, data)
    except OSError as exc:
        raise WriteError("write json", path, str(exc)) from exc


def format_json_file(path: Path) -> bool:
    """Rewrite ``path`` in canonical form. Returns whether the file changed."""
    path = Path(path)
    try:
        original = path.read_bytes()
    except OSError as exc:
        raise ReadError("read json", path, str(exc)) from exc
    try:
        document = json.loads(original.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReadError("read json", path, f"invalid JSON: {exc}") from exc

    formatted = prepare_json_data(document)
    if formatted == original:
        return False
    create_json_file(path, formatted)
    logger.debug("Formatted %s", path)
    return True
