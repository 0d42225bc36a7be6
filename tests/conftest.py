from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest
from PIL import Image

from asset_fixer.files import FileService
from asset_fixer.fixers import Service


@pytest.fixture
def write_png() -> Callable[..., Path]:
    def _write(path: Path, image: Image.Image, compress_level: int = 6) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path, format="PNG", compress_level=compress_level)
        return path

    return _write


@pytest.fixture
def write_json() -> Callable[..., Path]:
    def _write(path: Path, document: Dict[str, Any], indent: Optional[int] = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, indent=indent), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def file_service(tmp_path: Path) -> FileService:
    return FileService(tmp_path)


@pytest.fixture
def service(file_service: FileService) -> Service:
    return Service(file_service)
