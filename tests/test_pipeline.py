from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

import pytest
from PIL import Image

from asset_fixer import cli
from asset_fixer.files import FileService
from asset_fixer.fixers import Service
from asset_fixer.pipeline import discover_chains, run_fixers

from helpers import CHECKSUM_ADDRESS, LOWERCASE_ADDRESS, solid_image


@pytest.fixture
def repo(tmp_path: Path, write_png, write_json) -> Path:
    chain_dir = tmp_path / "blockchains" / "ethereum"
    write_json(chain_dir / "info" / "info.json", {"name": "Ethereum", "type": "chain"})
    write_png(chain_dir / "info" / "logo.png", solid_image(512, 512))
    write_json(chain_dir / "tokenlist.json", {"tokens": []})

    asset_dir = chain_dir / "assets" / LOWERCASE_ADDRESS
    write_json(asset_dir / "info.json", {"name": "Token", "type": "ERC20", "id": LOWERCASE_ADDRESS})
    write_png(asset_dir / "logo.png", solid_image(300, 600))

    tron_asset = tmp_path / "blockchains" / "tron" / "assets" / "1002000"
    write_json(tron_asset / "info.json", {"name": "BitTorrent", "type": "TRC10"})

    (tmp_path / "blockchains" / "atlantis").mkdir()
    return tmp_path


def _snapshot(root: Path) -> Dict[str, bytes]:
    return {str(path.relative_to(root)): path.read_bytes() for path in root.rglob("*") if path.is_file()}


def test_discover_chains_skips_unknown(repo: Path) -> None:
    assert [chain.handle for chain in discover_chains(repo)] == ["ethereum", "tron"]


def test_discover_chains_requires_blockchains_dir(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        discover_chains(tmp_path)


def test_run_fixers_normalizes_repository(repo: Path) -> None:
    service = Service(FileService(repo))

    report = run_fixers(service)

    assert report.ok
    chain_dir = repo / "blockchains" / "ethereum"
    asset_dir = chain_dir / "assets" / CHECKSUM_ADDRESS
    assert not (chain_dir / "assets" / LOWERCASE_ADDRESS).exists()

    asset_info = json.loads((asset_dir / "info.json").read_text(encoding="utf-8"))
    assert asset_info["id"] == CHECKSUM_ADDRESS
    assert asset_info["explorer"] == f"https://etherscan.io/token/{CHECKSUM_ADDRESS}"

    with Image.open(asset_dir / "logo.png") as logo:
        assert logo.size == (128, 256)
    with Image.open(chain_dir / "info" / "logo.png") as logo:
        assert logo.size == (256, 256)

    chain_info = json.loads((chain_dir / "info" / "info.json").read_text(encoding="utf-8"))
    assert chain_info["type"] == "coin"
    assert (chain_dir / "tokenlist.json").read_text(encoding="utf-8") == '{\n    "tokens": []\n}\n'

    tron_info = json.loads(
        (repo / "blockchains" / "tron" / "assets" / "1002000" / "info.json").read_text(encoding="utf-8")
    )
    assert tron_info["explorer"] == "https://tronscan.io/#/token/1002000"


def test_second_run_changes_nothing(repo: Path) -> None:
    run_fixers(Service(FileService(repo)))
    before = _snapshot(repo)

    report = run_fixers(Service(FileService(repo)))

    assert report.ok
    assert _snapshot(repo) == before


def test_run_fixers_keeps_only_folder_handles_cached(repo: Path) -> None:
    file_service = FileService(repo)

    run_fixers(Service(file_service))

    assert file_service.cached_paths() == [
        repo / "blockchains" / "ethereum" / "assets" / CHECKSUM_ADDRESS,
        repo / "blockchains" / "tron" / "assets" / "1002000",
    ]


def test_run_fixers_limited_to_chain_and_fixer(repo: Path) -> None:
    service = Service(FileService(repo))

    report = run_fixers(service, handles=["ethereum"], only=["chain-info"])

    assert report.ok
    assert report.fixers_run == 1
    assert (repo / "blockchains" / "ethereum" / "assets" / LOWERCASE_ADDRESS).is_dir()
    chain_info = json.loads(
        (repo / "blockchains" / "ethereum" / "info" / "info.json").read_text(encoding="utf-8")
    )
    assert chain_info["type"] == "coin"


def test_failures_are_reported_and_walk_continues(repo: Path, write_json) -> None:
    bad_dir = repo / "blockchains" / "ethereum" / "assets" / "not-an-address"
    write_json(bad_dir / "info.json", {"type": "ERC20"})

    report = run_fixers(Service(FileService(repo)))

    assert not report.ok
    assert [failure.fixer for failure in report.failures] == ["fix_eth_address_checksum"]
    assert report.failures[0].path == bad_dir
    assert json.loads((bad_dir / "info.json").read_text(encoding="utf-8"))["id"] == "not-an-address"
    assert (repo / "blockchains" / "ethereum" / "assets" / CHECKSUM_ADDRESS).is_dir()


def test_cli_exit_status(repo: Path, write_json) -> None:
    assert cli.main([str(repo)]) == 0

    write_json(repo / "blockchains" / "ethereum" / "assets" / "not-an-address" / "info.json", {})
    assert cli.main([str(repo), "--chain", "ethereum"]) == 1


def test_cli_uses_assets_root_env(repo: Path, monkeypatch) -> None:
    monkeypatch.setenv("ASSETS_ROOT", str(repo))

    assert cli.main(["--fixer", "chain-info"]) == 0
    chain_info = json.loads(
        (repo / "blockchains" / "ethereum" / "info" / "info.json").read_text(encoding="utf-8")
    )
    assert chain_info["type"] == "coin"


def test_cli_rejects_missing_repository(tmp_path: Path) -> None:
    assert cli.main([str(tmp_path)]) == 2
    assert cli.main([str(tmp_path), "--chain", "atlantis"]) == 2
