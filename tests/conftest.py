"""Pytest configuration and fixtures for token list builder tests."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from tokenlist_builder.core.config import BuildConfig, StorageCredentials

WETH_MAINNET = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC_MAINNET = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USDC_OPTIMISM = "0x7F5c764cBc14f9669B88837ca1490cCa17c31607"
WETH_POLYGON = "0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619"
USDC_ARBITRUM = "0xFF970A61A04b1cA14834A43f5dE4533eBDDB5CC8"


def token_entry(
    symbol: str,
    address: str,
    decimals: int = 18,
    name: str | None = None,
    logo: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """A raw token record as it appears in a chain file."""
    entry: dict[str, Any] = {
        "address": address,
        "name": name or symbol,
        "symbol": symbol,
        "decimals": decimals,
    }
    if logo is not None:
        entry["logoURI"] = logo
    entry.update(extra)
    return entry


def write_chain_file(repo: Path, filename: str, tokens: Any) -> Path:
    """Write a chain file under ``repo/chains``."""
    path = repo / "chains" / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(tokens, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def base_template() -> dict[str, Any]:
    """Token list template with version 1.2.5."""
    return {
        "name": "Tally Ho",
        "logoURI": "https://tally.cash/logo.png",
        "keywords": ["tally", "defi"],
        "timestamp": "2023-01-01T00:00:00.000Z",
        "version": {"major": 1, "minor": 2, "patch": 5},
    }


@pytest.fixture
def token_repo(tmp_path: Path, base_template: dict[str, Any]) -> Path:
    """A token list repository with three chain files, a template and a manifest."""
    write_chain_file(
        tmp_path,
        "1.json",
        [
            token_entry("WETH", WETH_MAINNET, name="Wrapped Ether", logo="../assets/weth.png"),
            token_entry("USDC", USDC_MAINNET, decimals=6, name="USD Coin"),
        ],
    )
    write_chain_file(
        tmp_path,
        "10.json",
        [token_entry("USDC", USDC_OPTIMISM, decimals=6, name="USD Coin", logo="../assets/usdc.png")],
    )
    write_chain_file(
        tmp_path,
        "137.json",
        [token_entry("WETH", WETH_POLYGON, name="Wrapped Ether", chainId=1)],
    )

    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "weth.png").write_bytes(b"\x89PNG weth")
    (assets / "usdc.png").write_bytes(b"\x89PNG usdc")

    (tmp_path / "base.tokenlist.json").write_text(
        json.dumps(base_template, indent=2) + "\n", encoding="utf-8"
    )
    (tmp_path / "package.json").write_text(
        json.dumps(
            {"name": "@tallyho/token-list", "version": "1.2.5", "private": False},
            indent=2,
        )
        + "\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def build_config(token_repo: Path) -> BuildConfig:
    """Default build config rooted at the sample repository."""
    return BuildConfig(root=token_repo)


@pytest.fixture
def credentials() -> StorageCredentials:
    """Configured Fleek storage credentials."""
    return StorageCredentials(api_key="test-key", api_secret="test-secret")


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2024-06-01 12:00 UTC."""
    moment = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: moment
