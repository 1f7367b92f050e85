"""Tests for chain file discovery, ordering and parsing."""

import json
from pathlib import Path

import pytest

from tokenlist_builder.core.exceptions import (
    InvalidChainFileError,
    InvalidChainFileNameError,
    InvalidTokenError,
    MissingInputError,
)
from tokenlist_builder.core.models import ChainFile, TokenRecord
from tokenlist_builder.pipeline.chain_files import (
    collect_tokens,
    discover_chain_files,
    load_chain_tokens,
    order_chain_files,
    parse_chain_id,
)

from conftest import USDC_MAINNET, WETH_MAINNET, token_entry, write_chain_file


class TestFilenames:
    """Tests for chain id extraction from file names."""

    def test_parse_chain_id(self):
        assert parse_chain_id(Path("chains/1.json")) == 1
        assert parse_chain_id(Path("chains/42161.json")) == 42161

    @pytest.mark.parametrize(
        "name",
        ["mainnet.json", "1a.json", "a1.json", "1.json.bak", "1.JSON", "-1.json", "0.json", ".json"],
    )
    def test_invalid_names_rejected(self, name):
        with pytest.raises(InvalidChainFileNameError) as exc_info:
            parse_chain_id(Path("chains") / name)
        assert name in str(exc_info.value)

    def test_order_is_numeric(self):
        paths = [Path("chains/10.json"), Path("chains/2.json"), Path("chains/9.json"), Path("chains/137.json")]
        ordered = order_chain_files(paths)
        assert [cf.chain_id for cf in ordered] == [2, 9, 10, 137]
        assert ordered[0].path == Path("chains/2.json")

    def test_order_independent_of_discovery_order(self):
        paths = [Path("chains/10.json"), Path("chains/2.json"), Path("chains/1.json")]
        assert order_chain_files(paths) == order_chain_files(list(reversed(paths)))

    def test_one_bad_name_rejects_all(self):
        with pytest.raises(InvalidChainFileNameError):
            order_chain_files([Path("chains/1.json"), Path("chains/mainnet.json")])


class TestDiscovery:
    """Tests for chain file discovery."""

    def test_discovers_json_files_only(self, tmp_path):
        write_chain_file(tmp_path, "1.json", [])
        write_chain_file(tmp_path, "mainnet.json", [])
        (tmp_path / "chains" / "README.md").write_text("notes")

        found = sorted(p.name for p in discover_chain_files(tmp_path / "chains"))
        assert found == ["1.json", "mainnet.json"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(MissingInputError):
            discover_chain_files(tmp_path / "chains")


class TestParsing:
    """Tests for parsing and tagging chain file records."""

    def test_records_tagged_with_chain_id(self, tmp_path):
        path = write_chain_file(
            tmp_path,
            "10.json",
            [token_entry("WETH", WETH_MAINNET), token_entry("USDC", USDC_MAINNET, decimals=6)],
        )
        tokens = load_chain_tokens(ChainFile(chain_id=10, path=path))

        assert [t.symbol for t in tokens] == ["WETH", "USDC"]
        assert all(t.chainId == 10 for t in tokens)

    def test_existing_chain_id_overridden(self, tmp_path):
        path = write_chain_file(tmp_path, "137.json", [token_entry("WETH", WETH_MAINNET, chainId=1)])
        tokens = load_chain_tokens(ChainFile(chain_id=137, path=path))
        assert tokens[0].chainId == 137

    def test_missing_address(self, tmp_path):
        record = {"name": "No Address", "symbol": "NONE", "decimals": 18}
        path = write_chain_file(tmp_path, "1.json", [record])

        with pytest.raises(InvalidTokenError) as exc_info:
            load_chain_tokens(ChainFile(chain_id=1, path=path))

        assert str(path) in str(exc_info.value)
        assert "no address" in str(exc_info.value)
        assert exc_info.value.record == record
        assert '{"name": "No Address", "symbol": "NONE", "decimals": 18}' in str(exc_info.value)

    def test_record_not_an_object(self, tmp_path):
        path = write_chain_file(tmp_path, "1.json", ["0xabc"])
        with pytest.raises(InvalidTokenError):
            load_chain_tokens(ChainFile(chain_id=1, path=path))

    def test_wrong_field_type(self, tmp_path):
        path = write_chain_file(tmp_path, "1.json", [token_entry("WETH", WETH_MAINNET, decimals="18")])
        with pytest.raises(InvalidTokenError) as exc_info:
            load_chain_tokens(ChainFile(chain_id=1, path=path))
        assert "decimals" in exc_info.value.reason

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "1.json"
        path.write_text('[{"address": "0x1"', encoding="utf-8")

        with pytest.raises(InvalidChainFileError) as exc_info:
            load_chain_tokens(ChainFile(chain_id=1, path=path))
        assert str(path) in str(exc_info.value)

    def test_not_an_array(self, tmp_path):
        path = write_chain_file(tmp_path, "1.json", {"address": WETH_MAINNET})
        with pytest.raises(InvalidChainFileError):
            load_chain_tokens(ChainFile(chain_id=1, path=path))

    def test_duplicates_pass_through(self, tmp_path):
        entry = token_entry("WETH", WETH_MAINNET)
        path = write_chain_file(tmp_path, "1.json", [entry, entry])
        assert len(load_chain_tokens(ChainFile(chain_id=1, path=path))) == 2


class TestCollect:
    """Tests for aggregating tokens across chain files."""

    def test_chain_grouping_follows_numeric_order(self, tmp_path):
        p10 = write_chain_file(tmp_path, "10.json", [token_entry("OP", WETH_MAINNET)])
        p2 = write_chain_file(tmp_path, "2.json", [token_entry("A", WETH_MAINNET), token_entry("B", USDC_MAINNET)])

        tokens = collect_tokens([p10, p2])
        assert [(t.chainId, t.symbol) for t in tokens] == [(2, "A"), (2, "B"), (10, "OP")]

    def test_names_checked_before_reading(self, tmp_path):
        broken = tmp_path / "chains" / "1.json"
        broken.parent.mkdir()
        broken.write_text("not json", encoding="utf-8")
        bad_name = write_chain_file(tmp_path, "mainnet.json", [])

        with pytest.raises(InvalidChainFileNameError):
            collect_tokens([broken, bad_name])

    def test_empty_directory(self, tmp_path):
        assert collect_tokens([]) == []


class TestTokenRecord:
    """Tests for token record serialization."""

    def test_model_order_without_source_order(self):
        record = TokenRecord.model_validate(
            {
                "decimals": 6,
                "tags": ["stablecoin"],
                "symbol": "USDC",
                "address": USDC_MAINNET,
                "chainId": 1,
                "name": "USD Coin",
            }
        )
        data = record.to_dict()

        assert list(data) == ["chainId", "address", "name", "symbol", "decimals", "tags"]
        assert "logoURI" not in data

    def test_chain_record_keeps_input_order(self):
        raw = {"name": "USD Coin", "address": USDC_MAINNET, "symbol": "USDC", "decimals": 6, "logoURI": "../usdc.png"}
        data = TokenRecord.from_chain_record(raw, 10).to_dict()

        assert list(data) == ["name", "address", "symbol", "decimals", "logoURI", "chainId"]
        assert data["chainId"] == 10

    def test_existing_chain_id_keeps_position(self):
        raw = {"chainId": 1, "address": USDC_MAINNET, "symbol": "USDC"}
        data = TokenRecord.from_chain_record(raw, 137).to_dict()

        assert list(data) == ["chainId", "address", "symbol"]
        assert data["chainId"] == 137

    def test_logo_changes_keep_input_order(self):
        raw = {"address": USDC_MAINNET, "logoURI": "../usdc.png", "symbol": "USDC"}
        token = TokenRecord.from_chain_record(raw, 1)

        assert list(token.with_logo("ipfs://Qm1").to_dict()) == ["address", "logoURI", "symbol", "chainId"]
        assert list(token.without_logo().to_dict()) == ["address", "symbol", "chainId"]

    def test_with_logo_returns_copy(self):
        record = TokenRecord.model_validate({"chainId": 1, "address": USDC_MAINNET, "logoURI": "../a.png"})
        updated = record.with_logo("ipfs://Qm123")

        assert record.logoURI == "../a.png"
        assert updated.to_dict()["logoURI"] == "ipfs://Qm123"

    def test_without_logo(self):
        record = TokenRecord.model_validate(
            {"chainId": 1, "address": USDC_MAINNET, "logoURI": "", "extensions": {"color": "#fff"}}
        )
        data = record.without_logo().to_dict()

        assert "logoURI" not in data
        assert data["extensions"] == {"color": "#fff"}
        assert json.dumps(data)
