"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from liquidation_scanner.config import (
    AppConfig,
    ChainConfig,
    DatabaseConfig,
    GraphQLConfig,
    NftConfig,
    ServerConfig,
)
from liquidation_scanner.models import NftMetadata, Position
from liquidation_scanner.protocols.artha.parser import parse_position

POOL_ID = "0x" + "ab" * 32
ORACLE_ADDRESS = "0x" + "11" * 20
LENDING_POOL_ADDRESS = "0x" + "22" * 20
NFT_CONTRACT_ADDRESS = "0x" + "33" * 20
BORROWER = "0x" + "44" * 20
LOAN_TOKEN_ADDRESS = "0x" + "55" * 20


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_url="https://rpc.example.com",
        chain_id=84532,
        rpc_timeout=10,
        lending_pool_address=LENDING_POOL_ADDRESS,
    )


@pytest.fixture()
def sample_graphql_config() -> GraphQLConfig:
    return GraphQLConfig(
        url="https://graph.example.com/query",
        token="test-token",
        page_size=1000,
        timeout=10,
    )


@pytest.fixture()
def sample_nft_config() -> NftConfig:
    return NftConfig(
        base_url="https://app.example.com/",
        owner_address="0xOWNER",
        contract_address=NFT_CONTRACT_ADDRESS,
        timeout=10,
    )


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig,
    sample_graphql_config: GraphQLConfig,
    sample_nft_config: NftConfig,
    tmp_path: Path,
) -> AppConfig:
    return AppConfig(
        server=ServerConfig(host="127.0.0.1", port=8081),
        graphql=sample_graphql_config,
        nft=sample_nft_config,
        chain=sample_chain_config,
        database=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"),
    )


# ---------------------------------------------------------------------------
# Indexer payload fixtures
# ---------------------------------------------------------------------------


def make_raw_position(
    token_id: str = "7",
    borrow_shares: str = "50",
    total_borrow_shares: str = "100",
    total_borrow_assets: str = "1000",
    pool_id: str = POOL_ID,
    bidder: str | None = None,
) -> dict[str, Any]:
    """Build one entry of the subgraph's ``positions`` list."""
    return {
        "id": f"{pool_id}-{token_id}",
        "account": {"id": BORROWER},
        "pool": {
            "id": pool_id,
            "utilizationRate": "0.5",
            "transactionHash": "0xdeadbeef",
            "totalSupplyShares": "2000",
            "totalSupplyAssets": "2000",
            "totalBorrowShares": total_borrow_shares,
            "totalBorrowAssets": total_borrow_assets,
            "oracle": ORACLE_ADDRESS,
            "ltv": "700000000000000000",
            "lth": "800000000000000000",
            "loanToken": {"id": LOAN_TOKEN_ADDRESS, "loanToken": LOAN_TOKEN_ADDRESS},
            "loanAddress": LOAN_TOKEN_ADDRESS,
            "lendingRate": "0.03",
            "irm": "0x" + "66" * 20,
            "curator": {"id": "0x" + "77" * 20},
            "collateralToken": {"collateralToken": NFT_CONTRACT_ADDRESS, "id": NFT_CONTRACT_ADDRESS},
            "collateralAddress": NFT_CONTRACT_ADDRESS,
            "borrowRate": "0.05",
        },
        "token": {"id": f"{NFT_CONTRACT_ADDRESS}-{token_id}", "tokenId": token_id},
        "tokenId": token_id,
        "bidder": bidder,
        "borrowShares": borrow_shares,
    }


def make_raw_nft(token_id: str = "7", name: str = "Artha IP", symbol: str = "AIP") -> dict[str, Any]:
    return {
        "contract": {"address": NFT_CONTRACT_ADDRESS, "name": name, "symbol": symbol},
        "tokenId": token_id,
        "tokenType": "ERC721",
    }


@pytest.fixture()
def raw_position() -> dict[str, Any]:
    return make_raw_position()


@pytest.fixture()
def sample_position(raw_position: dict[str, Any]) -> Position:
    return parse_position(raw_position)


@pytest.fixture()
def sample_nft() -> NftMetadata:
    return NftMetadata.from_dict(make_raw_nft())


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    server:
      host: 127.0.0.1
      port: 9000
    graphql:
      url: "https://graph.example.com/query"
      token: "tok"
      page_size: 500
    nft:
      base_url: "https://app.example.com"
      owner_address: "0xOWNER"
      contract_address: "0xNFT"
    chain:
      rpc_url: "https://rpc.example.com"
      chain_id: 84532
      rpc_timeout: 10
      lending_pool_address: "0xPOOL"
    database:
      url: "sqlite+aiosqlite:///test.db"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# aiohttp / web3 mocks
# ---------------------------------------------------------------------------


def mock_http_session(
    method: str,
    status: int = 200,
    json_data: Any = None,
    json_error: Exception | None = None,
) -> AsyncMock:
    """Create a mock aiohttp session whose ``method`` returns one response."""
    mock_response = AsyncMock()
    mock_response.status = status
    if json_error is not None:
        mock_response.json = AsyncMock(side_effect=json_error)
    else:
        mock_response.json = AsyncMock(return_value=json_data)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = AsyncMock()
    setattr(mock_session, method, MagicMock(return_value=mock_response))
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    return mock_session


def mock_web3(function_name: str, result: Any = None, error: Exception | None = None) -> MagicMock:
    """Create a mock AsyncWeb3 whose contract ``function_name(...).call()`` resolves."""
    call = AsyncMock(side_effect=error) if error is not None else AsyncMock(return_value=result)
    w3 = MagicMock()
    function = getattr(w3.eth.contract.return_value.functions, function_name)
    function.return_value.call = call
    return w3
