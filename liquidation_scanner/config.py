"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True)
class GraphQLConfig:
    url: str = ""
    token: str = ""
    page_size: int = 1000
    timeout: int = 30


@dataclass(frozen=True)
class NftConfig:
    base_url: str = ""
    owner_address: str = ""
    contract_address: str = ""
    timeout: int = 30


@dataclass(frozen=True)
class ChainConfig:
    rpc_url: str = "https://sepolia.base.org"
    chain_id: int = 84532
    rpc_timeout: int = 30
    lending_pool_address: str = ""


@dataclass(frozen=True)
class DatabaseConfig:
    url: str = "sqlite+aiosqlite:///liquidations.db"
    echo: bool = False


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    graphql: GraphQLConfig = field(default_factory=GraphQLConfig)
    nft: NftConfig = field(default_factory=NftConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_server(raw: dict[str, Any]) -> ServerConfig:
    return ServerConfig(
        host=raw.get("host", ServerConfig.host),
        port=int(raw.get("port", ServerConfig.port)),
    )


def _build_graphql(raw: dict[str, Any]) -> GraphQLConfig:
    return GraphQLConfig(
        url=raw.get("url", ""),
        token=raw.get("token", ""),
        page_size=int(raw.get("page_size", GraphQLConfig.page_size)),
        timeout=int(raw.get("timeout", GraphQLConfig.timeout)),
    )


def _build_nft(raw: dict[str, Any]) -> NftConfig:
    return NftConfig(
        base_url=raw.get("base_url", ""),
        owner_address=raw.get("owner_address", ""),
        contract_address=raw.get("contract_address", ""),
        timeout=int(raw.get("timeout", NftConfig.timeout)),
    )


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    return ChainConfig(
        rpc_url=raw.get("rpc_url", ChainConfig.rpc_url),
        chain_id=int(raw.get("chain_id", ChainConfig.chain_id)),
        rpc_timeout=int(raw.get("rpc_timeout", ChainConfig.rpc_timeout)),
        lending_pool_address=raw.get("lending_pool_address", ""),
    )


def _build_database(raw: dict[str, Any]) -> DatabaseConfig:
    return DatabaseConfig(
        url=raw.get("url", DatabaseConfig.url),
        echo=bool(raw.get("echo", False)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        server=_build_server(raw.get("server", {})),
        graphql=_build_graphql(raw.get("graphql", {})),
        nft=_build_nft(raw.get("nft", {})),
        chain=_build_chain(raw.get("chain", {})),
        database=_build_database(raw.get("database", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.graphql.url:
        raise ValueError("graphql.url must be configured")
    if cfg.graphql.page_size <= 0:
        raise ValueError("graphql.page_size must be positive")

    if not cfg.nft.base_url:
        raise ValueError("nft.base_url must be configured")
    if not cfg.nft.owner_address or not cfg.nft.contract_address:
        raise ValueError("nft.owner_address and nft.contract_address are required")

    if not cfg.chain.rpc_url:
        raise ValueError("chain.rpc_url must be configured")
    if not cfg.chain.lending_pool_address:
        raise ValueError("chain.lending_pool_address must be configured")
