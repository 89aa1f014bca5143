"""Configuration of the node components, loaded from TOML files."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any

RPC_CONFIG_FILENAME = "miden-rpc.toml"
FAUCET_CONFIG_FILENAME = "miden-faucet.toml"
NODE_CONFIG_FILE_PATH = "miden-node.toml"


class ConfigError(Exception):
    """A configuration file is missing, unreadable or malformed."""


def _section(data: Mapping[str, Any], key: str, context: str) -> Mapping[str, Any]:
    if key not in data:
        raise ConfigError(f"missing field `{key}` in {context}")
    value = data[key]
    if not isinstance(value, Mapping):
        raise ConfigError(f"field `{key}` in {context} must be a table")
    return value


def _string(data: Mapping[str, Any], key: str, context: str) -> str:
    if key not in data:
        raise ConfigError(f"missing field `{key}` in {context}")
    value = data[key]
    if not isinstance(value, str):
        raise ConfigError(f"field `{key}` in {context} must be a string")
    return value


def _boolean(data: Mapping[str, Any], key: str, context: str) -> bool:
    if key not in data:
        raise ConfigError(f"missing field `{key}` in {context}")
    value = data[key]
    if not isinstance(value, bool):
        raise ConfigError(f"field `{key}` in {context} must be a boolean")
    return value


def _port(data: Mapping[str, Any], context: str) -> int:
    if "port" not in data:
        raise ConfigError(f"missing field `port` in {context}")
    value = data["port"]
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFFFF:
        raise ConfigError(f"field `port` in {context} must be an integer in 0..=65535")
    return value


@dataclass(frozen=True, order=True)
class Endpoint:
    """A host and port that a component listens on."""

    host: str
    port: int

    def __str__(self) -> str:
        return f"http://{self.host}:{self.port}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Endpoint:
        return cls(_string(data, "host", "endpoint"), _port(data, "endpoint"))


@dataclass(frozen=True, order=True)
class RpcConfig:
    endpoint: Endpoint
    store_url: str
    block_producer_url: str

    def __str__(self) -> str:
        return (
            f'{{ endpoint: "{self.endpoint}", store_url: "{self.store_url}", '
            f'block_producer_url: "{self.block_producer_url}" }}'
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RpcConfig:
        return cls(
            endpoint=Endpoint.from_dict(_section(data, "endpoint", "rpc")),
            store_url=_string(data, "store_url", "rpc"),
            block_producer_url=_string(data, "block_producer_url", "rpc"),
        )

    def as_url(self) -> str:
        return str(self.endpoint)


@dataclass(frozen=True, order=True)
class RpcTopLevelConfig:
    rpc: RpcConfig

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RpcTopLevelConfig:
        return cls(RpcConfig.from_dict(_section(data, "rpc", "configuration")))


@dataclass(frozen=True, order=True)
class FaucetConfig:
    endpoint: Endpoint
    rpc_url: str
    database_filepath: str

    def __str__(self) -> str:
        return (
            f'{{ endpoint: "{self.endpoint}", store_url: "{self.database_filepath}", '
            f'block_producer_url: "{self.rpc_url}" }}'
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FaucetConfig:
        return cls(
            endpoint=Endpoint.from_dict(_section(data, "endpoint", "faucet")),
            rpc_url=_string(data, "rpc_url", "faucet"),
            database_filepath=_string(data, "database_filepath", "faucet"),
        )

    def as_url(self) -> str:
        return str(self.endpoint)


@dataclass(frozen=True, order=True)
class BlockProducerConfig:
    endpoint: Endpoint
    store_url: str
    verify_tx_proofs: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BlockProducerConfig:
        context = "block_producer"
        return cls(
            endpoint=Endpoint.from_dict(_section(data, "endpoint", context)),
            store_url=_string(data, "store_url", context),
            verify_tx_proofs=_boolean(data, "verify_tx_proofs", context),
        )


@dataclass(frozen=True, order=True)
class StoreConfig:
    endpoint: Endpoint
    database_filepath: Path
    genesis_filepath: Path

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StoreConfig:
        return cls(
            endpoint=Endpoint.from_dict(_section(data, "endpoint", "store")),
            database_filepath=Path(_string(data, "database_filepath", "store")),
            genesis_filepath=Path(_string(data, "genesis_filepath", "store")),
        )


@dataclass(frozen=True, order=True)
class StartCommandConfig:
    """Configuration of all components started together by the node."""

    block_producer: BlockProducerConfig
    rpc: RpcConfig
    store: StoreConfig

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StartCommandConfig:
        return cls(
            block_producer=BlockProducerConfig.from_dict(
                _section(data, "block_producer", "configuration")
            ),
            rpc=RpcConfig.from_dict(_section(data, "rpc", "configuration")),
            store=StoreConfig.from_dict(_section(data, "store", "configuration")),
        )


def load_toml(path: str | PathLike[str]) -> dict[str, Any]:
    """Read a TOML file into a dictionary."""
    path = Path(path)
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as err:
        raise ConfigError(f"failed to read {path}: {err}") from err
    except tomllib.TOMLDecodeError as err:
        raise ConfigError(f"failed to parse {path}: {err}") from err


def load_rpc_config(path: str | PathLike[str]) -> RpcTopLevelConfig:
    return RpcTopLevelConfig.from_dict(load_toml(path))


def load_faucet_config(path: str | PathLike[str]) -> FaucetConfig:
    return FaucetConfig.from_dict(load_toml(path))


def load_start_config(path: str | PathLike[str]) -> StartCommandConfig:
    try:
        return StartCommandConfig.from_dict(load_toml(path))
    except ConfigError as err:
        raise ConfigError(f"failed to load config file `{Path(path)}`: {err}") from err