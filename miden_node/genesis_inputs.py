"""Parsing of the genesis input file that describes the initial accounts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from typing import Any

from .config import ConfigError, load_toml

_U64_LIMIT = 2**64
_U8_LIMIT = 2**8


class GenesisInputError(Exception):
    """The genesis input file is missing or malformed."""


class AuthSchemeInput(Enum):
    RPO_FALCON512 = "RpoFalcon512"


@dataclass(frozen=True)
class BasicWalletInputs:
    init_seed: str
    auth_scheme: AuthSchemeInput
    auth_seed: str


@dataclass(frozen=True)
class BasicFungibleFaucetInputs:
    init_seed: str
    auth_scheme: AuthSchemeInput
    auth_seed: str
    token_symbol: str
    decimals: int
    max_supply: int


AccountInput = BasicWalletInputs | BasicFungibleFaucetInputs


@dataclass(frozen=True)
class GenesisInput:
    version: int
    timestamp: int
    accounts: tuple[AccountInput, ...]


def _field(data: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in data:
        raise GenesisInputError(f"missing field `{key}` in {context}")
    return data[key]


def _string(data: Mapping[str, Any], key: str, context: str) -> str:
    value = _field(data, key, context)
    if not isinstance(value, str):
        raise GenesisInputError(f"field `{key}` in {context} must be a string")
    return value


def _unsigned(data: Mapping[str, Any], key: str, context: str, limit: int) -> int:
    value = _field(data, key, context)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < limit:
        raise GenesisInputError(
            f"field `{key}` in {context} must be an integer in 0..{limit}"
        )
    return value


def _auth_scheme(data: Mapping[str, Any], context: str) -> AuthSchemeInput:
    value = _field(data, "auth_scheme", context)
    try:
        return AuthSchemeInput(value)
    except ValueError:
        raise GenesisInputError(f"unknown auth scheme {value!r} in {context}") from None


def _account(data: Any) -> AccountInput:
    if not isinstance(data, Mapping):
        raise GenesisInputError("each account must be a table")
    kind = _field(data, "type", "account")
    if kind == "BasicWallet":
        return BasicWalletInputs(
            init_seed=_string(data, "init_seed", kind),
            auth_scheme=_auth_scheme(data, kind),
            auth_seed=_string(data, "auth_seed", kind),
        )
    if kind == "BasicFungibleFaucet":
        return BasicFungibleFaucetInputs(
            init_seed=_string(data, "init_seed", kind),
            auth_scheme=_auth_scheme(data, kind),
            auth_seed=_string(data, "auth_seed", kind),
            token_symbol=_string(data, "token_symbol", kind),
            decimals=_unsigned(data, "decimals", kind, _U8_LIMIT),
            max_supply=_unsigned(data, "max_supply", kind, _U64_LIMIT),
        )
    raise GenesisInputError(f"unknown account type {kind!r}")


def parse_genesis_input(data: Mapping[str, Any]) -> GenesisInput:
    """Build genesis inputs from a parsed document."""
    accounts = _field(data, "accounts", "genesis input")
    if not isinstance(accounts, list):
        raise GenesisInputError("field `accounts` in genesis input must be an array")
    return GenesisInput(
        version=_unsigned(data, "version", "genesis input", _U64_LIMIT),
        timestamp=_unsigned(data, "timestamp", "genesis input", _U64_LIMIT),
        accounts=tuple(_account(account) for account in accounts),
    )


def load_genesis_input(path: str | PathLike[str]) -> GenesisInput:
    """Read and parse a genesis input TOML file."""
    try:
        data = load_toml(path)
    except ConfigError as err:
        raise GenesisInputError(str(err)) from err
    return parse_genesis_input(data)