"""Command-line parsing for the node, the RPC server and the faucet."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .config import FAUCET_CONFIG_FILENAME, NODE_CONFIG_FILE_PATH, RPC_CONFIG_FILENAME

DEFAULT_GENESIS_FILE_PATH = "genesis.dat"
DEFAULT_GENESIS_INPUTS_PATH = "genesis.toml"


def _unsigned(bits: int):
    limit = 2**bits

    def parse(text: str) -> int:
        try:
            value = int(text, 10)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid digit found in string: {text!r}") from None
        if not 0 <= value < limit:
            raise argparse.ArgumentTypeError(f"{text} is not in 0..{limit}")
        return value

    parse.__name__ = f"u{bits}"
    return parse


_u8 = _unsigned(8)
_u64 = _unsigned(64)


@dataclass(frozen=True)
class RpcArgs:
    config: Path
    command: str


@dataclass(frozen=True)
class NodeStartArgs:
    config: Path


@dataclass(frozen=True)
class MakeGenesisArgs:
    inputs_path: Path
    output_path: Path
    force: bool


@dataclass(frozen=True)
class FaucetInitArgs:
    token_symbol: str
    decimals: int
    max_supply: int
    asset_amount: int
    config: Path


@dataclass(frozen=True)
class FaucetImportArgs:
    faucet_path: Path
    asset_amount: int
    config: Path


def parse_rpc_args(argv: Sequence[str] | None = None) -> RpcArgs:
    """Parse the arguments of the RPC server."""
    parser = argparse.ArgumentParser(prog="miden-rpc")
    parser.add_argument(
        "-c", "--config", type=Path, metavar="FILE", default=Path(RPC_CONFIG_FILENAME)
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("serve", help="Start the RPC server")
    ns = parser.parse_args(argv)
    return RpcArgs(config=ns.config, command=ns.command)


def parse_node_args(argv: Sequence[str] | None = None) -> NodeStartArgs | MakeGenesisArgs:
    """Parse the arguments of the node."""
    parser = argparse.ArgumentParser(prog="miden-node")
    commands = parser.add_subparsers(dest="command", required=True)

    start = commands.add_parser("start", help="Start the node")
    start.add_argument(
        "-c", "--config", type=Path, metavar="FILE", default=Path(NODE_CONFIG_FILE_PATH)
    )

    genesis = commands.add_parser(
        "make-genesis",
        help="Generate a genesis file and account files from a genesis input file",
    )
    genesis.add_argument(
        "-i",
        "--inputs-path",
        type=Path,
        metavar="FILE",
        default=Path(DEFAULT_GENESIS_INPUTS_PATH),
        help="Read genesis file inputs from this location",
    )
    genesis.add_argument(
        "-o",
        "--output-path",
        type=Path,
        metavar="FILE",
        default=Path(DEFAULT_GENESIS_FILE_PATH),
        help="Write the genesis file to this location",
    )
    genesis.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Generate the output file even if a file already exists",
    )

    ns = parser.parse_args(argv)
    if ns.command == "start":
        return NodeStartArgs(config=ns.config)
    return MakeGenesisArgs(
        inputs_path=ns.inputs_path, output_path=ns.output_path, force=ns.force
    )


def parse_faucet_args(argv: Sequence[str] | None = None) -> FaucetInitArgs | FaucetImportArgs:
    """Parse the arguments of the faucet."""
    parser = argparse.ArgumentParser(
        prog="miden-faucet", description="A command line tool for the Miden faucet"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Initialise a new Miden faucet from arguments")
    init.add_argument("-t", "--token-symbol", required=True)
    init.add_argument("-d", "--decimals", type=_u8, required=True)
    init.add_argument("-m", "--max-supply", type=_u64, required=True)
    init.add_argument(
        "-a",
        "--asset-amount",
        type=_u64,
        required=True,
        help="Amount of assets to be dispersed by the faucet on each request",
    )
    init.add_argument(
        "-c", "--config", type=Path, metavar="FILE", default=Path(FAUCET_CONFIG_FILENAME)
    )

    imported = commands.add_parser(
        "import", help="Imports an existing Miden faucet from specified file"
    )
    imported.add_argument("-f", "--faucet-path", type=Path, required=True)
    imported.add_argument(
        "-a",
        "--asset-amount",
        type=_u64,
        required=True,
        help="Amount of assets to be dispersed by the faucet on each request",
    )
    imported.add_argument(
        "-c", "--config", type=Path, metavar="FILE", default=Path(FAUCET_CONFIG_FILENAME)
    )

    ns = parser.parse_args(argv)
    if ns.command == "init":
        return FaucetInitArgs(
            token_symbol=ns.token_symbol,
            decimals=ns.decimals,
            max_supply=ns.max_supply,
            asset_amount=ns.asset_amount,
            config=ns.config,
        )
    return FaucetImportArgs(
        faucet_path=ns.faucet_path, asset_amount=ns.asset_amount, config=ns.config
    )