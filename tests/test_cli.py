from pathlib import Path

import pytest

from miden_node.cli import (
    FaucetImportArgs,
    FaucetInitArgs,
    MakeGenesisArgs,
    NodeStartArgs,
    RpcArgs,
    parse_faucet_args,
    parse_node_args,
    parse_rpc_args,
)


def test_rpc_defaults():
    assert parse_rpc_args(["serve"]) == RpcArgs(config=Path("miden-rpc.toml"), command="serve")


def test_rpc_custom_config():
    args = parse_rpc_args(["--config", "other.toml", "serve"])
    assert args.config == Path("other.toml")
    assert args.command == "serve"


def test_rpc_requires_subcommand():
    with pytest.raises(SystemExit):
        parse_rpc_args([])


def test_node_start_default_config():
    assert parse_node_args(["start"]) == NodeStartArgs(config=Path("miden-node.toml"))


def test_node_start_short_config():
    assert parse_node_args(["start", "-c", "n.toml"]) == NodeStartArgs(config=Path("n.toml"))


def test_make_genesis_defaults():
    assert parse_node_args(["make-genesis"]) == MakeGenesisArgs(
        inputs_path=Path("genesis.toml"), output_path=Path("genesis.dat"), force=False
    )


def test_make_genesis_flags():
    args = parse_node_args(["make-genesis", "-i", "in.toml", "--output-path", "out.dat", "-f"])
    assert args == MakeGenesisArgs(
        inputs_path=Path("in.toml"), output_path=Path("out.dat"), force=True
    )


def test_node_unknown_command():
    with pytest.raises(SystemExit):
        parse_node_args(["stop"])


def test_faucet_init():
    args = parse_faucet_args(
        ["init", "-t", "POL", "-d", "12", "-m", "1000000", "-a", "100"]
    )
    assert args == FaucetInitArgs(
        token_symbol="POL",
        decimals=12,
        max_supply=1000000,
        asset_amount=100,
        config=Path("miden-faucet.toml"),
    )


def test_faucet_init_rejects_decimals_out_of_u8():
    with pytest.raises(SystemExit):
        parse_faucet_args(["init", "-t", "POL", "-d", "256", "-m", "1", "-a", "1"])


def test_faucet_init_rejects_negative_supply():
    with pytest.raises(SystemExit):
        parse_faucet_args(["init", "-t", "POL", "-d", "1", "-m", "-1", "-a", "1"])


def test_faucet_import():
    args = parse_faucet_args(
        ["import", "--faucet-path", "faucet.mac", "--asset-amount", "5", "-c", "f.toml"]
    )
    assert args == FaucetImportArgs(
        faucet_path=Path("faucet.mac"), asset_amount=5, config=Path("f.toml")
    )


def test_faucet_import_requires_path():
    with pytest.raises(SystemExit):
        parse_faucet_args(["import", "-a", "5"])