import pytest

from miden_node.genesis_inputs import (
    AuthSchemeInput,
    BasicFungibleFaucetInputs,
    BasicWalletInputs,
    GenesisInputError,
    load_genesis_input,
    parse_genesis_input,
)

WALLET_SEED = "0xa123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
WALLET_AUTH = "0xb123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
FAUCET_SEED = "0xc123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
FAUCET_AUTH = "0xd123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"

GENESIS_TOML = f"""
version = 1
timestamp = 1672531200

[[accounts]]
type = "BasicWallet"
init_seed = "{WALLET_SEED}"
auth_scheme = "RpoFalcon512"
auth_seed = "{WALLET_AUTH}"

[[accounts]]
type = "BasicFungibleFaucet"
init_seed = "{FAUCET_SEED}"
auth_scheme = "RpoFalcon512"
auth_seed = "{FAUCET_AUTH}"
token_symbol = "POL"
decimals = 12
max_supply = 1000000
"""


def _faucet(**overrides):
    data = {
        "type": "BasicFungibleFaucet",
        "init_seed": FAUCET_SEED,
        "auth_scheme": "RpoFalcon512",
        "auth_seed": FAUCET_AUTH,
        "token_symbol": "POL",
        "decimals": 12,
        "max_supply": 1000000,
    }
    data.update(overrides)
    return {"version": 1, "timestamp": 1672531200, "accounts": [data]}


def test_load_genesis_file(tmp_path):
    path = tmp_path / "genesis.toml"
    path.write_text(GENESIS_TOML)
    genesis = load_genesis_input(path)
    assert genesis.version == 1
    assert genesis.timestamp == 1672531200
    assert genesis.accounts == (
        BasicWalletInputs(WALLET_SEED, AuthSchemeInput.RPO_FALCON512, WALLET_AUTH),
        BasicFungibleFaucetInputs(
            FAUCET_SEED, AuthSchemeInput.RPO_FALCON512, FAUCET_AUTH, "POL", 12, 1000000
        ),
    )


def test_missing_file(tmp_path):
    with pytest.raises(GenesisInputError):
        load_genesis_input(tmp_path / "genesis.toml")


def test_unknown_account_type():
    data = _faucet(type="Mystery")
    with pytest.raises(GenesisInputError, match="Mystery"):
        parse_genesis_input(data)


def test_unknown_auth_scheme():
    with pytest.raises(GenesisInputError, match="auth scheme"):
        parse_genesis_input(_faucet(auth_scheme="Ed25519"))


@pytest.mark.parametrize("decimals", [-1, 256, "12"])
def test_decimals_must_fit_a_byte(decimals):
    with pytest.raises(GenesisInputError, match="decimals"):
        parse_genesis_input(_faucet(decimals=decimals))


def test_max_supply_must_fit_u64():
    with pytest.raises(GenesisInputError, match="max_supply"):
        parse_genesis_input(_faucet(max_supply=2**64))


def test_missing_token_symbol():
    data = _faucet()
    del data["accounts"][0]["token_symbol"]
    with pytest.raises(GenesisInputError, match="token_symbol"):
        parse_genesis_input(data)


def test_missing_accounts():
    with pytest.raises(GenesisInputError, match="accounts"):
        parse_genesis_input({"version": 1, "timestamp": 0})


def test_empty_account_list():
    genesis = parse_genesis_input({"version": 2, "timestamp": 5, "accounts": []})
    assert genesis.accounts == ()
    assert genesis.version == 2