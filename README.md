# miden-node

Building blocks for a rollup node: protocol value types and their message
conversions, configuration loading, request validation for the public RPC
interface, and an asyncio transaction queue. It is a plain Python library
with no third-party runtime dependencies.

## What is inside

- **`miden_node.digest`**: the four-word `Digest` used throughout the
  protocol messages. It encodes to and decodes from a 64-character hex
  string (`Digest.to_hex`, `Digest.to_hex_upper`, `Digest.from_hex`). It
  converts to and from four 64-bit words (`Digest.from_words`,
  `Digest.to_words`). `Digest.to_felts` checks each word against the
  field modulus, and `is_valid_felt` checks a single value.
- **`miden_node.errors`**: `ConversionError` and its specific kinds:
  `HexError`, `TooMuchData`, `InsufficientData`, `NotAValidFelt`,
  `SmtLeafError`, `SmtProofError` and `MissingFieldError`. The helper
  `missing_field(entity, field_name)` builds the error raised when a
  required field of a message is absent.
- **`miden_node.convert`**: `convert` and `try_convert`, which map a
  conversion function over a collection. `try_convert` stops at the first
  error and lets it propagate.
- **`miden_node.merkle`**: `MerklePath`, `MmrDelta`, `SmtLeaf` (built with
  `SmtLeaf.empty`, `SmtLeaf.single` or `SmtLeaf.multiple`) and `SmtProof`,
  each with `to_proto` / `from_proto` conversions to their message forms
  (`MmrDeltaMessage`, `SmtLeafEntryMessage`, `SmtLeafMessage`,
  `SmtOpeningMessage`). An `SmtProof` requires a path of depth 64.
- **`miden_node.accounts`**: `AccountId`, `AccountSummary`, `AccountInfo`,
  `AccountUpdateDetails`, `AccountInputRecord` and `AccountState`, with the
  message forms `AccountBlockInputRecord`, `AccountTransactionInputRecord`
  and `AccountUpdate`. `AccountState.from_record` treats an all-zero hash
  as an account that is not yet stored.
- **`miden_node.nullifiers`**: `Nullifier` and `NullifierWitness`, with the
  message form `NullifierBlockInputRecord`.
- **`miden_node.blocks`**: `BlockHeader` and its message form
  `BlockHeaderMessage`.
- **`miden_node.config`**: typed configuration (`Endpoint`, `RpcConfig`,
  `RpcTopLevelConfig`, `FaucetConfig`, `BlockProducerConfig`,
  `StoreConfig`, `StartCommandConfig`), read from TOML with `load_toml`,
  `load_rpc_config`, `load_faucet_config` and `load_start_config`.
  Problems are reported as `ConfigError`.
- **`miden_node.genesis_inputs`**: parsing and validation of genesis input
  files into `GenesisInput`, `BasicWalletInputs` and
  `BasicFungibleFaucetInputs` (`load_genesis_input`,
  `parse_genesis_input`). Problems are reported as `GenesisInputError`.
- **`miden_node.txqueue`**: an asyncio `TransactionQueue`. It verifies
  incoming transactions with a `TransactionValidator` and, at the interval
  given in `TransactionQueueOptions`, splits the queue into batches, limited
  by batch size and number of output notes, for a `BatchBuilder`. When a
  builder raises `BuildBatchError`, its transactions go back on the queue.
  A failed verification raises `AddTransactionError`. `pending()` returns
  the transactions still waiting.
- **`miden_node.rpc_api`**: `RpcApi` checks requests before forwarding them
  to a `StoreClient` or a `BlockProducerClient` that you implement.
  Malformed input raises `InvalidArgument`. `resolve_address` turns an
  `Endpoint` into a socket address.
- **`miden_node.cli`**: argument parsers for the RPC, node and faucet
  command lines (`parse_rpc_args`, `parse_node_args`,
  `parse_faucet_args`). Each returns a dataclass of the parsed options.

## Example

```python
from miden_node.digest import Digest
from miden_node.errors import ConversionError

digest = Digest.from_words([1, 2, 3, 4])
text = digest.to_hex()
assert Digest.from_hex(text) == digest

try:
    Digest.from_hex("00ff")
except ConversionError as err:
    print(err)  # Not enough data, expected 32, got 2
```

Loading a configuration file:

```python
from miden_node.config import load_rpc_config

config = load_rpc_config("miden-rpc.toml")
print(config.rpc)
```

## What this package does not do

- It installs no commands. `miden_node.cli` only parses argument lists;
  nothing here starts a node, an RPC server or a faucet.
- It has no network transport. `RpcApi` forwards to client objects that
  you supply, and `TransactionQueue` hands batches to a `BatchBuilder` that
  you supply.
- It has no store or database, and it does not create accounts, keys or
  genesis files. `genesis_inputs` only reads and checks the input file.
- It does not decode or verify transaction proofs itself. `RpcApi` is given
  the functions that do this.
- It has no faucet HTTP service.

## Requirements

Python 3.11 or later. The test suite uses pytest, pytest-asyncio and
hypothesis, available through the `test` extra.