"""Block headers and their wire form."""

from __future__ import annotations

from dataclasses import dataclass, fields

from .digest import MODULUS, Digest, is_valid_felt
from .errors import NotAValidFelt, missing_field

_U32_LIMIT = 2**32

_DIGEST_FIELDS = (
    "prev_hash",
    "chain_root",
    "account_root",
    "nullifier_root",
    "note_root",
    "batch_root",
    "proof_hash",
)


@dataclass
class BlockHeaderMessage:
    """Wire form of a block header."""

    prev_hash: Digest | None = None
    block_num: int = 0
    chain_root: Digest | None = None
    account_root: Digest | None = None
    nullifier_root: Digest | None = None
    note_root: Digest | None = None
    batch_root: Digest | None = None
    proof_hash: Digest | None = None
    version: int = 0
    timestamp: int = 0


@dataclass(frozen=True)
class BlockHeader:
    """The header of a block; version and timestamp are field elements."""

    prev_hash: Digest
    block_num: int
    chain_root: Digest
    account_root: Digest
    nullifier_root: Digest
    note_root: Digest
    batch_root: Digest
    proof_hash: Digest
    version: int
    timestamp: int

    def __post_init__(self) -> None:
        for name in _DIGEST_FIELDS:
            getattr(self, name).to_felts()
        if not 0 <= self.block_num < _U32_LIMIT:
            raise ValueError(f"block_num must fit in 32 bits, got {self.block_num}")
        if not is_valid_felt(self.version) or not is_valid_felt(self.timestamp):
            raise NotAValidFelt()

    def to_proto(self) -> BlockHeaderMessage:
        """Return the wire form; the version must fit in 32 bits."""
        if self.version >= _U32_LIMIT:
            raise ValueError("Failed to convert BlockHeader.version into u32")
        return BlockHeaderMessage(
            **{f.name: getattr(self, f.name) for f in fields(self)}
        )

    @classmethod
    def from_proto(cls, message: BlockHeaderMessage) -> BlockHeader:
        digests = {}
        for name in _DIGEST_FIELDS:
            value = getattr(message, name)
            if value is None:
                raise missing_field("BlockHeader", name)
            value.to_felts()
            digests[name] = value
        if message.timestamp >= MODULUS:
            raise ValueError("timestamp value is greater than or equal to the field modulus")
        return cls(
            block_num=message.block_num,
            version=message.version,
            timestamp=message.timestamp,
            **digests,
        )