"""Account identifiers, summaries, updates and input records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .digest import Digest, is_valid_felt
from .errors import NotAValidFelt, missing_field
from .merkle import MerklePath


def _checked_digest(digest: Digest) -> Digest:
    digest.to_felts()
    return digest


@dataclass(frozen=True, order=True)
class AccountId:
    """An account identifier; a single field element."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or not is_valid_felt(self.value):
            raise NotAValidFelt()

    def __str__(self) -> str:
        return f"0x{self.value:016x}"

    @classmethod
    def from_proto(cls, value: int) -> AccountId:
        return cls(value)

    def to_proto(self) -> int:
        return self.value


# WIRE MESSAGES
# ------------------------------------------------------------------------------------------------


@dataclass
class AccountBlockInputRecord:
    """Wire form of an account's state and proof for block building."""

    account_id: int | None = None
    account_hash: Digest | None = None
    proof: list[Digest] | None = None


@dataclass
class AccountTransactionInputRecord:
    """Wire form of an account's state for transaction verification."""

    account_id: int | None = None
    account_hash: Digest | None = None


@dataclass
class AccountUpdate:
    """Wire form of an account update."""

    account_id: int | None = None
    account_hash: Digest | None = None
    details: bytes | None = None


# DOMAIN TYPES
# ------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class AccountSummary:
    account_id: AccountId
    account_hash: Digest
    block_num: int

    def to_proto(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id.to_proto(),
            "account_hash": self.account_hash,
            "block_num": self.block_num,
        }


@dataclass(frozen=True)
class AccountInfo:
    """An account summary with the serialized account, if public."""

    summary: AccountSummary
    details: bytes | None = None

    def to_proto(self) -> dict[str, Any]:
        return {"summary": self.summary.to_proto(), "details": self.details}


@dataclass(frozen=True)
class AccountUpdateDetails:
    """An account's new state hash with its serialized changes, if public."""

    account_id: AccountId
    final_state_hash: Digest
    details: bytes | None = None

    def to_proto(self) -> AccountUpdate:
        return AccountUpdate(
            account_id=self.account_id.to_proto(),
            account_hash=self.final_state_hash,
            details=self.details,
        )


@dataclass(frozen=True)
class AccountInputRecord:
    """An account's hash and its Merkle path in the account tree."""

    account_id: AccountId
    account_hash: Digest
    proof: MerklePath

    def to_proto(self) -> AccountBlockInputRecord:
        return AccountBlockInputRecord(
            account_id=self.account_id.to_proto(),
            account_hash=self.account_hash,
            proof=self.proof.to_proto(),
        )

    @classmethod
    def from_proto(cls, record: AccountBlockInputRecord) -> AccountInputRecord:
        entity = "AccountBlockInputRecord"
        if record.account_id is None:
            raise missing_field(entity, "account_id")
        account_id = AccountId.from_proto(record.account_id)
        if record.account_hash is None:
            raise missing_field(entity, "account_hash")
        account_hash = _checked_digest(record.account_hash)
        if record.proof is None:
            raise missing_field(entity, "proof")
        return cls(account_id, account_hash, MerklePath.from_proto(record.proof))


@dataclass(frozen=True)
class AccountState:
    """An account and its hash in the store; no hash means a new account."""

    account_id: AccountId
    account_hash: Digest | None = None

    def __str__(self) -> str:
        account_hash = "None" if self.account_hash is None else str(self.account_hash)
        return f"{{ account_id: {self.account_id}, account_hash: {account_hash} }}"

    @classmethod
    def from_record(cls, record: AccountTransactionInputRecord) -> AccountState:
        """Read a record; an all-zero hash marks an account not yet stored."""
        entity = "AccountTransactionInputRecord"
        if record.account_id is None:
            raise missing_field(entity, "account_id")
        account_id = AccountId.from_proto(record.account_id)
        if record.account_hash is None:
            raise missing_field(entity, "account_hash")
        account_hash = _checked_digest(record.account_hash)
        return cls(account_id, None if account_hash == Digest() else account_hash)

    def to_record(self) -> AccountTransactionInputRecord:
        return AccountTransactionInputRecord(
            account_id=self.account_id.to_proto(),
            account_hash=self.account_hash,
        )

    @classmethod
    def from_update(cls, update: AccountUpdate) -> AccountState:
        if update.account_id is None:
            raise missing_field("AccountUpdate", "account_id")
        account_id = AccountId.from_proto(update.account_id)
        account_hash = None if update.account_hash is None else _checked_digest(update.account_hash)
        return cls(account_id, account_hash)