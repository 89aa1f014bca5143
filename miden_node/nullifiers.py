"""Nullifiers and the witnesses that prove their state in the nullifier tree."""

from __future__ import annotations

from dataclasses import dataclass

from .digest import Digest
from .errors import missing_field
from .merkle import SmtOpeningMessage, SmtProof


@dataclass(frozen=True, order=True)
class Nullifier:
    """The value that marks a note as consumed; a digest of valid felts."""

    digest: Digest

    def __post_init__(self) -> None:
        self.digest.to_felts()

    def __str__(self) -> str:
        return str(self.digest)

    def to_proto(self) -> Digest:
        return self.digest

    @classmethod
    def from_proto(cls, digest: Digest) -> Nullifier:
        """Build a nullifier, checking that every word is a field element."""
        return cls(digest)


@dataclass
class NullifierBlockInputRecord:
    """Wire form of a nullifier together with its opening in the nullifier tree."""

    nullifier: Digest | None = None
    opening: SmtOpeningMessage | None = None


@dataclass(frozen=True)
class NullifierWitness:
    """A nullifier and the sparse Merkle tree proof of its current state."""

    nullifier: Nullifier
    proof: SmtProof

    def to_proto(self) -> NullifierBlockInputRecord:
        return NullifierBlockInputRecord(
            nullifier=self.nullifier.to_proto(),
            opening=self.proof.to_proto(),
        )

    @classmethod
    def from_proto(cls, record: NullifierBlockInputRecord) -> NullifierWitness:
        entity = "NullifierBlockInputRecord"
        if record.nullifier is None:
            raise missing_field(entity, "nullifier")
        nullifier = Nullifier.from_proto(record.nullifier)
        if record.opening is None:
            raise missing_field(entity, "opening")
        return cls(nullifier, SmtProof.from_proto(record.opening))