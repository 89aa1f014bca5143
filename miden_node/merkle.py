"""Merkle paths, MMR deltas and sparse Merkle tree leaves and openings."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .convert import try_convert
from .digest import Digest
from .errors import SmtLeafError, SmtProofError, missing_field

SMT_DEPTH = 64
"""Depth of the sparse Merkle tree; an opening's path has this many nodes."""

Word = tuple[int, int, int, int]


def _checked_digest(digest: Digest) -> Digest:
    digest.to_felts()
    return digest


def _leaf_index(key: Digest) -> int:
    # The most significant felt of a key selects its leaf.
    return key.d3


# MERKLE PATH
# ------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class MerklePath:
    """The sibling nodes from a leaf up to the root."""

    nodes: tuple[Digest, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))

    @property
    def depth(self) -> int:
        return len(self.nodes)

    def to_proto(self) -> list[Digest]:
        """Return the siblings as sent over the wire."""
        return list(self.nodes)

    @classmethod
    def from_proto(cls, siblings: Iterable[Digest]) -> MerklePath:
        """Build a path from wire siblings, checking each is a valid digest."""
        return cls(tuple(try_convert(siblings, _checked_digest)))


# MMR DELTA
# ------------------------------------------------------------------------------------------------


@dataclass
class MmrDeltaMessage:
    """Wire form of an MMR delta."""

    forest: int = 0
    data: list[Digest] = field(default_factory=list)


@dataclass(frozen=True)
class MmrDelta:
    """Changes to a Merkle mountain range."""

    forest: int
    data: tuple[Digest, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", tuple(self.data))

    def to_proto(self) -> MmrDeltaMessage:
        return MmrDeltaMessage(self.forest, list(self.data))

    @classmethod
    def from_proto(cls, message: MmrDeltaMessage) -> MmrDelta:
        return cls(message.forest, tuple(try_convert(message.data, _checked_digest)))


# SMT LEAF
# ------------------------------------------------------------------------------------------------


@dataclass
class SmtLeafEntryMessage:
    """Wire form of a key/value pair stored in a leaf."""

    key: Digest | None = None
    value: Digest | None = None


@dataclass
class SmtLeafMessage:
    """Wire form of a leaf; at most one of the three variants is set."""

    empty: int | None = None
    single: SmtLeafEntryMessage | None = None
    multiple: list[SmtLeafEntryMessage] | None = None

    def __post_init__(self) -> None:
        chosen = [v for v in (self.empty, self.single, self.multiple) if v is not None]
        if len(chosen) > 1:
            raise ValueError("only one of empty, single and multiple may be set")


@dataclass
class SmtOpeningMessage:
    """Wire form of a leaf opening."""

    path: list[Digest] | None = None
    leaf: SmtLeafMessage | None = None


def entry_from_proto(message: SmtLeafEntryMessage) -> tuple[Digest, Word]:
    """Convert a wire entry into a key and a word."""
    if message.key is None:
        raise missing_field("SmtLeafEntry", "key")
    key = _checked_digest(message.key)
    if message.value is None:
        raise missing_field("SmtLeafEntry", "value")
    return key, message.value.to_felts()


def entry_to_proto(key: Digest, value: Sequence[int]) -> SmtLeafEntryMessage:
    """Convert a key and a word into a wire entry."""
    return SmtLeafEntryMessage(key=key, value=Digest.from_words(value))


@dataclass(frozen=True)
class SmtLeaf:
    """A leaf of the sparse Merkle tree: empty, one entry, or several."""

    index: int
    entries: tuple[tuple[Digest, Word], ...] = ()

    @classmethod
    def empty(cls, index: int) -> SmtLeaf:
        return cls(index)

    @classmethod
    def single(cls, key: Digest, value: Sequence[int]) -> SmtLeaf:
        return cls(_leaf_index(key), ((key, tuple(value)),))

    @classmethod
    def multiple(cls, entries: Iterable[tuple[Digest, Sequence[int]]]) -> SmtLeaf:
        """Build a leaf of two or more entries whose keys share one leaf index."""
        normalized = tuple((key, tuple(value)) for key, value in entries)
        if len(normalized) < 2:
            raise SmtLeafError(
                f"multiple leaf requires 2 or more entries, got {len(normalized)}"
            )
        index = _leaf_index(normalized[0][0])
        for key, _ in normalized[1:]:
            if _leaf_index(key) != index:
                raise SmtLeafError(f"inconsistent keys: {normalized[0][0]} and {key}")
        return cls(index, normalized)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def to_proto(self) -> SmtLeafMessage:
        if not self.entries:
            return SmtLeafMessage(empty=self.index)
        if len(self.entries) == 1:
            return SmtLeafMessage(single=entry_to_proto(*self.entries[0]))
        return SmtLeafMessage(multiple=[entry_to_proto(k, v) for k, v in self.entries])

    @classmethod
    def from_proto(cls, message: SmtLeafMessage) -> SmtLeaf:
        if message.empty is not None:
            return cls.empty(message.empty)
        if message.single is not None:
            return cls.single(*entry_from_proto(message.single))
        if message.multiple is not None:
            return cls.multiple(try_convert(message.multiple, entry_from_proto))
        raise missing_field("SmtLeaf", "leaf")


# SMT PROOF
# ------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class SmtProof:
    """An opening of one leaf: the leaf and its path to the root."""

    path: MerklePath
    leaf: SmtLeaf

    def __post_init__(self) -> None:
        if self.path.depth != SMT_DEPTH:
            raise SmtProofError(
                f"invalid path length {self.path.depth}, expected {SMT_DEPTH}"
            )

    def to_proto(self) -> SmtOpeningMessage:
        return SmtOpeningMessage(path=self.path.to_proto(), leaf=self.leaf.to_proto())

    @classmethod
    def from_proto(cls, message: SmtOpeningMessage) -> SmtProof:
        if message.path is None:
            raise missing_field("SmtOpening", "path")
        path = MerklePath.from_proto(message.path)
        if message.leaf is None:
            raise missing_field("SmtOpening", "leaf")
        leaf = SmtLeaf.from_proto(message.leaf)
        return cls(path, leaf)