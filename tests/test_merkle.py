import pytest

from miden_node.digest import MODULUS, Digest
from miden_node.errors import MissingFieldError, NotAValidFelt, SmtLeafError, SmtProofError
from miden_node.merkle import (
    SMT_DEPTH,
    MerklePath,
    MmrDelta,
    MmrDeltaMessage,
    SmtLeaf,
    SmtLeafEntryMessage,
    SmtLeafMessage,
    SmtOpeningMessage,
    SmtProof,
    entry_from_proto,
    entry_to_proto,
)

KEY = Digest(1, 2, 3, 4)
VALUE = (5, 6, 7, 8)


def full_path():
    return MerklePath(tuple(Digest(i, 0, 0, 0) for i in range(SMT_DEPTH)))


def test_merkle_path_round_trip():
    path = MerklePath((Digest(1, 1, 1, 1), Digest(2, 2, 2, 2)))
    assert MerklePath.from_proto(path.to_proto()) == path
    assert path.depth == 2


def test_merkle_path_rejects_invalid_felt():
    with pytest.raises(NotAValidFelt):
        MerklePath.from_proto([Digest(MODULUS, 0, 0, 0)])


def test_mmr_delta_round_trip():
    delta = MmrDelta(7, (Digest(1, 2, 3, 4),))
    message = delta.to_proto()
    assert message == MmrDeltaMessage(7, [Digest(1, 2, 3, 4)])
    assert MmrDelta.from_proto(message) == delta


def test_mmr_delta_rejects_invalid_felt():
    with pytest.raises(NotAValidFelt):
        MmrDelta.from_proto(MmrDeltaMessage(1, [Digest(0, MODULUS, 0, 0)]))


def test_entry_round_trip():
    assert entry_from_proto(entry_to_proto(KEY, VALUE)) == (KEY, VALUE)


@pytest.mark.parametrize(
    "message, field_name",
    [(SmtLeafEntryMessage(value=Digest()), "key"), (SmtLeafEntryMessage(key=KEY), "value")],
)
def test_entry_missing_fields(message, field_name):
    with pytest.raises(MissingFieldError) as info:
        entry_from_proto(message)
    assert info.value.field_name == field_name


def test_single_leaf_index_from_key():
    leaf = SmtLeaf.single(KEY, VALUE)
    assert leaf.index == KEY.d3
    assert leaf.entries == ((KEY, VALUE),)


@pytest.mark.parametrize(
    "leaf",
    [
        SmtLeaf.empty(99),
        SmtLeaf.single(KEY, VALUE),
        SmtLeaf.multiple([(KEY, VALUE), (Digest(9, 9, 9, 4), (1, 1, 1, 1))]),
    ],
)
def test_leaf_round_trip(leaf):
    assert SmtLeaf.from_proto(leaf.to_proto()) == leaf


def test_empty_leaf_message():
    message = SmtLeaf.empty(3).to_proto()
    assert message.empty == 3
    assert message.single is None and message.multiple is None


def test_multiple_requires_two_entries():
    with pytest.raises(SmtLeafError):
        SmtLeaf.multiple([(KEY, VALUE)])
    with pytest.raises(SmtLeafError):
        SmtLeaf.from_proto(SmtLeafMessage(multiple=[]))


def test_multiple_rejects_inconsistent_keys():
    with pytest.raises(SmtLeafError):
        SmtLeaf.multiple([(KEY, VALUE), (Digest(1, 2, 3, 5), VALUE)])


def test_leaf_missing_variant():
    with pytest.raises(MissingFieldError) as info:
        SmtLeaf.from_proto(SmtLeafMessage())
    assert info.value.field_name == "leaf"


def test_leaf_message_single_variant_only():
    with pytest.raises(ValueError):
        SmtLeafMessage(empty=1, single=entry_to_proto(KEY, VALUE))


def test_proof_round_trip():
    proof = SmtProof(full_path(), SmtLeaf.single(KEY, VALUE))
    assert SmtProof.from_proto(proof.to_proto()) == proof


def test_proof_rejects_short_path():
    with pytest.raises(SmtProofError):
        SmtProof(MerklePath((Digest(),)), SmtLeaf.empty(0))
    with pytest.raises(SmtProofError):
        SmtProof.from_proto(SmtOpeningMessage(path=[], leaf=SmtLeaf.empty(0).to_proto()))


@pytest.mark.parametrize(
    "message, field_name",
    [
        (SmtOpeningMessage(leaf=SmtLeafMessage(empty=0)), "path"),
        (SmtOpeningMessage(path=[Digest()] * SMT_DEPTH), "leaf"),
    ],
)
def test_proof_missing_fields(message, field_name):
    with pytest.raises(MissingFieldError) as info:
        SmtProof.from_proto(message)
    assert info.value.field_name == field_name