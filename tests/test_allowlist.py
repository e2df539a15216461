import json
from pathlib import Path

import hypothesis
import hypothesis.strategies
import pytest
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from singleton_deployer.allowlist import (
    AllowlistEntry,
    CommitmentTree,
    build_tree,
    encode_leaf,
    generate_proof,
    get_leaf,
    load_allowlist,
    verify_proof,
)
from singleton_deployer.exceptions import (
    EmptyAllowlist,
    EntryNotFound,
    InvalidAllowlistEntry,
    InvalidAllowlistFile,
)
from singleton_deployer.functions import get_checksum_address

ENTRY_A = AllowlistEntry(address="0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa1", token_id=5)
ENTRY_B = AllowlistEntry(address="0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb2", token_id=9)
ENTRY_C = AllowlistEntry(address="0xccccccccccccccccccccccccccccccccccccccc3", token_id=0)

entry_strategy = hypothesis.strategies.builds(
    AllowlistEntry,
    address=hypothesis.strategies.binary(min_size=20, max_size=20).map(
        lambda address: get_checksum_address(address)
    ),
    token_id=hypothesis.strategies.integers(min_value=0, max_value=2**256 - 1),
)


def _sorted_pair_hash(a: bytes, b: bytes) -> HexBytes:
    return HexBytes(keccak(min(a, b) + max(a, b)))


def test_leaf_is_packed_address_and_token_id():
    # keccak256(abi.encodePacked(address, uint256)): 20 address bytes followed by a 32 byte word
    expected = keccak(bytes.fromhex("aa" * 19 + "a1") + (5).to_bytes(32, "big"))
    assert get_leaf(ENTRY_A) == HexBytes(expected)


def test_leaf_ignores_address_case():
    checksummed = AllowlistEntry(address=get_checksum_address(ENTRY_A.address), token_id=5)
    assert get_leaf(checksummed) == get_leaf(ENTRY_A)


def test_encode_leaf_for_other_entry_shapes():
    assert encode_leaf(["uint256"], [42]) == HexBytes(keccak((42).to_bytes(32, "big")))
    assert encode_leaf(["address"], [ENTRY_B.address]) == HexBytes(
        keccak(bytes.fromhex("bb" * 19 + "b2"))
    )


def test_two_leaf_tree():
    h1 = get_leaf(ENTRY_A)
    h2 = get_leaf(ENTRY_B)

    tree = build_tree([ENTRY_A, ENTRY_B])
    assert tree.root == _sorted_pair_hash(h1, h2)
    assert tree.depth == 1
    assert len(tree) == 2

    swapped = build_tree([ENTRY_B, ENTRY_A])
    assert swapped.root == tree.root

    assert generate_proof(tree, ENTRY_A) == [h2]
    assert generate_proof(tree, ENTRY_B) == [h1]


def test_single_leaf_tree():
    tree = build_tree([ENTRY_A])
    assert tree.root == get_leaf(ENTRY_A)
    assert tree.depth == 0
    assert generate_proof(tree, ENTRY_A) == []
    assert verify_proof(get_leaf(ENTRY_A), [], tree.root)


def test_odd_node_is_promoted_unpaired():
    leaves = sorted([get_leaf(ENTRY_A), get_leaf(ENTRY_B), get_leaf(ENTRY_C)])
    tree = build_tree([ENTRY_C, ENTRY_A, ENTRY_B])

    assert tree.leaves == leaves
    assert tree.layers[1] == [_sorted_pair_hash(leaves[0], leaves[1]), leaves[2]]
    assert tree.root == _sorted_pair_hash(_sorted_pair_hash(leaves[0], leaves[1]), leaves[2])
    assert tree.depth == 2

    # The promoted leaf has no sibling on the first layer
    assert tree.get_proof(leaves[2]) == [_sorted_pair_hash(leaves[0], leaves[1])]
    assert tree.get_proof(leaves[0]) == [leaves[1], leaves[2]]


def test_duplicate_entries_are_committed_once():
    tree = build_tree([ENTRY_A, ENTRY_B, ENTRY_A])
    assert len(tree) == 2
    assert tree.root == build_tree([ENTRY_A, ENTRY_B]).root


def test_membership():
    tree = build_tree([ENTRY_A, ENTRY_B])
    assert get_leaf(ENTRY_A) in tree
    assert get_leaf(ENTRY_C) not in tree
    assert "not bytes" not in tree


def test_non_member_has_no_proof():
    tree = build_tree([ENTRY_A, ENTRY_B])
    with pytest.raises(EntryNotFound) as exc_info:
        generate_proof(tree, ENTRY_C)
    assert exc_info.value.leaf == get_leaf(ENTRY_C).to_0x_hex()

    with pytest.raises(EntryNotFound):
        generate_proof(tree, AllowlistEntry(address=ENTRY_A.address, token_id=6))


def test_empty_allowlist():
    with pytest.raises(EmptyAllowlist):
        build_tree([])
    with pytest.raises(EmptyAllowlist):
        CommitmentTree([])


def test_token_id_outside_uint256_range():
    too_large = AllowlistEntry(address=ENTRY_A.address, token_id=2**256)
    with pytest.raises(InvalidAllowlistEntry):
        get_leaf(too_large)
    with pytest.raises(InvalidAllowlistEntry):
        build_tree([ENTRY_B, too_large])

    largest = AllowlistEntry(address=ENTRY_A.address, token_id=2**256 - 1)
    assert get_leaf(largest) == HexBytes(
        keccak(bytes.fromhex("aa" * 19 + "a1") + b"\xff" * 32)
    )


def test_verify_rejects_wrong_root_or_proof():
    tree = build_tree([ENTRY_A, ENTRY_B, ENTRY_C])
    proof = generate_proof(tree, ENTRY_A)

    assert verify_proof(get_leaf(ENTRY_A), proof, tree.root)
    assert not verify_proof(get_leaf(ENTRY_A), proof, b"\x00" * 32)
    assert not verify_proof(get_leaf(ENTRY_A), proof[:-1], tree.root)
    assert not verify_proof(get_leaf(ENTRY_C), proof, tree.root)


@hypothesis.given(
    entries=hypothesis.strategies.lists(entry_strategy, min_size=1, max_size=40),
    data=hypothesis.strategies.data(),
)
def test_root_does_not_depend_on_entry_order(
    entries: list[AllowlistEntry],
    data: hypothesis.strategies.DataObject,
):
    shuffled = data.draw(hypothesis.strategies.permutations(entries))
    assert build_tree(entries).root == build_tree(shuffled).root


@hypothesis.given(entries=hypothesis.strategies.lists(entry_strategy, min_size=1, max_size=40))
def test_every_proof_reproduces_the_root(entries: list[AllowlistEntry]):
    tree = build_tree(entries)

    for entry in entries:
        proof = generate_proof(tree, entry)
        assert len(proof) <= tree.depth
        assert verify_proof(get_leaf(entry), proof, tree.root)


@pytest.mark.parametrize("exponent", range(7))
def test_full_tree_proofs_have_tree_depth(exponent: int):
    entries = [
        AllowlistEntry(address="0x000000000000000000000000000000000000dEaD", token_id=token_id)
        for token_id in range(2**exponent)
    ]
    tree = build_tree(entries)

    assert tree.depth == exponent
    for entry in entries:
        assert len(generate_proof(tree, entry)) == exponent


def test_load_allowlist(tmp_path: Path):
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_text(
        json.dumps(
            [
                {"address": ENTRY_A.address, "tokenId": 5},
                {"address": ENTRY_B.address, "tokenId": "9"},
            ]
        )
    )

    entries = load_allowlist(snapshot)
    assert entries == [
        AllowlistEntry(address=get_checksum_address(ENTRY_A.address), token_id=5),
        AllowlistEntry(address=get_checksum_address(ENTRY_B.address), token_id=9),
    ]
    assert build_tree(entries).root == build_tree([ENTRY_A, ENTRY_B]).root


@pytest.mark.parametrize(
    "contents",
    [
        "not json",
        json.dumps([{"address": "0x1234", "tokenId": 1}]),
        json.dumps([{"address": ENTRY_A.address}]),
        json.dumps([{"address": ENTRY_A.address, "tokenId": -1}]),
        json.dumps([{"address": ENTRY_A.address, "tokenId": 2**256}]),
    ],
)
def test_load_invalid_allowlist(tmp_path: Path, contents: str):
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_text(contents)
    with pytest.raises(InvalidAllowlistFile):
        load_allowlist(snapshot)


def test_load_missing_allowlist(tmp_path: Path):
    with pytest.raises(InvalidAllowlistFile):
        load_allowlist(tmp_path / "missing.json")
