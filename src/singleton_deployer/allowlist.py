"""
Allowlist commitments: a keccak Merkle tree over hashed allowlist entries, with inclusion proofs that
verify against the root using sorted-pair hashing (OpenZeppelin `MerkleProof` compatible).

Tree construction follows the conventions of the `merkletreejs` library with `sortLeaves` and
`sortPairs` enabled:
    - leaves are sorted before the tree is built, so the root does not depend on input order
    - each parent is keccak(min(left, right) ‖ max(left, right))
    - an unpaired node at the end of a layer is carried up to the next layer unchanged, and
      contributes no sibling to the proofs passing through it
"""

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pydantic
from eth_abi.exceptions import EncodingError
from eth_abi.packed import encode_packed
from eth_utils.address import is_address
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from singleton_deployer.exceptions.allowlist import (
    EmptyAllowlist,
    EntryNotFound,
    InvalidAllowlistEntry,
    InvalidAllowlistFile,
)
from singleton_deployer.functions import get_checksum_address

LEAF_TYPES: tuple[str, ...] = ("address", "uint256")
MAX_TOKEN_ID = 2**256 - 1


@dataclass(slots=True, frozen=True)
class AllowlistEntry:
    address: str
    token_id: int


def encode_leaf(types: Sequence[str], values: Sequence[Any]) -> HexBytes:
    """
    Hash the Solidity packed encoding of `values`, equivalent to `keccak256(abi.encodePacked(...))`.
    """

    try:
        encoded = encode_packed(list(types), list(values))
    except (EncodingError, TypeError, ValueError) as exc:
        raise InvalidAllowlistEntry(values=tuple(values), reason=str(exc)) from exc
    return HexBytes(keccak(encoded))


def get_leaf(entry: AllowlistEntry) -> HexBytes:
    return encode_leaf(LEAF_TYPES, (entry.address.lower(), entry.token_id))


def _hash_pair(a: bytes, b: bytes) -> HexBytes:
    return HexBytes(keccak(a + b) if a <= b else keccak(b + a))


class CommitmentTree:
    def __init__(self, leaves: Iterable[bytes]) -> None:
        unique_leaves = sorted({bytes(leaf) for leaf in leaves})
        if not unique_leaves:
            raise EmptyAllowlist

        layers: list[list[HexBytes]] = [[HexBytes(leaf) for leaf in unique_leaves]]
        while len(layers[-1]) > 1:
            nodes = layers[-1]
            parents: list[HexBytes] = []
            for i in range(0, len(nodes), 2):
                if i + 1 == len(nodes):
                    parents.append(nodes[i])
                else:
                    parents.append(_hash_pair(nodes[i], nodes[i + 1]))
            layers.append(parents)

        self._layers = layers
        self._leaf_index = {bytes(leaf): index for index, leaf in enumerate(layers[0])}

    def __contains__(self, leaf: object) -> bool:
        return isinstance(leaf, bytes) and bytes(leaf) in self._leaf_index

    def __len__(self) -> int:
        return len(self._layers[0])

    @property
    def depth(self) -> int:
        return len(self._layers) - 1

    @property
    def layers(self) -> list[list[HexBytes]]:
        return [list(layer) for layer in self._layers]

    @property
    def leaves(self) -> list[HexBytes]:
        return list(self._layers[0])

    @property
    def root(self) -> HexBytes:
        return self._layers[-1][0]

    def get_proof(self, leaf: bytes) -> list[HexBytes]:
        """
        Collect the sibling hashes on the path from `leaf` to the root.
        """

        try:
            index = self._leaf_index[bytes(leaf)]
        except KeyError:
            raise EntryNotFound(leaf=HexBytes(leaf).to_0x_hex()) from None

        proof: list[HexBytes] = []
        for layer in self._layers[:-1]:
            sibling_index = index - 1 if index % 2 else index + 1
            if sibling_index < len(layer):
                proof.append(layer[sibling_index])
            index //= 2

        return proof


def build_tree(entries: Iterable[AllowlistEntry]) -> CommitmentTree:
    return CommitmentTree(get_leaf(entry) for entry in entries)


def generate_proof(tree: CommitmentTree, entry: AllowlistEntry) -> list[HexBytes]:
    return tree.get_proof(get_leaf(entry))


def verify_proof(leaf: bytes, proof: Iterable[bytes], root: bytes) -> bool:
    computed = HexBytes(leaf)
    for sibling in proof:
        computed = _hash_pair(computed, sibling)
    return computed == HexBytes(root)


class _SnapshotEntry(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(populate_by_name=True)

    address: str
    token_id: int = pydantic.Field(alias="tokenId", ge=0, le=MAX_TOKEN_ID)

    @pydantic.field_validator("address")
    @classmethod
    def validate_address(cls, address: str) -> str:
        if not is_address(address):
            msg = f"{address} is not a valid address"
            raise ValueError(msg)
        return get_checksum_address(address)


_snapshot_adapter = pydantic.TypeAdapter(list[_SnapshotEntry])


def load_allowlist(path: Path) -> list[AllowlistEntry]:
    """
    Read an allowlist snapshot: a JSON array of `{"address": ..., "tokenId": ...}` objects.
    """

    try:
        snapshot = _snapshot_adapter.validate_python(json.loads(path.read_text()))
    except (OSError, json.JSONDecodeError, pydantic.ValidationError) as exc:
        raise InvalidAllowlistFile(message=f"Could not read allowlist {path}: {exc}") from exc

    return [AllowlistEntry(address=entry.address, token_id=entry.token_id) for entry in snapshot]
