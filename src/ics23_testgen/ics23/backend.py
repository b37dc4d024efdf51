"""Reference tree/proof backend producing ICS23 proofs over a Tendermint simple Merkle map."""

from __future__ import annotations

import bisect
import logging
from collections.abc import Mapping

from .proofs import (
    CommitmentProof,
    ExistenceProof,
    HashOp,
    InnerOp,
    LeafOp,
    LengthOp,
    NonExistenceProof,
)
from .tree import INNER_PREFIX, LEAF_PREFIX, SimpleMerkleMap

logger = logging.getLogger(__name__)

TENDERMINT_LEAF = LeafOp(
    hash=HashOp.SHA256,
    prehash_key=HashOp.NO_HASH,
    prehash_value=HashOp.SHA256,
    length=LengthOp.VAR_PROTO,
    prefix=LEAF_PREFIX,
)
"""Leaf operation matching `tree.encode_leaf` followed by `tree.leaf_hash`."""


class ProofError(Exception):
    """Raised when a proof is requested for a key that violates its precondition."""


class TendermintBackend:
    """
    Builds roots and ICS23 commitment proofs for a key-value mapping.

    The most recent tree is cached by mapping identity, so the root and the
    proof of one invocation share a single tree build.
    """

    def __init__(self) -> None:
        self._cached: tuple[Mapping[bytes, bytes], SimpleMerkleMap] | None = None

    def _tree(self, data: Mapping[bytes, bytes]) -> SimpleMerkleMap:
        if self._cached is not None and self._cached[0] is data:
            return self._cached[1]

        tree = SimpleMerkleMap(data)
        logger.debug("Built simple Merkle map over %d entries", len(tree))
        self._cached = (data, tree)
        return tree

    def build_tree(self, data: Mapping[bytes, bytes]) -> bytes:
        """Return the root hash of the mapping."""
        return self._tree(data).root

    def create_membership_proof(self, data: Mapping[bytes, bytes], key: bytes) -> CommitmentProof:
        """
        Prove that `key` maps to its value in `data`.

        Raises:
            ProofError: If `key` is not in `data`.
        """
        if key not in data:
            raise ProofError(f"cannot create membership proof if key {key.hex()} is not in map")

        return CommitmentProof(exist=self._existence_proof(data, key))

    def create_non_membership_proof(
        self, data: Mapping[bytes, bytes], key: bytes
    ) -> CommitmentProof:
        """
        Prove that `key` is absent from `data`.

        The proof carries existence proofs of the closest keys on each side.
        A side is left empty when `key` falls beyond that edge of the tree.

        Raises:
            ProofError: If `key` is in `data`.
        """
        if key in data:
            raise ProofError(f"cannot create non-membership proof if key {key.hex()} is in map")

        keys = self._tree(data).keys
        idx = bisect.bisect_left(keys, key)

        left = self._existence_proof(data, keys[idx - 1]) if idx > 0 else None
        right = self._existence_proof(data, keys[idx]) if idx < len(keys) else None

        return CommitmentProof(nonexist=NonExistenceProof(key=key, left=left, right=right))

    def _existence_proof(self, data: Mapping[bytes, bytes], key: bytes) -> ExistenceProof:
        tree = self._tree(data)

        # Each aunt becomes one inner op: the running hash goes on the side
        # opposite the aunt, and the 0x01 separator always leads.
        path = []
        for aunt in tree.aunts(tree.position(key)):
            if aunt.is_right:
                path.append(InnerOp(hash=HashOp.SHA256, prefix=INNER_PREFIX, suffix=aunt.hash))
            else:
                path.append(InnerOp(hash=HashOp.SHA256, prefix=INNER_PREFIX + aunt.hash))

        return ExistenceProof(key=key, value=data[key], leaf=TENDERMINT_LEAF, path=tuple(path))
