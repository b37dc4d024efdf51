"""
Tendermint simple Merkle map.

Entries are sorted by key and each one becomes a leaf payload::

    uvarint(len(key)) || key || uvarint(32) || sha256(value)

Hashes carry a one-byte domain separator (RFC 6962 style)::

    leaf_hash(x)     = sha256(0x00 || x)
    inner_hash(l, r) = sha256(0x01 || l || r)

The tree is not padded. A list of n > 1 leaves splits at the largest power
of two strictly below n, so the left subtree is always complete::

    n = 5:           root
                   /      \\
                 o          leaf4
               /   \\
             o       o
            / \\     / \\
          l0  l1  l2  l3
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .varint import encode_varint

LEAF_PREFIX = b"\x00"
"""Domain separator for leaf hashes."""

INNER_PREFIX = b"\x01"
"""Domain separator for inner node hashes."""


def leaf_hash(payload: bytes) -> bytes:
    """Hash a leaf payload."""
    return hashlib.sha256(LEAF_PREFIX + payload).digest()


def inner_hash(left: bytes, right: bytes) -> bytes:
    """Hash two child nodes together."""
    return hashlib.sha256(INNER_PREFIX + left + right).digest()


def get_split_point(length: int) -> int:
    """
    Return the largest power of two strictly less than `length`.

    Examples: 2->1, 3->2, 4->2, 5->4, 8->4, 9->8.
    """
    if length < 2:
        raise ValueError(f"Cannot split a list of {length} leaves")
    return 1 << ((length - 1).bit_length() - 1)


def encode_leaf(key: bytes, value: bytes) -> bytes:
    """Build the leaf payload for one entry; the value is pre-hashed."""
    value_hash = hashlib.sha256(value).digest()
    return encode_varint(len(key)) + key + encode_varint(len(value_hash)) + value_hash


def hash_from_leaves(leaves: Sequence[bytes]) -> bytes:
    """Compute the root over already-hashed leaves."""
    if not leaves:
        return hashlib.sha256(b"").digest()
    if len(leaves) == 1:
        return leaves[0]

    k = get_split_point(len(leaves))
    return inner_hash(hash_from_leaves(leaves[:k]), hash_from_leaves(leaves[k:]))


@dataclass(frozen=True, slots=True)
class Aunt:
    """A sibling hash met while walking from a leaf to the root."""

    hash: bytes
    is_right: bool
    """True when the sibling sits to the right of the path."""


class SimpleMerkleMap:
    """
    Merkle tree over a key-value mapping.

    The tree is built once at construction. Lookups by key resolve to the
    leaf position in key order.
    """

    def __init__(self, data: Mapping[bytes, bytes]) -> None:
        self._keys: tuple[bytes, ...] = tuple(sorted(data))
        self._positions = {key: i for i, key in enumerate(self._keys)}
        self._leaves = [leaf_hash(encode_leaf(key, data[key])) for key in self._keys]
        self._root = hash_from_leaves(self._leaves)

    @property
    def keys(self) -> tuple[bytes, ...]:
        """All keys in ascending byte order."""
        return self._keys

    @property
    def root(self) -> bytes:
        """The 32-byte root hash."""
        return self._root

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def position(self, key: bytes) -> int:
        """
        Return the leaf position of `key`.

        Raises:
            KeyError: If the key is not in the tree.
        """
        return self._positions[key]

    def aunts(self, index: int) -> list[Aunt]:
        """
        Return the sibling hashes from the leaf at `index` up to the root.

        Raises:
            IndexError: If `index` is out of range.
        """
        if not 0 <= index < len(self._leaves):
            raise IndexError(f"Leaf index {index} out of range for {len(self._leaves)} leaves")
        return _aunts(self._leaves, index)


def _aunts(leaves: Sequence[bytes], index: int) -> list[Aunt]:
    if len(leaves) == 1:
        return []

    k = get_split_point(len(leaves))
    if index < k:
        return _aunts(leaves[:k], index) + [Aunt(hash_from_leaves(leaves[k:]), is_right=True)]
    return _aunts(leaves[k:], index - k) + [Aunt(hash_from_leaves(leaves[:k]), is_right=False)]
