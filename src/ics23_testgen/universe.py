"""
Deterministic key-value universe and its ordered key index.

Every entry is derived from its position alone::

    key_i   = letters(sha256(b"ics23-testgen/key"   || uint64_be(i)))
    value_i = letters(sha256(b"ics23-testgen/value" || uint64_be(i)))

where `letters` maps each of the first 20 digest bytes `b` to
`LETTERS[b % 52]`. Any implementation can rebuild the same universe from the
size alone, and the universe of size n is the first n entries of any larger
one.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from typing import Final

from ics23_testgen.config import MAX_UNIVERSE_SIZE
from ics23_testgen.types import ArgumentError, UniverseError

logger = logging.getLogger(__name__)

LETTERS: Final = b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
"""Alphabet of generated keys and values."""

ENTRY_LENGTH: Final = 20
"""Length in bytes of every generated key and value."""

KEY_LABEL: Final = b"ics23-testgen/key"
VALUE_LABEL: Final = b"ics23-testgen/value"

Universe = dict[bytes, bytes]
"""Key to value mapping that proofs are built over."""


def derive_entry(label: bytes, index: int) -> bytes:
    """Derive the 20-letter string for entry `index` under `label`."""
    digest = hashlib.sha256(label + index.to_bytes(8, "big")).digest()
    return bytes(LETTERS[b % len(LETTERS)] for b in digest[:ENTRY_LENGTH])


def build_universe(size: int) -> Universe:
    """
    Build the universe of `size` entries.

    Args:
        size: Number of entries, between 1 and `MAX_UNIVERSE_SIZE`.

    Returns:
        Mapping with exactly `size` distinct keys, in generation order.

    Raises:
        ArgumentError: If `size` is not an int in the supported range.
        UniverseError: If two derived keys collide.
    """
    # bool is an int subclass but never a meaningful size.
    if not isinstance(size, int) or isinstance(size, bool):
        raise ArgumentError(f"universe size must be an integer, got {type(size).__name__}")
    if not 1 <= size <= MAX_UNIVERSE_SIZE:
        raise ArgumentError(f"universe size must be between 1 and {MAX_UNIVERSE_SIZE}, got {size}")

    universe: Universe = {}
    for i in range(size):
        key = derive_entry(KEY_LABEL, i)
        if key in universe:
            raise UniverseError(
                f"derived key {key.hex()} for entry {i} collides with an earlier entry"
            )
        universe[key] = derive_entry(VALUE_LABEL, i)

    logger.debug("Built universe of %d entries", size)
    return universe


def sorted_keys(universe: Mapping[bytes, bytes]) -> tuple[bytes, ...]:
    """Return the keys of `universe` in ascending byte-lexicographic order."""
    # Python compares bytes lexicographically by unsigned byte value,
    # with a proper prefix sorting first.
    return tuple(sorted(universe))
