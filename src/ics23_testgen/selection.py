"""
Key selection at a structural position of the ordered key index.

A fixture targets one of six scenarios: an existing or a missing key, at
the left edge, in the interior, or at the right edge of the key order. Each
scenario has its own strategy, looked up in `STRATEGIES` by
`(Mode, Position)`.

Missing keys must satisfy two properties at once:

1. Absence: no key in the index matches byte for byte.
2. Placement: the key sorts before every key (LEFT), after every key
   (RIGHT), or strictly between two adjacent keys (MIDDLE).

Whatever a strategy returns is checked again against the index with a
binary search before it is handed out. A fixture whose claimed scenario does
not match the data is worse than no fixture, so every shortfall is a
`SelectionError`.

Gap exhaustion
--------------
Between two adjacent keys `lo < hi` there is a byte string strictly inside
the interval unless `hi == lo + b"\\x00"`, since `lo + b"\\x00"` is the
immediate successor of `lo` in byte-lexicographic order. Such pairs are
skipped and the next pair outward from the centre is probed. The generated
universe never produces them; hand-made indexes can.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ics23_testgen.types import SelectionError

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Whether the selected key exists in the universe."""

    EXIST = "exist"
    NONEXIST = "nonexist"

    @property
    def exists(self) -> bool:
        """True for membership fixtures."""
        return self is Mode.EXIST


class Position(Enum):
    """Structural boundary of the ordered key index."""

    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class Selection:
    """A key chosen for one (mode, position) scenario."""

    key: bytes
    mode: Mode
    position: Position

    @property
    def exists(self) -> bool:
        """True when `key` is a member of the universe."""
        return self.mode.exists


Strategy = Callable[[Sequence[bytes]], bytes]
"""Picks a key from a non-empty ordered key index."""

MISSING_LEFT_SENTINEL: Final = b"\x01\x01\x01\x01"
"""Preferred missing key below the index; kept identical to other generators."""

MISSING_RIGHT_SENTINEL: Final = b"\xff\xff\xff\xff"
"""Preferred missing key above the index; kept identical to other generators."""


def _existing_left(index: Sequence[bytes]) -> bytes:
    return index[0]


def _existing_middle(index: Sequence[bytes]) -> bytes:
    if len(index) < 3:
        raise SelectionError(
            Mode.EXIST.value,
            Position.MIDDLE.value,
            len(index),
            "insufficient data: an interior key needs at least 3 keys",
        )
    return index[len(index) // 2]


def _existing_right(index: Sequence[bytes]) -> bytes:
    return index[-1]


def _missing_left(index: Sequence[bytes]) -> bytes:
    first = index[0]

    # A proper prefix always sorts before the key it prefixes.
    for candidate in (MISSING_LEFT_SENTINEL, first[:-1]):
        if candidate < first:
            return candidate

    raise SelectionError(
        Mode.NONEXIST.value,
        Position.LEFT.value,
        len(index),
        "the first key is empty, so no key sorts before it",
    )


def _missing_right(index: Sequence[bytes]) -> bytes:
    last = index[-1]

    # Appending any byte yields a key that sorts after the original.
    for candidate in (MISSING_RIGHT_SENTINEL, last + b"\x00"):
        if candidate > last:
            return candidate

    raise SelectionError(
        Mode.NONEXIST.value,
        Position.RIGHT.value,
        len(index),
        f"no candidate sorts after the last key {last.hex()}",
    )


def gap_key(lo: bytes, hi: bytes) -> bytes | None:
    """
    Return a key strictly between `lo` and `hi`, or None if there is none.

    The first candidate replaces the last two bytes of `lo` with 0xff, which
    lands right after `lo` for typical keys. The fallback `lo + b"\\x00"` is
    the smallest key above `lo` and fails only when it equals `hi`.

    Args:
        lo: Lower bound, exclusive.
        hi: Upper bound, exclusive. Must sort after `lo`.
    """
    candidates = []
    if len(lo) >= 2:
        candidates.append(lo[:-2] + b"\xff\xff")
    candidates.append(lo + b"\x00")

    for candidate in candidates:
        if lo < candidate < hi:
            return candidate
    return None


def probe_order(pairs: int) -> Iterator[int]:
    """
    Yield every pair index in `range(pairs)`, centre first, then alternating outward.

    Example: pairs=5 yields 2, 1, 3, 0, 4.
    """
    if pairs <= 0:
        return
    center = pairs // 2
    yield center
    for offset in range(1, pairs):
        for i in (center - offset, center + offset):
            if 0 <= i < pairs:
                yield i


def _missing_middle(index: Sequence[bytes]) -> bytes:
    if len(index) < 2:
        raise SelectionError(
            Mode.NONEXIST.value,
            Position.MIDDLE.value,
            len(index),
            "insufficient data: a gap between keys needs at least 2 keys",
        )

    for i in probe_order(len(index) - 1):
        lo, hi = index[i], index[i + 1]
        candidate = gap_key(lo, hi)
        if candidate is not None:
            return candidate
        logger.debug("No key fits between adjacent keys %s and %s", lo.hex(), hi.hex())

    raise SelectionError(
        Mode.NONEXIST.value,
        Position.MIDDLE.value,
        len(index),
        "every adjacent key pair is gap-exhausted",
    )


STRATEGIES: Final[Mapping[tuple[Mode, Position], Strategy]] = {
    (Mode.EXIST, Position.LEFT): _existing_left,
    (Mode.EXIST, Position.MIDDLE): _existing_middle,
    (Mode.EXIST, Position.RIGHT): _existing_right,
    (Mode.NONEXIST, Position.LEFT): _missing_left,
    (Mode.NONEXIST, Position.MIDDLE): _missing_middle,
    (Mode.NONEXIST, Position.RIGHT): _missing_right,
}
"""Selection strategy for every scenario."""


def check_placement(index: Sequence[bytes], key: bytes, mode: Mode, position: Position) -> None:
    """
    Confirm that `key` really has the membership and rank its scenario claims.

    Raises:
        SelectionError: If `key` is present when it should be absent (or the
            reverse), or if it sorts outside the requested boundary.
    """
    rank = bisect.bisect_left(index, key)
    present = rank < len(index) and index[rank] == key

    if present != mode.exists:
        state = "present in" if present else "absent from"
        raise SelectionError(
            mode.value, position.value, len(index), f"key {key.hex()} is {state} the universe"
        )

    # Existing keys occupy ranks 0..n-1, missing keys fall into slots 0..n.
    last = len(index) - 1 if mode.exists else len(index)
    if position is Position.LEFT:
        placed = rank == 0
    elif position is Position.RIGHT:
        placed = rank == last
    else:
        placed = 0 < rank < last

    if not placed:
        raise SelectionError(
            mode.value, position.value, len(index), f"key {key.hex()} lands at rank {rank}"
        )


def select_key(index: Sequence[bytes], mode: Mode, position: Position) -> Selection:
    """
    Select the key for a (mode, position) scenario.

    Args:
        index: Keys in strictly ascending byte order.
        mode: Whether the key must exist.
        position: Where in the key order it must land.

    Returns:
        The selection, already checked against the index.

    Raises:
        SelectionError: If the scenario cannot be satisfied by this index.
    """
    if not index:
        raise SelectionError(mode.value, position.value, 0, "the key index is empty")

    key = STRATEGIES[(mode, position)](index)
    check_placement(index, key, mode, position)

    logger.debug("Selected %s %s key %s", mode.value, position.value, key.hex())
    return Selection(key=key, mode=mode, position=position)
