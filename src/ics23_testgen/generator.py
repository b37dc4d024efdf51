"""End-to-end fixture generation: build, index, select, prove, encode."""

from __future__ import annotations

import logging

from ics23_testgen.config import DEFAULT_UNIVERSE_SIZE
from ics23_testgen.fixture import Fixture, encode_fixture
from ics23_testgen.ics23 import TendermintBackend
from ics23_testgen.orchestrator import ProofBackend, prove
from ics23_testgen.selection import Mode, Position, select_key
from ics23_testgen.universe import build_universe, sorted_keys

logger = logging.getLogger(__name__)


def generate_fixture(
    mode: Mode,
    position: Position,
    size: int = DEFAULT_UNIVERSE_SIZE,
    backend: ProofBackend | None = None,
) -> Fixture:
    """
    Generate the fixture for one scenario.

    Args:
        mode: Existing or missing key.
        position: Left edge, interior or right edge of the key order.
        size: Number of entries in the universe.
        backend: Tree and proof construction. Defaults to the Tendermint
            simple Merkle map producing ICS23 proofs.

    Returns:
        The fixture. Same arguments always give the same fixture.

    Raises:
        ArgumentError: If `size` is out of range.
        UniverseError: If the universe cannot be derived.
        SelectionError: If the scenario cannot be satisfied.
        CollaboratorError: If the backend fails.
        EncodingError: If the proof cannot be serialized.
    """
    if backend is None:
        backend = TendermintBackend()

    universe = build_universe(size)
    index = sorted_keys(universe)
    selection = select_key(index, mode, position)
    scenario = prove(universe, selection, backend)
    fixture = encode_fixture(scenario)

    logger.info(
        "Generated %s %s fixture over %d keys (%d proof bytes)",
        mode.value,
        position.value,
        size,
        len(fixture.proof),
    )
    return fixture
