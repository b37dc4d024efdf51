"""
Deterministic ICS23 proof fixture generator.

Builds a reproducible key-value universe, picks a key at a structural
position (existing or provably missing), proves it against the universe's
Merkle root and emits the scenario as a hex-encoded JSON fixture for
cross-language conformance tests.
"""

from .fixture import Fixture, encode_fixture
from .generator import generate_fixture
from .orchestrator import CanonicalProof, ProofBackend, ProvenScenario, prove
from .selection import Mode, Position, Selection, select_key
from .universe import build_universe, sorted_keys

__all__ = [
    # Pipeline
    "generate_fixture",
    "build_universe",
    "sorted_keys",
    "select_key",
    "prove",
    "encode_fixture",
    # Types
    "Mode",
    "Position",
    "Selection",
    "ProvenScenario",
    "Fixture",
    "ProofBackend",
    "CanonicalProof",
]
