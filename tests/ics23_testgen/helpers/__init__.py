"""Test helpers for ics23_testgen unit tests."""

from __future__ import annotations

from .mocks import FailingProof, FakeBackend, FakeProof
from .proofs import calculate_existence_root, check_non_existence

__all__ = [
    # Mocks
    "FakeBackend",
    "FakeProof",
    "FailingProof",
    # Proof checks
    "calculate_existence_root",
    "check_non_existence",
]
