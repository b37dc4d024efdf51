"""
Proof orchestration over an injected tree/proof backend.

The generator never builds trees or proofs itself. It talks to any object
satisfying `ProofBackend`, which makes the selection logic testable with a
fake backend that returns canned roots and proofs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from ics23_testgen.selection import Selection
from ics23_testgen.types import CollaboratorError

logger = logging.getLogger(__name__)


class CanonicalProof(Protocol):
    """A proof object with a stable binary serialization."""

    def encode(self) -> bytes:
        """Return the canonical binary encoding of the proof."""
        ...


class ProofBackend(Protocol):
    """Tree and proof construction consumed by the generator."""

    def build_tree(self, data: Mapping[bytes, bytes]) -> bytes:
        """Return the deterministic root hash of `data`."""
        ...

    def create_membership_proof(self, data: Mapping[bytes, bytes], key: bytes) -> CanonicalProof:
        """Prove that `key` is in `data`."""
        ...

    def create_non_membership_proof(
        self, data: Mapping[bytes, bytes], key: bytes
    ) -> CanonicalProof:
        """Prove that `key` is not in `data`."""
        ...


@dataclass(frozen=True, slots=True)
class ProvenScenario:
    """Everything a fixture needs, before serialization."""

    root: bytes
    key: bytes
    value: bytes
    """The member's value, or empty for a non-membership scenario."""
    proof: CanonicalProof


def prove(
    universe: Mapping[bytes, bytes], selection: Selection, backend: ProofBackend
) -> ProvenScenario:
    """
    Obtain the root and the proof for a selected key.

    Args:
        universe: The key-value data the proof is built over.
        selection: The selected key and its scenario.
        backend: Tree and proof construction.

    Returns:
        Root, key, value and the unserialized proof object.

    Raises:
        CollaboratorError: If the backend fails. The backend's exception is
            chained as the cause.
    """
    mode = selection.mode.value

    try:
        root = backend.build_tree(universe)
    except Exception as e:
        raise CollaboratorError("build tree", selection.key, mode, e) from e

    if selection.exists:
        operation = "create membership proof"
        create = backend.create_membership_proof
    else:
        operation = "create non-membership proof"
        create = backend.create_non_membership_proof

    try:
        proof = create(universe, selection.key)
    except Exception as e:
        raise CollaboratorError(operation, selection.key, mode, e) from e

    # The backend has accepted the key's membership at this point.
    value = universe[selection.key] if selection.exists else b""

    logger.debug(
        "Obtained %s proof for key %s under root %s", mode, selection.key.hex(), root.hex()
    )
    return ProvenScenario(root=root, key=selection.key, value=value, proof=proof)
