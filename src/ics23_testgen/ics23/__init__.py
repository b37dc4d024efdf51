"""
Reference ICS23 proof backend.

Builds Tendermint simple Merkle map roots and encodes membership and
non-membership proofs as ICS23 `CommitmentProof` protobuf messages.
"""

from .backend import TENDERMINT_LEAF, ProofError, TendermintBackend
from .proofs import (
    CommitmentProof,
    ExistenceProof,
    HashOp,
    InnerOp,
    LeafOp,
    LengthOp,
    NonExistenceProof,
)
from .tree import SimpleMerkleMap
from .wire import ProtobufDecodeError

__all__ = [
    # Backend
    "TendermintBackend",
    "TENDERMINT_LEAF",
    "ProofError",
    "SimpleMerkleMap",
    # Messages
    "CommitmentProof",
    "ExistenceProof",
    "NonExistenceProof",
    "LeafOp",
    "InnerOp",
    "HashOp",
    "LengthOp",
    "ProtobufDecodeError",
]
