"""Reusable type definitions for fixture generation."""

from .base import HexBytesModel, StrictBaseModel
from .exceptions import (
    ArgumentError,
    CollaboratorError,
    EncodingError,
    SelectionError,
    TestgenError,
    UniverseError,
)

__all__ = [
    # Models
    "HexBytesModel",
    "StrictBaseModel",
    # Exceptions
    "TestgenError",
    "ArgumentError",
    "UniverseError",
    "SelectionError",
    "CollaboratorError",
    "EncodingError",
]
