"""
Fixture record and its JSON form.

The emitted file has exactly four fields, in this order::

    {
      "root": "<hex tree root>",
      "key": "<hex key>",
      "value": "<hex value, empty string for non-existence>",
      "proof": "<hex canonical proof encoding>"
    }

Hex is lowercase with no separators and no `0x` prefix.
"""

from __future__ import annotations

import json

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ics23_testgen.orchestrator import ProvenScenario
from ics23_testgen.types import EncodingError, HexBytesModel


class Fixture(HexBytesModel):
    """One complete proof scenario."""

    root: bytes
    """Root hash of the tree over the universe."""

    key: bytes
    """The key the proof is about."""

    value: bytes
    """The key's value, or empty for a non-existence fixture."""

    proof: bytes
    """Canonical binary encoding of the commitment proof."""

    def to_json(self) -> str:
        """
        Render the fixture as pretty-printed JSON with a trailing newline.

        Raises:
            EncodingError: If the model cannot be serialized.
        """
        try:
            return json.dumps(self.model_dump(mode="json"), indent=2) + "\n"
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise EncodingError(f"json encoding: {e}") from e

    @classmethod
    def from_json(cls, text: str | bytes) -> Fixture:
        """
        Parse a fixture previously written by `to_json`.

        Raises:
            EncodingError: If the text is not a valid fixture.
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise EncodingError(f"invalid fixture: {e}") from e


def encode_fixture(scenario: ProvenScenario) -> Fixture:
    """
    Serialize the proof of a proven scenario and pack it into a fixture.

    Raises:
        EncodingError: If the proof cannot be serialized.
    """
    try:
        proof = bytes(scenario.proof.encode())
    except Exception as e:
        raise EncodingError(f"proof serialization: {e}") from e

    try:
        return Fixture(root=scenario.root, key=scenario.key, value=scenario.value, proof=proof)
    except ValidationError as e:
        raise EncodingError(f"invalid fixture fields: {e}") from e
