"""Strict base models for fixture records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_serializer, field_validator


class StrictBaseModel(BaseModel):
    """A strict, immutable pydantic base model."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
    )


class HexBytesModel(StrictBaseModel):
    """
    A strict model whose bytes fields travel as lowercase hex in JSON.

    Validation accepts raw bytes or a hex string without a `0x` prefix.
    Python-mode dumps keep the raw bytes; only JSON-mode dumps render hex.
    """

    @field_validator("*", mode="before")
    @classmethod
    def decode_hex(cls, value: Any, info: ValidationInfo) -> Any:
        """Decode hex strings given for bytes fields."""
        if isinstance(value, str) and info.field_name is not None:
            if cls.model_fields[info.field_name].annotation is bytes:
                return bytes.fromhex(value)
        return value

    @field_serializer("*", when_used="json")
    def encode_hex(self, value: Any) -> Any:
        """Render bytes as lowercase hex."""
        if isinstance(value, bytes):
            return value.hex()
        return value
