"""
Protobuf wire format helpers.

The ICS23 proof messages use only two wire types:

- VARINT (0): enum fields (`HashOp`, `LengthOp`).
- LENGTH_DELIMITED (2): bytes fields and embedded messages.

Proto3 canonical encoding rules followed by the encoders here:

- Fields are written in ascending field-number order.
- Scalar fields holding their default (zero enum, empty bytes) are omitted.
- Unset embedded messages are omitted; set ones are written even if empty.
- Repeated embedded messages repeat the same tag once per element.

The schema is fixed and small, so messages are encoded by hand rather than
through generated code.

References:
    https://protobuf.dev/programming-guides/encoding/
    https://github.com/cosmos/ics23/blob/master/proto/cosmos/ics23/v1/proofs.proto
"""

from __future__ import annotations

from .varint import VarintError, decode_varint, encode_varint

WIRE_TYPE_VARINT = 0
"""Varint wire type for int32, int64, uint32, uint64, bool, enum."""

WIRE_TYPE_64BIT = 1
"""Fixed 64-bit wire type. Never produced here, only skipped."""

WIRE_TYPE_LENGTH_DELIMITED = 2
"""Length-delimited wire type for bytes, strings and embedded messages."""

WIRE_TYPE_32BIT = 5
"""Fixed 32-bit wire type. Never produced here, only skipped."""


class ProtobufDecodeError(ValueError):
    """Raised when a protobuf message cannot be decoded."""


def read_varint(data: bytes, pos: int) -> tuple[int, int]:
    """
    Decode a varint returning (value, new_position).

    Raises:
        ProtobufDecodeError: If the varint is truncated or too long.
    """
    try:
        value, consumed = decode_varint(data, pos)
    except VarintError as e:
        raise ProtobufDecodeError(f"Invalid varint at offset {pos}: {e}") from e
    return value, pos + consumed


def encode_tag(field_number: int, wire_type: int) -> bytes:
    """Encode a protobuf field tag."""
    return encode_varint((field_number << 3) | wire_type)


def decode_tag(data: bytes, pos: int) -> tuple[int, int, int]:
    """
    Decode a protobuf field tag.

    Returns:
        (field_number, wire_type, new_position) tuple.
    """
    tag, pos = read_varint(data, pos)
    return tag >> 3, tag & 0x07, pos


def encode_length_delimited(field_number: int, data: bytes) -> bytes:
    """Encode a length-delimited field (bytes or embedded message)."""
    return encode_tag(field_number, WIRE_TYPE_LENGTH_DELIMITED) + encode_varint(len(data)) + data


def encode_bytes(field_number: int, value: bytes) -> bytes:
    """Encode a bytes field, omitting it when empty."""
    if not value:
        return b""
    return encode_length_delimited(field_number, value)


def encode_message(field_number: int, encoded: bytes | None) -> bytes:
    """Encode an embedded message field, omitting it only when unset."""
    if encoded is None:
        return b""
    return encode_length_delimited(field_number, encoded)


def encode_enum(field_number: int, value: int) -> bytes:
    """Encode an enum field, omitting the zero default."""
    if value == 0:
        return b""
    return encode_tag(field_number, WIRE_TYPE_VARINT) + encode_varint(value)


def read_length_delimited(data: bytes, pos: int) -> tuple[bytes, int]:
    """
    Read a length-prefixed payload.

    Returns:
        (payload, new_position) tuple.

    Raises:
        ProtobufDecodeError: If the payload runs past the end of the data.
    """
    length, pos = read_varint(data, pos)
    end = pos + length
    if end > len(data):
        raise ProtobufDecodeError(
            f"Length-delimited field overruns buffer: need {length} bytes at offset {pos}, "
            f"have {len(data) - pos}"
        )
    return data[pos:end], end


def skip_field(data: bytes, pos: int, wire_type: int) -> int:
    """Skip an unknown field based on wire type."""
    if wire_type == WIRE_TYPE_VARINT:
        _, pos = read_varint(data, pos)
    elif wire_type == WIRE_TYPE_LENGTH_DELIMITED:
        _, pos = read_length_delimited(data, pos)
    elif wire_type == WIRE_TYPE_32BIT:
        pos += 4
    elif wire_type == WIRE_TYPE_64BIT:
        pos += 8
    else:
        raise ProtobufDecodeError(f"Unknown wire type: {wire_type}")

    if pos > len(data):
        raise ProtobufDecodeError("Truncated fixed-width field")
    return pos
