"""
Unsigned LEB128 varint encoding and decoding.

Varints appear in two places of the ICS23/Tendermint stack:

1. Protobuf wire format: field tags and length prefixes of every
   `CommitmentProof` message.
2. Leaf hashing: `LengthOp.VAR_PROTO` prefixes the key and the value hash
   with their varint-encoded lengths before hashing the leaf.

Byte structure::

    [C|D D D D D D D]
     ^-- Continuation bit (1 = more bytes, 0 = last byte)
       ^-----------^-- 7 bits of data, low-order group first

Examples: 0 -> 00, 127 -> 7f, 128 -> 80 01, 300 -> ac 02.

Maximum value: 2^64 - 1 (10 bytes), matching protobuf.

References:
    Protocol Buffers encoding:
        https://protobuf.dev/programming-guides/encoding/#varints
"""

from __future__ import annotations


class VarintError(ValueError):
    """Raised when varint decoding fails."""


def encode_varint(value: int) -> bytes:
    """
    Encode an unsigned integer as LEB128 varint.

    Args:
        value: Non-negative integer to encode. Maximum: 2^64 - 1.

    Returns:
        Varint-encoded bytes (1 to 10 bytes).

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError("Varint must be non-negative")

    result = bytearray()

    # Emit 7 bits at a time with the continuation bit set
    # until the remainder fits in a single byte.
    while value >= 0x80:
        result.append((value & 0x7F) | 0x80)
        value >>= 7

    result.append(value)

    return bytes(result)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode a varint from bytes at the given offset.

    Args:
        data: Input bytes containing the varint.
        offset: Starting position in data. Defaults to 0.

    Returns:
        Tuple of (decoded_value, bytes_consumed).

    Raises:
        VarintError: If the input is truncated or longer than 10 bytes.
    """
    result = 0
    shift = 0
    pos = offset

    while True:
        if pos >= len(data):
            raise VarintError("Truncated varint")

        byte = data[pos]
        pos += 1

        result |= (byte & 0x7F) << shift
        shift += 7

        if not (byte & 0x80):
            break

        # A 64-bit value needs at most 10 bytes.
        if shift >= 70:
            raise VarintError("Varint too long")

    return result, pos - offset
