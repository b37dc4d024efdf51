"""
ICS23 commitment proof messages and their protobuf encoding.

Wire Format
-----------

The subset of `cosmos/ics23/v1/proofs.proto` needed for single-key proofs::

    message LeafOp {
        HashOp hash = 1;
        HashOp prehash_key = 2;
        HashOp prehash_value = 3;
        LengthOp length = 4;
        bytes prefix = 5;
    }

    message InnerOp {
        HashOp hash = 1;
        bytes prefix = 2;
        bytes suffix = 3;
    }

    message ExistenceProof {
        bytes key = 1;
        bytes value = 2;
        LeafOp leaf = 3;
        repeated InnerOp path = 4;
    }

    message NonExistenceProof {
        bytes key = 1;
        ExistenceProof left = 2;
        ExistenceProof right = 3;
    }

    message CommitmentProof {
        oneof proof {
            ExistenceProof exist = 1;
            NonExistenceProof nonexist = 2;
            BatchProof batch = 3;
            CompressedBatchProof compressed = 4;
        }
    }

Batch and compressed proofs are never produced by the generator and are
rejected on decode.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

from .wire import (
    WIRE_TYPE_LENGTH_DELIMITED,
    WIRE_TYPE_VARINT,
    ProtobufDecodeError,
    decode_tag,
    encode_bytes,
    encode_enum,
    encode_message,
    read_length_delimited,
    read_varint,
    skip_field,
)


class HashOp(IntEnum):
    """Hash function applied at a proof step."""

    NO_HASH = 0
    SHA256 = 1
    SHA512 = 2
    KECCAK256 = 3
    RIPEMD160 = 4
    BITCOIN = 5
    SHA512_256 = 6
    BLAKE2B_512 = 7
    BLAKE2S_256 = 8
    BLAKE3 = 9


class LengthOp(IntEnum):
    """Length prefix applied to the key and value before leaf hashing."""

    NO_PREFIX = 0
    VAR_PROTO = 1
    VAR_RLP = 2
    FIXED32_BIG = 3
    FIXED32_LITTLE = 4
    FIXED64_BIG = 5
    FIXED64_LITTLE = 6
    REQUIRE_32_BYTES = 7
    REQUIRE_64_BYTES = 8


def _iter_fields(data: bytes) -> Iterator[tuple[int, int | bytes]]:
    """
    Yield (field_number, value) for the VARINT and LENGTH_DELIMITED fields of a message.

    Fields of other wire types are skipped. Varint values come back as int,
    length-delimited payloads as bytes.
    """
    pos = 0
    while pos < len(data):
        field_num, wire_type, pos = decode_tag(data, pos)

        if wire_type == WIRE_TYPE_VARINT:
            value, pos = read_varint(data, pos)
            yield field_num, value
        elif wire_type == WIRE_TYPE_LENGTH_DELIMITED:
            payload, pos = read_length_delimited(data, pos)
            yield field_num, payload
        else:
            pos = skip_field(data, pos, wire_type)


def _expect_int(message: str, field_num: int, value: int | bytes) -> int:
    if not isinstance(value, int):
        raise ProtobufDecodeError(f"{message}.{field_num}: expected varint")
    return value


def _expect_bytes(message: str, field_num: int, value: int | bytes) -> bytes:
    if not isinstance(value, bytes):
        raise ProtobufDecodeError(f"{message}.{field_num}: expected length-delimited")
    return value


def _hash_op(message: str, field_num: int, value: int | bytes) -> HashOp:
    raw = _expect_int(message, field_num, value)
    try:
        return HashOp(raw)
    except ValueError as e:
        raise ProtobufDecodeError(f"{message}.{field_num}: unknown HashOp {raw}") from e


@dataclass(frozen=True, slots=True)
class LeafOp:
    """How a leaf node hash is computed from a key and a value."""

    hash: HashOp = HashOp.NO_HASH
    """Hash applied to the final prefixed leaf payload."""

    prehash_key: HashOp = HashOp.NO_HASH
    """Hash applied to the key before length-prefixing."""

    prehash_value: HashOp = HashOp.NO_HASH
    """Hash applied to the value before length-prefixing."""

    length: LengthOp = LengthOp.NO_PREFIX
    """Length prefix applied to the (pre-hashed) key and value."""

    prefix: bytes = b""
    """Domain separation bytes placed before the key."""

    def encode(self) -> bytes:
        """Encode as protobuf."""
        return b"".join(
            [
                encode_enum(1, self.hash),
                encode_enum(2, self.prehash_key),
                encode_enum(3, self.prehash_value),
                encode_enum(4, self.length),
                encode_bytes(5, self.prefix),
            ]
        )

    @classmethod
    def decode(cls, data: bytes) -> LeafOp:
        """Decode from protobuf."""
        hash_op = prehash_key = prehash_value = HashOp.NO_HASH
        length = LengthOp.NO_PREFIX
        prefix = b""

        for field_num, value in _iter_fields(data):
            if field_num == 1:
                hash_op = _hash_op("LeafOp", field_num, value)
            elif field_num == 2:
                prehash_key = _hash_op("LeafOp", field_num, value)
            elif field_num == 3:
                prehash_value = _hash_op("LeafOp", field_num, value)
            elif field_num == 4:
                raw = _expect_int("LeafOp", field_num, value)
                try:
                    length = LengthOp(raw)
                except ValueError as e:
                    raise ProtobufDecodeError(f"LeafOp.4: unknown LengthOp {raw}") from e
            elif field_num == 5:
                prefix = _expect_bytes("LeafOp", field_num, value)

        return cls(
            hash=hash_op,
            prehash_key=prehash_key,
            prehash_value=prehash_value,
            length=length,
            prefix=prefix,
        )


@dataclass(frozen=True, slots=True)
class InnerOp:
    """One step from a child hash to its parent: `hash(prefix || child || suffix)`."""

    hash: HashOp = HashOp.NO_HASH
    prefix: bytes = b""
    suffix: bytes = b""

    def encode(self) -> bytes:
        """Encode as protobuf."""
        return b"".join(
            [
                encode_enum(1, self.hash),
                encode_bytes(2, self.prefix),
                encode_bytes(3, self.suffix),
            ]
        )

    @classmethod
    def decode(cls, data: bytes) -> InnerOp:
        """Decode from protobuf."""
        hash_op = HashOp.NO_HASH
        prefix = suffix = b""

        for field_num, value in _iter_fields(data):
            if field_num == 1:
                hash_op = _hash_op("InnerOp", field_num, value)
            elif field_num == 2:
                prefix = _expect_bytes("InnerOp", field_num, value)
            elif field_num == 3:
                suffix = _expect_bytes("InnerOp", field_num, value)

        return cls(hash=hash_op, prefix=prefix, suffix=suffix)


@dataclass(frozen=True, slots=True)
class ExistenceProof:
    """Proof that `key` maps to `value` under some root."""

    key: bytes = b""
    value: bytes = b""
    leaf: LeafOp | None = None
    path: tuple[InnerOp, ...] = ()
    """Inner ops ordered from the leaf up to the root."""

    def encode(self) -> bytes:
        """Encode as protobuf."""
        result = bytearray()
        result.extend(encode_bytes(1, self.key))
        result.extend(encode_bytes(2, self.value))
        result.extend(encode_message(3, self.leaf.encode() if self.leaf is not None else None))
        for step in self.path:
            result.extend(encode_message(4, step.encode()))
        return bytes(result)

    @classmethod
    def decode(cls, data: bytes) -> ExistenceProof:
        """Decode from protobuf."""
        key = value = b""
        leaf: LeafOp | None = None
        path: list[InnerOp] = []

        for field_num, raw in _iter_fields(data):
            if field_num == 1:
                key = _expect_bytes("ExistenceProof", field_num, raw)
            elif field_num == 2:
                value = _expect_bytes("ExistenceProof", field_num, raw)
            elif field_num == 3:
                leaf = LeafOp.decode(_expect_bytes("ExistenceProof", field_num, raw))
            elif field_num == 4:
                path.append(InnerOp.decode(_expect_bytes("ExistenceProof", field_num, raw)))

        return cls(key=key, value=value, leaf=leaf, path=tuple(path))


@dataclass(frozen=True, slots=True)
class NonExistenceProof:
    """
    Proof that `key` is absent.

    `left` and `right` prove the keys immediately below and above `key`.
    One of them is missing when `key` lies beyond an edge of the tree.
    """

    key: bytes = b""
    left: ExistenceProof | None = None
    right: ExistenceProof | None = None

    def encode(self) -> bytes:
        """Encode as protobuf."""
        return b"".join(
            [
                encode_bytes(1, self.key),
                encode_message(2, self.left.encode() if self.left is not None else None),
                encode_message(3, self.right.encode() if self.right is not None else None),
            ]
        )

    @classmethod
    def decode(cls, data: bytes) -> NonExistenceProof:
        """Decode from protobuf."""
        key = b""
        left: ExistenceProof | None = None
        right: ExistenceProof | None = None

        for field_num, raw in _iter_fields(data):
            if field_num == 1:
                key = _expect_bytes("NonExistenceProof", field_num, raw)
            elif field_num == 2:
                left = ExistenceProof.decode(_expect_bytes("NonExistenceProof", field_num, raw))
            elif field_num == 3:
                right = ExistenceProof.decode(_expect_bytes("NonExistenceProof", field_num, raw))

        return cls(key=key, left=left, right=right)


@dataclass(frozen=True, slots=True)
class CommitmentProof:
    """Top-level proof envelope. Exactly one variant is set."""

    exist: ExistenceProof | None = None
    nonexist: NonExistenceProof | None = None

    def __post_init__(self) -> None:
        if (self.exist is None) == (self.nonexist is None):
            raise ValueError("CommitmentProof must hold exactly one of exist or nonexist")

    def encode(self) -> bytes:
        """Encode as protobuf. This is the canonical serialization stored in fixtures."""
        if self.exist is not None:
            return encode_message(1, self.exist.encode())
        assert self.nonexist is not None
        return encode_message(2, self.nonexist.encode())

    @classmethod
    def decode(cls, data: bytes) -> CommitmentProof:
        """
        Decode from protobuf.

        Raises:
            ProtobufDecodeError: If the data is malformed, holds a batch or
                compressed proof, or holds no proof at all.
        """
        exist: ExistenceProof | None = None
        nonexist: NonExistenceProof | None = None

        for field_num, raw in _iter_fields(data):
            # Oneof semantics: the last variant on the wire wins.
            if field_num == 1:
                exist = ExistenceProof.decode(_expect_bytes("CommitmentProof", field_num, raw))
                nonexist = None
            elif field_num == 2:
                nonexist = NonExistenceProof.decode(
                    _expect_bytes("CommitmentProof", field_num, raw)
                )
                exist = None
            elif field_num in (3, 4):
                raise ProtobufDecodeError("Batch and compressed proofs are not supported")

        if exist is None and nonexist is None:
            raise ProtobufDecodeError("CommitmentProof holds no proof")

        return cls(exist=exist, nonexist=nonexist)
