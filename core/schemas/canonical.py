"""
Schemas - Canonical Encoding
File: canonical.py

Purpose: Deterministic binary serialization of signed payloads.

The signer hashes and signs exactly these bytes, so the encoding here must
match it bit for bit. The format is tag-length-value, fields in ascending
field-number order, byte-compatible with the proto3 wire format:

    key    = varint(field_number << 3 | wire_type)
    string = key, varint(len(utf8)), utf8        (wire type 2)
    bytes  = key, varint(len), raw               (wire type 2)
    int    = key, varint(value)                  (wire type 0)

Default values ("", 0, False, b"", None) are not written.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

from typing import Any, ClassVar

from pydantic import BaseModel

from .errors import CanonicalizationException

WIRE_VARINT = 0
WIRE_LENGTH_DELIMITED = 2

_UINT64_MASK = (1 << 64) - 1
_MAX_FIELD_NUMBER = (1 << 29) - 1


class CanonicalModel(BaseModel):
    """
    Base for models that have a canonical binary form.

    Subclasses map field numbers to attribute names:

        __canonical_fields__ = ((1, "message_id"), (2, "sender"))
    """

    __canonical_fields__: ClassVar[tuple[tuple[int, str], ...]] = ()

    def to_canonical_bytes(self) -> bytes:
        return encode_canonical(self)


def encode_varint(value: int) -> bytes:
    """
    Encode a non-negative integer as a base-128 varint.

    Negative values are encoded as their 64-bit two's complement
    (ten bytes), the same way int64 fields are written on the wire.
    """
    if value < 0:
        value &= _UINT64_MASK
    out = bytearray()
    while True:
        bits = value & 0x7F
        value >>= 7
        if value:
            out.append(bits | 0x80)
        else:
            out.append(bits)
            return bytes(out)


def encode_key(field_number: int, wire_type: int) -> bytes:
    if not 1 <= field_number <= _MAX_FIELD_NUMBER:
        raise CanonicalizationException(
            message=f"Field number out of range: {field_number}",
            details={"field_number": field_number},
        )
    return encode_varint((field_number << 3) | wire_type)


def encode_field(field_number: int, value: Any, path: str = "") -> bytes:
    """
    Encode a single field, or return b"" when the value is a default.

    Raises:
        CanonicalizationException: If the value type has no canonical form.
    """
    if value is None:
        return b""

    # bool before int since bool is subclass of int
    if isinstance(value, bool):
        if not value:
            return b""
        return encode_key(field_number, WIRE_VARINT) + encode_varint(1)

    if isinstance(value, int):
        if value == 0:
            return b""
        return encode_key(field_number, WIRE_VARINT) + encode_varint(value)

    if isinstance(value, str):
        data = value.encode("utf-8")
    elif isinstance(value, (bytes, bytearray)):
        data = bytes(value)
    elif isinstance(value, CanonicalModel):
        data = encode_canonical(value, path)
    else:
        raise CanonicalizationException(
            message=f"Cannot canonicalize value of type {type(value).__name__}",
            details={"path": path, "type": type(value).__name__},
        )

    if not data:
        return b""
    return (
        encode_key(field_number, WIRE_LENGTH_DELIMITED)
        + encode_varint(len(data))
        + data
    )


def encode_canonical(model: CanonicalModel, path: str = "") -> bytes:
    """
    Serialize a model to its canonical binary form.

    Args:
        model: A CanonicalModel instance.
        path: Current path for error reporting.

    Returns:
        The canonical bytes; empty for a model holding only defaults.

    Raises:
        CanonicalizationException: If the model declares no field numbers,
            declares one twice, or holds an unsupported value.

    Example:
        >>> encode_canonical(SmsPayload(message_id="msg-1"))
        b'\\n\\x05msg-1'
    """
    fields = type(model).__canonical_fields__
    if not fields:
        raise CanonicalizationException(
            message=f"{type(model).__name__} declares no canonical fields",
            details={"path": path, "type": type(model).__name__},
        )

    numbers = [number for number, _ in fields]
    if len(set(numbers)) != len(numbers):
        raise CanonicalizationException(
            message=f"{type(model).__name__} declares duplicate field numbers",
            details={"path": path, "field_numbers": numbers},
        )

    out = bytearray()
    for number, name in sorted(fields):
        field_path = f"{path}.{name}" if path else name
        out += encode_field(number, getattr(model, name), field_path)
    return bytes(out)
