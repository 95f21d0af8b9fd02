"""Field-level wire encodings shared by every request and response shape.

The API sends integers wider than 32 bits and all addresses as strings, byte
blobs as standard base64, and address collections as lists/maps of base58
text. Each helper here handles exactly one of those rules.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from solders.pubkey import Pubkey

from .error import CodecError

_INT_TEXT_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class IntType:
    """An integer width with inclusive bounds."""

    name: str
    min: int
    max: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


def _unsigned(bits: int) -> IntType:
    return IntType(f"u{bits}", 0, 2**bits - 1)


def _signed(bits: int) -> IntType:
    return IntType(f"i{bits}", -(2 ** (bits - 1)), 2 ** (bits - 1) - 1)


U8 = _unsigned(8)
U16 = _unsigned(16)
U32 = _unsigned(32)
U64 = _unsigned(64)
U128 = _unsigned(128)
I16 = _signed(16)
I32 = _signed(32)
I64 = _signed(64)
I128 = _signed(128)


def is_int(value: Any) -> bool:
    """Check for a real integer (bool is rejected)."""
    return isinstance(value, int) and not isinstance(value, bool)


# =============================================================================
# String-encoded scalars
# =============================================================================


def encode_str(value: Union[int, Pubkey]) -> str:
    """Encode an integer or address as its canonical text form."""
    if is_int(value) or isinstance(value, Pubkey):
        return str(value)
    raise TypeError(f"Cannot string-encode {type(value).__name__}")


def encode_optional_str(value: Optional[Union[int, Pubkey]]) -> Optional[str]:
    """Same as encode_str, but None stays None (JSON null)."""
    if value is None:
        return None
    return encode_str(value)


def decode_int_str(raw: Any, int_type: IntType) -> int:
    """Decode a string-encoded integer of the given width.

    Raises:
        CodecError: If raw is not a string, not fully numeric, or out of range
    """
    if not isinstance(raw, str):
        raise CodecError(f"Expected {int_type.name} as string, got {type(raw).__name__}")
    if not _INT_TEXT_PATTERN.fullmatch(raw):
        raise CodecError(f"Parse error: {raw!r} is not a valid {int_type.name}")
    value = int(raw)
    if not int_type.contains(value):
        raise CodecError(f"Parse error: {raw!r} does not fit in {int_type.name}")
    return value


def decode_optional_int_str(raw: Any, int_type: IntType) -> Optional[int]:
    if raw is None:
        return None
    return decode_int_str(raw, int_type)


def decode_int(raw: Any, int_type: IntType) -> int:
    """Decode a native JSON number of the given width."""
    if not is_int(raw):
        raise CodecError(f"Expected {int_type.name}, got {type(raw).__name__}")
    if not int_type.contains(raw):
        raise CodecError(f"{raw} does not fit in {int_type.name}")
    return raw


def decode_optional_int(raw: Any, int_type: IntType) -> Optional[int]:
    if raw is None:
        return None
    return decode_int(raw, int_type)


def decode_pubkey(raw: Any) -> Pubkey:
    """Decode a base58 address.

    Raises:
        CodecError: If raw is not a valid address
    """
    if not isinstance(raw, str):
        raise CodecError(f"Expected address as string, got {type(raw).__name__}")
    try:
        return Pubkey.from_string(raw)
    except Exception as e:
        raise CodecError(f"Invalid address {raw!r}: {e}") from e


def decode_bool(raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise CodecError(f"Expected bool, got {type(raw).__name__}")
    return raw


def decode_str(raw: Any) -> str:
    if not isinstance(raw, str):
        raise CodecError(f"Expected string, got {type(raw).__name__}")
    return raw


# =============================================================================
# Base64 byte blobs
# =============================================================================


def encode_base64(data: bytes) -> str:
    """Encode raw bytes as standard base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_base64(raw: Any) -> bytes:
    """Decode standard base64 text.

    Raises:
        CodecError: If raw is not valid base64
    """
    if not isinstance(raw, str):
        raise CodecError(f"Expected base64 string, got {type(raw).__name__}")
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CodecError(f"Base64 decode error: {e}") from e


# =============================================================================
# Address collections
# =============================================================================


def encode_pubkey_list(pubkeys: Iterable[Pubkey]) -> list[str]:
    return [encode_str(pubkey) for pubkey in pubkeys]


def decode_pubkey_list(raw: Any) -> list[Pubkey]:
    """Decode a list of base58 addresses, failing on the first bad entry."""
    if not isinstance(raw, list):
        raise CodecError(f"Expected list of addresses, got {type(raw).__name__}")
    result = []
    for index, entry in enumerate(raw):
        try:
            result.append(decode_pubkey(entry))
        except CodecError as e:
            raise CodecError(f"Entry {index}: {e.message}") from e
    return result


def decode_pubkey_values_map(raw: Any, key_type: IntType) -> dict[int, Pubkey]:
    """Decode a {string-encoded id: address} object."""
    if not isinstance(raw, dict):
        raise CodecError(f"Expected object, got {type(raw).__name__}")
    result: dict[int, Pubkey] = {}
    for key, value in raw.items():
        parsed = decode_int_str(key, key_type)
        if parsed in result:
            raise CodecError(f"Duplicate key {key!r}: id {parsed} already present")
        result[parsed] = decode_pubkey(value)
    return result


# =============================================================================
# JSON containers
# =============================================================================


def decode_object(raw: Any, type_name: str) -> dict:
    """Check that a decoded JSON value is an object before reading fields."""
    if not isinstance(raw, dict):
        raise CodecError(f"Expected object for {type_name}, got {type(raw).__name__}")
    return raw


def decode_list(raw: Any) -> list:
    if not isinstance(raw, list):
        raise CodecError(f"Expected list, got {type(raw).__name__}")
    return raw
