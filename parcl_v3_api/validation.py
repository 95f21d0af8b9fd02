"""Input validation utilities for request payloads."""

from typing import Any, Optional

from solders.pubkey import Pubkey

from .codec import IntType, is_int
from .error import InvalidParameterError


def validate_pubkey(value: Any, field_name: str) -> None:
    """Validate that a value is a solders Pubkey.

    Raises:
        InvalidParameterError: If not a Pubkey
    """
    if not isinstance(value, Pubkey):
        raise InvalidParameterError(
            f"{field_name} must be a Pubkey, got {type(value).__name__}"
        )


def validate_pubkey_list(values: Any, field_name: str) -> None:
    if not isinstance(values, (list, tuple)):
        raise InvalidParameterError(f"{field_name} must be a list of Pubkeys")
    for index, value in enumerate(values):
        validate_pubkey(value, f"{field_name}[{index}]")


def validate_int(value: Any, int_type: IntType, field_name: str) -> None:
    """Validate that an integer fits the declared width.

    Raises:
        InvalidParameterError: If not an int or out of range
    """
    if not is_int(value):
        raise InvalidParameterError(
            f"{field_name} must be an int, got {type(value).__name__}"
        )
    if not int_type.contains(value):
        raise InvalidParameterError(
            f"{field_name} must be within {int_type.name} range, got {value}"
        )


def validate_optional_int(value: Optional[int], int_type: IntType, field_name: str) -> None:
    if value is not None:
        validate_int(value, int_type, field_name)


def validate_identifier(
    value: Any,
    identifier_type: type,
    field_name: str,
    optional: bool = False,
) -> None:
    if value is None and optional:
        return
    if not isinstance(value, identifier_type):
        raise InvalidParameterError(
            f"{field_name} must be a {identifier_type.__name__}, got {type(value).__name__}"
        )


def validate_identifier_list(values: Any, identifier_type: type, field_name: str) -> None:
    if not isinstance(values, (list, tuple)):
        raise InvalidParameterError(
            f"{field_name} must be a list of {identifier_type.__name__}"
        )
    for index, value in enumerate(values):
        validate_identifier(value, identifier_type, f"{field_name}[{index}]")
