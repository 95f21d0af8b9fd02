"""Identifier types: a resource referenced by numeric id or by address.

On the wire an identifier is untagged. It is always the inner value's string
form, and decoding tries the numeric id first and the address second.
"""

from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Union

from solders.pubkey import Pubkey

from ..codec import (
    U32,
    U64,
    IntType,
    decode_int,
    decode_int_str,
    decode_pubkey,
    decode_pubkey_list,
    decode_pubkey_values_map,
    encode_str,
    is_int,
)
from ..constants import DEFAULT_EXCHANGE_ID
from ..error import CodecError, DecodeError, IdentifierParseError

ExchangeId = int
MarginAccountId = int
MarketId = int
SettlementRequestId = int


class _Identifier:
    """Base for the id-or-address identifier families."""

    ID_TYPE: ClassVar[IntType]

    __slots__ = ("_value",)

    def __init__(self, value: Union[int, Pubkey]):
        if is_int(value):
            if not self.ID_TYPE.contains(value):
                raise ValueError(
                    f"{type(self).__name__} id {value} does not fit in {self.ID_TYPE.name}"
                )
        elif not isinstance(value, Pubkey):
            raise TypeError(
                f"{type(self).__name__} must wrap an int or a Pubkey, got {type(value).__name__}"
            )
        self._value = value

    @classmethod
    def of(cls, value):
        """Accept an identifier of this type, a numeric id, or an address."""
        if isinstance(value, cls):
            return value
        return cls(value)

    @classmethod
    def from_id(cls, id: int):
        if not is_int(id):
            raise TypeError(f"Expected int, got {type(id).__name__}")
        return cls(id)

    @classmethod
    def from_address(cls, address: Pubkey):
        if not isinstance(address, Pubkey):
            raise TypeError(f"Expected Pubkey, got {type(address).__name__}")
        return cls(address)

    @classmethod
    def parse(cls, raw: Any):
        """Resolve wire text into the id or the address variant.

        Raises:
            IdentifierParseError: If raw matches neither variant
        """
        resolvers: tuple[Callable[[Any], Union[int, Pubkey]], ...] = (
            cls._resolve_id,
            decode_pubkey,
        )
        for resolve in resolvers:
            try:
                return cls(resolve(raw))
            except CodecError:
                continue
        raise IdentifierParseError(raw)

    @classmethod
    def _resolve_id(cls, raw: Any) -> int:
        if is_int(raw):
            return decode_int(raw, cls.ID_TYPE)
        return decode_int_str(raw, cls.ID_TYPE)

    @property
    def value(self) -> Union[int, Pubkey]:
        return self._value

    @property
    def is_id(self) -> bool:
        return is_int(self._value)

    @property
    def is_address(self) -> bool:
        return isinstance(self._value, Pubkey)

    @property
    def id(self) -> Optional[int]:
        return self._value if self.is_id else None

    @property
    def address(self) -> Optional[Pubkey]:
        return self._value if self.is_address else None

    def to_json(self) -> str:
        return encode_str(self._value)

    def __str__(self) -> str:
        return encode_str(self._value)

    def __repr__(self) -> str:
        variant = "Id" if self.is_id else "Address"
        return f"{type(self).__name__}.{variant}({self._value})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.is_id == other.is_id and self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.is_id, self._value))


class ExchangeIdentifier(_Identifier):
    """Exchange referenced by u64 id or by address."""

    ID_TYPE = U64
    __slots__ = ()

    @classmethod
    def default(cls) -> "ExchangeIdentifier":
        return cls(DEFAULT_EXCHANGE_ID)


class MarginAccountIdentifier(_Identifier):
    """Margin account referenced by u32 id or by address."""

    ID_TYPE = U32
    __slots__ = ()


class MarketIdentifier(_Identifier):
    """Market referenced by u32 id or by address."""

    ID_TYPE = U32
    __slots__ = ()


class MarketIdentifiersResponseKind(Enum):
    """Which shape /market-ids should answer with."""

    MAP = "map"
    ADDRESSES = "addresses"
    IDS = "ids"

    @classmethod
    def default(cls) -> "MarketIdentifiersResponseKind":
        return cls.MAP

    def __str__(self) -> str:
        return self.value


def _decode_ids(raw: Any) -> list[int]:
    if not isinstance(raw, list):
        raise CodecError(f"Expected list of ids, got {type(raw).__name__}")
    return [decode_int(entry, U32) for entry in raw]


def _decode_map(raw: Any) -> dict[int, Pubkey]:
    return decode_pubkey_values_map(raw, U32)


class MarketIdentifiersResponse:
    """Untagged /market-ids response: ids, addresses, or an id -> address map."""

    _VARIANTS: ClassVar[tuple[tuple[MarketIdentifiersResponseKind, Callable[[Any], Any]], ...]] = (
        (MarketIdentifiersResponseKind.IDS, _decode_ids),
        (MarketIdentifiersResponseKind.ADDRESSES, decode_pubkey_list),
        (MarketIdentifiersResponseKind.MAP, _decode_map),
    )

    __slots__ = ("kind", "value")

    def __init__(
        self,
        kind: MarketIdentifiersResponseKind,
        value: Union[list[int], list[Pubkey], dict[int, Pubkey]],
    ):
        self.kind = kind
        self.value = value

    @classmethod
    def from_json(cls, data: Any) -> "MarketIdentifiersResponse":
        for kind, decode in cls._VARIANTS:
            try:
                return cls(kind, decode(data))
            except CodecError:
                continue
        raise DecodeError("Market ids response did not match any variant")

    def matches(self, kind: MarketIdentifiersResponseKind) -> bool:
        """Check whether this response satisfies the requested kind.

        An empty list decodes as ids but is also a valid empty address list.
        """
        if kind == self.kind:
            return True
        return (
            kind == MarketIdentifiersResponseKind.ADDRESSES
            and self.kind == MarketIdentifiersResponseKind.IDS
            and not self.value
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarketIdentifiersResponse):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __repr__(self) -> str:
        return f"MarketIdentifiersResponse({self.kind.name}, {self.value!r})"
