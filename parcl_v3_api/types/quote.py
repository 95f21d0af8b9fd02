"""Modify-position quote types for the Parcl v3 API."""

from dataclasses import dataclass, field

from ..codec import I128, U32, U64, U128, decode_int, decode_int_str, decode_object
from ..error import DecodeError

_QUOTE_FIELDS = frozenset(
    ("market_id", "size_delta", "fill_price", "index_price", "notional", "fees")
)


@dataclass(frozen=True)
class ModifyPositionQuote:
    """Response for POST /modify-position-quote.

    A pricing preview only; nothing here can be signed or submitted.

    The server does not publish a schema for this response. The six typed
    fields are the ones the client relies on; any other keys the server sends
    are kept verbatim in `extra`.
    """

    market_id: int
    size_delta: int
    fill_price: int
    index_price: int
    notional: int
    fees: int
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "ModifyPositionQuote":
        data = decode_object(data, "ModifyPositionQuote")
        try:
            return cls(
                market_id=decode_int(data["market_id"], U32),
                size_delta=decode_int_str(data["size_delta"], I128),
                fill_price=decode_int_str(data["fill_price"], U64),
                index_price=decode_int_str(data["index_price"], U64),
                notional=decode_int_str(data["notional"], U128),
                fees=decode_int_str(data["fees"], U64),
                extra={k: v for k, v in data.items() if k not in _QUOTE_FIELDS},
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in ModifyPositionQuote: {e}")
