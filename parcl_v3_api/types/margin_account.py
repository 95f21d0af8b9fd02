"""Margin account types for the Parcl v3 API."""

from dataclasses import dataclass

from solders.pubkey import Pubkey

from ..codec import (
    I128,
    U32,
    U64,
    U128,
    decode_bool,
    decode_int,
    decode_int_str,
    decode_list,
    decode_object,
    decode_pubkey,
    decode_str,
)
from ..error import DecodeError


@dataclass(frozen=True)
class Margins:
    """Margin requirements of a margin account.

    available_margin is signed: it goes negative once the account is
    under water.
    """

    available_margin: int
    total_required_margin: int
    required_initial_margin: int
    required_maintenance_margin: int
    required_liquidation_fee_margin: int
    accumulated_liquidation_fees: int

    @classmethod
    def from_dict(cls, data: dict) -> "Margins":
        data = decode_object(data, "Margins")
        try:
            return cls(
                available_margin=decode_int_str(data["available_margin"], I128),
                total_required_margin=decode_int_str(data["total_required_margin"], U64),
                required_initial_margin=decode_int_str(data["required_initial_margin"], U64),
                required_maintenance_margin=decode_int_str(
                    data["required_maintenance_margin"], U64
                ),
                required_liquidation_fee_margin=decode_int_str(
                    data["required_liquidation_fee_margin"], U64
                ),
                accumulated_liquidation_fees=decode_int_str(
                    data["accumulated_liquidation_fees"], U64
                ),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in Margins: {e}")


@dataclass(frozen=True)
class PositionInfo:
    """Open position in a single market."""

    size: int
    last_interaction_price: int
    last_interaction_funding_per_unit: str
    market_id: int

    @classmethod
    def from_dict(cls, data: dict) -> "PositionInfo":
        data = decode_object(data, "PositionInfo")
        try:
            return cls(
                size=decode_int_str(data["size"], I128),
                last_interaction_price=decode_int_str(data["last_interaction_price"], U128),
                last_interaction_funding_per_unit=decode_str(
                    data["last_interaction_funding_per_unit"]
                ),
                market_id=decode_int(data["market_id"], U32),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in PositionInfo: {e}")


@dataclass(frozen=True)
class MarginAccountInfo:
    """Response for GET /margin-account."""

    address: Pubkey
    id: int
    active_market_ids: list[int]
    positions: list[PositionInfo]
    margins: Margins
    margin: int
    excess_margin: int
    exchange: Pubkey
    owner: Pubkey
    delegate: Pubkey
    can_close: bool
    can_liquidate: bool
    in_liquidation: bool

    @classmethod
    def from_dict(cls, data: dict) -> "MarginAccountInfo":
        data = decode_object(data, "MarginAccountInfo")
        try:
            return cls(
                address=decode_pubkey(data["address"]),
                id=decode_int(data["id"], U32),
                active_market_ids=[
                    decode_int(m, U32) for m in decode_list(data["active_market_ids"])
                ],
                positions=[PositionInfo.from_dict(p) for p in decode_list(data["positions"])],
                margins=Margins.from_dict(data["margins"]),
                margin=decode_int_str(data["margin"], U64),
                excess_margin=decode_int_str(data["excess_margin"], U64),
                exchange=decode_pubkey(data["exchange"]),
                owner=decode_pubkey(data["owner"]),
                delegate=decode_pubkey(data["delegate"]),
                can_close=decode_bool(data["can_close"]),
                can_liquidate=decode_bool(data["can_liquidate"]),
                in_liquidation=decode_bool(data["in_liquidation"]),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in MarginAccountInfo: {e}")
