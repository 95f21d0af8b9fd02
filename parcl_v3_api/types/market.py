"""Market-related types for the Parcl v3 API."""

from dataclasses import dataclass

from solders.pubkey import Pubkey

from ..codec import (
    I32,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    decode_int,
    decode_int_str,
    decode_object,
    decode_pubkey,
    decode_str,
)
from ..error import DecodeError


@dataclass(frozen=True)
class PriceFeedInfo:
    """Latest oracle price; the real price is price * 10^expo."""

    price: int
    expo: int

    @classmethod
    def from_dict(cls, data: dict) -> "PriceFeedInfo":
        data = decode_object(data, "PriceFeedInfo")
        try:
            return cls(
                price=decode_int_str(data["price"], U64),
                expo=decode_int(data["expo"], I32),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in PriceFeedInfo: {e}")


@dataclass(frozen=True)
class MarketInfoAccounting:
    last_utilized_liquidation_capacity: int
    size: int
    skew: int
    last_funding_rate: str
    last_funding_per_unit: str
    last_time_funding_updated: int
    first_liquidation_epoch_start_time: int
    last_liquidation_epoch_index: int
    last_time_liquidation_capacity_updated: int

    @classmethod
    def from_dict(cls, data: dict) -> "MarketInfoAccounting":
        data = decode_object(data, "MarketInfoAccounting")
        try:
            return cls(
                last_utilized_liquidation_capacity=decode_int_str(
                    data["last_utilized_liquidation_capacity"], U128
                ),
                size=decode_int_str(data["size"], U128),
                skew=decode_int_str(data["skew"], I128),
                last_funding_rate=decode_str(data["last_funding_rate"]),
                last_funding_per_unit=decode_str(data["last_funding_per_unit"]),
                last_time_funding_updated=decode_int(data["last_time_funding_updated"], U64),
                first_liquidation_epoch_start_time=decode_int(
                    data["first_liquidation_epoch_start_time"], U64
                ),
                last_liquidation_epoch_index=decode_int(data["last_liquidation_epoch_index"], U64),
                last_time_liquidation_capacity_updated=decode_int(
                    data["last_time_liquidation_capacity_updated"], U64
                ),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in MarketInfoAccounting: {e}")


@dataclass(frozen=True)
class MarketInfoSettings:
    """Per-market risk and fee settings. Rates are in basis points."""

    min_position_margin: int
    skew_scale: int
    max_side_size: int
    max_liquidation_limit_accumulation_multiplier: int
    max_seconds_in_liquidation_epoch: int
    initial_margin_ratio: int
    maker_fee_rate: int
    taker_fee_rate: int
    max_funding_velocity: int
    liquidation_fee_rate: int
    min_initial_margin_ratio: int
    maintenance_margin_proportion: int
    max_liquidation_pd: int
    authorized_liquidator: Pubkey

    @classmethod
    def from_dict(cls, data: dict) -> "MarketInfoSettings":
        data = decode_object(data, "MarketInfoSettings")
        try:
            return cls(
                min_position_margin=decode_int_str(data["min_position_margin"], U128),
                skew_scale=decode_int_str(data["skew_scale"], U128),
                max_side_size=decode_int_str(data["max_side_size"], U128),
                max_liquidation_limit_accumulation_multiplier=decode_int(
                    data["max_liquidation_limit_accumulation_multiplier"], U64
                ),
                max_seconds_in_liquidation_epoch=decode_int(
                    data["max_seconds_in_liquidation_epoch"], U64
                ),
                initial_margin_ratio=decode_int(data["initial_margin_ratio"], U32),
                maker_fee_rate=decode_int(data["maker_fee_rate"], U16),
                taker_fee_rate=decode_int(data["taker_fee_rate"], U16),
                max_funding_velocity=decode_int(data["max_funding_velocity"], U16),
                liquidation_fee_rate=decode_int(data["liquidation_fee_rate"], U16),
                min_initial_margin_ratio=decode_int(data["min_initial_margin_ratio"], U16),
                maintenance_margin_proportion=decode_int(
                    data["maintenance_margin_proportion"], U16
                ),
                max_liquidation_pd=decode_int(data["max_liquidation_pd"], U16),
                authorized_liquidator=decode_pubkey(data["authorized_liquidator"]),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in MarketInfoSettings: {e}")


@dataclass(frozen=True)
class MarketInfo:
    """Response for GET /market."""

    address: Pubkey
    price_feed_info: PriceFeedInfo
    accounting: MarketInfoAccounting
    settings: MarketInfoSettings
    id: int
    exchange: Pubkey
    price_feed: Pubkey
    status: int

    @classmethod
    def from_dict(cls, data: dict) -> "MarketInfo":
        data = decode_object(data, "MarketInfo")
        try:
            return cls(
                address=decode_pubkey(data["address"]),
                price_feed_info=PriceFeedInfo.from_dict(data["price_feed_info"]),
                accounting=MarketInfoAccounting.from_dict(data["accounting"]),
                settings=MarketInfoSettings.from_dict(data["settings"]),
                id=decode_int(data["id"], U32),
                exchange=decode_pubkey(data["exchange"]),
                price_feed=decode_pubkey(data["price_feed"]),
                status=decode_int(data["status"], U8),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in MarketInfo: {e}")
