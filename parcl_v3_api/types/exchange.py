"""Exchange-related types for the Parcl v3 API."""

from dataclasses import dataclass
from enum import Enum

from solders.pubkey import Pubkey

from ..codec import (
    I16,
    U16,
    U32,
    U64,
    U128,
    decode_int,
    decode_int_str,
    decode_list,
    decode_object,
    decode_pubkey,
    decode_str,
)
from ..error import CodecError, DecodeError


class OracleKind(Enum):
    """Price oracle program family."""

    PYTH = "Pyth"
    PARCL = "Parcl"
    PYTH_V2 = "PythV2"


@dataclass(frozen=True)
class OracleConfig:
    kind: OracleKind
    program_id: Pubkey

    @classmethod
    def from_dict(cls, data: dict) -> "OracleConfig":
        data = decode_object(data, "OracleConfig")
        try:
            kind_str = decode_str(data["kind"])
            try:
                kind = OracleKind(kind_str)
            except ValueError:
                raise CodecError(f"Unknown oracle kind: {kind_str!r}")
            return cls(
                kind=kind,
                program_id=decode_pubkey(data["program_id"]),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in OracleConfig: {e}")


@dataclass(frozen=True)
class ExchangeInfoAccounting:
    """Exchange-wide balances and open interest."""

    notional_open_interest: int
    last_time_locked_open_interest_accounting_refreshed: int
    balance: int
    margin_balance: int
    lp_balance: int
    lp_shares: int
    protocol_fees: int
    unsettled_collateral_amount: int

    @classmethod
    def from_dict(cls, data: dict) -> "ExchangeInfoAccounting":
        data = decode_object(data, "ExchangeInfoAccounting")
        try:
            return cls(
                notional_open_interest=decode_int_str(data["notional_open_interest"], U128),
                last_time_locked_open_interest_accounting_refreshed=decode_int_str(
                    data["last_time_locked_open_interest_accounting_refreshed"], U64
                ),
                balance=decode_int_str(data["balance"], U64),
                margin_balance=decode_int_str(data["margin_balance"], U64),
                lp_balance=decode_int_str(data["lp_balance"], U64),
                lp_shares=decode_int_str(data["lp_shares"], U64),
                protocol_fees=decode_int_str(data["protocol_fees"], U64),
                unsettled_collateral_amount=decode_int_str(
                    data["unsettled_collateral_amount"], U64
                ),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in ExchangeInfoAccounting: {e}")


@dataclass(frozen=True)
class ExchangeInfoSettings:
    """Exchange-wide fee and settlement settings.

    Rates are in basis points; durations in seconds.
    """

    min_lp_duration: int
    settlement_delay: int
    min_liquidation_fee: int
    max_liquidation_fee: int
    locked_open_interest_staleness_threshold: int
    protocol_fee_rate: int
    locked_open_interest_ratio: int
    max_keeper_tip_rate: int

    @classmethod
    def from_dict(cls, data: dict) -> "ExchangeInfoSettings":
        data = decode_object(data, "ExchangeInfoSettings")
        try:
            return cls(
                min_lp_duration=decode_int(data["min_lp_duration"], U64),
                settlement_delay=decode_int(data["settlement_delay"], U64),
                min_liquidation_fee=decode_int_str(data["min_liquidation_fee"], U64),
                max_liquidation_fee=decode_int_str(data["max_liquidation_fee"], U64),
                locked_open_interest_staleness_threshold=decode_int(
                    data["locked_open_interest_staleness_threshold"], U64
                ),
                protocol_fee_rate=decode_int(data["protocol_fee_rate"], U16),
                locked_open_interest_ratio=decode_int(data["locked_open_interest_ratio"], U16),
                max_keeper_tip_rate=decode_int(data["max_keeper_tip_rate"], U16),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in ExchangeInfoSettings: {e}")


@dataclass(frozen=True)
class ExchangeInfo:
    """Response for GET /exchange."""

    address: Pubkey
    accounting: ExchangeInfoAccounting
    settings: ExchangeInfoSettings
    id: int
    market_ids: list[int]
    oracle_configs: list[OracleConfig]
    status: int
    collateral_expo: int
    collateral_mint: Pubkey
    collateral_vault: Pubkey
    admin: Pubkey
    nominated_admin: Pubkey
    authorized_settler: Pubkey
    authorized_protocol_fees_collector: Pubkey

    @classmethod
    def from_dict(cls, data: dict) -> "ExchangeInfo":
        data = decode_object(data, "ExchangeInfo")
        try:
            return cls(
                address=decode_pubkey(data["address"]),
                accounting=ExchangeInfoAccounting.from_dict(data["accounting"]),
                settings=ExchangeInfoSettings.from_dict(data["settings"]),
                id=decode_int_str(data["id"], U64),
                market_ids=[decode_int(m, U32) for m in decode_list(data["market_ids"])],
                oracle_configs=[
                    OracleConfig.from_dict(o) for o in decode_list(data["oracle_configs"])
                ],
                status=decode_int(data["status"], U16),
                collateral_expo=decode_int(data["collateral_expo"], I16),
                collateral_mint=decode_pubkey(data["collateral_mint"]),
                collateral_vault=decode_pubkey(data["collateral_vault"]),
                admin=decode_pubkey(data["admin"]),
                nominated_admin=decode_pubkey(data["nominated_admin"]),
                authorized_settler=decode_pubkey(data["authorized_settler"]),
                authorized_protocol_fees_collector=decode_pubkey(
                    data["authorized_protocol_fees_collector"]
                ),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in ExchangeInfo: {e}")
