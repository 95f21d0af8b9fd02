"""Request payloads for the Parcl v3 API.

Each payload validates its fields on construction and serializes with
`to_dict()` into the exact JSON object the server expects. Optional fields
are always present and sent as null when unset.
"""

from dataclasses import dataclass
from typing import Optional

from solders.pubkey import Pubkey

from ..codec import U16, U32, U64, I128, encode_optional_str, encode_pubkey_list, encode_str
from ..error import InvalidParameterError
from ..validation import (
    validate_identifier,
    validate_identifier_list,
    validate_int,
    validate_optional_int,
    validate_pubkey,
    validate_pubkey_list,
)
from .identifiers import (
    ExchangeIdentifier,
    MarginAccountIdentifier,
    MarketIdentifier,
)


class SlippageSetting:
    """Exclusive choice between an acceptable price and a bps tolerance.

    Use `AcceptablePrice` or `SlippageToleranceBps`; exactly one of the two
    wire fields is ever populated.
    """

    __slots__ = ()

    def as_request_fields(self) -> tuple[Optional[int], Optional[int]]:
        """Return (acceptable_price, slippage_tolerance_bps)."""
        raise NotImplementedError


@dataclass(frozen=True)
class AcceptablePrice(SlippageSetting):
    """Worst price the trade may fill at."""

    price: int

    def __post_init__(self):
        validate_int(self.price, U64, "acceptable_price")

    def as_request_fields(self) -> tuple[Optional[int], Optional[int]]:
        return self.price, None


@dataclass(frozen=True)
class SlippageToleranceBps(SlippageSetting):
    """Maximum adverse price move in basis points."""

    bps: int

    def __post_init__(self):
        validate_int(self.bps, U16, "slippage_tolerance_bps")

    def as_request_fields(self) -> tuple[Optional[int], Optional[int]]:
        return None, self.bps


def _validate_slippage(slippage_setting: SlippageSetting) -> None:
    if not isinstance(slippage_setting, SlippageSetting) or type(slippage_setting) is SlippageSetting:
        raise InvalidParameterError(
            "slippage_setting must be AcceptablePrice or SlippageToleranceBps"
        )


def _exchange_id_json(exchange_id: Optional[ExchangeIdentifier]) -> Optional[str]:
    return None if exchange_id is None else exchange_id.to_json()


def _slippage_json(slippage_setting: SlippageSetting) -> dict:
    acceptable_price, slippage_tolerance_bps = slippage_setting.as_request_fields()
    return {
        "acceptable_price": encode_optional_str(acceptable_price),
        "slippage_tolerance_bps": slippage_tolerance_bps,
    }


@dataclass
class MarginAccountsPayload:
    """Request for POST /margin-accounts."""

    margin_accounts: list[Pubkey]
    exchange_id: Optional[ExchangeIdentifier] = None

    def __post_init__(self):
        validate_pubkey_list(self.margin_accounts, "margin_accounts")
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)

    def to_dict(self) -> dict:
        return {
            "margin_accounts": encode_pubkey_list(self.margin_accounts),
            "exchange_id": _exchange_id_json(self.exchange_id),
        }


@dataclass
class MarketsPayload:
    """Request for POST /markets."""

    market_ids: list[MarketIdentifier]
    exchange_id: Optional[ExchangeIdentifier] = None

    def __post_init__(self):
        validate_identifier_list(self.market_ids, MarketIdentifier, "market_ids")
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)

    def to_dict(self) -> dict:
        return {
            "market_ids": [market_id.to_json() for market_id in self.market_ids],
            "exchange_id": _exchange_id_json(self.exchange_id),
        }


@dataclass
class CreateMarginAccountPayload:
    """Request for POST /create-margin-account-{transaction,instructions}."""

    owner: Pubkey
    margin_account_id: Optional[int] = None
    exchange_id: Optional[ExchangeIdentifier] = None
    priority_fee_percentile: Optional[int] = None

    def __post_init__(self):
        validate_pubkey(self.owner, "owner")
        validate_optional_int(self.margin_account_id, U32, "margin_account_id")
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)
        validate_optional_int(self.priority_fee_percentile, U16, "priority_fee_percentile")

    def to_dict(self) -> dict:
        return {
            "owner": encode_str(self.owner),
            "margin_account_id": self.margin_account_id,
            "exchange_id": _exchange_id_json(self.exchange_id),
            "priority_fee_percentile": self.priority_fee_percentile,
        }


@dataclass
class CloseMarginAccountPayload:
    """Request for POST /close-margin-account-{transaction,instructions}."""

    owner: Pubkey
    margin_account_id: MarginAccountIdentifier
    exchange_id: Optional[ExchangeIdentifier] = None
    priority_fee_percentile: Optional[int] = None

    def __post_init__(self):
        validate_pubkey(self.owner, "owner")
        validate_identifier(self.margin_account_id, MarginAccountIdentifier, "margin_account_id")
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)
        validate_optional_int(self.priority_fee_percentile, U16, "priority_fee_percentile")

    def to_dict(self) -> dict:
        return {
            "owner": encode_str(self.owner),
            "margin_account_id": self.margin_account_id.to_json(),
            "exchange_id": _exchange_id_json(self.exchange_id),
            "priority_fee_percentile": self.priority_fee_percentile,
        }


@dataclass
class DepositMarginPayload:
    """Request for POST /deposit-margin-{transaction,instructions}."""

    owner: Pubkey
    margin_account_id: MarginAccountIdentifier
    margin: int
    exchange_id: Optional[ExchangeIdentifier] = None
    priority_fee_percentile: Optional[int] = None

    def __post_init__(self):
        validate_pubkey(self.owner, "owner")
        validate_identifier(self.margin_account_id, MarginAccountIdentifier, "margin_account_id")
        validate_int(self.margin, U64, "margin")
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)
        validate_optional_int(self.priority_fee_percentile, U16, "priority_fee_percentile")

    def to_dict(self) -> dict:
        return {
            "owner": encode_str(self.owner),
            "margin_account_id": self.margin_account_id.to_json(),
            "margin": self.margin,
            "exchange_id": _exchange_id_json(self.exchange_id),
            "priority_fee_percentile": self.priority_fee_percentile,
        }


@dataclass
class WithdrawMarginPayload:
    """Request for POST /withdraw-margin-{transaction,instructions}."""

    owner: Pubkey
    margin_account_id: MarginAccountIdentifier
    margin: int
    settlement_request_id: Optional[int] = None
    keeper_tip: Optional[int] = None
    exchange_id: Optional[ExchangeIdentifier] = None
    priority_fee_percentile: Optional[int] = None

    def __post_init__(self):
        validate_pubkey(self.owner, "owner")
        validate_identifier(self.margin_account_id, MarginAccountIdentifier, "margin_account_id")
        validate_int(self.margin, U64, "margin")
        validate_optional_int(self.settlement_request_id, U64, "settlement_request_id")
        validate_optional_int(self.keeper_tip, U64, "keeper_tip")
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)
        validate_optional_int(self.priority_fee_percentile, U16, "priority_fee_percentile")

    def to_dict(self) -> dict:
        return {
            "owner": encode_str(self.owner),
            "margin_account_id": self.margin_account_id.to_json(),
            "margin": self.margin,
            "settlement_request_id": self.settlement_request_id,
            "keeper_tip": self.keeper_tip,
            "exchange_id": _exchange_id_json(self.exchange_id),
            "priority_fee_percentile": self.priority_fee_percentile,
        }


@dataclass
class ModifyPositionPayload:
    """Request for POST /modify-position-{transaction,instructions}."""

    owner: Pubkey
    margin_account_id: MarginAccountIdentifier
    market_id: int
    size_delta: int
    slippage_setting: SlippageSetting
    exchange_id: Optional[ExchangeIdentifier] = None
    priority_fee_percentile: Optional[int] = None

    def __post_init__(self):
        validate_pubkey(self.owner, "owner")
        validate_identifier(self.margin_account_id, MarginAccountIdentifier, "margin_account_id")
        validate_int(self.market_id, U32, "market_id")
        validate_int(self.size_delta, I128, "size_delta")
        _validate_slippage(self.slippage_setting)
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)
        validate_optional_int(self.priority_fee_percentile, U16, "priority_fee_percentile")

    def to_dict(self) -> dict:
        return {
            "owner": encode_str(self.owner),
            "margin_account_id": self.margin_account_id.to_json(),
            "market_id": self.market_id,
            "size_delta": encode_str(self.size_delta),
            **_slippage_json(self.slippage_setting),
            "exchange_id": _exchange_id_json(self.exchange_id),
            "priority_fee_percentile": self.priority_fee_percentile,
        }


@dataclass
class ClosePositionPayload:
    """Request for POST /close-position-{transaction,instructions}.

    Closing is a modify whose target size is zero; the server derives the
    size delta from the current position.
    """

    owner: Pubkey
    margin_account_id: MarginAccountIdentifier
    market_id: int
    slippage_setting: SlippageSetting
    exchange_id: Optional[ExchangeIdentifier] = None
    priority_fee_percentile: Optional[int] = None

    def __post_init__(self):
        validate_pubkey(self.owner, "owner")
        validate_identifier(self.margin_account_id, MarginAccountIdentifier, "margin_account_id")
        validate_int(self.market_id, U32, "market_id")
        _validate_slippage(self.slippage_setting)
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)
        validate_optional_int(self.priority_fee_percentile, U16, "priority_fee_percentile")

    def to_dict(self) -> dict:
        return {
            "owner": encode_str(self.owner),
            "margin_account_id": self.margin_account_id.to_json(),
            "market_id": self.market_id,
            **_slippage_json(self.slippage_setting),
            "exchange_id": _exchange_id_json(self.exchange_id),
            "priority_fee_percentile": self.priority_fee_percentile,
        }


@dataclass
class LiquidatePayload:
    """Request for POST /liquidate-{transaction,instructions}."""

    margin_account_to_liquidate: Pubkey
    liquidator: Pubkey
    liquidator_margin_account_id: MarginAccountIdentifier
    exchange_id: Optional[ExchangeIdentifier] = None
    priority_fee_percentile: Optional[int] = None

    def __post_init__(self):
        validate_pubkey(self.margin_account_to_liquidate, "margin_account_to_liquidate")
        validate_pubkey(self.liquidator, "liquidator")
        validate_identifier(
            self.liquidator_margin_account_id,
            MarginAccountIdentifier,
            "liquidator_margin_account_id",
        )
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)
        validate_optional_int(self.priority_fee_percentile, U16, "priority_fee_percentile")

    def to_dict(self) -> dict:
        return {
            "margin_account_to_liquidate": encode_str(self.margin_account_to_liquidate),
            "liquidator": encode_str(self.liquidator),
            "liquidator_margin_account_id": self.liquidator_margin_account_id.to_json(),
            "exchange_id": _exchange_id_json(self.exchange_id),
            "priority_fee_percentile": self.priority_fee_percentile,
        }


@dataclass
class ModifyPositionQuotePayload:
    """Request for POST /modify-position-quote."""

    owner: Pubkey
    margin_account_id: MarginAccountIdentifier
    market_id: int
    size_delta: int
    slippage_setting: SlippageSetting
    exchange_id: Optional[ExchangeIdentifier] = None

    def __post_init__(self):
        validate_pubkey(self.owner, "owner")
        validate_identifier(self.margin_account_id, MarginAccountIdentifier, "margin_account_id")
        validate_int(self.market_id, U32, "market_id")
        validate_int(self.size_delta, I128, "size_delta")
        _validate_slippage(self.slippage_setting)
        validate_identifier(self.exchange_id, ExchangeIdentifier, "exchange_id", optional=True)

    def to_dict(self) -> dict:
        return {
            "owner": encode_str(self.owner),
            "margin_account_id": self.margin_account_id.to_json(),
            "market_id": self.market_id,
            "size_delta": encode_str(self.size_delta),
            **_slippage_json(self.slippage_setting),
            "exchange_id": _exchange_id_json(self.exchange_id),
        }
