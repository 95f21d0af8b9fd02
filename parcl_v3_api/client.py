"""Parcl v3 REST API client implementation."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Union

from solders.pubkey import Pubkey

from . import constants
from .codec import I32, U16, decode_int, decode_list, decode_object, decode_pubkey_list
from .constants import DEFAULT_V3_API_URL
from .error import (
    DecodeError,
    InvalidParameterError,
    RequestError,
    ResponseShapeMismatchError,
)
from .transport import AiohttpTransport, Query, Transport
from .types import (
    ClosePositionPayload,
    CloseMarginAccountPayload,
    CreateMarginAccountInstructionsResponse,
    CreateMarginAccountInstructionsResponseInternal,
    CreateMarginAccountPayload,
    CreateMarginAccountTransactionResponse,
    DepositMarginPayload,
    ExchangeIdentifier,
    ExchangeInfo,
    InstructionInfo,
    InstructionInfoInternal,
    LiquidatePayload,
    MarginAccountIdentifier,
    MarginAccountInfo,
    MarginAccountsPayload,
    MarketIdentifier,
    MarketIdentifiersResponse,
    MarketIdentifiersResponseKind,
    MarketInfo,
    MarketsPayload,
    ModifyPositionPayload,
    ModifyPositionQuote,
    ModifyPositionQuotePayload,
    SlippageSetting,
    TransactionInfo,
    WithdrawMarginPayload,
)
from .validation import validate_optional_int, validate_pubkey

logger = logging.getLogger(__name__)

MarginAccountRef = Union[MarginAccountIdentifier, int, Pubkey]
MarketRef = Union[MarketIdentifier, int, Pubkey]


def _coerce_identifier(build: Callable[[Any], Any], value: Any, field_name: str) -> Any:
    """Build an identifier, reporting bad input as InvalidParameterError."""
    try:
        return build(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"{field_name}: {e}") from e


@dataclass(frozen=True)
class ParclV3ApiClientConfig:
    """Immutable client configuration.

    Args:
        base_url: Base URL of the Parcl v3 API
        exchange_id: Exchange every request targets (defaults to id 0)
        priority_fee_percentile: Priority fee hint sent with mutating requests
    """

    base_url: str = DEFAULT_V3_API_URL
    exchange_id: Union[ExchangeIdentifier, int, Pubkey] = field(
        default_factory=ExchangeIdentifier.default
    )
    priority_fee_percentile: Optional[int] = None

    def __post_init__(self):
        if not self.base_url or not self.base_url.strip():
            raise InvalidParameterError("base_url cannot be empty")
        if not isinstance(self.exchange_id, ExchangeIdentifier):
            exchange_id = _coerce_identifier(
                ExchangeIdentifier.of, self.exchange_id, "exchange_id"
            )
            object.__setattr__(self, "exchange_id", exchange_id)
        validate_optional_int(self.priority_fee_percentile, U16, "priority_fee_percentile")


class ParclV3ApiClient:
    """Parcl v3 REST API client.

    Every method is a single request/response round trip. Nothing is cached
    and nothing is retried; errors surface to the caller as they happen.

    Example:
        ```python
        async with ParclV3ApiClient() as client:
            exchange = await client.get_exchange()
            market_ids = await client.get_market_ids()
        ```
    """

    def __init__(
        self,
        config: Optional[ParclV3ApiClientConfig] = None,
        transport: Optional[Transport] = None,
    ):
        """Create a new client.

        Args:
            config: Client configuration; defaults to the public API and exchange 0
            transport: Optional transport; an AiohttpTransport is created if omitted
        """
        self._config = config or ParclV3ApiClientConfig()
        self._transport = transport or AiohttpTransport(self._config.base_url)

    @property
    def config(self) -> ParclV3ApiClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def exchange_id(self) -> ExchangeIdentifier:
        return self._config.exchange_id

    @property
    def priority_fee_percentile(self) -> Optional[int]:
        return self._config.priority_fee_percentile

    async def __aenter__(self) -> "ParclV3ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    # =========================================================================
    # Request plumbing
    # =========================================================================

    def _exchange_query(self) -> tuple[str, str]:
        return ("exchange_id", self._config.exchange_id.to_json())

    def _margin_account_ref(
        self,
        value: MarginAccountRef,
        field_name: str = "margin_account_id",
    ) -> MarginAccountIdentifier:
        return _coerce_identifier(MarginAccountIdentifier.of, value, field_name)

    def _market_ref(self, value: MarketRef, field_name: str = "market_id") -> MarketIdentifier:
        return _coerce_identifier(MarketIdentifier.of, value, field_name)

    async def _request(
        self,
        method: str,
        path: str,
        query: Query = (),
        body: Optional[dict] = None,
    ) -> Any:
        """Send a request, check the status and parse the JSON body.

        Raises:
            TransportError: If the round trip fails
            RequestError: If the status is not 2xx
            DecodeError: If the body is not valid JSON
        """
        status, raw = await self._transport.send(method, path, query, body)
        if not 200 <= status < 300:
            body_text = raw.decode("utf-8", errors="replace")
            logger.warning(f"{method} {path} returned status {status}")
            raise RequestError(status, body_text)
        logger.debug(f"{method} {path} returned status {status} ({len(raw)} bytes)")
        try:
            return json.loads(raw)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(f"Failed to deserialize response from {path}: {e}")

    async def _get(self, path: str, query: Query = ()) -> Any:
        return await self._request("GET", path, query=query)

    async def _post(self, path: str, body: dict) -> Any:
        return await self._request("POST", path, body=body)

    # =========================================================================
    # Exchange endpoints
    # =========================================================================

    async def get_exchange(self) -> ExchangeInfo:
        """Get the configured exchange.

        Returns:
            ExchangeInfo snapshot
        """
        data = await self._get(constants.EXCHANGE_PATH, [self._exchange_query()])
        return ExchangeInfo.from_dict(data)

    async def get_exponents(self) -> dict[str, int]:
        """Get the decimal exponent of every price feed, keyed by symbol."""
        data = await self._get(constants.EXPONENTS_PATH, [self._exchange_query()])
        exponents = decode_object(data, "exponents")
        return {symbol: decode_int(expo, I32) for symbol, expo in exponents.items()}

    # =========================================================================
    # Market id endpoints
    # =========================================================================

    async def _get_market_ids_internal(
        self,
        response_kind: MarketIdentifiersResponseKind,
    ) -> MarketIdentifiersResponse:
        data = await self._get(
            constants.MARKET_IDS_PATH,
            [("response_kind", response_kind.value), self._exchange_query()],
        )
        response = MarketIdentifiersResponse.from_json(data)
        if not response.matches(response_kind):
            logger.warning(
                f"Requested {response_kind} market ids, server answered with {response.kind}"
            )
            raise ResponseShapeMismatchError(response_kind)
        return response

    async def get_market_ids(self) -> list[int]:
        """Get the ids of every market on the exchange.

        Raises:
            ResponseShapeMismatchError: If the server does not answer with ids
        """
        response = await self._get_market_ids_internal(MarketIdentifiersResponseKind.IDS)
        return list(response.value)

    async def get_market_ids_map(self) -> dict[int, Pubkey]:
        """Get a mapping from market id to market address.

        Raises:
            ResponseShapeMismatchError: If the server does not answer with a map
        """
        response = await self._get_market_ids_internal(MarketIdentifiersResponseKind.MAP)
        return dict(response.value)

    async def get_market_addresses(self) -> list[Pubkey]:
        """Get the address of every market on the exchange.

        Raises:
            ResponseShapeMismatchError: If the server does not answer with addresses
        """
        response = await self._get_market_ids_internal(MarketIdentifiersResponseKind.ADDRESSES)
        return list(response.value)

    # =========================================================================
    # Margin account endpoints
    # =========================================================================

    async def get_margin_account(
        self,
        margin_account_id: MarginAccountRef,
        owner: Optional[Pubkey] = None,
    ) -> MarginAccountInfo:
        """Get a margin account.

        Args:
            margin_account_id: Margin account id or address
            owner: Owner, required when looking up by numeric id

        Returns:
            MarginAccountInfo snapshot
        """
        margin_account_id = self._margin_account_ref(margin_account_id)
        if owner is not None:
            validate_pubkey(owner, "owner")
        query = [
            ("margin_account_id", margin_account_id.to_json()),
            ("owner", None if owner is None else str(owner)),
            self._exchange_query(),
        ]
        data = await self._get(constants.MARGIN_ACCOUNT_PATH, query)
        return MarginAccountInfo.from_dict(data)

    async def get_margin_account_from_id(
        self,
        owner: Pubkey,
        margin_account_id: int,
    ) -> MarginAccountInfo:
        margin_account_id = _coerce_identifier(
            MarginAccountIdentifier.from_id, margin_account_id, "margin_account_id"
        )
        return await self.get_margin_account(margin_account_id, owner)

    async def get_margin_account_from_address(self, address: Pubkey) -> MarginAccountInfo:
        margin_account_id = _coerce_identifier(
            MarginAccountIdentifier.from_address, address, "address"
        )
        return await self.get_margin_account(margin_account_id)

    async def get_margin_accounts(
        self,
        margin_accounts: Sequence[Pubkey],
    ) -> list[Optional[MarginAccountInfo]]:
        """Get several margin accounts in one round trip.

        Args:
            margin_accounts: Margin account addresses

        Returns:
            One entry per requested address, in request order; None where the
            account does not exist
        """
        payload = MarginAccountsPayload(
            margin_accounts=list(margin_accounts),
            exchange_id=self._config.exchange_id,
        )
        data = await self._post(constants.MARGIN_ACCOUNTS_PATH, payload.to_dict())
        return [
            None if entry is None else MarginAccountInfo.from_dict(entry)
            for entry in decode_list(data)
        ]

    async def get_unhealthy_margin_accounts(self) -> list[Pubkey]:
        """Get the addresses of margin accounts that can be liquidated."""
        data = await self._get(constants.UNHEALTHY_MARGIN_ACCOUNTS_PATH, [self._exchange_query()])
        return decode_pubkey_list(data)

    # =========================================================================
    # Market endpoints
    # =========================================================================

    async def get_market(self, market_id: MarketRef) -> MarketInfo:
        """Get a market by id or address.

        Returns:
            MarketInfo snapshot
        """
        market_id = self._market_ref(market_id)
        query = [("market_id", market_id.to_json()), self._exchange_query()]
        data = await self._get(constants.MARKET_PATH, query)
        return MarketInfo.from_dict(data)

    async def get_market_from_id(self, market_id: int) -> MarketInfo:
        market_id = _coerce_identifier(MarketIdentifier.from_id, market_id, "market_id")
        return await self.get_market(market_id)

    async def get_market_from_address(self, address: Pubkey) -> MarketInfo:
        market_id = _coerce_identifier(MarketIdentifier.from_address, address, "address")
        return await self.get_market(market_id)

    async def get_markets(self, market_ids: Sequence[MarketRef]) -> list[MarketInfo]:
        """Get several markets in one round trip, in request order."""
        payload = MarketsPayload(
            market_ids=[self._market_ref(market_id) for market_id in market_ids],
            exchange_id=self._config.exchange_id,
        )
        data = await self._post(constants.MARKETS_PATH, payload.to_dict())
        return [MarketInfo.from_dict(entry) for entry in decode_list(data)]

    async def get_markets_from_ids(self, ids: Sequence[int]) -> list[MarketInfo]:
        return await self.get_markets(
            [_coerce_identifier(MarketIdentifier.from_id, i, "ids") for i in ids]
        )

    async def get_markets_from_addresses(self, addresses: Sequence[Pubkey]) -> list[MarketInfo]:
        return await self.get_markets(
            [_coerce_identifier(MarketIdentifier.from_address, a, "addresses") for a in addresses]
        )

    # =========================================================================
    # Create / close margin account
    # =========================================================================

    def _create_margin_account_payload(
        self,
        owner: Pubkey,
        margin_account_id: Optional[int],
    ) -> CreateMarginAccountPayload:
        return CreateMarginAccountPayload(
            owner=owner,
            margin_account_id=margin_account_id,
            exchange_id=self._config.exchange_id,
            priority_fee_percentile=self._config.priority_fee_percentile,
        )

    async def get_create_margin_account_transaction(
        self,
        owner: Pubkey,
        margin_account_id: Optional[int] = None,
    ) -> CreateMarginAccountTransactionResponse:
        """Build a transaction creating a margin account.

        Args:
            owner: Owner of the new margin account
            margin_account_id: Desired id; the server picks the next free id if None

        Returns:
            CreateMarginAccountTransactionResponse with the new account's address and id
        """
        payload = self._create_margin_account_payload(owner, margin_account_id)
        data = await self._post(
            constants.CREATE_MARGIN_ACCOUNT_TRANSACTION_PATH, payload.to_dict()
        )
        return CreateMarginAccountTransactionResponse.from_dict(data)

    async def get_create_margin_account_instructions(
        self,
        owner: Pubkey,
        margin_account_id: Optional[int] = None,
    ) -> CreateMarginAccountInstructionsResponse:
        """Instructions variant of get_create_margin_account_transaction."""
        payload = self._create_margin_account_payload(owner, margin_account_id)
        data = await self._post(
            constants.CREATE_MARGIN_ACCOUNT_INSTRUCTIONS_PATH, payload.to_dict()
        )
        return CreateMarginAccountInstructionsResponseInternal.from_dict(data).to_response()

    def _close_margin_account_payload(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
    ) -> CloseMarginAccountPayload:
        return CloseMarginAccountPayload(
            owner=owner,
            margin_account_id=self._margin_account_ref(margin_account_id),
            exchange_id=self._config.exchange_id,
            priority_fee_percentile=self._config.priority_fee_percentile,
        )

    async def get_close_margin_account_transaction(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
    ) -> TransactionInfo:
        """Build a transaction closing a margin account."""
        payload = self._close_margin_account_payload(owner, margin_account_id)
        data = await self._post(constants.CLOSE_MARGIN_ACCOUNT_TRANSACTION_PATH, payload.to_dict())
        return TransactionInfo.from_dict(data)

    async def get_close_margin_account_instructions(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
    ) -> InstructionInfo:
        payload = self._close_margin_account_payload(owner, margin_account_id)
        data = await self._post(
            constants.CLOSE_MARGIN_ACCOUNT_INSTRUCTIONS_PATH, payload.to_dict()
        )
        return InstructionInfoInternal.from_dict(data).to_instruction_info()

    # =========================================================================
    # Deposit / withdraw margin
    # =========================================================================

    def _deposit_margin_payload(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        margin: int,
    ) -> DepositMarginPayload:
        return DepositMarginPayload(
            owner=owner,
            margin_account_id=self._margin_account_ref(margin_account_id),
            margin=margin,
            exchange_id=self._config.exchange_id,
            priority_fee_percentile=self._config.priority_fee_percentile,
        )

    async def get_deposit_margin_transaction(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        margin: int,
    ) -> TransactionInfo:
        """Build a transaction depositing collateral into a margin account.

        Args:
            owner: Margin account owner
            margin_account_id: Margin account id or address
            margin: Amount of collateral in base units
        """
        payload = self._deposit_margin_payload(owner, margin_account_id, margin)
        data = await self._post(constants.DEPOSIT_MARGIN_TRANSACTION_PATH, payload.to_dict())
        return TransactionInfo.from_dict(data)

    async def get_deposit_margin_instructions(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        margin: int,
    ) -> InstructionInfo:
        payload = self._deposit_margin_payload(owner, margin_account_id, margin)
        data = await self._post(constants.DEPOSIT_MARGIN_INSTRUCTIONS_PATH, payload.to_dict())
        return InstructionInfoInternal.from_dict(data).to_instruction_info()

    def _withdraw_margin_payload(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        margin: int,
        settlement_request_id: Optional[int],
        keeper_tip: Optional[int],
    ) -> WithdrawMarginPayload:
        return WithdrawMarginPayload(
            owner=owner,
            margin_account_id=self._margin_account_ref(margin_account_id),
            margin=margin,
            settlement_request_id=settlement_request_id,
            keeper_tip=keeper_tip,
            exchange_id=self._config.exchange_id,
            priority_fee_percentile=self._config.priority_fee_percentile,
        )

    async def get_withdraw_margin_transaction(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        margin: int,
        settlement_request_id: Optional[int] = None,
        keeper_tip: Optional[int] = None,
    ) -> TransactionInfo:
        """Build a transaction requesting a margin withdrawal.

        Args:
            owner: Margin account owner
            margin_account_id: Margin account id or address
            margin: Amount of collateral in base units
            settlement_request_id: Optional id for the settlement request
            keeper_tip: Optional tip for the keeper executing the settlement
        """
        payload = self._withdraw_margin_payload(
            owner, margin_account_id, margin, settlement_request_id, keeper_tip
        )
        data = await self._post(constants.WITHDRAW_MARGIN_TRANSACTION_PATH, payload.to_dict())
        return TransactionInfo.from_dict(data)

    async def get_withdraw_margin_instructions(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        margin: int,
        settlement_request_id: Optional[int] = None,
        keeper_tip: Optional[int] = None,
    ) -> InstructionInfo:
        payload = self._withdraw_margin_payload(
            owner, margin_account_id, margin, settlement_request_id, keeper_tip
        )
        data = await self._post(constants.WITHDRAW_MARGIN_INSTRUCTIONS_PATH, payload.to_dict())
        return InstructionInfoInternal.from_dict(data).to_instruction_info()

    # =========================================================================
    # Positions
    # =========================================================================

    def _modify_position_payload(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        market_id: int,
        size_delta: int,
        slippage_setting: SlippageSetting,
    ) -> ModifyPositionPayload:
        return ModifyPositionPayload(
            owner=owner,
            margin_account_id=self._margin_account_ref(margin_account_id),
            market_id=market_id,
            size_delta=size_delta,
            slippage_setting=slippage_setting,
            exchange_id=self._config.exchange_id,
            priority_fee_percentile=self._config.priority_fee_percentile,
        )

    async def get_modify_position_transaction(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        market_id: int,
        size_delta: int,
        slippage_setting: SlippageSetting,
    ) -> TransactionInfo:
        """Build a transaction changing a position's size.

        Args:
            owner: Margin account owner
            margin_account_id: Margin account id or address
            market_id: Market to trade
            size_delta: Signed size change; positive goes long, negative goes short
            slippage_setting: AcceptablePrice or SlippageToleranceBps
        """
        payload = self._modify_position_payload(
            owner, margin_account_id, market_id, size_delta, slippage_setting
        )
        data = await self._post(constants.MODIFY_POSITION_TRANSACTION_PATH, payload.to_dict())
        return TransactionInfo.from_dict(data)

    async def get_modify_position_instructions(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        market_id: int,
        size_delta: int,
        slippage_setting: SlippageSetting,
    ) -> InstructionInfo:
        payload = self._modify_position_payload(
            owner, margin_account_id, market_id, size_delta, slippage_setting
        )
        data = await self._post(constants.MODIFY_POSITION_INSTRUCTIONS_PATH, payload.to_dict())
        return InstructionInfoInternal.from_dict(data).to_instruction_info()

    def _close_position_payload(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        market_id: int,
        slippage_setting: SlippageSetting,
    ) -> ClosePositionPayload:
        return ClosePositionPayload(
            owner=owner,
            margin_account_id=self._margin_account_ref(margin_account_id),
            market_id=market_id,
            slippage_setting=slippage_setting,
            exchange_id=self._config.exchange_id,
            priority_fee_percentile=self._config.priority_fee_percentile,
        )

    async def get_close_position_transaction(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        market_id: int,
        slippage_setting: SlippageSetting,
    ) -> TransactionInfo:
        """Build a transaction bringing a position's size back to zero."""
        payload = self._close_position_payload(
            owner, margin_account_id, market_id, slippage_setting
        )
        data = await self._post(constants.CLOSE_POSITION_TRANSACTION_PATH, payload.to_dict())
        return TransactionInfo.from_dict(data)

    async def get_close_position_instructions(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        market_id: int,
        slippage_setting: SlippageSetting,
    ) -> InstructionInfo:
        payload = self._close_position_payload(
            owner, margin_account_id, market_id, slippage_setting
        )
        data = await self._post(constants.CLOSE_POSITION_INSTRUCTIONS_PATH, payload.to_dict())
        return InstructionInfoInternal.from_dict(data).to_instruction_info()

    async def get_modify_position_quote(
        self,
        owner: Pubkey,
        margin_account_id: MarginAccountRef,
        market_id: int,
        size_delta: int,
        slippage_setting: SlippageSetting,
    ) -> ModifyPositionQuote:
        """Preview the price and fees of a position change without building anything."""
        payload = ModifyPositionQuotePayload(
            owner=owner,
            margin_account_id=self._margin_account_ref(margin_account_id),
            market_id=market_id,
            size_delta=size_delta,
            slippage_setting=slippage_setting,
            exchange_id=self._config.exchange_id,
        )
        data = await self._post(constants.MODIFY_POSITION_QUOTE_PATH, payload.to_dict())
        return ModifyPositionQuote.from_dict(data)

    # =========================================================================
    # Liquidation
    # =========================================================================

    def _liquidate_payload(
        self,
        margin_account_to_liquidate: Pubkey,
        liquidator: Pubkey,
        liquidator_margin_account_id: MarginAccountRef,
    ) -> LiquidatePayload:
        return LiquidatePayload(
            margin_account_to_liquidate=margin_account_to_liquidate,
            liquidator=liquidator,
            liquidator_margin_account_id=self._margin_account_ref(
                liquidator_margin_account_id, "liquidator_margin_account_id"
            ),
            exchange_id=self._config.exchange_id,
            priority_fee_percentile=self._config.priority_fee_percentile,
        )

    async def get_liquidate_transaction(
        self,
        margin_account_to_liquidate: Pubkey,
        liquidator: Pubkey,
        liquidator_margin_account_id: MarginAccountRef,
    ) -> TransactionInfo:
        """Build a transaction liquidating an unhealthy margin account.

        Args:
            margin_account_to_liquidate: Address of the unhealthy margin account
            liquidator: Liquidator wallet
            liquidator_margin_account_id: Liquidator's own margin account id or address
        """
        payload = self._liquidate_payload(
            margin_account_to_liquidate, liquidator, liquidator_margin_account_id
        )
        data = await self._post(constants.LIQUIDATE_TRANSACTION_PATH, payload.to_dict())
        return TransactionInfo.from_dict(data)

    async def get_liquidate_instructions(
        self,
        margin_account_to_liquidate: Pubkey,
        liquidator: Pubkey,
        liquidator_margin_account_id: MarginAccountRef,
    ) -> InstructionInfo:
        payload = self._liquidate_payload(
            margin_account_to_liquidate, liquidator, liquidator_margin_account_id
        )
        data = await self._post(constants.LIQUIDATE_INSTRUCTIONS_PATH, payload.to_dict())
        return InstructionInfoInternal.from_dict(data).to_instruction_info()
