"""Parcl v3 API client - Python SDK for the Parcl v3 perpetuals exchange API.

The client reads exchange, market and margin account state, and builds
transactions or instructions for every exchange operation. Signing and
submitting them is left to the caller.

Example:
    ```python
    from parcl_v3_api import ParclV3ApiClient, SlippageToleranceBps

    async with ParclV3ApiClient() as client:
        market_ids = await client.get_market_ids()
        tx = await client.get_modify_position_transaction(
            owner, 0, market_ids[0], 1_000_000, SlippageToleranceBps(50)
        )
    ```
"""

__version__ = "0.1.0"

from .client import ParclV3ApiClient, ParclV3ApiClientConfig

from .transport import AiohttpTransport, Transport

from .constants import DEFAULT_V3_API_URL

from .error import (
    ApiError,
    TransportError,
    RequestError,
    DecodeError,
    CodecError,
    IdentifierParseError,
    ResponseShapeMismatchError,
    InvalidParameterError,
)

from .types import (
    # Identifier types
    ExchangeId,
    MarginAccountId,
    MarketId,
    SettlementRequestId,
    ExchangeIdentifier,
    MarginAccountIdentifier,
    MarketIdentifier,
    MarketIdentifiersResponseKind,
    MarketIdentifiersResponse,
    # Payload types
    SlippageSetting,
    AcceptablePrice,
    SlippageToleranceBps,
    MarginAccountsPayload,
    MarketsPayload,
    CreateMarginAccountPayload,
    CloseMarginAccountPayload,
    DepositMarginPayload,
    WithdrawMarginPayload,
    ModifyPositionPayload,
    ClosePositionPayload,
    LiquidatePayload,
    ModifyPositionQuotePayload,
    # Transaction types
    TransactionInfo,
    AccountMetaInternal,
    InstructionInternal,
    InstructionsInternal,
    InstructionInfoInternal,
    Instructions,
    InstructionInfo,
    CreateMarginAccountTransactionResponse,
    CreateMarginAccountInstructionsResponse,
    CreateMarginAccountInstructionsResponseInternal,
    # Exchange types
    OracleKind,
    OracleConfig,
    ExchangeInfoAccounting,
    ExchangeInfoSettings,
    ExchangeInfo,
    # Margin account types
    Margins,
    PositionInfo,
    MarginAccountInfo,
    # Market types
    PriceFeedInfo,
    MarketInfoAccounting,
    MarketInfoSettings,
    MarketInfo,
    # Quote types
    ModifyPositionQuote,
)

__all__ = [
    "__version__",
    # Client
    "ParclV3ApiClient",
    "ParclV3ApiClientConfig",
    "AiohttpTransport",
    "Transport",
    "DEFAULT_V3_API_URL",
    # Errors
    "ApiError",
    "TransportError",
    "RequestError",
    "DecodeError",
    "CodecError",
    "IdentifierParseError",
    "ResponseShapeMismatchError",
    "InvalidParameterError",
    # Identifier types
    "ExchangeId",
    "MarginAccountId",
    "MarketId",
    "SettlementRequestId",
    "ExchangeIdentifier",
    "MarginAccountIdentifier",
    "MarketIdentifier",
    "MarketIdentifiersResponseKind",
    "MarketIdentifiersResponse",
    # Payload types
    "SlippageSetting",
    "AcceptablePrice",
    "SlippageToleranceBps",
    "MarginAccountsPayload",
    "MarketsPayload",
    "CreateMarginAccountPayload",
    "CloseMarginAccountPayload",
    "DepositMarginPayload",
    "WithdrawMarginPayload",
    "ModifyPositionPayload",
    "ClosePositionPayload",
    "LiquidatePayload",
    "ModifyPositionQuotePayload",
    # Transaction types
    "TransactionInfo",
    "AccountMetaInternal",
    "InstructionInternal",
    "InstructionsInternal",
    "InstructionInfoInternal",
    "Instructions",
    "InstructionInfo",
    "CreateMarginAccountTransactionResponse",
    "CreateMarginAccountInstructionsResponse",
    "CreateMarginAccountInstructionsResponseInternal",
    # Exchange types
    "OracleKind",
    "OracleConfig",
    "ExchangeInfoAccounting",
    "ExchangeInfoSettings",
    "ExchangeInfo",
    # Margin account types
    "Margins",
    "PositionInfo",
    "MarginAccountInfo",
    # Market types
    "PriceFeedInfo",
    "MarketInfoAccounting",
    "MarketInfoSettings",
    "MarketInfo",
    # Quote types
    "ModifyPositionQuote",
]
