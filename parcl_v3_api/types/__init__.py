"""Wire types for the Parcl v3 API."""

from .identifiers import (
    ExchangeId,
    MarginAccountId,
    MarketId,
    SettlementRequestId,
    ExchangeIdentifier,
    MarginAccountIdentifier,
    MarketIdentifier,
    MarketIdentifiersResponseKind,
    MarketIdentifiersResponse,
)

from .payloads import (
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
)

from .transaction import (
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
)

from .exchange import (
    OracleKind,
    OracleConfig,
    ExchangeInfoAccounting,
    ExchangeInfoSettings,
    ExchangeInfo,
)

from .margin_account import (
    Margins,
    PositionInfo,
    MarginAccountInfo,
)

from .market import (
    PriceFeedInfo,
    MarketInfoAccounting,
    MarketInfoSettings,
    MarketInfo,
)

from .quote import ModifyPositionQuote

__all__ = [
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
