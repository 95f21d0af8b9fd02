"""Constants for the Parcl v3 API client."""

DEFAULT_V3_API_URL = "https://v3.parcl-api.com"

DEFAULT_EXCHANGE_ID = 0

# Paths
EXCHANGE_PATH = "/exchange"
EXPONENTS_PATH = "/exponents"
MARKET_IDS_PATH = "/market-ids"
MARGIN_ACCOUNT_PATH = "/margin-account"
MARGIN_ACCOUNTS_PATH = "/margin-accounts"
UNHEALTHY_MARGIN_ACCOUNTS_PATH = "/unhealthy-margin-accounts"
MARKET_PATH = "/market"
MARKETS_PATH = "/markets"
CREATE_MARGIN_ACCOUNT_TRANSACTION_PATH = "/create-margin-account-transaction"
CREATE_MARGIN_ACCOUNT_INSTRUCTIONS_PATH = "/create-margin-account-instructions"
CLOSE_MARGIN_ACCOUNT_TRANSACTION_PATH = "/close-margin-account-transaction"
CLOSE_MARGIN_ACCOUNT_INSTRUCTIONS_PATH = "/close-margin-account-instructions"
DEPOSIT_MARGIN_TRANSACTION_PATH = "/deposit-margin-transaction"
DEPOSIT_MARGIN_INSTRUCTIONS_PATH = "/deposit-margin-instructions"
WITHDRAW_MARGIN_TRANSACTION_PATH = "/withdraw-margin-transaction"
WITHDRAW_MARGIN_INSTRUCTIONS_PATH = "/withdraw-margin-instructions"
MODIFY_POSITION_TRANSACTION_PATH = "/modify-position-transaction"
MODIFY_POSITION_INSTRUCTIONS_PATH = "/modify-position-instructions"
CLOSE_POSITION_TRANSACTION_PATH = "/close-position-transaction"
CLOSE_POSITION_INSTRUCTIONS_PATH = "/close-position-instructions"
LIQUIDATE_TRANSACTION_PATH = "/liquidate-transaction"
LIQUIDATE_INSTRUCTIONS_PATH = "/liquidate-instructions"
MODIFY_POSITION_QUOTE_PATH = "/modify-position-quote"
