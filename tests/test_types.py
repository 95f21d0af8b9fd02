"""Tests for response type decoding."""

import pytest
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from parcl_v3_api import (
    CodecError,
    CreateMarginAccountInstructionsResponseInternal,
    CreateMarginAccountTransactionResponse,
    DecodeError,
    ExchangeInfo,
    InstructionInfoInternal,
    InstructionInternal,
    MarginAccountInfo,
    MarketInfo,
    ModifyPositionQuote,
    OracleConfig,
    OracleKind,
    TransactionInfo,
)

from .factories import (
    exchange_info_dict,
    instruction_dict,
    instruction_info_dict,
    margin_account_dict,
    market_info_dict,
    transaction_info_dict,
)


class TestTransactionInfo:
    def test_from_dict(self):
        info = TransactionInfo.from_dict(transaction_info_dict("AQIDBA=="))
        assert info.transaction == b"\x01\x02\x03\x04"
        assert info.total_required_lamports == 5000
        assert info.required_compute_lamports == 4000
        assert info.required_rent_lamports == 1000
        assert info.cu_limit == 400000

    def test_empty_transaction(self):
        assert TransactionInfo.from_dict(transaction_info_dict("")).transaction == b""

    def test_invalid_base64(self):
        with pytest.raises(CodecError):
            TransactionInfo.from_dict(transaction_info_dict("not base64!"))

    def test_missing_field(self):
        data = transaction_info_dict()
        del data["cu_limit"]
        with pytest.raises(DecodeError, match="cu_limit"):
            TransactionInfo.from_dict(data)

    def test_not_an_object(self):
        with pytest.raises(DecodeError):
            TransactionInfo.from_dict(["transaction"])


class TestInstructionConversion:
    def test_account_flags_preserved(self):
        program_id, signer, readonly = (Pubkey.new_unique() for _ in range(3))
        internal = InstructionInternal.from_dict(
            instruction_dict(program_id, [(signer, True, False), (readonly, False, True)], "AQID")
        )

        instruction = internal.to_instruction()

        assert isinstance(instruction, Instruction)
        assert instruction.program_id == program_id
        assert bytes(instruction.data) == b"\x01\x02\x03"
        assert list(instruction.accounts) == [
            AccountMeta(pubkey=signer, is_signer=True, is_writable=False),
            AccountMeta(pubkey=readonly, is_signer=False, is_writable=True),
        ]

    def test_instruction_info(self):
        v3 = instruction_dict(Pubkey.new_unique(), [(Pubkey.new_unique(), True, True)])
        budget = instruction_dict(Pubkey.new_unique(), [], "")

        info = InstructionInfoInternal.from_dict(
            instruction_info_dict([v3], [budget])
        ).to_instruction_info()

        assert len(info.instructions.v3_instructions) == 1
        assert len(info.instructions.compute_budget_instructions) == 1
        assert info.instructions.all() == [
            info.instructions.compute_budget_instructions[0],
            info.instructions.v3_instructions[0],
        ]
        assert info.cu_limit == 400000

    def test_account_flag_must_be_bool(self):
        data = instruction_dict(Pubkey.new_unique(), [(Pubkey.new_unique(), True, False)])
        data["accounts"][0]["is_signer"] = 1
        with pytest.raises(CodecError):
            InstructionInternal.from_dict(data)

    def test_missing_nested_field(self):
        data = instruction_info_dict([], [])
        del data["instructions"]["compute_budget_instructions"]
        with pytest.raises(DecodeError, match="compute_budget_instructions"):
            InstructionInfoInternal.from_dict(data)


class TestCreateMarginAccountResponses:
    def test_transaction(self):
        address = Pubkey.new_unique()
        data = transaction_info_dict()
        del data["cu_limit"]
        data.update({"margin_account_address": str(address), "margin_account_id": 4})

        response = CreateMarginAccountTransactionResponse.from_dict(data)

        assert response.margin_account_address == address
        assert response.margin_account_id == 4
        assert response.cu_limit is None

    def test_instructions(self):
        address = Pubkey.new_unique()
        data = instruction_info_dict(
            [instruction_dict(Pubkey.new_unique(), [(Pubkey.new_unique(), True, True)])], []
        )
        data.update({"margin_account_address": str(address), "margin_account_id": 0})

        response = CreateMarginAccountInstructionsResponseInternal.from_dict(data).to_response()

        assert response.margin_account_address == address
        assert response.margin_account_id == 0
        assert response.cu_limit == 400000
        assert isinstance(response.instructions.v3_instructions[0], Instruction)


class TestExchangeInfo:
    def test_from_dict(self):
        address = Pubkey.new_unique()
        info = ExchangeInfo.from_dict(exchange_info_dict(address))

        assert info.address == address
        assert info.id == 0
        assert info.market_ids == [23, 24]
        assert info.collateral_expo == -6
        assert info.accounting.notional_open_interest == 2**128 - 1
        assert info.settings.min_liquidation_fee == 1000000
        assert info.settings.settlement_delay == 60
        assert [c.kind for c in info.oracle_configs] == [OracleKind.PYTH, OracleKind.PYTH_V2]

    def test_id_must_be_text(self):
        data = exchange_info_dict(Pubkey.new_unique())
        data["id"] = 0
        with pytest.raises(CodecError):
            ExchangeInfo.from_dict(data)

    def test_unknown_oracle_kind(self):
        with pytest.raises(CodecError, match="Unknown oracle kind"):
            OracleConfig.from_dict({"kind": "Chainlink", "program_id": str(Pubkey.new_unique())})


class TestMarginAccountInfo:
    def test_from_dict(self):
        address, owner = Pubkey.new_unique(), Pubkey.new_unique()
        info = MarginAccountInfo.from_dict(margin_account_dict(address, id=3, owner=owner))

        assert info.address == address
        assert info.owner == owner
        assert info.id == 3
        assert info.margin == 2**64 - 1
        assert info.delegate == Pubkey.default()
        assert info.positions[0].size == -(2**127)
        assert info.positions[0].last_interaction_price == 2**128 - 1
        assert info.positions[0].last_interaction_funding_per_unit == "-0.000123"
        assert info.can_liquidate is False

    def test_negative_available_margin(self):
        data = margin_account_dict(Pubkey.new_unique())
        data["margins"]["available_margin"] = "-500"
        assert MarginAccountInfo.from_dict(data).margins.available_margin == -500

    def test_negative_margin_rejected(self):
        data = margin_account_dict(Pubkey.new_unique())
        data["margin"] = "-1"
        with pytest.raises(CodecError):
            MarginAccountInfo.from_dict(data)

    def test_missing_field(self):
        data = margin_account_dict(Pubkey.new_unique())
        del data["owner"]
        with pytest.raises(DecodeError, match="MarginAccountInfo"):
            MarginAccountInfo.from_dict(data)


class TestMarketInfo:
    def test_from_dict(self):
        address = Pubkey.new_unique()
        info = MarketInfo.from_dict(market_info_dict(address, id=23))

        assert info.address == address
        assert info.id == 23
        assert info.status == 1
        assert info.price_feed_info.price == 123456789
        assert info.price_feed_info.expo == -6
        assert info.accounting.skew == -250000
        assert info.accounting.last_funding_rate == "0.0001"
        assert info.settings.skew_scale == 100000000000
        assert info.settings.authorized_liquidator == Pubkey.default()

    def test_status_width(self):
        data = market_info_dict(Pubkey.new_unique())
        data["status"] = 256
        with pytest.raises(CodecError):
            MarketInfo.from_dict(data)


class TestModifyPositionQuote:
    def test_from_dict(self):
        quote = ModifyPositionQuote.from_dict(
            {
                "market_id": 23,
                "size_delta": "-1000000",
                "fill_price": "123500000",
                "index_price": "123456789",
                "notional": "123500000000000",
                "fees": "61750",
            }
        )
        assert quote.market_id == 23
        assert quote.size_delta == -1000000
        assert quote.fees == 61750
        assert quote.extra == {}

    def test_unknown_keys_kept(self):
        quote = ModifyPositionQuote.from_dict(
            {
                "market_id": 1,
                "size_delta": "5",
                "fill_price": "10",
                "index_price": "10",
                "notional": "50",
                "fees": "0",
                "price_impact": "0.0001",
            }
        )
        assert quote.extra == {"price_impact": "0.0001"}
