"""Tests for id-or-address identifiers and the market ids response."""

import pytest
from solders.pubkey import Pubkey

from parcl_v3_api import (
    DecodeError,
    ExchangeIdentifier,
    IdentifierParseError,
    MarginAccountIdentifier,
    MarketIdentifier,
    MarketIdentifiersResponse,
    MarketIdentifiersResponseKind,
)


class TestIdentifierConstruction:
    def test_from_id(self):
        market = MarketIdentifier.from_id(5)
        assert market.is_id
        assert not market.is_address
        assert market.id == 5
        assert market.address is None

    def test_from_address(self):
        address = Pubkey.new_unique()
        market = MarketIdentifier.from_address(address)
        assert market.is_address
        assert market.address == address
        assert market.id is None

    def test_of_accepts_all_forms(self):
        address = Pubkey.new_unique()
        existing = MarginAccountIdentifier.from_id(1)
        assert MarginAccountIdentifier.of(existing) is existing
        assert MarginAccountIdentifier.of(1) == existing
        assert MarginAccountIdentifier.of(address).address == address

    def test_id_width_enforced(self):
        with pytest.raises(ValueError, match="u32"):
            MarketIdentifier.from_id(2**32)
        with pytest.raises(ValueError):
            MarginAccountIdentifier.from_id(-1)
        assert ExchangeIdentifier.from_id(2**32).id == 2**32

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            MarketIdentifier.from_id("5")
        with pytest.raises(TypeError):
            MarketIdentifier.from_id(True)
        with pytest.raises(TypeError):
            MarketIdentifier.from_address("5")
        with pytest.raises(TypeError):
            MarketIdentifier(5.0)

    def test_default_exchange(self):
        exchange = ExchangeIdentifier.default()
        assert exchange == ExchangeIdentifier.from_id(0)
        assert exchange.to_json() == "0"


class TestIdentifierWire:
    def test_id_serializes_as_text(self):
        assert MarketIdentifier.from_id(5).to_json() == "5"
        assert str(MarketIdentifier.from_id(5)) == "5"

    def test_address_serializes_as_base58(self):
        address = Pubkey.new_unique()
        assert MarketIdentifier.from_address(address).to_json() == str(address)

    def test_parse_id(self):
        assert MarketIdentifier.parse("5") == MarketIdentifier.from_id(5)

    def test_parse_native_number(self):
        assert MarketIdentifier.parse(5) == MarketIdentifier.from_id(5)

    def test_parse_address(self):
        address = Pubkey.new_unique()
        assert MarketIdentifier.parse(str(address)) == MarketIdentifier.from_address(address)

    def test_round_trip(self):
        for identifier in (
            ExchangeIdentifier.from_id(2**64 - 1),
            ExchangeIdentifier.from_address(Pubkey.new_unique()),
            MarginAccountIdentifier.from_id(0),
            MarketIdentifier.from_id(2**32 - 1),
        ):
            assert type(identifier).parse(identifier.to_json()) == identifier

    @pytest.mark.parametrize("raw", ["", "abc", "1.5", None, [], "4294967296"])
    def test_parse_failure(self, raw):
        with pytest.raises(IdentifierParseError):
            MarketIdentifier.parse(raw)

    def test_parse_failure_is_decode_error(self):
        with pytest.raises(DecodeError):
            ExchangeIdentifier.parse("not an id")

    def test_u64_text_is_valid_exchange_id(self):
        assert ExchangeIdentifier.parse("4294967296").id == 4294967296


class TestIdentifierEquality:
    def test_families_differ(self):
        assert MarketIdentifier.from_id(1) != MarginAccountIdentifier.from_id(1)

    def test_hashable(self):
        ids = {MarketIdentifier.from_id(1), MarketIdentifier.from_id(1), MarketIdentifier.from_id(2)}
        assert len(ids) == 2

    def test_repr(self):
        assert repr(MarketIdentifier.from_id(5)) == "MarketIdentifier.Id(5)"


class TestMarketIdentifiersResponseKind:
    def test_wire_values(self):
        assert MarketIdentifiersResponseKind.MAP.value == "map"
        assert MarketIdentifiersResponseKind.ADDRESSES.value == "addresses"
        assert MarketIdentifiersResponseKind.IDS.value == "ids"

    def test_default(self):
        assert MarketIdentifiersResponseKind.default() == MarketIdentifiersResponseKind.MAP


class TestMarketIdentifiersResponse:
    def test_ids(self):
        response = MarketIdentifiersResponse.from_json([0, 1, 23])
        assert response.kind == MarketIdentifiersResponseKind.IDS
        assert response.value == [0, 1, 23]

    def test_addresses(self):
        addresses = [Pubkey.new_unique(), Pubkey.new_unique()]
        response = MarketIdentifiersResponse.from_json([str(a) for a in addresses])
        assert response.kind == MarketIdentifiersResponseKind.ADDRESSES
        assert response.value == addresses

    def test_map(self):
        address = Pubkey.new_unique()
        response = MarketIdentifiersResponse.from_json({"23": str(address)})
        assert response.kind == MarketIdentifiersResponseKind.MAP
        assert response.value == {23: address}

    def test_empty_list_decodes_as_ids(self):
        response = MarketIdentifiersResponse.from_json([])
        assert response.kind == MarketIdentifiersResponseKind.IDS
        assert response.matches(MarketIdentifiersResponseKind.IDS)
        assert response.matches(MarketIdentifiersResponseKind.ADDRESSES)
        assert not response.matches(MarketIdentifiersResponseKind.MAP)

    def test_non_empty_ids_do_not_match_addresses(self):
        response = MarketIdentifiersResponse.from_json([1])
        assert not response.matches(MarketIdentifiersResponseKind.ADDRESSES)

    @pytest.mark.parametrize("raw", ["ids", 5, None, [1, "x"], {"a": "b"}])
    def test_unrecognised_shape(self, raw):
        with pytest.raises(DecodeError, match="did not match any variant"):
            MarketIdentifiersResponse.from_json(raw)
