"""Tests for the field-level wire codecs."""

import pytest
from solders.pubkey import Pubkey

from parcl_v3_api.codec import (
    I16,
    I64,
    I128,
    U16,
    U32,
    U64,
    U128,
    decode_base64,
    decode_bool,
    decode_int,
    decode_int_str,
    decode_list,
    decode_object,
    decode_optional_int,
    decode_optional_int_str,
    decode_pubkey,
    decode_pubkey_list,
    decode_pubkey_values_map,
    encode_base64,
    encode_optional_str,
    encode_pubkey_list,
    encode_str,
)
from parcl_v3_api.error import CodecError, DecodeError


class TestIntTypes:
    def test_bounds(self):
        assert U16.max == 65535
        assert U32.max == 4294967295
        assert U64.max == 18446744073709551615
        assert U128.max == 2**128 - 1
        assert I16.min == -32768
        assert I128.min == -(2**127)
        assert I128.max == 2**127 - 1

    def test_contains(self):
        assert U32.contains(0)
        assert U32.contains(U32.max)
        assert not U32.contains(-1)
        assert not U32.contains(U32.max + 1)


class TestStringEncodedInts:
    @pytest.mark.parametrize(
        "value,int_type",
        [
            (0, U64),
            (18446744073709551615, U64),
            (2**63 - 1, I64),
            (-(2**63), I64),
            (-(2**127), I128),
            (2**127 - 1, I128),
            (2**128 - 1, U128),
        ],
    )
    def test_boundaries_survive(self, value, int_type):
        text = encode_str(value)
        assert text == str(value)
        assert decode_int_str(text, int_type) == value

    def test_u64_max_is_exact_text(self):
        assert encode_str(18446744073709551615) == "18446744073709551615"

    def test_leading_plus_accepted(self):
        assert decode_int_str("+5", U32) == 5

    @pytest.mark.parametrize("raw", ["", " 1", "1 ", "1\n", "1_000", "1.5", "1e3", "0x10", "abc", "-"])
    def test_rejects_non_numeric_text(self, raw):
        with pytest.raises(CodecError):
            decode_int_str(raw, U64)

    def test_rejects_out_of_range(self):
        with pytest.raises(CodecError, match="does not fit in u64"):
            decode_int_str("18446744073709551616", U64)
        with pytest.raises(CodecError):
            decode_int_str("-1", U64)

    def test_rejects_native_number(self):
        with pytest.raises(CodecError, match="as string"):
            decode_int_str(5, U64)

    def test_optional(self):
        assert decode_optional_int_str(None, U64) is None
        assert decode_optional_int_str("7", U64) == 7
        assert encode_optional_str(None) is None
        assert encode_optional_str(7) == "7"

    def test_encode_rejects_other_types(self):
        with pytest.raises(TypeError):
            encode_str("5")
        with pytest.raises(TypeError):
            encode_str(True)

    def test_codec_error_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_int_str("x", U64)


class TestNativeInts:
    def test_decode_int(self):
        assert decode_int(42, U32) == 42
        assert decode_optional_int(None, U32) is None

    def test_rejects_bool(self):
        with pytest.raises(CodecError):
            decode_int(True, U32)

    def test_rejects_string(self):
        with pytest.raises(CodecError):
            decode_int("42", U32)

    def test_rejects_out_of_range(self):
        with pytest.raises(CodecError):
            decode_int(70000, U16)

    def test_decode_bool(self):
        assert decode_bool(False) is False
        with pytest.raises(CodecError):
            decode_bool(0)


class TestPubkeys:
    def test_round_trip(self):
        pubkey = Pubkey.new_unique()
        assert decode_pubkey(encode_str(pubkey)) == pubkey

    def test_invalid_address(self):
        with pytest.raises(CodecError, match="Invalid address"):
            decode_pubkey("not-a-pubkey")

    def test_non_string_address(self):
        with pytest.raises(CodecError):
            decode_pubkey(None)

    def test_list(self):
        pubkeys = [Pubkey.new_unique() for _ in range(3)]
        assert decode_pubkey_list(encode_pubkey_list(pubkeys)) == pubkeys

    def test_list_reports_bad_entry(self):
        raw = [str(Pubkey.new_unique()), "garbage"]
        with pytest.raises(CodecError, match="Entry 1"):
            decode_pubkey_list(raw)

    def test_list_rejects_object(self):
        with pytest.raises(CodecError):
            decode_pubkey_list({})

    def test_values_map(self):
        a, b = Pubkey.new_unique(), Pubkey.new_unique()
        result = decode_pubkey_values_map({"0": str(a), "23": str(b)}, U32)
        assert result == {0: a, 23: b}

    def test_values_map_rejects_bad_key(self):
        with pytest.raises(CodecError):
            decode_pubkey_values_map({"zero": str(Pubkey.new_unique())}, U32)

    def test_values_map_rejects_colliding_keys(self):
        raw = {"1": str(Pubkey.new_unique()), "01": str(Pubkey.new_unique())}
        with pytest.raises(CodecError, match="Duplicate key"):
            decode_pubkey_values_map(raw, U32)


class TestBase64:
    @pytest.mark.parametrize("data", [b"", b"\x00", b"\x01\x02\x03", bytes(range(256))])
    def test_round_trip(self, data):
        assert decode_base64(encode_base64(data)) == data

    def test_empty_string_is_empty_bytes(self):
        assert decode_base64("") == b""

    def test_known_value(self):
        assert encode_base64(b"\x01\x02\x03") == "AQID"

    @pytest.mark.parametrize("raw", ["!!!", "AQI", "AQ=D"])
    def test_invalid(self, raw):
        with pytest.raises(CodecError, match="Base64"):
            decode_base64(raw)

    def test_non_string(self):
        with pytest.raises(CodecError):
            decode_base64(None)


class TestContainers:
    def test_decode_object(self):
        assert decode_object({"a": 1}, "Thing") == {"a": 1}
        with pytest.raises(CodecError, match="Thing"):
            decode_object([], "Thing")

    def test_decode_list(self):
        assert decode_list([1]) == [1]
        with pytest.raises(CodecError):
            decode_list({})
