"""
Unit tests for the Base58 codec.
"""

from collections import Counter

import pytest

from votecred import base58
from votecred.config import BASE58_STRLEN
from votecred.errors import InvalidLength, InvalidSymbol


# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

class TestTables:
    def test_alphabet_has_58_distinct_symbols(self):
        assert len(base58.ALPHABET) == 58
        assert len(set(base58.ALPHABET)) == 58

    def test_alphabet_excludes_ambiguous_characters(self):
        for char in "0OIl":
            assert char not in base58.ALPHABET

    def test_inverse_lookup_matches_alphabet(self):
        for digit, char in enumerate(base58.ALPHABET):
            assert base58.decode_digit(char) == digit
            assert base58.decode_digit(ord(char)) == digit
            assert base58.encode_digit(digit) == char

    def test_decode_rejects_non_members(self):
        for symbol in ["0", "O", "I", "l", "+", " ", "é"]:
            with pytest.raises(InvalidSymbol):
                base58.decode_digit(symbol)
        with pytest.raises(InvalidSymbol):
            base58.decode_digit(0)

    def test_encode_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            base58.encode_digit(58)
        with pytest.raises(ValueError):
            base58.encode_digit(-1)


# ---------------------------------------------------------------------------
# Fixed-length values
# ---------------------------------------------------------------------------

class TestValidate:
    def test_valid_value_returned_unchanged(self):
        value = "123456789ABCDEFGHJKLMN"
        assert base58.validate(value) == value

    def test_wrong_length_rejected(self):
        with pytest.raises(InvalidLength) as info:
            base58.validate("1" * (BASE58_STRLEN - 1))
        assert info.value.length == BASE58_STRLEN - 1
        with pytest.raises(InvalidLength):
            base58.validate("1" * (BASE58_STRLEN + 1))

    def test_invalid_symbol_position_reported(self):
        value = "1" * 5 + "0" + "1" * (BASE58_STRLEN - 6)
        with pytest.raises(InvalidSymbol) as info:
            base58.validate(value)
        assert info.value.position == 5
        assert info.value.symbol == "0"

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            base58.validate(b"1" * BASE58_STRLEN)


class TestGenerate:
    def test_length_and_alphabet(self, rng):
        for _ in range(100):
            value = base58.generate(rng)
            assert len(value) == BASE58_STRLEN
            assert all(c in base58.ALPHABET for c in value)

    def test_values_are_unique(self, rng):
        assert base58.generate(rng) != base58.generate(rng)

    def test_scripted_bytes_map_to_digits(self, scripted):
        value = base58.generate(scripted(bytes(range(BASE58_STRLEN))))
        assert value == base58.ALPHABET[:BASE58_STRLEN]

    def test_byte_reduced_mod_58(self, scripted):
        value = base58.generate(scripted(bytes([58, 116, 174, 231])), length=4)
        assert value == "111z"

    def test_biased_bytes_are_rejected(self, scripted):
        # 232..255 would favour the first 24 symbols if reduced mod 58.
        script = bytes(range(232, 256)) + bytes([57] * BASE58_STRLEN)
        value = base58.generate(scripted(script))
        assert value == "z" * BASE58_STRLEN

    def test_distribution_is_roughly_uniform(self, rng):
        counts = Counter()
        for _ in range(500):
            counts.update(base58.generate(rng))
        total = 500 * BASE58_STRLEN
        expected = total / 58
        assert set(counts) <= set(base58.ALPHABET)
        assert len(counts) == 58
        for char in base58.ALPHABET:
            assert 0.6 * expected < counts[char] < 1.4 * expected


# ---------------------------------------------------------------------------
# General bytes codec
# ---------------------------------------------------------------------------

class TestBytesCodec:
    def test_known_vector(self):
        assert base58.b58encode(b"hello world") == "StV1DL6CwTryKyV"
        assert base58.b58decode("StV1DL6CwTryKyV") == b"hello world"

    def test_leading_zeros_preserved(self):
        assert base58.b58encode(b"\x00\x00\x01") == "112"
        assert base58.b58decode("112") == b"\x00\x00\x01"

    def test_empty(self):
        assert base58.b58encode(b"") == ""
        assert base58.b58decode("") == b""

    def test_decode_invalid_symbol(self):
        with pytest.raises(InvalidSymbol):
            base58.b58decode("abc0")

    def test_type_checks(self):
        with pytest.raises(TypeError):
            base58.b58encode("text")
        with pytest.raises(TypeError):
            base58.b58decode(b"text")
