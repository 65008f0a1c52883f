"""
Unit tests for shortkey.manager.codec.

Covers:
    - Base62 encode/decode round trip, including the 64-bit upper bound
    - Alphabet ordering (digits, upper, lower)
    - Rejection of empty, out-of-alphabet and out-of-range input
    - Random letter keys: length, alphabet, diversity
"""

import random

import pytest

from shortkey.errors import BadInput, InvalidKey
from shortkey.manager.codec import (
    BASE62_ALPHABET,
    LETTER_ALPHABET,
    MAX_ID,
    decode,
    encode,
    is_canonical,
    random_key,
)


def test_encode_zero():
    assert encode(0) == "0"


def test_alphabet_order():
    assert encode(9) == "9"
    assert encode(10) == "A"
    assert encode(35) == "Z"
    assert encode(36) == "a"
    assert encode(61) == "z"
    assert encode(62) == "10"
    assert BASE62_ALPHABET == "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


@pytest.mark.parametrize("n", [0, 1, 61, 62, 3843, 3844, 2**32, 2**62, MAX_ID - 1, MAX_ID])
def test_round_trip_boundaries(n):
    assert decode(encode(n)) == n


def test_round_trip_random_sample():
    rng = random.Random(1234)
    for _ in range(2000):
        n = rng.randint(0, MAX_ID)
        assert decode(encode(n)) == n


def test_encode_has_no_padding():
    assert encode(1) == "1"
    assert not encode(12345).startswith("0")


def test_encode_negative_rejected():
    with pytest.raises(ValueError):
        encode(-1)


@pytest.mark.parametrize("bad", ["abc-", "a b", "ä", "12_3", "+", "AAA/"])
def test_decode_rejects_out_of_alphabet(bad):
    with pytest.raises(InvalidKey, match="Invalid character"):
        decode(bad)


def test_decode_rejects_empty():
    with pytest.raises(InvalidKey):
        decode("")


def test_decode_rejects_beyond_int64():
    with pytest.raises(InvalidKey, match="64-bit"):
        decode(encode(MAX_ID + 1))


def test_invalid_key_is_bad_input():
    # The HTTP layer maps BadInput to 400; InvalidKey must travel the same path.
    assert issubclass(InvalidKey, BadInput)


def test_is_canonical():
    assert is_canonical("0")
    assert is_canonical("A")
    assert not is_canonical("00A")
    assert not is_canonical("")
    assert not is_canonical("ab-c")


def test_random_key_shape_and_diversity():
    samples = [random_key() for _ in range(200)]
    assert all(len(k) == 6 and set(k) <= set(LETTER_ALPHABET) for k in samples)
    assert len(set(samples)) > 150


def test_random_key_custom_length():
    assert len(random_key(10)) == 10
    assert len(LETTER_ALPHABET) == 52
