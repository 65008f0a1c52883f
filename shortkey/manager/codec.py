"""
Key codec for shortkey.

Two independent encodings live here:
- Base62 (digits, then A-Z, then a-z) for store-assigned 64-bit identifiers.
  0 -> "0", 61 -> "z", 62 -> "10". No left padding.
- Random letter keys (52 symbols, default length 6). These are usability
  keys, not security tokens, so the plain `random` module is used; uniqueness
  is enforced by the store, not by the generator.

LLM Prompt Example:
    "Explain why a base-62 rendering of a database sequence gives the
    shortest collision-free keys, and why random letter keys need a unique
    index plus bounded retry."
"""

import random
import string

from ..errors import InvalidKey

BASE62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE62_BASE = len(BASE62_ALPHABET)
LETTER_ALPHABET = string.ascii_lowercase + string.ascii_uppercase

# Largest identifier a signed 64-bit sequence can hand out.
MAX_ID = 2**63 - 1

_REVERSE = {ch: idx for idx, ch in enumerate(BASE62_ALPHABET)}


def encode(num: int) -> str:
    """
    Convert a non-negative integer to a Base62 string, most-significant first.
    """
    if num < 0:
        raise ValueError("num must be non-negative")
    if num == 0:
        return BASE62_ALPHABET[0]
    out = []
    while num > 0:
        num, rem = divmod(num, BASE62_BASE)
        out.append(BASE62_ALPHABET[rem])
    return "".join(reversed(out))


def decode(key: str) -> int:
    """
    Convert a Base62 string back to its integer.

    Raises:
        InvalidKey: empty input, a character outside the alphabet, or a value
            beyond the 64-bit identifier range.
    """
    if not key:
        raise InvalidKey("Key must not be empty")
    result = 0
    for ch in key:
        digit = _REVERSE.get(ch)
        if digit is None:
            raise InvalidKey(f"Invalid character {ch!r} in key")
        result = result * BASE62_BASE + digit
    if result > MAX_ID:
        raise InvalidKey("Key exceeds the 64-bit identifier range")
    return result


def is_canonical(key: str) -> bool:
    """True when `key` is exactly what `encode` would produce for its value."""
    try:
        return encode(decode(key)) == key
    except InvalidKey:
        return False


def random_key(length: int = 6) -> str:
    return "".join(random.choice(LETTER_ALPHABET) for _ in range(length))
