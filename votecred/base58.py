"""
Base58 codec (Bitcoin alphabet).

Two uses in the credential core:
  * fixed-length random strings (election UUIDs and voter passwords), built
    one symbol at a time from the secure random source, and
  * the general bytes <-> text codec, used to render public keys compactly.

The alphabet leaves out the visually ambiguous 0, O, I and l.
"""

from votecred.config import BASE58_STRLEN, RANDOM_BATCH_SIZE
from votecred.errors import InvalidLength, InvalidSymbol

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
BASE = len(ALPHABET)

# symbol byte -> digit value, -1 for bytes outside the alphabet
INV_LOOKUP = [-1] * 256
for _digit, _char in enumerate(ALPHABET):
    INV_LOOKUP[ord(_char)] = _digit
del _digit, _char

# Largest multiple of 58 that fits in a byte; bytes at or above it are dropped.
_REJECT_FROM = (256 // BASE) * BASE


def encode_digit(digit: int) -> str:
    if not 0 <= digit < BASE:
        raise ValueError(f"Base58 digit out of range: {digit}")
    return ALPHABET[digit]


def decode_digit(symbol, position=None) -> int:
    """Map one symbol (a 1-char str or an ASCII byte value) to its digit."""
    if isinstance(symbol, str) and len(symbol) == 1:
        code = ord(symbol)
    else:
        code = symbol
    if not isinstance(code, int) or not 0 <= code < 256 or INV_LOOKUP[code] < 0:
        raise InvalidSymbol(symbol, position)
    return INV_LOOKUP[code]


def validate(value: str, length: int = BASE58_STRLEN) -> str:
    """Check a fixed-length Base58 value and return it unchanged."""
    if not isinstance(value, str):
        raise TypeError("Base58 value must be a string")
    if len(value) != length:
        raise InvalidLength(len(value), length)
    for position, char in enumerate(value):
        decode_digit(char, position)
    return value


def generate(rng, length: int = BASE58_STRLEN) -> str:
    """
    Draw `length` symbols, each independently uniform over the alphabet.

    Random bytes >= 232 are discarded so that `byte % 58` carries no bias.
    Every batch is a single read from the (locked) random source.
    """
    digits = []
    while len(digits) < length:
        for byte in rng.read(RANDOM_BATCH_SIZE):
            if byte < _REJECT_FROM:
                digits.append(byte % BASE)
                if len(digits) == length:
                    break
    return "".join(ALPHABET[d] for d in digits)


def b58encode(data: bytes) -> str:
    """Encode bytes to a base58 string, preserving leading zero bytes."""
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("Input must be bytes")
    data = bytes(data)
    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    num = int.from_bytes(data, "big")

    encoded = []
    while num > 0:
        num, rem = divmod(num, BASE)
        encoded.append(ALPHABET[rem])

    return ALPHABET[0] * leading_zeros + "".join(reversed(encoded))


def b58decode(encoded: str) -> bytes:
    """Decode a base58 string to bytes."""
    if not isinstance(encoded, str):
        raise TypeError("Input must be a string")

    num = 0
    for position, char in enumerate(encoded):
        num = num * BASE + decode_digit(char, position)

    leading_zeros = len(encoded) - len(encoded.lstrip(ALPHABET[0]))
    if num == 0:
        return b"\x00" * leading_zeros
    byte_len = (num.bit_length() + 7) // 8
    return b"\x00" * leading_zeros + num.to_bytes(byte_len, "big")
