"""
Ristretto255 group arithmetic, delegated to libsodium through pysodium.

Scalars and points are handled as their canonical 32-byte encodings:
scalars little-endian and reduced mod ORDER, points in the ristretto255
compressed form.
"""

import pysodium

# Prime order of the ristretto255 group
ORDER = 2**252 + 27742317777372353535851937790883648493

SCALAR_BYTES = pysodium.crypto_core_ristretto255_SCALARBYTES
POINT_BYTES = pysodium.crypto_core_ristretto255_BYTES
_WIDE_BYTES = pysodium.crypto_core_ristretto255_NONREDUCEDSCALARBYTES

# Canonical encoding of the ristretto255 base point (RFC 9496)
GENERATOR = bytes.fromhex(
    "e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76"
)
IDENTITY = bytes(POINT_BYTES)
ZERO_SCALAR = bytes(SCALAR_BYTES)


def scalar_from_bytes_mod_order(data: bytes) -> bytes:
    """Reduce a little-endian byte string of at most 64 bytes mod ORDER."""
    if len(data) > _WIDE_BYTES:
        raise ValueError(f"Scalar input longer than {_WIDE_BYTES} bytes")
    wide = bytes(data) + bytes(_WIDE_BYTES - len(data))
    return pysodium.crypto_core_ristretto255_scalar_reduce(wide)


def scalar_to_int(scalar: bytes) -> int:
    return int.from_bytes(scalar, "little")


def base_mul(scalar: bytes) -> bytes:
    """Return GENERATOR * scalar."""
    # libsodium refuses to output the identity, which only the zero scalar hits.
    if scalar == ZERO_SCALAR:
        return IDENTITY
    return pysodium.crypto_scalarmult_ristretto255_base(scalar)


def mul(scalar: bytes, point: bytes) -> bytes:
    """Return point * scalar for an arbitrary valid point."""
    if scalar == ZERO_SCALAR or point == IDENTITY:
        return IDENTITY
    return pysodium.crypto_scalarmult_ristretto255(scalar, point)


def is_valid_point(point: bytes) -> bool:
    if not isinstance(point, (bytes, bytearray)) or len(point) != POINT_BYTES:
        return False
    if bytes(point) == IDENTITY:
        return True
    return bool(pysodium.crypto_core_ristretto255_is_valid_point(bytes(point)))


def is_canonical_scalar(scalar: bytes) -> bool:
    if not isinstance(scalar, (bytes, bytearray)) or len(scalar) != SCALAR_BYTES:
        return False
    return scalar_to_int(scalar) < ORDER
