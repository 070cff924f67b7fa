"""
Configuration constants for credential generation and key expansion.

Changing any of the derivation constants changes every derived keypair, so
they are fixed in code. Only the log level is read from the environment.
"""

import logging
import os

BASE58_STRLEN = 22  # characters per UUID / password

CHECKSUM_MODULUS = 53

PBKDF2_ITERATIONS = 1000
DERIVED_KEY_LEN = 32  # bytes

# Random bytes requested per locked draw while filling a Base58 value.
RANDOM_BATCH_SIZE = 32


def resolve_log_level(name: str) -> int:
    """Map a level name to its logging value; unknown names mean WARNING."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


LOG_LEVEL = resolve_log_level(os.environ.get("VOTECRED_LOG_LEVEL", "WARNING"))
