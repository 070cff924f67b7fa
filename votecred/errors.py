"""
Error kinds raised by the credential core.

An invalid checksum is not an error: Password.validate_checksum() returns
False for it, leaving the reject/prompt policy to the caller.
"""


class CredentialError(Exception):
    """Base class for every error raised by votecred."""


class RandomnessUnavailable(CredentialError):
    """The secure random source failed to deliver bytes."""


class InvalidSymbol(CredentialError, ValueError):
    """A character outside the Base58 alphabet was decoded."""

    def __init__(self, symbol, position=None):
        self.symbol = symbol
        self.position = position
        where = "" if position is None else f" at position {position}"
        super().__init__(f"Invalid base58 character{where}: {symbol!r}")


class InvalidLength(CredentialError, ValueError):
    """A Base58 value does not have the fixed credential length."""

    def __init__(self, length, expected):
        self.length = length
        self.expected = expected
        super().__init__(f"Expected {expected} base58 characters, got {length}")


class CredentialMismatch(CredentialError, ValueError):
    """Stored key material does not match the credential it claims to expand."""
