"""
votecred: voter credential generation and key expansion.
"""

from votecred.credentials import (
    UUID,
    Credential,
    ExpandedCredential,
    Password,
    deserialize_credential,
    serialize_credential,
)
from votecred.errors import (
    CredentialError,
    CredentialMismatch,
    InvalidLength,
    InvalidSymbol,
    RandomnessUnavailable,
)
from votecred.randomness import RandomSource

__version__ = "0.1.0"
