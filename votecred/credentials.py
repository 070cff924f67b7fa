"""
Voter credentials

A credential is a short Base58 secret (the password) bound to the public
Base58 identifier of an election (the uuid). Running PBKDF2 over the pair
expands it into a ristretto255 keypair:

  1. PBKDF2-HMAC-SHA256, 1000 iterations, password as secret, uuid as salt
  2. the 32-byte output, reduced mod the group order, is the secret key
  3. public key = generator * secret key

The password carries a checksum in its last character so that most typing
mistakes are caught before any key is derived. Expansion is deterministic:
the password is the only thing a voter needs to keep.
"""

import hmac
import json
from dataclasses import dataclass

from Crypto.Hash import SHA256
from Crypto.Protocol.KDF import PBKDF2

from votecred import base58, group
from votecred.config import (
    BASE58_STRLEN,
    CHECKSUM_MODULUS,
    DERIVED_KEY_LEN,
    PBKDF2_ITERATIONS,
)
from votecred.errors import CredentialMismatch


# ---------------------------------------------------------------------------
# Checksum
# ---------------------------------------------------------------------------

def checksum(value: str) -> int:
    """
    Checksum digit for a password, computed over all but its last character.

    Characters are read right to left; the i-th one contributes
    58^i * digit mod 53. The result c = (53 - sum) mod 53 makes the
    weighted sum of the whole password vanish mod 53.
    """
    total = 0
    weight = 1  # 58^i mod 53
    for char in reversed(value[:BASE58_STRLEN - 1]):
        total = (total + weight * base58.decode_digit(char)) % CHECKSUM_MODULUS
        weight = (weight * base58.BASE) % CHECKSUM_MODULUS
    return (CHECKSUM_MODULUS - total) % CHECKSUM_MODULUS


def with_checksum(value: str) -> str:
    """Replace the last character of a Base58 value by its checksum symbol."""
    return value[:BASE58_STRLEN - 1] + base58.encode_digit(checksum(value))


# ---------------------------------------------------------------------------
# UUID and password
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UUID:
    """Public Base58 string naming one election. No checksum."""

    value: str

    def __post_init__(self):
        base58.validate(self.value)

    @classmethod
    def generate(cls, rng) -> "UUID":
        return cls(base58.generate(rng))

    def __str__(self):
        return self.value

    def __bytes__(self):
        return self.value.encode("ascii")


@dataclass(frozen=True, repr=False, eq=False)
class Password:
    """
    Secret Base58 string held by a voter.

    Passwords built by generate() always carry a valid checksum. Passwords
    parsed from user input only need to be well-formed; whether the
    checksum holds is asked separately through validate_checksum().
    """

    value: str

    def __post_init__(self):
        base58.validate(self.value)

    @classmethod
    def generate(cls, rng) -> "Password":
        return cls(with_checksum(base58.generate(rng)))

    def checksum(self) -> int:
        return checksum(self.value)

    def validate_checksum(self) -> bool:
        expected = base58.encode_digit(self.checksum())
        return hmac.compare_digest(self.value[-1], expected)

    def __eq__(self, other):
        if not isinstance(other, Password):
            return NotImplemented
        return hmac.compare_digest(self.value, other.value)

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return "Password('********')"

    def __str__(self):
        return self.value

    def __bytes__(self):
        return self.value.encode("ascii")


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Credential:
    """A voter's password together with the uuid of the election it is for."""

    password: Password
    uuid: UUID

    @classmethod
    def generate(cls, rng, uuid: UUID) -> "Credential":
        return cls(Password.generate(rng), uuid)

    @classmethod
    def from_pair(cls, pair) -> "Credential":
        password, uuid = pair
        return cls(password, uuid)

    @classmethod
    def from_strings(cls, password: str, uuid: str) -> "Credential":
        """Parse a password as typed by a voter, plus the election uuid."""
        return cls(Password(password.strip()), UUID(uuid.strip()))

    @classmethod
    def from_expanded(cls, expanded: "ExpandedCredential") -> "Credential":
        return expanded.to_credential()

    def expand(self) -> "ExpandedCredential":
        return ExpandedCredential.from_credential(self)

    def to_dict(self) -> dict:
        return {"password": str(self.password), "uuid": str(self.uuid)}

    @classmethod
    def from_dict(cls, data: dict) -> "Credential":
        return cls(Password(data["password"]), UUID(data["uuid"]))


def derive_secret(password: Password, uuid: UUID) -> bytes:
    """PBKDF2-HMAC-SHA256 of the password, salted with the election uuid."""
    return PBKDF2(
        bytes(password),
        bytes(uuid),
        dkLen=DERIVED_KEY_LEN,
        count=PBKDF2_ITERATIONS,
        hmac_hash_module=SHA256,
    )


def expand_keys(password: Password, uuid: UUID) -> tuple:
    """Return (secret_key, public_key) encodings for a password and uuid."""
    secret_key = group.scalar_from_bytes_mod_order(derive_secret(password, uuid))
    public_key = group.base_mul(secret_key)
    return secret_key, public_key


class ExpandedCredential:
    """
    A credential plus the keypair it expands to.

    This is a derived view: from_credential() always recomputes the same
    keys from the same (password, uuid). The secret scalar lives in a
    mutable buffer so that wipe() can zero it once it is no longer needed.

    wipe() only clears that buffer. The bytes produced during expansion
    (PBKDF2 output, the reduced scalar from libsodium) and every value
    returned by the secret_key property are immutable copies that stay in
    memory until the garbage collector reclaims them.
    """

    __slots__ = ("_password", "_uuid", "_secret_key", "_public_key")

    def __init__(self, password: Password, uuid: UUID, secret_key: bytes, public_key: bytes):
        if not group.is_canonical_scalar(secret_key):
            raise ValueError("secret_key is not a canonical ristretto255 scalar")
        if not group.is_valid_point(public_key):
            raise ValueError("public_key is not a valid ristretto255 point")
        object.__setattr__(self, "_password", password)
        object.__setattr__(self, "_uuid", uuid)
        object.__setattr__(self, "_secret_key", bytearray(secret_key))
        object.__setattr__(self, "_public_key", bytes(public_key))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_credential(cls, credential: Credential) -> "ExpandedCredential":
        secret_key, public_key = expand_keys(credential.password, credential.uuid)
        return cls(credential.password, credential.uuid, secret_key, public_key)

    @classmethod
    def generate(cls, rng, uuid: UUID) -> "ExpandedCredential":
        return cls.from_credential(Credential.generate(rng, uuid))

    @property
    def password(self) -> Password:
        return self._password

    @property
    def uuid(self) -> UUID:
        return self._uuid

    @property
    def secret_key(self) -> bytes:
        return bytes(self._secret_key)

    @property
    def public_key(self) -> bytes:
        return self._public_key

    def to_credential(self) -> Credential:
        return Credential(self._password, self._uuid)

    def is_consistent(self) -> bool:
        """Check the carried keys against a fresh expansion of the credential."""
        secret_key, public_key = expand_keys(self._password, self._uuid)
        return hmac.compare_digest(secret_key, bytes(self._secret_key)) and (
            public_key == self._public_key
        )

    def wipe(self):
        """Zero the secret scalar in place."""
        secret = getattr(self, "_secret_key", None)
        if secret is not None:
            secret[:] = bytes(len(secret))

    def __del__(self):
        self.wipe()

    def __eq__(self, other):
        if not isinstance(other, ExpandedCredential):
            return NotImplemented
        return (
            self._password == other._password
            and self._uuid == other._uuid
            and self._public_key == other._public_key
            and hmac.compare_digest(bytes(self._secret_key), bytes(other._secret_key))
        )

    __hash__ = None

    def __repr__(self):
        return (
            f"ExpandedCredential(uuid={self._uuid.value!r}, "
            f"public_key={self._public_key.hex()!r})"
        )

    # -----------------------------------------------------------------------
    # Serialization (for transport to storage / ballot signing)
    # -----------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "password": str(self._password),
            "uuid": str(self._uuid),
            "secret_key": bytes(self._secret_key).hex(),
            "public_key": self._public_key.hex(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExpandedCredential":
        """Load a serialized expanded credential, rejecting inconsistent keys."""
        expanded = cls(
            Password(data["password"]),
            UUID(data["uuid"]),
            bytes.fromhex(data["secret_key"]),
            bytes.fromhex(data["public_key"]),
        )
        if not expanded.is_consistent():
            raise CredentialMismatch(
                "Stored keys do not match the credential they were derived from"
            )
        return expanded

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_json(cls, text: str) -> "ExpandedCredential":
        return cls.from_dict(json.loads(text))


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def serialize_credential(credential) -> dict:
    """Serialize a Credential or ExpandedCredential for storage / transport."""
    return credential.to_dict()


def deserialize_credential(data: dict):
    """Inverse of serialize_credential(); expanded iff key fields are present."""
    if "secret_key" in data or "public_key" in data:
        return ExpandedCredential.from_dict(data)
    return Credential.from_dict(data)
