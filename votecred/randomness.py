"""
Secure randomness capability.

A RandomSource is created once by the caller and passed to every generation
function. Each read() is one critical section, so concurrent generators never
interleave their draws from the underlying entropy source.
"""

import threading

from Crypto.Random import get_random_bytes

from votecred.errors import RandomnessUnavailable


class RandomSource:
    """Serialize access to a byte-producing callable (default: pycryptodome)."""

    def __init__(self, reader=get_random_bytes):
        self._reader = reader
        self._lock = threading.Lock()

    def read(self, n: int) -> bytes:
        """Return exactly n cryptographically secure random bytes."""
        with self._lock:
            try:
                data = self._reader(n)
            except RandomnessUnavailable:
                raise
            except Exception as e:
                raise RandomnessUnavailable(f"Random source failed: {e}") from e
        if len(data) != n:
            raise RandomnessUnavailable(
                f"Random source returned {len(data)} bytes, expected {n}"
            )
        return bytes(data)
