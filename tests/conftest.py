"""
pytest configuration for votecred tests.
Provides the shared random source and a scripted reader for exact draws.
"""
import pytest

from votecred.randomness import RandomSource


class ScriptedReader:
    """Byte reader that replays a fixed script, then repeats its tail byte."""

    def __init__(self, script: bytes):
        self.script = bytearray(script)
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        fill = self.script[-1:] or b"\x00"
        out = bytes(self.script[:n])
        del self.script[:n]
        out += bytes(fill) * (n - len(out))
        if not self.script:
            self.script = bytearray(fill)
        return out


class FailingReader:
    def __call__(self, n: int) -> bytes:
        raise OSError("entropy source unavailable")


@pytest.fixture(scope="module")
def rng():
    return RandomSource()


@pytest.fixture
def scripted():
    def make(script: bytes) -> RandomSource:
        return RandomSource(ScriptedReader(script))
    return make


@pytest.fixture
def failing_rng():
    return RandomSource(FailingReader())
