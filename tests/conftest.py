"""
cryptorand Test Fixtures
"""

import pytest
from typing import List

from Crypto.Random import get_random_bytes

from cryptorand.core.entropy import EntropySource
from cryptorand.errors import EntropyUnavailableError
from cryptorand.numtheory.sieve import SmallPrimeSieve


class CountingSource(EntropySource):
    """System randomness, recording every request size."""

    def __init__(self):
        self.requests: List[int] = []

    def get_random_bytes(self, n: int) -> bytes:
        self.requests.append(n)
        return get_random_bytes(n)

    @property
    def total_bytes(self) -> int:
        return sum(self.requests)


class StreamSource(EntropySource):
    """Serves a fixed byte string front to back; short reads once drained."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def get_random_bytes(self, n: int) -> bytes:
        chunk = self.data[self.offset:self.offset + n]
        self.offset += len(chunk)
        return chunk

    async def get_random_bytes_async(self, n: int) -> bytes:
        return self.get_random_bytes(n)


class PatternSource(EntropySource):
    """Every byte has the same value."""

    def __init__(self, value: int = 0):
        self.value = value
        self.calls = 0

    def get_random_bytes(self, n: int) -> bytes:
        self.calls += 1
        return bytes([self.value]) * n

    async def get_random_bytes_async(self, n: int) -> bytes:
        return self.get_random_bytes(n)


class FailingSource(EntropySource):
    """Source with no randomness available."""

    def get_random_bytes(self, n: int) -> bytes:
        raise EntropyUnavailableError("test source has no entropy")


@pytest.fixture
def fresh_sieve() -> SmallPrimeSieve:
    """Create an empty sieve cache."""
    return SmallPrimeSieve()


@pytest.fixture
def counting_source() -> CountingSource:
    return CountingSource()


@pytest.fixture
def zero_source() -> PatternSource:
    """Source returning only zero bytes."""
    return PatternSource(0)


@pytest.fixture
def failing_source() -> FailingSource:
    return FailingSource()


@pytest.fixture
def small_primes_below_50() -> List[int]:
    return [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]


@pytest.fixture
def stream_source():
    """Factory: StreamSource(data)."""
    return StreamSource


@pytest.fixture
def pattern_source():
    """Factory: PatternSource(value)."""
    return PatternSource
