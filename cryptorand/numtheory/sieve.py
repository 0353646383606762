"""
cryptorand Small Prime Sieve

Cached sieve of Eratosthenes used for trial division ahead of Miller-Rabin.

The cache is an explicit object rather than hidden module state: callers own
a SmallPrimeSieve (or share the default one) and can clear it for test
isolation. Reads work on an immutable snapshot; regeneration runs under a
lock and replaces the snapshot in one assignment.
"""

from __future__ import annotations
import bisect
import logging
import threading
from typing import Iterable, Optional, Tuple

from cryptorand.constants import DEFAULT_SIEVE_LIMIT, SIEVE_REUSE_THRESHOLD
from cryptorand.errors import InvalidParameterError
from cryptorand.numtheory.bigrandom import is_int

logger = logging.getLogger(__name__)


def generate_primes_up_to(limit: int) -> Tuple[int, ...]:
    """All primes <= limit, ascending. Uncached."""
    if limit < 2:
        return ()

    composite = bytearray(limit + 1)
    for i in range(2, int(limit ** 0.5) + 1):
        if not composite[i]:
            composite[i * i::i] = b"\x01" * len(range(i * i, limit + 1, i))
    return tuple(i for i in range(2, limit + 1) if not composite[i])


class SmallPrimeSieve:
    """
    Small-prime cache with reuse threshold.

    A cached list complete up to L answers a request for limit l <= L:
    - as-is when L - l < reuse_threshold (a few extra primes are harmless
      for trial division)
    - sliced down to l otherwise, without recomputation
    A request above L regenerates the cache.
    """

    def __init__(self, reuse_threshold: int = SIEVE_REUSE_THRESHOLD):
        if not is_int(reuse_threshold) or reuse_threshold < 0:
            raise InvalidParameterError(
                "reuse_threshold", f"must be a non-negative integer, got {reuse_threshold!r}"
            )
        self.reuse_threshold = reuse_threshold
        self._lock = threading.Lock()
        self._snapshot: Optional[Tuple[int, Tuple[int, ...]]] = None
        self._generate_calls = 0

    @property
    def generate_calls(self) -> int:
        """Number of sieve runs since construction or the last clear()."""
        return self._generate_calls

    @property
    def cached_limit(self) -> Optional[int]:
        snapshot = self._snapshot
        return snapshot[0] if snapshot else None

    def primes_up_to(self, limit: int = DEFAULT_SIEVE_LIMIT) -> Tuple[int, ...]:
        """
        Ascending primes up to limit.

        The result may include primes slightly above limit when the cached
        list is within the reuse threshold.
        """
        if not is_int(limit) or limit < 0:
            raise InvalidParameterError("limit", f"must be a non-negative integer, got {limit!r}")

        served = self._serve(self._snapshot, limit)
        if served is not None:
            return served

        with self._lock:
            # Another thread may have grown the cache while we waited
            served = self._serve(self._snapshot, limit)
            if served is not None:
                return served

            primes = generate_primes_up_to(limit)
            self._generate_calls += 1
            self._snapshot = (limit, primes)
            logger.debug(f"Sieve regenerated up to {limit}: {len(primes)} primes")
            return primes

    def _serve(
        self,
        snapshot: Optional[Tuple[int, Tuple[int, ...]]],
        limit: int
    ) -> Optional[Tuple[int, ...]]:
        if snapshot is None:
            return None

        cached_limit, primes = snapshot
        if cached_limit < limit:
            return None
        if cached_limit - limit < self.reuse_threshold:
            return primes

        logger.debug(f"Sieve cache up to {cached_limit} sliced to {limit}")
        return primes[:bisect.bisect_right(primes, limit)]

    def clear(self) -> None:
        """Drop the cache and reset the generation counter."""
        with self._lock:
            self._snapshot = None
            self._generate_calls = 0
        logger.debug("Sieve cache cleared")


_default_sieve: Optional[SmallPrimeSieve] = None
_default_lock = threading.Lock()


def get_default_sieve() -> SmallPrimeSieve:
    """Process-wide sieve shared by callers that do not inject their own."""
    global _default_sieve
    if _default_sieve is None:
        with _default_lock:
            if _default_sieve is None:
                _default_sieve = SmallPrimeSieve()
    return _default_sieve


def sieve_up_to(limit: int = DEFAULT_SIEVE_LIMIT) -> Tuple[int, ...]:
    """primes_up_to() on the default sieve."""
    return get_default_sieve().primes_up_to(limit)


def combined_sieve_test(p: int, primes: Iterable[int]) -> bool:
    """
    Combined sieve for safe-prime candidates (Wiener).

    Returns False when p or q = (p-1)/2 has a small prime factor other than
    itself. True means neither was ruled out; it is not a primality proof.
    """
    q = (p - 1) // 2
    for s in primes:
        if s * s > p:
            break
        if p % s == 0 and p != s:
            return False
        if q % s == 0 and q != s:
            return False
    return True
