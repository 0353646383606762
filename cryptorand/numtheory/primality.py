"""
cryptorand Primality Testing

Miller-Rabin with small-prime trial division.

Two policies:
- STANDARD: random witnesses in [2, n-2], error probability <= 4^-k
- ENHANCED: as STANDARD, plus every witness is screened for a common
  factor with n; a shared factor proves n composite
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Optional, Sequence, Union

from cryptorand.constants import (
    DEFAULT_PRIME_ITERATIONS,
    DEFAULT_SIEVE_LIMIT,
    POLICY_STANDARD,
    POLICY_ENHANCED,
)
from cryptorand.core.driver import Routine, run_sync, run_async
from cryptorand.core.entropy import EntropySource, get_default_source
from cryptorand.errors import InvalidIterationsError, InvalidParameterError
from cryptorand.numtheory.bigrandom import is_int, draw_range
from cryptorand.numtheory.modular import gcd, mod_pow
from cryptorand.numtheory.sieve import SmallPrimeSieve, get_default_sieve

logger = logging.getLogger(__name__)


class PrimalityPolicy(Enum):
    """Witness validation policy."""
    STANDARD = POLICY_STANDARD
    ENHANCED = POLICY_ENHANCED

    @classmethod
    def coerce(cls, value: Union["PrimalityPolicy", str]) -> "PrimalityPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError(
                "policy", f"expected one of {[p.value for p in cls]}, got {value!r}"
            ) from None


def check_iterations(iterations) -> int:
    if not is_int(iterations) or iterations < 1:
        raise InvalidIterationsError(iterations)
    return iterations


def miller_rabin(
    n: int,
    iterations: int,
    policy: PrimalityPolicy,
    primes: Sequence[int]
) -> Routine[bool]:
    """
    Probabilistic primality routine.

    Args:
        n: Candidate
        iterations: Number of witness rounds
        policy: Witness validation policy
        primes: Ascending small primes for trial division

    Returns:
        Routine yielding True if n is probably prime
    """
    if not is_int(n):
        raise InvalidParameterError("n", f"must be an integer, got {n!r}")
    check_iterations(iterations)

    if n < 2:
        return False
    if n == 2 or n == 3:
        return True
    if n % 2 == 0:
        return False

    for p in primes:
        if p * p > n:
            break
        if n % p == 0:
            return False

    # Write n-1 as 2^r * d
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for _ in range(iterations):
        witness = yield from draw_range(2, n - 2)

        if policy is PrimalityPolicy.ENHANCED and gcd(witness, n) > 1:
            return False

        x = mod_pow(witness, d, n)
        if x == 1 or x == n - 1:
            continue

        for _ in range(r - 1):
            x = (x * x) % n
            if x == n - 1:
                break
        else:
            return False

    return True


class PrimalityTester:
    """
    Miller-Rabin tester bound to a sieve and an entropy source.

    Both default to the process-wide instances when omitted.
    """

    def __init__(
        self,
        sieve: Optional[SmallPrimeSieve] = None,
        source: Optional[EntropySource] = None,
        sieve_limit: int = DEFAULT_SIEVE_LIMIT,
    ):
        self.sieve = sieve or get_default_sieve()
        self.source = source
        self.sieve_limit = sieve_limit

    def _source(self) -> EntropySource:
        return self.source or get_default_source()

    def routine(
        self,
        n: int,
        iterations: int = DEFAULT_PRIME_ITERATIONS,
        policy: Union[PrimalityPolicy, str] = PrimalityPolicy.STANDARD
    ) -> Routine[bool]:
        """Primality routine for composition inside generator loops."""
        policy = PrimalityPolicy.coerce(policy)
        check_iterations(iterations)
        return miller_rabin(n, iterations, policy, self.sieve.primes_up_to(self.sieve_limit))

    def test(
        self,
        n: int,
        iterations: int = DEFAULT_PRIME_ITERATIONS,
        policy: Union[PrimalityPolicy, str] = PrimalityPolicy.STANDARD
    ) -> bool:
        return run_sync(self.routine(n, iterations, policy), self._source())

    async def test_async(
        self,
        n: int,
        iterations: int = DEFAULT_PRIME_ITERATIONS,
        policy: Union[PrimalityPolicy, str] = PrimalityPolicy.STANDARD
    ) -> bool:
        return await run_async(self.routine(n, iterations, policy), self._source())


def is_probable_prime(
    n: int,
    iterations: int = DEFAULT_PRIME_ITERATIONS,
    policy: Union[PrimalityPolicy, str] = PrimalityPolicy.STANDARD,
    source: Optional[EntropySource] = None,
    sieve: Optional[SmallPrimeSieve] = None
) -> bool:
    """True if n passes trial division and `iterations` Miller-Rabin rounds."""
    return PrimalityTester(sieve, source).test(n, iterations, policy)


async def is_probable_prime_async(
    n: int,
    iterations: int = DEFAULT_PRIME_ITERATIONS,
    policy: Union[PrimalityPolicy, str] = PrimalityPolicy.STANDARD,
    source: Optional[EntropySource] = None,
    sieve: Optional[SmallPrimeSieve] = None
) -> bool:
    """Async form of is_probable_prime."""
    return await PrimalityTester(sieve, source).test_async(n, iterations, policy)
