"""
cryptorand Prime Generation

Exact-bit-length primes and safe primes by rejection: draw an odd candidate
of the requested length, test it, repeat.

The loop terminates with probability 1 but has no fixed bound. Callers that
need bounded latency pass max_attempts and/or deadline (seconds on the
monotonic clock), or wrap the async form in asyncio.wait_for().
"""

from __future__ import annotations
import logging
import time
from typing import Callable, Optional, Sequence, Tuple, Union

from cryptorand.constants import (
    DEFAULT_PRIME_ITERATIONS,
    MIN_BIT_LENGTH,
    MIN_SAFE_PRIME_BITS,
)
from cryptorand.core.driver import CHECKPOINT, Routine, run_sync, run_async
from cryptorand.core.entropy import EntropySource, get_default_source
from cryptorand.errors import (
    AttemptsExhaustedError,
    DeadlineExceededError,
    InvalidParameterError,
)
from cryptorand.numtheory.bigrandom import is_int, check_bit_length, draw_exact_bits
from cryptorand.numtheory.primality import (
    PrimalityPolicy,
    PrimalityTester,
    check_iterations,
    miller_rabin,
)
from cryptorand.numtheory.sieve import combined_sieve_test

logger = logging.getLogger(__name__)

PolicyLike = Union[PrimalityPolicy, str]


def _check_limits(max_attempts, deadline) -> None:
    if max_attempts is not None and (not is_int(max_attempts) or max_attempts < 1):
        raise InvalidParameterError(
            "max_attempts", f"must be a positive integer, got {max_attempts!r}"
        )
    if deadline is not None and (
        isinstance(deadline, bool)
        or not isinstance(deadline, (int, float))
        or deadline <= 0
    ):
        raise InvalidParameterError("deadline", f"must be a positive number of seconds, got {deadline!r}")


class _Budget:
    """Attempt counter with optional cap and deadline."""

    def __init__(self, what: str, max_attempts: Optional[int], deadline: Optional[float]):
        self.what = what
        self.max_attempts = max_attempts
        self.deadline = deadline
        self.started = time.monotonic()
        self.expires = self.started + deadline if deadline is not None else None
        self.attempts = 0

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started

    def next_attempt(self) -> None:
        """Account for one more attempt, raising if a limit is reached."""
        if self.max_attempts is not None and self.attempts >= self.max_attempts:
            logger.warning(f"{self.what} search gave up after {self.attempts} attempts")
            raise AttemptsExhaustedError(self.what, self.attempts)
        if self.expires is not None and time.monotonic() >= self.expires:
            logger.warning(
                f"{self.what} search hit {self.deadline}s deadline after {self.attempts} attempts"
            )
            raise DeadlineExceededError(self.what, self.deadline, self.attempts)
        self.attempts += 1


def _search_prime(
    bits: int,
    iterations: int,
    policy: PrimalityPolicy,
    primes: Sequence[int],
    budget: _Budget,
    prefilter: Optional[Callable[[int], bool]] = None
) -> Routine[int]:
    while True:
        yield CHECKPOINT
        budget.next_attempt()

        candidate = yield from draw_exact_bits(bits, require_odd=True)
        if prefilter is not None and not prefilter(candidate):
            logger.debug(f"{budget.what} attempt {budget.attempts}: rejected by sieve")
            continue
        if (yield from miller_rabin(candidate, iterations, policy, primes)):
            return candidate
        logger.debug(f"{budget.what} attempt {budget.attempts}: composite")


def prime_routine(
    bits: int,
    iterations: int,
    policy: PrimalityPolicy,
    primes: Sequence[int],
    max_attempts: Optional[int] = None,
    deadline: Optional[float] = None
) -> Routine[int]:
    """
    Routine producing a probable prime in [2^(bits-1), 2^bits).

    Every attempt starts with a checkpoint, so the async driver yields to
    the event loop between candidates.
    """
    check_bit_length(bits, MIN_BIT_LENGTH)
    check_iterations(iterations)
    _check_limits(max_attempts, deadline)

    budget = _Budget("prime", max_attempts, deadline)
    prime = yield from _search_prime(bits, iterations, policy, primes, budget)
    logger.info(
        f"Generated {bits}-bit prime after {budget.attempts} attempts "
        f"({budget.elapsed:.3f}s)"
    )
    return prime


def safe_prime_routine(
    bits: int,
    iterations: int,
    policy: PrimalityPolicy,
    primes: Sequence[int],
    max_attempts: Optional[int] = None,
    deadline: Optional[float] = None
) -> Routine[int]:
    """
    Routine producing a safe prime p = 2q + 1 with q prime and p of
    exactly `bits` bits.

    q candidates are screened with the combined sieve on 2q + 1 before
    Miller-Rabin. max_attempts counts outer (q found, p tested) rounds; the
    deadline covers the whole search.
    """
    check_bit_length(bits, MIN_SAFE_PRIME_BITS)
    check_iterations(iterations)
    _check_limits(max_attempts, deadline)

    budget = _Budget("safe prime", max_attempts, deadline)
    # Inner search inherits the deadline but not the attempt cap
    inner = _Budget("safe prime", None, deadline)
    inner.expires = budget.expires

    def prefilter(q: int) -> bool:
        return combined_sieve_test(2 * q + 1, primes)

    while True:
        yield CHECKPOINT
        budget.next_attempt()

        q = yield from _search_prime(bits - 1, iterations, policy, primes, inner, prefilter)
        p = 2 * q + 1
        if p.bit_length() != bits:
            continue
        if (yield from miller_rabin(p, iterations, policy, primes)):
            logger.info(
                f"Generated {bits}-bit safe prime after {budget.attempts} attempts "
                f"({inner.attempts} candidates, {budget.elapsed:.3f}s)"
            )
            return p
        logger.debug(f"safe prime attempt {budget.attempts}: 2q+1 composite")


class PrimeGenerator:
    """
    Prime and safe-prime generator.

    Args:
        tester: PrimalityTester supplying the sieve (default: shared sieve)
        source: Entropy source (default: tester's source, then system)
    """

    def __init__(
        self,
        tester: Optional[PrimalityTester] = None,
        source: Optional[EntropySource] = None
    ):
        self.tester = tester or PrimalityTester(source=source)
        self.source = source

    def _source(self) -> EntropySource:
        return self.source or self.tester.source or get_default_source()

    def _primes(self) -> Tuple[int, ...]:
        return self.tester.sieve.primes_up_to(self.tester.sieve_limit)

    def prime_routine(
        self,
        bits: int,
        iterations: int = DEFAULT_PRIME_ITERATIONS,
        policy: PolicyLike = PrimalityPolicy.STANDARD,
        max_attempts: Optional[int] = None,
        deadline: Optional[float] = None
    ) -> Routine[int]:
        check_bit_length(bits, MIN_BIT_LENGTH)
        check_iterations(iterations)
        _check_limits(max_attempts, deadline)
        return prime_routine(
            bits, iterations, PrimalityPolicy.coerce(policy), self._primes(),
            max_attempts, deadline
        )

    def safe_prime_routine(
        self,
        bits: int,
        iterations: int = DEFAULT_PRIME_ITERATIONS,
        policy: PolicyLike = PrimalityPolicy.STANDARD,
        max_attempts: Optional[int] = None,
        deadline: Optional[float] = None
    ) -> Routine[int]:
        check_bit_length(bits, MIN_SAFE_PRIME_BITS)
        check_iterations(iterations)
        _check_limits(max_attempts, deadline)
        return safe_prime_routine(
            bits, iterations, PrimalityPolicy.coerce(policy), self._primes(),
            max_attempts, deadline
        )

    def rand_prime(self, bits: int, iterations: int = DEFAULT_PRIME_ITERATIONS,
                   policy: PolicyLike = PrimalityPolicy.STANDARD,
                   max_attempts: Optional[int] = None,
                   deadline: Optional[float] = None) -> int:
        routine = self.prime_routine(bits, iterations, policy, max_attempts, deadline)
        return run_sync(routine, self._source())

    async def rand_prime_async(self, bits: int, iterations: int = DEFAULT_PRIME_ITERATIONS,
                               policy: PolicyLike = PrimalityPolicy.STANDARD,
                               max_attempts: Optional[int] = None,
                               deadline: Optional[float] = None) -> int:
        routine = self.prime_routine(bits, iterations, policy, max_attempts, deadline)
        return await run_async(routine, self._source())

    def rand_safe_prime(self, bits: int, iterations: int = DEFAULT_PRIME_ITERATIONS,
                        policy: PolicyLike = PrimalityPolicy.STANDARD,
                        max_attempts: Optional[int] = None,
                        deadline: Optional[float] = None) -> int:
        routine = self.safe_prime_routine(bits, iterations, policy, max_attempts, deadline)
        return run_sync(routine, self._source())

    async def rand_safe_prime_async(self, bits: int, iterations: int = DEFAULT_PRIME_ITERATIONS,
                                    policy: PolicyLike = PrimalityPolicy.STANDARD,
                                    max_attempts: Optional[int] = None,
                                    deadline: Optional[float] = None) -> int:
        routine = self.safe_prime_routine(bits, iterations, policy, max_attempts, deadline)
        return await run_async(routine, self._source())


# ==============================================================================
# Module-level convenience functions
# ==============================================================================

def rand_prime(
    bits: int,
    iterations: int = DEFAULT_PRIME_ITERATIONS,
    policy: PolicyLike = PrimalityPolicy.STANDARD,
    max_attempts: Optional[int] = None,
    deadline: Optional[float] = None,
    source: Optional[EntropySource] = None
) -> int:
    """Random probable prime of exactly `bits` bits."""
    return PrimeGenerator(source=source).rand_prime(bits, iterations, policy, max_attempts, deadline)


async def rand_prime_async(
    bits: int,
    iterations: int = DEFAULT_PRIME_ITERATIONS,
    policy: PolicyLike = PrimalityPolicy.STANDARD,
    max_attempts: Optional[int] = None,
    deadline: Optional[float] = None,
    source: Optional[EntropySource] = None
) -> int:
    return await PrimeGenerator(source=source).rand_prime_async(
        bits, iterations, policy, max_attempts, deadline
    )


def rand_safe_prime(
    bits: int,
    iterations: int = DEFAULT_PRIME_ITERATIONS,
    policy: PolicyLike = PrimalityPolicy.STANDARD,
    max_attempts: Optional[int] = None,
    deadline: Optional[float] = None,
    source: Optional[EntropySource] = None
) -> int:
    """Random safe prime p (with (p-1)/2 prime) of exactly `bits` bits."""
    return PrimeGenerator(source=source).rand_safe_prime(bits, iterations, policy, max_attempts, deadline)


async def rand_safe_prime_async(
    bits: int,
    iterations: int = DEFAULT_PRIME_ITERATIONS,
    policy: PolicyLike = PrimalityPolicy.STANDARD,
    max_attempts: Optional[int] = None,
    deadline: Optional[float] = None,
    source: Optional[EntropySource] = None
) -> int:
    return await PrimeGenerator(source=source).rand_safe_prime_async(
        bits, iterations, policy, max_attempts, deadline
    )
