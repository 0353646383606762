"""
cryptorand Generator

CryptoRand bundles an entropy source, a private sieve cache, a CDT registry
and configured defaults behind one object with sync and async methods.
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from cryptorand.config import RandConfig
from cryptorand.core.entropy import EntropySource, get_default_source
from cryptorand.core.driver import run_sync, run_async
from cryptorand.errors import InvalidParameterError
from cryptorand.lattice.cdt import CDTRegistry, get_default_registry
from cryptorand.lattice.sampler import rand_lattice, rand_lattice_async
from cryptorand.numtheory.bigrandom import draw_exact_bits
from cryptorand.numtheory.modular import mod_pow, mod_inverse
from cryptorand.numtheory.primality import PrimalityTester
from cryptorand.numtheory.primes import PrimeGenerator
from cryptorand.numtheory.sieve import SmallPrimeSieve

logger = logging.getLogger(__name__)


def _pick(value, default):
    return default if value is None else value


class CryptoRand:
    """
    Configured randomness engine.

    Usage:
        rng = CryptoRand(RandConfig())
        p = rng.rand_safe_prime(512)
        x = await rng.rand_lattice_async()
    """

    def __init__(
        self,
        config: Optional[RandConfig] = None,
        source: Optional[EntropySource] = None,
        registry: Optional[CDTRegistry] = None
    ):
        self.config = config or RandConfig()
        errors = self.config.validate()
        if errors:
            raise InvalidParameterError("config", "; ".join(errors))

        self.source = source or get_default_source()
        self.registry = registry or get_default_registry()
        self.sieve = SmallPrimeSieve(self.config.sieve.reuse_threshold)
        self.tester = PrimalityTester(self.sieve, self.source, self.config.sieve.limit)
        self.primes = PrimeGenerator(self.tester, self.source)

        logger.debug(
            f"CryptoRand ready: policy={self.config.prime.policy}, "
            f"iterations={self.config.prime.iterations}"
        )

    # ==========================================================================
    # Big integers
    # ==========================================================================

    def rand_big_int(self, bits: int, require_odd: bool = False) -> int:
        return run_sync(draw_exact_bits(bits, require_odd), self.source)

    async def rand_big_int_async(self, bits: int, require_odd: bool = False) -> int:
        return await run_async(draw_exact_bits(bits, require_odd), self.source)

    mod_pow = staticmethod(mod_pow)
    mod_inverse = staticmethod(mod_inverse)

    # ==========================================================================
    # Primes
    # ==========================================================================

    def is_probable_prime(self, n: int, iterations: Optional[int] = None, policy=None) -> bool:
        prime = self.config.prime
        return self.tester.test(n, _pick(iterations, prime.iterations), _pick(policy, prime.policy))

    async def is_probable_prime_async(self, n: int, iterations: Optional[int] = None, policy=None) -> bool:
        prime = self.config.prime
        return await self.tester.test_async(
            n, _pick(iterations, prime.iterations), _pick(policy, prime.policy)
        )

    def _prime_args(self, iterations, policy, max_attempts, deadline) -> tuple:
        prime = self.config.prime
        return (
            _pick(iterations, prime.iterations),
            _pick(policy, prime.policy),
            _pick(max_attempts, prime.max_attempts),
            _pick(deadline, prime.deadline),
        )

    def rand_prime(self, bits: int, iterations: Optional[int] = None, policy=None,
                   max_attempts: Optional[int] = None, deadline: Optional[float] = None) -> int:
        return self.primes.rand_prime(bits, *self._prime_args(iterations, policy, max_attempts, deadline))

    async def rand_prime_async(self, bits: int, iterations: Optional[int] = None, policy=None,
                               max_attempts: Optional[int] = None, deadline: Optional[float] = None) -> int:
        return await self.primes.rand_prime_async(
            bits, *self._prime_args(iterations, policy, max_attempts, deadline)
        )

    def rand_safe_prime(self, bits: int, iterations: Optional[int] = None, policy=None,
                        max_attempts: Optional[int] = None, deadline: Optional[float] = None) -> int:
        return self.primes.rand_safe_prime(bits, *self._prime_args(iterations, policy, max_attempts, deadline))

    async def rand_safe_prime_async(self, bits: int, iterations: Optional[int] = None, policy=None,
                                    max_attempts: Optional[int] = None,
                                    deadline: Optional[float] = None) -> int:
        return await self.primes.rand_safe_prime_async(
            bits, *self._prime_args(iterations, policy, max_attempts, deadline)
        )

    def clear_cache(self) -> None:
        """Drop this engine's sieve cache."""
        self.sieve.clear()

    # ==========================================================================
    # Lattice
    # ==========================================================================

    def _lattice_args(self, dimension, modulus, sigma, output_mode) -> tuple:
        lattice = self.config.lattice
        return (
            _pick(dimension, lattice.dimension),
            _pick(modulus, lattice.modulus),
            _pick(sigma, lattice.sigma),
            _pick(output_mode, lattice.output_mode),
        )

    def rand_lattice(self, dimension: Optional[int] = None, modulus: Optional[int] = None,
                     sigma: Optional[float] = None, output_mode=None) -> Union[float, int]:
        return rand_lattice(
            *self._lattice_args(dimension, modulus, sigma, output_mode),
            registry=self.registry, source=self.source
        )

    async def rand_lattice_async(self, dimension: Optional[int] = None, modulus: Optional[int] = None,
                                 sigma: Optional[float] = None, output_mode=None) -> Union[float, int]:
        return await rand_lattice_async(
            *self._lattice_args(dimension, modulus, sigma, output_mode),
            registry=self.registry, source=self.source
        )
