"""
cryptorand
Cryptographic Randomness Engine

Exact-bit random integers, modular arithmetic, Miller-Rabin primality,
prime and safe-prime generation, and LWE-style lattice sampling.

Every operation has a blocking and an asyncio form built on one routine.
"""

__version__ = "1.0.0"
__author__ = "cryptorand"

from cryptorand.config import RandConfig, setup_logging
from cryptorand.core.entropy import (
    EntropySource,
    SystemEntropySource,
    CallableEntropySource,
    get_default_source,
)
from cryptorand.errors import (
    ErrorCode,
    CryptoRandError,
    InvalidParameterError,
    InvalidBitLengthError,
    InvalidIterationsError,
    NoInverseError,
    EntropyUnavailableError,
    AttemptsExhaustedError,
    DeadlineExceededError,
    UnknownSigmaError,
)
from cryptorand.generator import CryptoRand
from cryptorand.lattice import (
    CDTRegistry,
    DiscreteGaussianSampler,
    OutputMode,
    rand_lattice,
    rand_lattice_async,
)
from cryptorand.numtheory import (
    SmallPrimeSieve,
    PrimalityPolicy,
    PrimalityTester,
    PrimeGenerator,
    rand_big_int,
    rand_big_int_async,
    mod_pow,
    mod_inverse,
    gcd,
    get_default_sieve,
    sieve_up_to,
    combined_sieve_test,
    is_probable_prime,
    is_probable_prime_async,
    rand_prime,
    rand_prime_async,
    rand_safe_prime,
    rand_safe_prime_async,
)

__all__ = [
    "__version__",
    # Engine
    "CryptoRand",
    "RandConfig",
    "setup_logging",
    # Entropy
    "EntropySource",
    "SystemEntropySource",
    "CallableEntropySource",
    "get_default_source",
    # Errors
    "ErrorCode",
    "CryptoRandError",
    "InvalidParameterError",
    "InvalidBitLengthError",
    "InvalidIterationsError",
    "NoInverseError",
    "EntropyUnavailableError",
    "AttemptsExhaustedError",
    "DeadlineExceededError",
    "UnknownSigmaError",
    # Number theory
    "SmallPrimeSieve",
    "PrimalityPolicy",
    "PrimalityTester",
    "PrimeGenerator",
    "rand_big_int",
    "rand_big_int_async",
    "mod_pow",
    "mod_inverse",
    "gcd",
    "get_default_sieve",
    "sieve_up_to",
    "combined_sieve_test",
    "is_probable_prime",
    "is_probable_prime_async",
    "rand_prime",
    "rand_prime_async",
    "rand_safe_prime",
    "rand_safe_prime_async",
    # Lattice
    "CDTRegistry",
    "DiscreteGaussianSampler",
    "OutputMode",
    "rand_lattice",
    "rand_lattice_async",
]
