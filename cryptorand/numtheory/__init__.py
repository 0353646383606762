"""
cryptorand Number Theory

Big random integers, modular arithmetic, small-prime sieve, primality
testing and prime generation.
"""

from cryptorand.numtheory.bigrandom import (
    check_bit_length,
    draw_exact_bits,
    draw_below,
    draw_range,
    draw_many_below,
    draw_ternary,
    draw_bit,
    rand_big_int,
    rand_big_int_async,
)
from cryptorand.numtheory.modular import (
    mod_pow,
    mod_inverse,
    gcd,
    extended_gcd,
)
from cryptorand.numtheory.sieve import (
    SmallPrimeSieve,
    generate_primes_up_to,
    get_default_sieve,
    sieve_up_to,
    combined_sieve_test,
)
from cryptorand.numtheory.primality import (
    PrimalityPolicy,
    PrimalityTester,
    miller_rabin,
    is_probable_prime,
    is_probable_prime_async,
)
from cryptorand.numtheory.primes import (
    PrimeGenerator,
    prime_routine,
    safe_prime_routine,
    rand_prime,
    rand_prime_async,
    rand_safe_prime,
    rand_safe_prime_async,
)

__all__ = [
    # Big random
    "check_bit_length",
    "draw_exact_bits",
    "draw_below",
    "draw_range",
    "draw_many_below",
    "draw_ternary",
    "draw_bit",
    "rand_big_int",
    "rand_big_int_async",
    # Modular arithmetic
    "mod_pow",
    "mod_inverse",
    "gcd",
    "extended_gcd",
    # Sieve
    "SmallPrimeSieve",
    "generate_primes_up_to",
    "get_default_sieve",
    "sieve_up_to",
    "combined_sieve_test",
    # Primality
    "PrimalityPolicy",
    "PrimalityTester",
    "miller_rabin",
    "is_probable_prime",
    "is_probable_prime_async",
    # Prime generation
    "PrimeGenerator",
    "prime_routine",
    "safe_prime_routine",
    "rand_prime",
    "rand_prime_async",
    "rand_safe_prime",
    "rand_safe_prime_async",
]
