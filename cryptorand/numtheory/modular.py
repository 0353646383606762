"""
cryptorand Modular Arithmetic

Modular exponentiation, modular inverse and gcd over arbitrary-precision
integers. All functions are pure and iterative, so large operands never hit
the recursion limit.
"""

from __future__ import annotations
from typing import Tuple

from cryptorand.errors import InvalidParameterError, NoInverseError


def _require_int(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameterError(name, f"must be an integer, got {value!r}")


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    Compute base^exponent mod modulus by square-and-multiply.

    Args:
        base: Any integer (reduced mod modulus first)
        exponent: Non-negative integer
        modulus: Positive integer

    Returns:
        Result in [0, modulus)
    """
    _require_int("base", base)
    _require_int("exponent", exponent)
    _require_int("modulus", modulus)
    if modulus < 1:
        raise InvalidParameterError("modulus", f"must be positive, got {modulus}")
    if exponent < 0:
        raise InvalidParameterError("exponent", f"must be non-negative, got {exponent}")

    if modulus == 1:
        return 0

    result = 1
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result


def gcd(a: int, b: int) -> int:
    """Greatest common divisor, always non-negative."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclid.

    Returns:
        (g, x, y) with a*x + b*y == g and g == gcd(a, b) >= 0
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y

    if old_r < 0:
        old_r, old_x, old_y = -old_r, -old_x, -old_y
    return old_r, old_x, old_y


def mod_inverse(a: int, m: int) -> int:
    """
    Multiplicative inverse of a modulo m.

    Raises:
        NoInverseError: gcd(a, m) != 1
        InvalidParameterError: m < 1 or non-integer operands
    """
    _require_int("a", a)
    _require_int("m", m)
    if m < 1:
        raise InvalidParameterError("m", f"must be positive, got {m}")
    if m == 1:
        return 0

    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        raise NoInverseError(a, m)
    return x % m
