"""
cryptorand BigRandom

Uniform arbitrary-precision integers drawn from an entropy source.

All draws are routines (see cryptorand.core.driver): they yield byte
requests and never touch a random source directly. Bounded draws use masked
rejection sampling, so no value is favoured by modulo reduction.
"""

from __future__ import annotations
from typing import List, Optional

from cryptorand.constants import MIN_BIT_LENGTH, TERNARY_REJECT_BYTE
from cryptorand.core.driver import Routine, run_sync, run_async
from cryptorand.core.entropy import EntropySource, get_default_source
from cryptorand.errors import InvalidBitLengthError, InvalidParameterError


def is_int(value) -> bool:
    """True for real integers; bool is rejected."""
    return isinstance(value, int) and not isinstance(value, bool)


def check_bit_length(bits, minimum: int = MIN_BIT_LENGTH) -> int:
    """Validate an exact bit length, raising InvalidBitLengthError."""
    if not is_int(bits) or bits < minimum:
        raise InvalidBitLengthError(bits, minimum)
    return bits


def draw_exact_bits(bits: int, require_odd: bool = False) -> Routine[int]:
    """
    Draw an integer of exactly `bits` bits.

    Requests ceil(bits/8) bytes, drops the excess high bits, then forces the
    top bit (value lies in [2^(bits-1), 2^bits)) and, if require_odd, the
    bottom bit. Every other bit is uniform.

    Args:
        bits: Bit length (>= 2)
        require_odd: Force the least significant bit to 1

    Returns:
        Routine yielding the integer
    """
    check_bit_length(bits)
    nbytes = (bits + 7) // 8
    data = yield nbytes

    value = int.from_bytes(data, "big") & ((1 << bits) - 1)
    value |= 1 << (bits - 1)
    if require_odd:
        value |= 1
    return value


def draw_below(upper: int) -> Routine[int]:
    """Draw a uniform integer in [0, upper)."""
    if not is_int(upper) or upper < 1:
        raise InvalidParameterError("upper", f"must be a positive integer, got {upper!r}")
    if upper == 1:
        return 0

    width = (upper - 1).bit_length()
    nbytes = (width + 7) // 8
    mask = (1 << width) - 1

    # Acceptance probability is above 1/2 per draw
    while True:
        data = yield nbytes
        value = int.from_bytes(data, "big") & mask
        if value < upper:
            return value


def draw_range(low: int, high: int) -> Routine[int]:
    """Draw a uniform integer in [low, high] (inclusive)."""
    if high < low:
        raise InvalidParameterError("high", f"empty range [{low}, {high}]")
    offset = yield from draw_below(high - low + 1)
    return low + offset


def draw_many_below(upper: int, count: int) -> Routine[List[int]]:
    """
    Draw `count` independent uniform integers in [0, upper).

    Bytes are requested in batches; rejected chunks are topped up by a
    further, smaller request.
    """
    if not is_int(upper) or upper < 1:
        raise InvalidParameterError("upper", f"must be a positive integer, got {upper!r}")
    if not is_int(count) or count < 0:
        raise InvalidParameterError("count", f"must be a non-negative integer, got {count!r}")
    if upper == 1:
        return [0] * count

    width = (upper - 1).bit_length()
    nbytes = (width + 7) // 8
    mask = (1 << width) - 1

    values: List[int] = []
    while len(values) < count:
        need = count - len(values)
        data = yield need * nbytes
        for offset in range(0, need * nbytes, nbytes):
            value = int.from_bytes(data[offset:offset + nbytes], "big") & mask
            if value < upper:
                values.append(value)
    return values


def draw_ternary(count: int) -> Routine[List[int]]:
    """Draw `count` coefficients uniformly from {-1, 0, 1}."""
    if not is_int(count) or count < 0:
        raise InvalidParameterError("count", f"must be a non-negative integer, got {count!r}")

    coefficients: List[int] = []
    while len(coefficients) < count:
        data = yield count - len(coefficients)
        for byte in data:
            if byte != TERNARY_REJECT_BYTE:
                coefficients.append(byte % 3 - 1)
    return coefficients


def draw_bit() -> Routine[int]:
    """Draw a single uniform bit."""
    data = yield 1
    return data[0] & 1


def rand_big_int(
    bits: int,
    require_odd: bool = False,
    source: Optional[EntropySource] = None
) -> int:
    """Random integer of exactly `bits` bits."""
    return run_sync(draw_exact_bits(bits, require_odd), source or get_default_source())


async def rand_big_int_async(
    bits: int,
    require_odd: bool = False,
    source: Optional[EntropySource] = None
) -> int:
    """Async form of rand_big_int."""
    return await run_async(draw_exact_bits(bits, require_odd), source or get_default_source())
