"""
cryptorand Lattice Sampler

LWE-style pseudorandom values: b = <a, s> + e mod q with a ternary secret s,
uniform public coefficients a and discrete Gaussian error e.

The vector a is drawn fresh from the entropy source and discarded; nothing
is kept between calls.
"""

from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Optional, Union

from cryptorand.constants import (
    DEFAULT_LATTICE_DIMENSION,
    DEFAULT_LATTICE_MODULUS,
    DEFAULT_LATTICE_SIGMA,
    OUTPUT_NORMALIZED,
    OUTPUT_INTEGER,
)
from cryptorand.core.driver import Routine, run_sync, run_async
from cryptorand.core.entropy import EntropySource, get_default_source
from cryptorand.errors import InvalidParameterError
from cryptorand.lattice.cdt import CDTRegistry, DiscreteGaussianSampler
from cryptorand.numtheory.bigrandom import is_int, draw_many_below, draw_ternary

logger = logging.getLogger(__name__)


class OutputMode(Enum):
    """Lattice output transform."""
    NORMALIZED = OUTPUT_NORMALIZED      # b / q, float in [0, 1)
    INTEGER = OUTPUT_INTEGER            # b, int in [0, q)

    @classmethod
    def coerce(cls, value: Union["OutputMode", str]) -> "OutputMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError(
                "output_mode", f"expected one of {[m.value for m in cls]}, got {value!r}"
            ) from None


def check_lattice_params(dimension, modulus) -> None:
    if not is_int(dimension) or dimension < 1:
        raise InvalidParameterError("dimension", f"must be a positive integer, got {dimension!r}")
    if not is_int(modulus) or modulus < 2:
        raise InvalidParameterError("modulus", f"must be an integer >= 2, got {modulus!r}")


def lattice_routine(
    dimension: int,
    modulus: int,
    sampler: DiscreteGaussianSampler,
    output_mode: OutputMode
) -> Routine[Union[float, int]]:
    """Routine yielding one lattice sample."""
    secret = yield from draw_ternary(dimension)
    public = yield from draw_many_below(modulus, dimension)
    error = yield from sampler.sample()

    b = (sum(a * s for a, s in zip(public, secret)) + error) % modulus

    if output_mode is OutputMode.INTEGER:
        return b

    # (q-1)/q rounds to 1.0 once q exceeds 2^53
    return min(b / modulus, math.nextafter(1.0, 0.0))


def _prepare(dimension, modulus, sigma, output_mode, registry):
    check_lattice_params(dimension, modulus)
    mode = OutputMode.coerce(output_mode)
    sampler = DiscreteGaussianSampler.for_sigma(sigma, registry)
    return lattice_routine(dimension, modulus, sampler, mode)


def rand_lattice(
    dimension: int = DEFAULT_LATTICE_DIMENSION,
    modulus: int = DEFAULT_LATTICE_MODULUS,
    sigma: float = DEFAULT_LATTICE_SIGMA,
    output_mode: Union[OutputMode, str] = OutputMode.NORMALIZED,
    registry: Optional[CDTRegistry] = None,
    source: Optional[EntropySource] = None
) -> Union[float, int]:
    """
    LWE-style random value.

    Args:
        dimension: Secret / public vector length
        modulus: q
        sigma: Error distribution width; must have a registered CDT
        output_mode: "normalized" (float in [0, 1)) or "integer"
        registry: CDT registry (default: built-in tables)
        source: Entropy source (default: system)

    Raises:
        UnknownSigmaError: no CDT for sigma
        InvalidParameterError: bad dimension, modulus or output mode
    """
    routine = _prepare(dimension, modulus, sigma, output_mode, registry)
    return run_sync(routine, source or get_default_source())


async def rand_lattice_async(
    dimension: int = DEFAULT_LATTICE_DIMENSION,
    modulus: int = DEFAULT_LATTICE_MODULUS,
    sigma: float = DEFAULT_LATTICE_SIGMA,
    output_mode: Union[OutputMode, str] = OutputMode.NORMALIZED,
    registry: Optional[CDTRegistry] = None,
    source: Optional[EntropySource] = None
) -> Union[float, int]:
    """Async form of rand_lattice."""
    routine = _prepare(dimension, modulus, sigma, output_mode, registry)
    return await run_async(routine, source or get_default_source())
