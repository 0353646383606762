"""
cryptorand Lattice

CDT discrete Gaussian sampling and the LWE-style value sampler.
"""

from cryptorand.lattice.cdt import (
    CDTRegistry,
    DiscreteGaussianSampler,
    get_default_registry,
)
from cryptorand.lattice.sampler import (
    OutputMode,
    lattice_routine,
    rand_lattice,
    rand_lattice_async,
)

__all__ = [
    # CDT
    "CDTRegistry",
    "DiscreteGaussianSampler",
    "get_default_registry",
    # Sampler
    "OutputMode",
    "lattice_routine",
    "rand_lattice",
    "rand_lattice_async",
]
