"""
cryptorand Discrete Gaussian Sampling

Cumulative distribution tables (CDT) and inversion sampling.

A table T for a given sigma is non-increasing with T[0] the maximum. A
sample draws u uniformly from [0, T[0]), takes the largest index i with
T[i] > u as the magnitude and attaches a random sign.
"""

from __future__ import annotations
import bisect
import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from cryptorand.constants import DEFAULT_CDT_TABLES
from cryptorand.core.driver import Routine
from cryptorand.errors import InvalidParameterError, UnknownSigmaError
from cryptorand.numtheory.bigrandom import is_int, draw_below, draw_bit

logger = logging.getLogger(__name__)


def _validate_table(sigma: float, table: Iterable[int]) -> Tuple[int, ...]:
    table = tuple(table)
    if not table:
        raise InvalidParameterError("table", f"empty CDT for sigma {sigma}")
    if any(not is_int(t) or t < 0 for t in table):
        raise InvalidParameterError("table", f"CDT for sigma {sigma} must hold non-negative integers")
    if table[0] < 1:
        raise InvalidParameterError("table", f"CDT for sigma {sigma} must start above zero")
    for prev, cur in zip(table, table[1:]):
        if cur > prev:
            raise InvalidParameterError("table", f"CDT for sigma {sigma} must be non-increasing")
    return table


class CDTRegistry:
    """
    Sigma -> CDT mapping.

    Lookups of an unregistered sigma fail; there is no fallback table.
    """

    def __init__(self, tables: Optional[Dict[float, Iterable[int]]] = None):
        self._lock = threading.Lock()
        self._tables: Dict[float, Tuple[int, ...]] = {}
        for sigma, table in (tables or {}).items():
            self.register(sigma, table)

    def register(self, sigma: float, table: Iterable[int]) -> None:
        """Add or replace the table for sigma."""
        if isinstance(sigma, bool) or not isinstance(sigma, (int, float)) or sigma <= 0:
            raise InvalidParameterError("sigma", f"must be a positive number, got {sigma!r}")
        table = _validate_table(sigma, table)
        with self._lock:
            self._tables[float(sigma)] = table
        logger.debug(f"Registered CDT for sigma {sigma} ({len(table)} entries)")

    def get(self, sigma: float) -> Tuple[int, ...]:
        try:
            return self._tables[float(sigma)]
        except (KeyError, TypeError, ValueError):
            raise UnknownSigmaError(sigma, self._tables.keys()) from None

    def sigmas(self) -> List[float]:
        return sorted(self._tables)

    def __contains__(self, sigma) -> bool:
        try:
            return float(sigma) in self._tables
        except (TypeError, ValueError):
            return False


_default_registry: Optional[CDTRegistry] = None


def get_default_registry() -> CDTRegistry:
    """Registry preloaded with the built-in tables."""
    global _default_registry
    if _default_registry is None:
        _default_registry = CDTRegistry(DEFAULT_CDT_TABLES)
    return _default_registry


class DiscreteGaussianSampler:
    """Inversion sampler over one CDT."""

    def __init__(self, table: Iterable[int]):
        self.table = _validate_table("custom", table)
        # Ascending copy for bisect
        self._negated = [-t for t in self.table]

    @classmethod
    def for_sigma(cls, sigma: float, registry: Optional[CDTRegistry] = None) -> "DiscreteGaussianSampler":
        return cls((registry or get_default_registry()).get(sigma))

    @property
    def bound(self) -> int:
        """Exclusive upper bound of the uniform draw."""
        return self.table[0]

    def sample_magnitude_from(self, u: int) -> int:
        """Largest index i with table[i] > u, for u in [0, table[0])."""
        if not is_int(u) or not 0 <= u < self.table[0]:
            raise InvalidParameterError("u", f"must be in [0, {self.table[0]}), got {u!r}")
        return bisect.bisect_left(self._negated, -u) - 1

    def sample(self) -> Routine[int]:
        """Routine yielding one signed sample."""
        u = yield from draw_below(self.table[0])
        magnitude = self.sample_magnitude_from(u)
        negative = yield from draw_bit()
        return -magnitude if negative else magnitude
