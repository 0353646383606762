"""
cryptorand Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from cryptorand.constants import (
    DEFAULT_PRIME_ITERATIONS,
    DEFAULT_SIEVE_LIMIT,
    SIEVE_REUSE_THRESHOLD,
    DEFAULT_LATTICE_DIMENSION,
    DEFAULT_LATTICE_MODULUS,
    DEFAULT_LATTICE_SIGMA,
    POLICY_STANDARD,
    POLICY_ENHANCED,
    OUTPUT_NORMALIZED,
    OUTPUT_INTEGER,
)
from cryptorand.numtheory.bigrandom import is_int

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_number(value) -> bool:
    return is_int(value) or isinstance(value, float)


@dataclass
class PrimeConfig:
    """Prime generation defaults."""
    iterations: int = DEFAULT_PRIME_ITERATIONS
    policy: str = POLICY_STANDARD
    max_attempts: Optional[int] = None
    deadline: Optional[float] = None          # seconds


@dataclass
class SieveConfig:
    """Small-prime sieve configuration."""
    limit: int = DEFAULT_SIEVE_LIMIT
    reuse_threshold: int = SIEVE_REUSE_THRESHOLD


@dataclass
class LatticeConfig:
    """Lattice sampler defaults."""
    dimension: int = DEFAULT_LATTICE_DIMENSION
    modulus: int = DEFAULT_LATTICE_MODULUS
    sigma: float = DEFAULT_LATTICE_SIGMA
    output_mode: str = OUTPUT_NORMALIZED


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class RandConfig:
    """
    Complete engine configuration.

    Consumed by CryptoRand; every section falls back to its defaults.
    """
    prime: PrimeConfig = field(default_factory=PrimeConfig)
    sieve: SieveConfig = field(default_factory=SieveConfig)
    lattice: LatticeConfig = field(default_factory=LatticeConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        # Prime validation
        if not is_int(self.prime.iterations) or self.prime.iterations < 1:
            errors.append(f"iterations must be an integer >= 1: {self.prime.iterations!r}")

        if self.prime.policy not in (POLICY_STANDARD, POLICY_ENHANCED):
            errors.append(f"Unknown primality policy: {self.prime.policy!r}")

        max_attempts = self.prime.max_attempts
        if max_attempts is not None and (not is_int(max_attempts) or max_attempts < 1):
            errors.append(f"max_attempts must be an integer >= 1: {max_attempts!r}")

        deadline = self.prime.deadline
        if deadline is not None and (not _is_number(deadline) or deadline <= 0):
            errors.append(f"deadline must be a positive number: {deadline!r}")

        # Sieve validation
        if not is_int(self.sieve.limit) or self.sieve.limit < 2:
            errors.append(f"Sieve limit must be an integer >= 2: {self.sieve.limit!r}")

        if not is_int(self.sieve.reuse_threshold) or self.sieve.reuse_threshold < 0:
            errors.append(f"reuse_threshold must be a non-negative integer: {self.sieve.reuse_threshold!r}")

        # Lattice validation
        if not is_int(self.lattice.dimension) or self.lattice.dimension < 1:
            errors.append(f"dimension must be an integer >= 1: {self.lattice.dimension!r}")

        if not is_int(self.lattice.modulus) or self.lattice.modulus < 2:
            errors.append(f"Invalid lattice modulus: {self.lattice.modulus!r}")

        if not _is_number(self.lattice.sigma) or self.lattice.sigma <= 0:
            errors.append(f"sigma must be a positive number: {self.lattice.sigma!r}")

        if self.lattice.output_mode not in (OUTPUT_NORMALIZED, OUTPUT_INTEGER):
            errors.append(f"Unknown output mode: {self.lattice.output_mode!r}")

        # Log validation
        if not isinstance(self.log.level, str) or self.log.level.upper() not in _LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log.level!r}")

        return errors

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "RandConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls()

        if "prime" in data:
            config.prime = PrimeConfig(**data["prime"])

        if "sieve" in data:
            config.sieve = SieveConfig(**data["sieve"])

        if "lattice" in data:
            config.lattice = LatticeConfig(**data["lattice"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "prime": asdict(self.prime),
            "sieve": asdict(self.sieve),
            "lattice": asdict(self.lattice),
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
