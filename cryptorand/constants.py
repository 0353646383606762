"""
cryptorand Constants

All engine constants defined here for single source of truth.
"""

from typing import Final, Dict, Tuple

# ==============================================================================
# BIG RANDOM
# ==============================================================================

MIN_BIT_LENGTH: Final[int] = 2                  # Smallest exact-length draw
MIN_SAFE_PRIME_BITS: Final[int] = 3             # 5 and 7 are the 3-bit safe primes
TERNARY_REJECT_BYTE: Final[int] = 255           # 0..254 splits evenly into 3 classes

# ==============================================================================
# SMALL PRIME SIEVE
# ==============================================================================

DEFAULT_SIEVE_LIMIT: Final[int] = 65536         # 2^16, inclusive
SIEVE_REUSE_THRESHOLD: Final[int] = 1000        # Max excess served without slicing

# ==============================================================================
# PRIMALITY / PRIME GENERATION
# ==============================================================================

DEFAULT_PRIME_ITERATIONS: Final[int] = 40       # Error <= 4^-40 per candidate
POLICY_STANDARD: Final[str] = "standard"
POLICY_ENHANCED: Final[str] = "enhanced"

# ==============================================================================
# LATTICE SAMPLING
# ==============================================================================

DEFAULT_LATTICE_DIMENSION: Final[int] = 512
DEFAULT_LATTICE_MODULUS: Final[int] = 12289     # NTT-friendly prime, 12289 = 3 * 2^12 + 1
DEFAULT_LATTICE_SIGMA: Final[float] = 3.2

OUTPUT_NORMALIZED: Final[str] = "normalized"
OUTPUT_INTEGER: Final[str] = "integer"

# Cumulative distribution tables for discrete Gaussian sampling.
#
# Entries are scaled by 2^16 and non-increasing: entry i approximates
# 2^16 * P(|X| >= i). Sigma 3.2 has a tailcut of 13. Sigma 178.56 pairs with
# dimension 1024 and modulus 16777213 (a prime just below 2^24).
DEFAULT_CDT_TABLES: Final[Dict[float, Tuple[int, ...]]] = {
    3.2: (
        65535, 63963, 60395, 55305, 49438, 43597, 38341, 33914, 30338, 27508,
        25235, 23401, 21897, 20628,
    ),
    178.56: (
        65535, 65534, 65533, 65530, 65525, 65520, 65510, 65500, 65480, 65450,
        65400, 65350, 65280, 65200, 65100, 64980, 64850, 64700, 64500, 64300,
        64100, 63900, 63650, 63400, 63100, 62800, 62500, 62150, 61800, 61400,
        61000, 60500, 60000, 59500, 59000, 58400, 57800, 57200, 56600, 56000,
        55300, 54600, 53900, 53200, 52500, 51800, 51100, 50400, 49700, 49000,
        48300, 47600, 46900, 46200, 45500, 44800, 44100, 43400, 42700, 42000,
        41300, 40600, 39900, 39200, 38500, 37800, 37100, 36400, 35700, 35000,
        34300, 33600, 32900, 32200, 31500, 30800, 30100, 29400, 28700, 28000,
        27300, 26600, 25900, 25200, 24500, 23800, 23100, 22400, 21700, 21000,
        20300, 19600, 18900, 18200, 17500, 16800, 16100, 15400, 14700, 14000,
        13300, 12600, 11900, 11200, 10500, 9800, 9100, 8400, 7700, 7000,
        6300, 5600, 4900, 4200, 3500, 2800, 2100, 1400, 700, 350,
        175, 87, 43, 21, 10, 5, 2, 1,
    ),
}
