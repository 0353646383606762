"""
cryptorand Error Handling

All error codes and exception classes.

Composite primality results and rejected generator candidates are normal
control flow and never raise.
"""

from enum import IntEnum
from typing import Optional, Any, Iterable


class ErrorCode(IntEnum):
    """Engine error codes."""

    # 1xxx - Parameter errors
    INVALID_PARAMETER = 1001
    INVALID_BIT_LENGTH = 1002
    INVALID_ITERATIONS = 1003

    # 2xxx - Arithmetic errors
    NO_INVERSE = 2001

    # 3xxx - Entropy errors
    ENTROPY_UNAVAILABLE = 3001

    # 4xxx - Generator limits
    ATTEMPTS_EXHAUSTED = 4001
    DEADLINE_EXCEEDED = 4002

    # 5xxx - Lattice errors
    UNKNOWN_SIGMA = 5001


class CryptoRandError(Exception):
    """Base exception for all cryptorand errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# Parameter Errors (1xxx)
# ==============================================================================

class InvalidParameterError(CryptoRandError):
    def __init__(self, param: str, message: str = ""):
        msg = f"Invalid parameter: {param}"
        if message:
            msg += f" - {message}"
        super().__init__(ErrorCode.INVALID_PARAMETER, msg, {"parameter": param})


class InvalidBitLengthError(CryptoRandError):
    def __init__(self, bits: Any, minimum: int = 2):
        super().__init__(
            ErrorCode.INVALID_BIT_LENGTH,
            f"Bit length must be an integer greater than or equal to {minimum}: {bits!r}",
            {"bits": repr(bits), "minimum": minimum}
        )


class InvalidIterationsError(CryptoRandError):
    def __init__(self, iterations: Any):
        super().__init__(
            ErrorCode.INVALID_ITERATIONS,
            f"Number of iterations must be a positive integer: {iterations!r}",
            {"iterations": repr(iterations)}
        )


# ==============================================================================
# Arithmetic Errors (2xxx)
# ==============================================================================

class NoInverseError(CryptoRandError):
    def __init__(self, a: int, m: int):
        super().__init__(
            ErrorCode.NO_INVERSE,
            "Modular inverse does not exist",
            {"a": str(a), "m": str(m)}
        )


# ==============================================================================
# Entropy Errors (3xxx)
# ==============================================================================

class EntropyUnavailableError(CryptoRandError):
    def __init__(self, message: str = "No secure random source available", details: Any = None):
        super().__init__(ErrorCode.ENTROPY_UNAVAILABLE, message, details)


# ==============================================================================
# Generator Limit Errors (4xxx)
# ==============================================================================

class AttemptsExhaustedError(CryptoRandError):
    def __init__(self, what: str, attempts: int):
        super().__init__(
            ErrorCode.ATTEMPTS_EXHAUSTED,
            f"No {what} found after {attempts} attempts",
            {"what": what, "attempts": attempts}
        )


class DeadlineExceededError(CryptoRandError):
    def __init__(self, what: str, deadline: float, attempts: int):
        super().__init__(
            ErrorCode.DEADLINE_EXCEEDED,
            f"No {what} found within {deadline}s ({attempts} attempts)",
            {"what": what, "deadline": deadline, "attempts": attempts}
        )


# ==============================================================================
# Lattice Errors (5xxx)
# ==============================================================================

class UnknownSigmaError(CryptoRandError):
    def __init__(self, sigma: float, available: Iterable[float] = ()):
        available = sorted(available)
        super().__init__(
            ErrorCode.UNKNOWN_SIGMA,
            f"No CDT table registered for sigma {sigma}",
            {"sigma": sigma, "available": available}
        )
