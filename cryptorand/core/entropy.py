"""
cryptorand Entropy Sources

The engine never produces randomness itself. Every random bit is requested
from an EntropySource, synchronously or through an awaitable.
"""

from __future__ import annotations
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from Crypto.Random import get_random_bytes

from cryptorand.errors import EntropyUnavailableError

logger = logging.getLogger(__name__)


class EntropySource(ABC):
    """
    Cryptographically secure byte provider.

    Implementations must raise EntropyUnavailableError rather than degrade
    to a weaker generator.
    """

    @abstractmethod
    def get_random_bytes(self, n: int) -> bytes:
        """Return exactly n secure random bytes."""

    async def get_random_bytes_async(self, n: int) -> bytes:
        """
        Awaitable form of get_random_bytes.

        The default runs the blocking call on the loop's default executor
        so the scheduler stays responsive.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.get_random_bytes, n)


class SystemEntropySource(EntropySource):
    """Operating system CSPRNG via pycryptodome."""

    def get_random_bytes(self, n: int) -> bytes:
        try:
            return get_random_bytes(n)
        except (OSError, NotImplementedError) as e:
            raise EntropyUnavailableError(
                f"System random source failed: {e}",
                {"requested": n}
            ) from e


class CallableEntropySource(EntropySource):
    """
    Adapt plain callables (os.urandom, secrets.token_bytes, ...) to an
    EntropySource.

    Args:
        func: Blocking n -> bytes callable
        async_func: Optional coroutine function n -> bytes; when omitted the
            blocking callable is run in the default executor
    """

    def __init__(
        self,
        func: Callable[[int], bytes],
        async_func: Optional[Callable[[int], Awaitable[bytes]]] = None,
    ):
        if func is None:
            raise EntropyUnavailableError("No random bytes callable supplied")
        self._func = func
        self._async_func = async_func

    def get_random_bytes(self, n: int) -> bytes:
        return self._func(n)

    async def get_random_bytes_async(self, n: int) -> bytes:
        if self._async_func is not None:
            return await self._async_func(n)
        return await super().get_random_bytes_async(n)


_default_source: Optional[EntropySource] = None


def get_default_source() -> EntropySource:
    """Return the process-wide system entropy source, creating it lazily."""
    global _default_source
    if _default_source is None:
        _default_source = SystemEntropySource()
        logger.debug("System entropy source initialized")
    return _default_source
