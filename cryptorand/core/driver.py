"""
cryptorand Routine Driver

Every algorithm is written once as a generator ("routine") that yields what
it needs from the outside world:

- a positive int n: request n entropy bytes, answered via send()
- CHECKPOINT: a retry-loop boundary, answered with None

run_sync() answers requests with blocking reads. run_async() awaits the
source and gives the event loop a turn at every checkpoint, so long prime
searches never starve other tasks.
"""

from __future__ import annotations
import asyncio
from typing import Generator, Optional, TypeVar, Union

from cryptorand.core.entropy import EntropySource
from cryptorand.errors import EntropyUnavailableError


class Checkpoint:
    """Sentinel marking a point where async execution may suspend."""

    _instance: Optional["Checkpoint"] = None

    def __new__(cls) -> "Checkpoint":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CHECKPOINT"


CHECKPOINT = Checkpoint()

T = TypeVar("T")
Request = Union[int, Checkpoint]
Routine = Generator[Request, Optional[bytes], T]


def _checked(data: bytes, n: int) -> bytes:
    if len(data) != n:
        raise EntropyUnavailableError(
            f"Entropy source returned {len(data)} bytes, expected {n}",
            {"requested": n, "received": len(data)}
        )
    return data


def run_sync(routine: Routine[T], source: EntropySource) -> T:
    """Drive a routine to completion with blocking entropy reads."""
    try:
        request = next(routine)
        while True:
            if request is CHECKPOINT:
                reply = None
            else:
                reply = _checked(source.get_random_bytes(request), request)
            request = routine.send(reply)
    except StopIteration as done:
        return done.value
    finally:
        routine.close()


async def run_async(routine: Routine[T], source: EntropySource) -> T:
    """Drive a routine to completion, suspending at every request."""
    try:
        request = next(routine)
        while True:
            if request is CHECKPOINT:
                await asyncio.sleep(0)
                reply = None
            else:
                data = await source.get_random_bytes_async(request)
                reply = _checked(data, request)
            request = routine.send(reply)
    except StopIteration as done:
        return done.value
    finally:
        routine.close()
