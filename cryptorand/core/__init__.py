"""
cryptorand Core

Entropy source contract and the sync/async routine driver.
"""

from cryptorand.core.entropy import (
    EntropySource,
    SystemEntropySource,
    CallableEntropySource,
    get_default_source,
)
from cryptorand.core.driver import (
    CHECKPOINT,
    Checkpoint,
    Routine,
    run_sync,
    run_async,
)

__all__ = [
    # Entropy
    "EntropySource",
    "SystemEntropySource",
    "CallableEntropySource",
    "get_default_source",
    # Driver
    "CHECKPOINT",
    "Checkpoint",
    "Routine",
    "run_sync",
    "run_async",
]
