"""Core contracts (Protocol).

Façades and services depend on these structural interfaces, never on the
asyncio adapters directly, so process I/O can be stubbed in tests.
"""

from core.interfaces.binary import (
    CommandRunner,
    Invokable,
    Resolvable,
    Sleeper,
    Supervisable,
)

__all__ = [
    "CommandRunner",
    "Invokable",
    "Resolvable",
    "Sleeper",
    "Supervisable",
]
