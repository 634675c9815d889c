"""In-memory step state, for unit tests and single-run scripts."""

from __future__ import annotations

from servicekit.core.types import BitMask


class MemoryStepPersistence:
    """Int-backed IStepPersistenceHandler."""

    def __init__(self, initial: BitMask = 0) -> None:
        self._bits = initial

    def get(self) -> BitMask:
        return self._bits

    def store(self, bits: BitMask) -> None:
        self._bits = bits
