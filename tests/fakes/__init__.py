"""Shared test doubles: in-memory step state and sample step enums."""

from __future__ import annotations

from servicekit.core.types import BitMask
from servicekit.persistence.memory_backend import MemoryStepPersistence
from servicekit.step.values import StepEnum


class RecordingStepPersistence(MemoryStepPersistence):
    """MemoryStepPersistence that counts reads and remembers every write."""

    def __init__(self, initial: BitMask = 0) -> None:
        super().__init__(initial)
        self.reads = 0
        self.writes: list[BitMask] = []

    def get(self) -> BitMask:
        self.reads += 1
        return super().get()

    def store(self, bits: BitMask) -> None:
        self.writes.append(bits)
        super().store(bits)


class BoomError(Exception):
    """Business error raised by test workers."""


class Steps(StepEnum):
    FIRST = 0x01
    SECOND = 0x02
    THIRD = 0x04
    FOURTH = 0x08


__all__ = ["BoomError", "MemoryStepPersistence", "RecordingStepPersistence", "Steps"]
