"""Type aliases used across servicekit."""

from __future__ import annotations

BitFlag = int
BitMask = int
ProcessId = str

MAX_BITMASK = (1 << 64) - 1
