"""Redis backend implementing IStepPersistenceHandler."""

from __future__ import annotations

import redis

from servicekit.core.exceptions import PersistenceError
from servicekit.core.types import BitMask, ProcessId


class RedisStepPersistence:
    """Production IStepPersistenceHandler storing one process bitmask per Redis key."""

    def __init__(self, process_id: ProcessId, host: str = "localhost", port: int = 6379, db: int = 0,
                 key_prefix: str = "servicekit:steps:") -> None:
        self._process_id = process_id
        self._key = f"{key_prefix}{process_id}"
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> BitMask:
        try:
            raw = self._client.get(self._key)
        except Exception as exc:
            raise PersistenceError("Redis", "GET", f"key={self._key!r}: {exc}") from exc
        return int(raw) if raw is not None else 0

    def store(self, bits: BitMask) -> None:
        try:
            self._client.set(self._key, str(bits))
        except Exception as exc:
            raise PersistenceError("Redis", "SET", f"key={self._key!r}: {exc}") from exc
