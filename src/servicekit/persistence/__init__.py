"""Pluggable step-state backends behind the IStepPersistenceHandler protocol."""

from __future__ import annotations

from servicekit.core.config import AppSettings
from servicekit.core.protocols import IStepPersistenceHandler
from servicekit.core.types import ProcessId
from servicekit.persistence.dynamodb_backend import DynamoDBStepPersistence
from servicekit.persistence.memory_backend import MemoryStepPersistence
from servicekit.persistence.redis_backend import RedisStepPersistence


def create_persistence(process_id: ProcessId, settings: AppSettings | None = None) -> IStepPersistenceHandler:
    """Create the step-state backend selected by ``settings.step.backend`` for one process."""
    if settings is None:
        settings = AppSettings()

    backend = settings.step.backend
    if backend == "redis":
        return RedisStepPersistence(
            process_id,
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            key_prefix=settings.redis.key_prefix,
        )
    if backend == "dynamodb":
        return DynamoDBStepPersistence(
            process_id,
            table=settings.dynamodb.table,
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )
    return MemoryStepPersistence()


__all__ = [
    "DynamoDBStepPersistence",
    "IStepPersistenceHandler",
    "MemoryStepPersistence",
    "RedisStepPersistence",
    "create_persistence",
]
