"""DynamoDB backend implementing IStepPersistenceHandler."""

from __future__ import annotations

import logging
from decimal import Decimal

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from servicekit.core.exceptions import PersistenceError
from servicekit.core.types import BitMask, ProcessId

logger = logging.getLogger(__name__)

STEPS_SK = "STEPS"


class DynamoDBStepPersistence:
    """Production IStepPersistenceHandler: one item per process in a PK/SK table.

    Item layout: ``PK = "PROCESS#<process_id>"``, ``SK = "STEPS"``, ``bits`` (number).
    A missing item reads as 0.
    """

    def __init__(self, process_id: ProcessId, table: str = "servicekit-step-state", table_suffix: str = "",
                 region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        self._process_id = process_id
        self._table_name = f"{table}{table_suffix}"
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._table = self._ddb.Table(self._table_name)

    @property
    def key(self) -> dict[str, str]:
        return {"PK": f"PROCESS#{self._process_id}", "SK": STEPS_SK}

    def get(self) -> BitMask:
        try:
            resp = self._table.get_item(Key=self.key, ConsistentRead=True)
        except (BotoCoreError, ClientError) as exc:
            raise PersistenceError("DynamoDB", "GetItem", f"table={self._table_name!r}: {exc}") from exc
        item = resp.get("Item")
        if item is None:
            return 0
        return int(item.get("bits", Decimal(0)))

    def store(self, bits: BitMask) -> None:
        logger.debug("store - table=%s, key=%s, bits=%#x", self._table_name, self.key, bits)
        try:
            self._table.update_item(
                Key=self.key,
                UpdateExpression="SET bits = :bits",
                ExpressionAttributeValues={":bits": Decimal(bits)},
            )
        except (BotoCoreError, ClientError) as exc:
            raise PersistenceError("DynamoDB", "UpdateItem", f"table={self._table_name!r}: {exc}") from exc
