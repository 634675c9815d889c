"""Create the DynamoDB table holding step-completion bitmasks.

Usage:
    python scripts/create_step_table.py --endpoint-url http://localhost:4566
    python scripts/create_step_table.py --table-suffix=-dev

Suffixes starting with a dash must use the ``--table-suffix=-dev`` form.
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

DEFAULT_TABLE = "servicekit-step-state"


def create_step_table(ddb: Any, table: str = DEFAULT_TABLE, suffix: str = "") -> bool:
    """Create the PK/SK step table. Returns False when it already exists."""
    client = ddb.meta.client
    table_name = f"{table}{suffix}"
    existing = client.list_tables().get("TableNames", [])

    if table_name in existing:
        print(f"  Table {table_name} already exists, skipping")
        return False

    client.create_table(
        TableName=table_name,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    print(f"  Created table {table_name}")
    return True


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the servicekit step-state DynamoDB table")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table", default=DEFAULT_TABLE, help="Base table name")
    parser.add_argument("--table-suffix", default="", help="Table name suffix, e.g. --table-suffix=-dev")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    args = parser.parse_args(argv)

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating step table...")
    create_step_table(ddb, table=args.table, suffix=args.table_suffix)
    print("Done!")


if __name__ == "__main__":
    main()
