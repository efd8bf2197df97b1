"""Create the HaulPay DynamoDB tables and load sample HR data.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import boto3

from haulpay.models.employee import Employee
from haulpay.models.records import (
    AdminAllowance,
    AttendanceRecord,
    Holiday,
    OvertimeRecord,
    PetServiceRecord,
    Trip,
    TripExpense,
    UndertimeRecord,
)
from haulpay.persistence.dynamodb_backend import TABLE_NAMES, DynamoDBHRStore, put_many

SEED_PATH = Path(__file__).resolve().parent.parent / "config" / "sample_seed.json"

# seed file section -> record model
SEED_SECTIONS: list[tuple[str, type]] = [
    ("employees", Employee),
    ("trips", Trip),
    ("tripExpenses", TripExpense),
    ("attendance", AttendanceRecord),
    ("overtime", OvertimeRecord),
    ("undertime", UndertimeRecord),
    ("adminAllowances", AdminAllowance),
    ("petService", PetServiceRecord),
    ("holidays", Holiday),
]


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create all HaulPay tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for name in TABLE_NAMES:
        table_name = f"{name}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
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


def load_seed(path: Path = SEED_PATH) -> dict[str, list[Any]]:
    """Parse the seed file into record models, keyed by section."""
    data = json.loads(path.read_text())
    return {
        section: [model.model_validate(doc) for doc in data.get(section, [])]
        for section, model in SEED_SECTIONS
    }


def seed_sample_data(store: DynamoDBHRStore, path: Path = SEED_PATH) -> dict[str, int]:
    """Write every seed record through the store; returns counts per section."""
    counts: dict[str, int] = {}
    for section, records in load_seed(path).items():
        counts[section] = put_many(store, records)
        print(f"  Seeded {counts[section]} {section}")
    return counts


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for HaulPay")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="ap-southeast-1", help="AWS region")
    parser.add_argument("--seed-file", default=str(SEED_PATH), help="Seed JSON file")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    print("Seeding data...")
    store = DynamoDBHRStore(
        table_suffix=args.table_suffix, region=args.region, endpoint_url=args.endpoint_url,
    )
    seed_sample_data(store, Path(args.seed_file))

    print("Done!")


if __name__ == "__main__":
    main()
