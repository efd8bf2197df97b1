"""Tests for DynamoDB seed script."""

from __future__ import annotations

import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from seed_dynamodb import create_tables, load_seed, seed_sample_data  # noqa: E402

from haulpay.models.payroll import PayrollPeriod  # noqa: E402
from haulpay.persistence.dynamodb_backend import DynamoDBHRStore  # noqa: E402

REGION = "us-east-1"


@pytest.fixture
def ddb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name=REGION)


@pytest.fixture
def store(ddb):
    create_tables(ddb, suffix="-test")
    return DynamoDBHRStore(table_suffix="-test", region=REGION)


class TestCreateTables:
    def test_creates_all_three_tables(self, ddb):
        create_tables(ddb, suffix="-test")
        client = boto3.client("dynamodb", region_name=REGION)
        tables = client.list_tables()["TableNames"]
        assert sorted(tables) == [
            "haulpay-employees-test",
            "haulpay-operations-test",
            "haulpay-payroll-records-test",
        ]

    def test_idempotent_skips_existing(self, ddb):
        create_tables(ddb, suffix="-test")
        create_tables(ddb, suffix="-test")  # should not raise
        client = boto3.client("dynamodb", region_name=REGION)
        assert len(client.list_tables()["TableNames"]) == 3


class TestSeedSampleData:
    def test_sample_file_parses(self):
        seed = load_seed()
        assert len(seed["employees"]) == 3
        assert {e.role.value for e in seed["employees"]} == {"Driver", "Helper", "Admin"}

    def test_seeds_employees(self, store):
        counts = seed_sample_data(store)
        assert counts["employees"] == 3
        assert len(store.list_employees()) == 3

    def test_seeded_february_is_loadable(self, store):
        seed_sample_data(store)
        inputs = store.load_inputs(PayrollPeriod.parse("2024-02-01", "2024-02-15"))
        assert sorted(t.id for t in inputs.trips) == ["TRP-001", "TRP-002"]
        assert [x.id for x in inputs.trip_expenses] == ["EXP-001"]
        assert [h.id for h in inputs.holidays] == ["HOL-001"]
