"""Tests for the per-employee payroll ledger."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from haulpay.core.exceptions import InvalidPeriodError
from haulpay.models.payroll import PayrollRecord
from haulpay.services.ledger import PayrollLedger
from tests.fakes import MemoryHRStore

GENERATED = dt.datetime(2024, 4, 1, tzinfo=dt.timezone.utc)


def _record(record_id: str, start: str, end: str, gross: str, employee_id: str = "E1") -> PayrollRecord:
    return PayrollRecord(
        id=record_id, employee_id=employee_id, period_start=start, period_end=end,
        gross_income=gross, date_generated=GENERATED,
    )


@pytest.fixture
def ledger() -> PayrollLedger:
    store = MemoryHRStore()
    store.add_payroll_records([
        _record("R1", "2024-01-01", "2024-01-15", "6000"),
        _record("R2", "2024-01-16", "2024-01-31", "6000"),
        _record("R3", "2024-02-01", "2024-02-15", "12000"),
        _record("R4", "2024-02-16", "2024-03-02", "9000"),
        _record("R5", "2024-01-01", "2024-01-15", "9999", employee_id="E2"),
    ])
    return PayrollLedger(store=store)


def test_records_inside_range_newest_first(ledger):
    summary = ledger.summarize("E1", dt.date(2024, 1, 1), dt.date(2024, 2, 29))
    assert [r.id for r in summary.records] == ["R3", "R2", "R1"]


def test_totals(ledger):
    summary = ledger.summarize("E1", dt.date(2024, 1, 1), dt.date(2024, 2, 29))
    assert summary.total_gross == Decimal("24000")
    assert summary.total_thirteenth_month == Decimal("2000")
    assert summary.total_ipon_pondo == Decimal("1200")
    assert summary.grand_total == Decimal("3200")


def test_empty_range(ledger):
    summary = ledger.summarize("E1", dt.date(2023, 1, 1), dt.date(2023, 12, 31))
    assert summary.records == []
    assert summary.grand_total == Decimal("0")


def test_reversed_range_rejected(ledger):
    with pytest.raises(InvalidPeriodError):
        ledger.summarize("E1", dt.date(2024, 2, 1), dt.date(2024, 1, 1))
