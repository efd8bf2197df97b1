"""Tests for toggle-style attendance marking."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from haulpay.models.employee import Employee
from haulpay.models.records import AttendanceRecord, AttendanceStatus
from haulpay.services.attendance_marker import AttendanceMarker
from tests.fakes import MemoryHRStore

DAY = dt.date(2024, 3, 4)


@pytest.fixture
def store() -> MemoryHRStore:
    return MemoryHRStore()


@pytest.fixture
def marker(store) -> AttendanceMarker:
    return AttendanceMarker(store=store)


@pytest.fixture
def employee() -> Employee:
    return Employee(id="D1", name="Ramon", daily_rate=800)


def test_first_mark_writes_canonical_record_with_snapshot(marker, store, employee):
    record = marker.mark(employee, DAY, AttendanceStatus.HALF_DAY)
    assert record.id == "2024-03-04_D1"
    assert record.computed_pay == Decimal("400")
    assert store.find_attendance("D1", DAY) == [record]


def test_same_status_twice_clears_the_day(marker, store, employee):
    marker.mark(employee, DAY, AttendanceStatus.PRESENT)
    assert marker.mark(employee, DAY, AttendanceStatus.PRESENT) is None
    assert store.find_attendance("D1", DAY) == []


def test_new_status_replaces_previous(marker, store, employee):
    marker.mark(employee, DAY, AttendanceStatus.PRESENT)
    record = marker.mark(employee, DAY, AttendanceStatus.ABSENT)
    assert record.computed_pay == Decimal("0")
    assert [r.status for r in store.find_attendance("D1", DAY)] == [AttendanceStatus.ABSENT]


def test_duplicates_are_healed(marker, store, employee):
    store.add_attendance([
        AttendanceRecord(id="legacy-1", date=DAY, employee_id="D1", status="Absent"),
        AttendanceRecord(id="legacy-2", date=DAY, employee_id="D1", status="Rest Day"),
    ])
    marker.mark(employee, DAY, AttendanceStatus.PRESENT)
    assert [r.id for r in store.find_attendance("D1", DAY)] == ["2024-03-04_D1"]


def test_snapshot_uses_rate_at_mark_time(marker, store, employee):
    marker.mark(employee, DAY, AttendanceStatus.PRESENT)
    raised = employee.model_copy(update={"daily_rate": Decimal("900")})
    store.save_employee(raised)
    assert store.find_attendance("D1", DAY)[0].computed_pay == Decimal("800")
