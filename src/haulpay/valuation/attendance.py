"""Attendance status to day pay."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Iterable

from haulpay.models.base import ZERO, to_decimal
from haulpay.models.records import AttendanceRecord, AttendanceStatus, attendance_id
from haulpay.valuation.rate_tables import HALF_DAY_FACTOR


def value_attendance(daily_rate: Decimal, status: AttendanceStatus | str) -> Decimal:
    """Pay earned for one day with the given status.

    Unknown statuses earn nothing.
    """
    rate = to_decimal(daily_rate)
    if status == AttendanceStatus.PRESENT:
        return rate
    if status == AttendanceStatus.HALF_DAY:
        return rate * HALF_DAY_FACTOR
    return ZERO


def attendance_by_date(
    records: Iterable[AttendanceRecord], employee_id: str
) -> dict[dt.date, AttendanceRecord]:
    """Index one employee's attendance by date.

    Duplicate marks for the same day can exist until the next write heals
    them; the canonical id wins, otherwise the last one seen.
    """
    by_date: dict[dt.date, AttendanceRecord] = {}
    for record in records:
        if record.employee_id != employee_id:
            continue
        current = by_date.get(record.date)
        canonical = attendance_id(record.date, employee_id)
        if current is not None and current.id == canonical and record.id != canonical:
            continue
        by_date[record.date] = record
    return by_date


def snapshot_pay_total(records: Iterable[AttendanceRecord], exclude: set[dt.date] | None = None) -> Decimal:
    """Sum the stored mark-time pay snapshots, skipping excluded dates."""
    exclude = exclude or set()
    return sum((r.computed_pay for r in records if r.date not in exclude), ZERO)
