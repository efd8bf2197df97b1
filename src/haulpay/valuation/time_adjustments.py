"""Overtime premiums and undertime deductions."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from haulpay.models.base import ZERO, to_decimal
from haulpay.models.payroll import PayrollPeriod
from haulpay.models.records import OvertimeRecord, OvertimeType, UndertimeRecord
from haulpay.valuation.rate_tables import HOURS_PER_DAY, MINUTES_PER_DAY, OVERTIME_MULTIPLIERS


def overtime_amount(daily_rate: Decimal, hours: Decimal, ot_type: OvertimeType | str) -> Decimal:
    """hours x hourly rate x premium; unknown types earn no premium."""
    try:
        multiplier = OVERTIME_MULTIPLIERS[OvertimeType(ot_type)]
    except ValueError:
        return ZERO
    # multiply before dividing so whole-peso results stay exact
    return to_decimal(hours) * to_decimal(daily_rate) * multiplier / HOURS_PER_DAY


def undertime_amount(daily_rate: Decimal, minutes: Decimal) -> Decimal:
    return to_decimal(minutes) * to_decimal(daily_rate) / MINUTES_PER_DAY


def period_overtime(
    employee_id: str, daily_rate: Decimal, records: Iterable[OvertimeRecord], period: PayrollPeriod
) -> Decimal:
    return sum(
        (
            overtime_amount(daily_rate, r.hours, r.type)
            for r in records
            if r.employee_id == employee_id and period.contains(r.date)
        ),
        ZERO,
    )


def period_undertime(
    employee_id: str, daily_rate: Decimal, records: Iterable[UndertimeRecord], period: PayrollPeriod
) -> Decimal:
    return sum(
        (
            undertime_amount(daily_rate, r.minutes)
            for r in records
            if r.employee_id == employee_id and period.contains(r.date)
        ),
        ZERO,
    )
