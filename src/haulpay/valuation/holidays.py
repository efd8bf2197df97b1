"""Holiday pay rules.

On a holiday date the holiday rule decides the day's pay outright; the
ordinary attendance value for that date is not added on top.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Iterable, Mapping

from pydantic import BaseModel, Field

from haulpay.models.base import ZERO, to_decimal
from haulpay.models.payroll import PayrollPeriod
from haulpay.models.records import AttendanceRecord, Holiday, HolidayType
from haulpay.valuation.rate_tables import HOLIDAY_MULTIPLIERS

# Regular outranks Special when both are declared for the same date
_PRECEDENCE = {HolidayType.REGULAR: 0, HolidayType.SPECIAL_NON_WORKING: 1}


class HolidayPay(BaseModel):
    total: Decimal = ZERO
    dates: set[dt.date] = Field(default_factory=set)


def holiday_day_pay(daily_rate: Decimal, holiday_type: HolidayType | str, worked: bool) -> Decimal:
    """Pay for one holiday date given whether the employee worked it."""
    try:
        unworked, worked_rate = HOLIDAY_MULTIPLIERS[HolidayType(holiday_type)]
    except ValueError:
        return ZERO
    return to_decimal(daily_rate) * (worked_rate if worked else unworked)


def holidays_in_period(holidays: Iterable[Holiday], period: PayrollPeriod) -> dict[dt.date, HolidayType]:
    """One holiday type per date within the period."""
    by_date: dict[dt.date, HolidayType] = {}
    for holiday in holidays:
        if not period.contains(holiday.date):
            continue
        current = by_date.get(holiday.date)
        if current is None or _PRECEDENCE[holiday.type] < _PRECEDENCE[current]:
            by_date[holiday.date] = holiday.type
    return by_date


def period_holiday_pay(
    daily_rate: Decimal,
    holidays: Iterable[Holiday],
    attendance: Mapping[dt.date, AttendanceRecord],
    period: PayrollPeriod,
) -> HolidayPay:
    """Holiday pay for every holiday date in the period.

    ``attendance`` is the employee's marks keyed by date. A date with no
    mark, or marked Absent / Rest Day, counts as unworked.
    """
    total = ZERO
    dates = set()
    for day, holiday_type in sorted(holidays_in_period(holidays, period).items()):
        record = attendance.get(day)
        worked = record is not None and record.status.is_worked
        total += holiday_day_pay(daily_rate, holiday_type, worked)
        dates.add(day)
    return HolidayPay(total=total, dates=dates)
