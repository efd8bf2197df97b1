"""Tests for holiday pay rules."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from haulpay.models.records import AttendanceRecord, Holiday, HolidayType
from haulpay.valuation.holidays import holiday_day_pay, holidays_in_period, period_holiday_pay


@pytest.mark.parametrize(
    "holiday_type, worked, expected",
    [
        (HolidayType.REGULAR, True, Decimal("1600")),
        (HolidayType.REGULAR, False, Decimal("800")),
        (HolidayType.SPECIAL_NON_WORKING, True, Decimal("1040")),
        (HolidayType.SPECIAL_NON_WORKING, False, Decimal("0")),
    ],
)
def test_holiday_day_pay(holiday_type, worked, expected):
    assert holiday_day_pay(Decimal("800"), holiday_type, worked) == expected


def test_regular_wins_when_two_holidays_share_a_date(first_half):
    day = dt.date(2024, 3, 8)
    holidays = [
        Holiday(date=day, type=HolidayType.SPECIAL_NON_WORKING),
        Holiday(date=day, type=HolidayType.REGULAR),
    ]
    assert holidays_in_period(holidays, first_half) == {day: HolidayType.REGULAR}


class TestPeriodHolidayPay:
    def test_worked_and_unworked_holidays(self, first_half):
        worked_day = dt.date(2024, 3, 8)
        holidays = [
            Holiday(date=worked_day, type=HolidayType.REGULAR),
            Holiday(date=dt.date(2024, 3, 12), type=HolidayType.SPECIAL_NON_WORKING),
            Holiday(date=dt.date(2024, 3, 29), type=HolidayType.REGULAR),
        ]
        attendance = {
            worked_day: AttendanceRecord(id="a", date=worked_day, employee_id="D1", status="Half-Day"),
        }
        result = period_holiday_pay(Decimal("800"), holidays, attendance, first_half)
        assert result.total == Decimal("1600")
        assert result.dates == {worked_day, dt.date(2024, 3, 12)}

    def test_rest_day_on_regular_holiday_is_unworked(self, first_half):
        day = dt.date(2024, 3, 8)
        attendance = {day: AttendanceRecord(id="a", date=day, employee_id="D1", status="Rest Day")}
        result = period_holiday_pay(Decimal("800"), [Holiday(date=day, type="Regular")], attendance, first_half)
        assert result.total == Decimal("800")
