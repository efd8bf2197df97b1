"""End-to-end tests for the payroll valuation engine."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from haulpay.models.employee import Employee, Loan, Role
from haulpay.models.payroll import PayrollInputs, PayrollPeriod
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
from haulpay.valuation.engine import value_payroll, value_payroll_batch


def _day(d: int) -> dt.date:
    return dt.date(2024, 3, d)


class TestDriverLine:
    def test_full_breakdown_mid_month(self, first_half):
        driver = Employee(
            id="D1", name="Ramon", role=Role.DRIVER, daily_rate=800,
            sss=450, philhealth=250, pagibig=100, uniform_ded=100,
            loans=[Loan(id="L1", amount=3000, amortization=500)],
        )
        inputs = PayrollInputs(
            trips=[
                Trip(id="T1", date=_day(2), driver_id="D1", helper_id="H1", driver_rate=1500, helper_rate=900),
                Trip(id="T2", date=_day(9), driver_id="D1", driver_rate=1200),
                Trip(id="T3", date=_day(20), driver_id="D1", driver_rate=5000),
            ],
            trip_expenses=[TripExpense(id="X1", trip_id="T1", ca_driver=300, ca_helper=200)],
            overtime=[OvertimeRecord(id="O1", date=_day(2), employee_id="D1", hours=2, type="Regular")],
            undertime=[UndertimeRecord(id="U1", date=_day(3), employee_id="D1", minutes=30)],
        )

        line = value_payroll(driver, inputs, first_half)

        assert line.trip_count == 2
        assert line.base_pay == Decimal("2700")
        assert line.overtime_pay == Decimal("250")
        assert line.undertime_deduction == Decimal("50")
        assert line.gross_income == Decimal("2900")
        assert line.ipon_pondo == Decimal("145")
        assert line.is_month_end is False
        assert line.statutory_total == Decimal("0")
        assert line.fixed_deductions == Decimal("100")
        assert line.trip_ca == Decimal("300")
        assert line.loan_amortization_total == Decimal("500")
        assert line.taxable_income == Decimal("1450")
        assert line.tax == Decimal("0")
        # 2900 - (100 + 145 + 300 + 500)
        assert line.net_pay == Decimal("1855")
        assert line.thirteenth_month == Decimal("2900") / Decimal("12")

    def test_month_end_applies_statutory(self, second_half):
        driver = Employee(id="D1", name="Ramon", daily_rate=800, sss=450, philhealth=250, pagibig=100, mp2=200)
        inputs = PayrollInputs(trips=[Trip(id="T1", date=_day(20), driver_id="D1", driver_rate=2000)])
        line = value_payroll(driver, inputs, second_half)
        assert line.is_month_end is True
        assert line.statutory_total == Decimal("1000")
        # (2000 - 800) / 2
        assert line.taxable_income == Decimal("600")
        assert line.net_pay == Decimal("2000") - Decimal("1000") - Decimal("100")

    def test_holiday_pay_is_added_to_net_not_gross(self, first_half):
        driver = Employee(id="D1", name="Ramon", daily_rate=800)
        inputs = PayrollInputs(
            attendance=[
                AttendanceRecord(id="a", date=_day(8), employee_id="D1", status="Present", computed_pay=800),
                AttendanceRecord(id="b", date=_day(11), employee_id="D1", status="Present", computed_pay=800),
            ],
            holidays=[Holiday(date=_day(8), type="Regular")],
        )
        line = value_payroll(driver, inputs, first_half)
        assert line.gross_income == Decimal("0")
        assert line.holiday_pay == Decimal("1600")
        assert line.attendance_pay == Decimal("800")
        assert line.net_pay == Decimal("1600")


class TestAdminLine:
    def test_admin_gross_is_fixed_rate(self, admin, first_half):
        inputs = PayrollInputs(
            trips=[Trip(id="T1", date=_day(2), driver_id="A1", driver_rate=1500)],
            attendance=[AttendanceRecord(id="a", date=_day(4), employee_id="A1", status="Present")],
            admin_allowances=[
                AdminAllowance(id="1", date=_day(4), employee_id="A1", transportation=150, meal=100),
            ],
            pet_service=[PetServiceRecord(year=2024, month=3, employee_id="A1", qualified=True)],
        )
        line = value_payroll(admin, inputs, first_half)
        assert line.trip_count == 0
        assert line.gross_income == Decimal("9000")
        assert line.admin_allowance == Decimal("250")
        assert line.pet_service_pay == Decimal("2000")
        assert line.ipon_pondo == Decimal("450")
        assert line.net_pay == Decimal("9000") + Decimal("250") + Decimal("2000") - Decimal("450")


def test_ipon_pondo_is_five_percent_of_gross(helper, first_half):
    inputs = PayrollInputs(trips=[
        Trip(id=f"T{i}", date=_day(i), driver_id="X", helper_id="H1", helper_rate=733) for i in range(1, 8)
    ])
    line = value_payroll(helper, inputs, first_half)
    assert line.ipon_pondo == line.gross_income * Decimal("0.05")


def test_empty_inputs_value_to_zero(driver, first_half):
    line = value_payroll(driver, PayrollInputs(), first_half)
    assert line.gross_income == Decimal("0")
    assert line.net_pay == Decimal("0")


def test_batch_sorted_by_name(driver, helper, admin):
    period = PayrollPeriod.parse("2024-03-01", "2024-03-15")
    lines = value_payroll_batch([driver, helper, admin], PayrollInputs(), period)
    assert [line.employee_name for line in lines] == ["Jun", "Liza", "Ramon"]
