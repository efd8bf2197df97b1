"""Payroll valuation engine.

Turns one employee's raw records for a cut-off into a full payroll line:

    gross   = base (trip income, or the fixed Admin rate) + overtime - undertime
    net     = gross + holiday pay + admin allowance + pet service
              - statutory (month-end only) - fixed deductions - ipon pondo
              - trip cash advances - loan amortization - withholding tax

Every function here is pure. Invalid or missing numbers were already
coerced to zero by the models, so valuation itself cannot fail.
"""

from __future__ import annotations

from haulpay.models.base import ZERO
from haulpay.models.employee import Employee
from haulpay.models.payroll import PayrollInputs, PayrollLine, PayrollPeriod
from haulpay.valuation.allowances import admin_allowance_total, pet_service_total
from haulpay.valuation.attendance import attendance_by_date, snapshot_pay_total
from haulpay.valuation.holidays import period_holiday_pay
from haulpay.valuation.loans import scheduled_loan_deductions
from haulpay.valuation.rate_tables import IPON_PONDO_RATE, THIRTEENTH_MONTH_DIVISOR
from haulpay.valuation.statutory import is_month_end, statutory_deductions
from haulpay.valuation.tax import calculate_withholding_tax, taxable_base
from haulpay.valuation.time_adjustments import period_overtime, period_undertime
from haulpay.valuation.trips import value_trip_cash_advances, value_trips


def value_payroll(employee: Employee, inputs: PayrollInputs, period: PayrollPeriod) -> PayrollLine:
    """Value one employee's payroll for one period."""
    # --- Earnings ---
    if employee.is_salaried:
        trip_count = 0
        base_pay = employee.rate
        period_trips = []
    else:
        trips = value_trips(employee, inputs.trips, period)
        trip_count = trips.trip_count
        base_pay = trips.gross
        period_trips = trips.trips

    overtime = period_overtime(employee.id, employee.daily_rate, inputs.overtime, period)
    undertime = period_undertime(employee.id, employee.daily_rate, inputs.undertime, period)
    gross_income = base_pay + overtime - undertime

    attendance = attendance_by_date(
        (a for a in inputs.attendance if period.contains(a.date)), employee.id
    )
    holiday = period_holiday_pay(employee.daily_rate, inputs.holidays, attendance, period)
    attendance_pay = snapshot_pay_total(attendance.values(), exclude=holiday.dates)

    admin_allowance = admin_allowance_total(employee.id, inputs.admin_allowances, attendance, period)
    pet_service_pay = pet_service_total(employee.id, inputs.pet_service, period)

    # --- Deductions ---
    statutory = statutory_deductions(employee, period)
    fixed_deductions = employee.fixed_deductions_total
    ipon_pondo = gross_income * IPON_PONDO_RATE
    cash_advances = value_trip_cash_advances(employee, period_trips, inputs.trip_expenses)
    loan_deductions = scheduled_loan_deductions(employee)
    loan_total = sum((d.amount for d in loan_deductions), ZERO)

    taxable_income = taxable_base(gross_income, statutory.tax_exempt)
    tax = calculate_withholding_tax(taxable_income)

    total_deductions = (
        statutory.total + fixed_deductions + ipon_pondo
        + cash_advances.total + loan_total + tax
    )
    net_pay = (
        gross_income + holiday.total + admin_allowance + pet_service_pay
        - total_deductions
    )

    return PayrollLine(
        employee_id=employee.id,
        employee_name=employee.name,
        role=employee.role,
        period_start=period.start,
        period_end=period.end,
        is_month_end=is_month_end(period),
        trip_count=trip_count,
        base_pay=base_pay,
        overtime_pay=overtime,
        undertime_deduction=undertime,
        gross_income=gross_income,
        attendance_pay=attendance_pay,
        holiday_pay=holiday.total,
        admin_allowance=admin_allowance,
        pet_service_pay=pet_service_pay,
        sss=statutory.sss,
        philhealth=statutory.philhealth,
        pagibig=statutory.pagibig,
        mp2=statutory.mp2,
        fixed_deductions=fixed_deductions,
        ipon_pondo=ipon_pondo,
        trip_ca=cash_advances.total,
        loan_deductions=loan_deductions,
        loan_amortization_total=loan_total,
        taxable_income=taxable_income,
        tax=tax,
        total_deductions=total_deductions,
        net_pay=net_pay,
        thirteenth_month=gross_income / THIRTEENTH_MONTH_DIVISOR,
        period_trips=period_trips,
        ca_items=cash_advances.items,
    )


def value_payroll_batch(
    employees: list[Employee], inputs: PayrollInputs, period: PayrollPeriod
) -> list[PayrollLine]:
    """Value every employee, sorted by name for presentation."""
    return [value_payroll(e, inputs, period) for e in sorted(employees, key=lambda e: e.name.lower())]
