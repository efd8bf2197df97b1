"""Payroll period, engine inputs/outputs and the persisted payroll record."""

from __future__ import annotations

import calendar
import datetime as dt
from decimal import Decimal
from typing import Any, Iterator

from pydantic import BaseModel, Field, field_validator, model_validator

from haulpay.core.exceptions import InvalidPeriodError
from haulpay.models.base import ZERO, CollaboratorModel, MoneyField
from haulpay.models.employee import LoanType, Role
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


class PayrollPeriod(BaseModel):
    """Inclusive cut-off date range."""

    model_config = {"frozen": True}

    start: dt.date
    end: dt.date

    @model_validator(mode="before")
    @classmethod
    def _check_order(cls, data: Any) -> Any:
        if isinstance(data, dict):
            start, end = data.get("start"), data.get("end")
            try:
                ordered = dt.date.fromisoformat(str(start)) <= dt.date.fromisoformat(str(end))
            except ValueError:
                raise InvalidPeriodError(start, end) from None
            if not ordered:
                raise InvalidPeriodError(start, end)
        return data

    @classmethod
    def parse(cls, start: dt.date | str, end: dt.date | str) -> PayrollPeriod:
        return cls(start=start, end=end)

    def contains(self, day: dt.date) -> bool:
        return self.start <= day <= self.end

    def months(self) -> Iterator[tuple[int, int]]:
        """Yield each (year, month) the period touches, in order."""
        year, month = self.start.year, self.start.month
        while (year, month) <= (self.end.year, self.end.month):
            yield year, month
            month += 1
            if month > 12:
                year, month = year + 1, 1

    @property
    def ends_on_month_end(self) -> bool:
        last_day = calendar.monthrange(self.end.year, self.end.month)[1]
        return self.end.day == last_day

    @property
    def spans_months(self) -> bool:
        return (self.start.year, self.start.month) != (self.end.year, self.end.month)

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


class PayrollInputs(BaseModel):
    """Everything the engine reads besides the employee master record.

    Collections may hold records for any employee and any date; the engine
    does its own employee and period filtering.
    """

    trips: list[Trip] = Field(default_factory=list)
    trip_expenses: list[TripExpense] = Field(default_factory=list)
    attendance: list[AttendanceRecord] = Field(default_factory=list)
    overtime: list[OvertimeRecord] = Field(default_factory=list)
    undertime: list[UndertimeRecord] = Field(default_factory=list)
    admin_allowances: list[AdminAllowance] = Field(default_factory=list)
    pet_service: list[PetServiceRecord] = Field(default_factory=list)
    holidays: list[Holiday] = Field(default_factory=list)

    @field_validator("*", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class LoanDeduction(BaseModel):
    """Scheduled amortization for one active loan this cut-off."""

    loan_id: str
    type: LoanType
    description: str = ""
    amount: Decimal


class PayrollRecord(CollaboratorModel):
    """Persisted per-employee, per-period payroll summary.

    Never updated in place; a period is regenerated by deleting and
    re-inserting all of its records.
    """

    id: str
    employee_id: str
    employee_name: str = ""
    period_start: dt.date
    period_end: dt.date
    gross_income: MoneyField = ZERO
    net_pay: MoneyField = ZERO
    ipon_pondo: MoneyField = ZERO
    thirteenth_month: MoneyField = ZERO
    date_generated: dt.datetime

    def matches_period(self, period: PayrollPeriod) -> bool:
        return self.period_start == period.start and self.period_end == period.end


class PayrollLine(CollaboratorModel):
    """Full payroll breakdown for one employee and period (payslip source)."""

    employee_id: str
    employee_name: str
    role: Role
    period_start: dt.date
    period_end: dt.date
    is_month_end: bool

    # Earnings
    trip_count: int = 0
    base_pay: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    undertime_deduction: Decimal = ZERO
    gross_income: Decimal = ZERO
    attendance_pay: Decimal = ZERO
    holiday_pay: Decimal = ZERO
    admin_allowance: Decimal = ZERO
    pet_service_pay: Decimal = ZERO

    # Deductions
    sss: Decimal = ZERO
    philhealth: Decimal = ZERO
    pagibig: Decimal = ZERO
    mp2: Decimal = ZERO
    fixed_deductions: Decimal = ZERO
    ipon_pondo: Decimal = ZERO
    trip_ca: Decimal = ZERO
    loan_deductions: list[LoanDeduction] = Field(default_factory=list)
    loan_amortization_total: Decimal = ZERO
    taxable_income: Decimal = ZERO
    tax: Decimal = ZERO
    total_deductions: Decimal = ZERO

    net_pay: Decimal = ZERO
    thirteenth_month: Decimal = ZERO

    period_trips: list[Trip] = Field(default_factory=list)
    ca_items: list[TripExpense] = Field(default_factory=list)

    @property
    def statutory_total(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig + self.mp2

    @property
    def total_earnings(self) -> Decimal:
        return self.gross_income + self.holiday_pay + self.admin_allowance + self.pet_service_pay

    def to_record(self, record_id: str, generated_at: dt.datetime) -> PayrollRecord:
        return PayrollRecord(
            id=record_id,
            employee_id=self.employee_id,
            employee_name=self.employee_name,
            period_start=self.period_start,
            period_end=self.period_end,
            gross_income=self.gross_income,
            net_pay=self.net_pay,
            ipon_pondo=self.ipon_pondo,
            thirteenth_month=self.thirteenth_month,
            date_generated=generated_at,
        )


class GenerationResult(BaseModel):
    """Outcome of regenerating one payroll period."""

    period: PayrollPeriod
    deleted_count: int = 0
    records: list[PayrollRecord] = Field(default_factory=list)

    @property
    def inserted_count(self) -> int:
        return len(self.records)

    @property
    def total_gross(self) -> Decimal:
        return sum((r.gross_income for r in self.records), ZERO)

    @property
    def total_net(self) -> Decimal:
        return sum((r.net_pay for r in self.records), ZERO)
