"""Month-end gating of government contributions (SSS, PhilHealth, Pag-IBIG, MP2).

Contributions are collected once a month, at the cut-off that closes the
month. A cut-off that crosses into the next month also closes one.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from haulpay.models.base import ZERO
from haulpay.models.employee import Employee
from haulpay.models.payroll import PayrollPeriod


class StatutoryDeductions(BaseModel):
    sss: Decimal = ZERO
    philhealth: Decimal = ZERO
    pagibig: Decimal = ZERO
    mp2: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig + self.mp2

    @property
    def tax_exempt(self) -> Decimal:
        """Portion excluded from taxable income (MP2 is voluntary savings)."""
        return self.sss + self.philhealth + self.pagibig


def is_month_end(period: PayrollPeriod) -> bool:
    return period.ends_on_month_end or period.spans_months


def statutory_deductions(employee: Employee, period: PayrollPeriod) -> StatutoryDeductions:
    if not is_month_end(period):
        return StatutoryDeductions()
    return StatutoryDeductions(
        sss=employee.sss,
        philhealth=employee.philhealth,
        pagibig=employee.pagibig,
        mp2=employee.mp2,
    )
