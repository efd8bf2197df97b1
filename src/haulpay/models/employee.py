"""Employee master record with its embedded loan ledger."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import StrEnum
from typing import Any, Optional

from pydantic import Field, field_validator

from haulpay.models.base import ZERO, CollaboratorModel, MoneyField


class Role(StrEnum):
    DRIVER = "Driver"
    HELPER = "Helper"
    ADMIN = "Admin"


class EmploymentStatus(StrEnum):
    ACTIVE = "Active"
    RESIGNED = "Resigned"
    SUSPENDED = "Suspended"
    PROBATION = "Probation"


class LoanType(StrEnum):
    UNIFORM = "Uniform"
    OFFICE_CA = "Office CA"
    SSS_LOAN = "SSS Loan"
    PAGIBIG_LOAN = "Pag-Ibig Loan"
    OTHER = "Other Deduction"


class LoanStatus(StrEnum):
    ACTIVE = "Active"
    PAID = "Paid"


class LoanPayment(CollaboratorModel):
    """A single posted payment against a loan."""

    id: str
    date: dt.date
    amount: MoneyField = ZERO
    remarks: str = ""


class Loan(CollaboratorModel):
    """Loan or scheduled deduction owed by an employee."""

    id: str
    date: Optional[dt.date] = None  # application date
    type: LoanType = LoanType.OTHER
    description: str = ""
    amount: MoneyField = ZERO  # principal
    amortization: MoneyField = ZERO  # scheduled deduction per cut-off
    paid_amount: MoneyField = ZERO
    status: LoanStatus = LoanStatus.ACTIVE
    remarks: str = ""
    payments: list[LoanPayment] = Field(default_factory=list)

    @field_validator("payments", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def balance(self) -> Decimal:
        return self.amount - self.paid_amount


class Employee(CollaboratorModel):
    """HR master record. Payroll only ever reads it, except loan balances."""

    id: str
    name: str = ""
    role: Role = Role.DRIVER
    status: EmploymentStatus = EmploymentStatus.ACTIVE

    # Pay basis
    rate: MoneyField = ZERO  # fixed pay per cut-off (Admin)
    daily_rate: MoneyField = ZERO  # daily wage (Driver/Helper, OT/UT/holiday basis)

    # Statutory, collected at month-end cut-offs only
    sss: MoneyField = ZERO
    philhealth: MoneyField = ZERO
    pagibig: MoneyField = ZERO
    mp2: MoneyField = ZERO

    # Fixed deductions, collected every cut-off
    uniform_ded: MoneyField = ZERO
    office_ca: MoneyField = Field(default=ZERO, alias="officeCA")
    sss_loan: MoneyField = ZERO
    pagibig_loan: MoneyField = ZERO
    other_deduction: MoneyField = ZERO
    other_deduction_name: str = ""

    loans: list[Loan] = Field(default_factory=list)

    @field_validator("loans", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_salaried(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def fixed_deductions_total(self) -> Decimal:
        return (
            self.uniform_ded + self.office_ca + self.sss_loan
            + self.pagibig_loan + self.other_deduction
        )

    @property
    def active_loans(self) -> list[Loan]:
        return [loan for loan in self.loans if loan.status == LoanStatus.ACTIVE]
