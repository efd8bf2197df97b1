"""Loan amortization preview and explicit loan payment posting."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from haulpay.core.exceptions import InvalidPaymentError, LoanNotFoundError
from haulpay.models.base import ZERO, to_decimal
from haulpay.models.employee import Employee, Loan, LoanPayment, LoanStatus
from haulpay.models.payroll import LoanDeduction


def scheduled_loan_deductions(employee: Employee) -> list[LoanDeduction]:
    """Per-loan amortization due this cut-off; Paid loans are skipped.

    Read-only: payroll valuation never posts a payment.
    """
    return [
        LoanDeduction(
            loan_id=loan.id,
            type=loan.type,
            description=loan.description,
            amount=loan.amortization,
        )
        for loan in employee.active_loans
    ]


def loan_amortization_total(employee: Employee) -> Decimal:
    return sum((d.amount for d in scheduled_loan_deductions(employee)), ZERO)


def apply_loan_payment(
    employee: Employee,
    loan_id: str,
    amount: Decimal,
    payment_id: str,
    paid_on: dt.date,
    remarks: str = "",
) -> Employee:
    """Return a copy of the employee with the payment posted to one loan.

    The loan flips to Paid once cumulative payments reach the principal.
    A Paid loan stays Paid; it is never reopened here.
    """
    value = to_decimal(amount)
    if value <= ZERO:
        raise InvalidPaymentError(f"Loan payment must be positive, got {amount!r}")

    loans: list[Loan] = []
    found = False
    for loan in employee.loans:
        if loan.id != loan_id:
            loans.append(loan)
            continue
        found = True
        paid = loan.paid_amount + value
        status = LoanStatus.PAID if paid >= loan.amount or loan.status == LoanStatus.PAID else LoanStatus.ACTIVE
        payment = LoanPayment(id=payment_id, date=paid_on, amount=value, remarks=remarks)
        loans.append(
            loan.model_copy(
                update={"paid_amount": paid, "status": status, "payments": [*loan.payments, payment]}
            )
        )
    if not found:
        raise LoanNotFoundError(employee.id, loan_id)
    return employee.model_copy(update={"loans": loans})
