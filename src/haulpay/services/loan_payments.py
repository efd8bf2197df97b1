"""Post explicit loan payments against the employee master."""

from __future__ import annotations

import datetime as dt
import logging
import uuid
from decimal import Decimal

from haulpay.core.exceptions import EmployeeNotFoundError
from haulpay.core.protocols import IEmployeeStore
from haulpay.models.employee import Loan
from haulpay.valuation.loans import apply_loan_payment

logger = logging.getLogger(__name__)


class LoanPaymentRecorder:
    """Read-modify-write of an employee's loan list.

    There is no version check, so two concurrent payments on the same
    employee can lose one update.
    """

    def __init__(self, *, store: IEmployeeStore) -> None:
        self._store = store

    def record_payment(
        self,
        employee_id: str,
        loan_id: str,
        amount: Decimal,
        paid_on: dt.date,
        remarks: str = "",
    ) -> Loan:
        employee = self._store.get_employee(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(f"Employee {employee_id!r} not found")

        updated = apply_loan_payment(
            employee, loan_id, amount, payment_id=uuid.uuid4().hex, paid_on=paid_on, remarks=remarks,
        )
        self._store.save_employee(updated)

        loan = next(item for item in updated.loans if item.id == loan_id)
        logger.info(
            "Posted %s to loan %s of %s (paid %s of %s, %s)",
            amount, loan_id, employee_id, loan.paid_amount, loan.amount, loan.status,
        )
        return loan
