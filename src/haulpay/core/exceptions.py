"""HaulPay exception hierarchy."""

from __future__ import annotations

from datetime import date


class HaulPayError(Exception):
    """Base exception for all HaulPay errors."""


class InvalidPeriodError(HaulPayError):
    """Payroll period bounds are malformed or out of order."""

    def __init__(self, start: date | str, end: date | str) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Invalid payroll period {start} to {end}: start must not be after end")


class StorageError(HaulPayError):
    """A storage collaborator operation failed."""


class CacheError(HaulPayError):
    """Redis cache operation failed."""


class PayrollGenerationError(HaulPayError):
    """Regenerating a period's payroll records failed.

    ``partial`` is True when the failure came while replacing stored records.
    Completed deletes/inserts are not rolled back, so the period may be
    under-populated until it is regenerated. When it is False nothing was
    written.
    """

    def __init__(self, period_start: date, period_end: date, message: str, *, partial: bool = True) -> None:
        self.period_start = period_start
        self.period_end = period_end
        self.partial = partial
        outcome = "Some records may be missing for this period." if partial else "No records were written."
        super().__init__(f"Payroll generation for {period_start} to {period_end} failed: {message}. {outcome}")


class EmployeeNotFoundError(HaulPayError):
    """No employee with the given id."""


class LoanNotFoundError(HaulPayError):
    """Employee has no loan with the given id."""

    def __init__(self, employee_id: str, loan_id: str) -> None:
        self.employee_id = employee_id
        self.loan_id = loan_id
        super().__init__(f"Loan {loan_id!r} not found for employee {employee_id!r}")


class InvalidPaymentError(HaulPayError):
    """Loan payment amount is not positive."""
