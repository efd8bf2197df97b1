"""Per-employee payroll history over a date range."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from haulpay.core.exceptions import InvalidPeriodError
from haulpay.core.protocols import IPayrollStore
from haulpay.models.base import ZERO
from haulpay.models.payroll import PayrollRecord
from haulpay.valuation.rate_tables import IPON_PONDO_RATE, THIRTEENTH_MONTH_DIVISOR


class LedgerSummary(BaseModel):
    employee_id: str
    start: dt.date
    end: dt.date
    records: list[PayrollRecord] = Field(default_factory=list)
    total_gross: Decimal = ZERO
    total_thirteenth_month: Decimal = ZERO
    total_ipon_pondo: Decimal = ZERO

    @property
    def grand_total(self) -> Decimal:
        return self.total_thirteenth_month + self.total_ipon_pondo


class PayrollLedger:
    """Stored payroll records for one employee whose period falls inside [start, end]."""

    def __init__(self, *, store: IPayrollStore) -> None:
        self._store = store

    def summarize(self, employee_id: str, start: dt.date, end: dt.date) -> LedgerSummary:
        if start > end:
            raise InvalidPeriodError(start, end)

        records = [
            r for r in self._store.list_employee_records(employee_id)
            if r.period_start >= start and r.period_end <= end
        ]
        records.sort(key=lambda r: (r.period_start, r.period_end), reverse=True)

        total_gross = sum((r.gross_income for r in records), ZERO)
        return LedgerSummary(
            employee_id=employee_id,
            start=start,
            end=end,
            records=records,
            total_gross=total_gross,
            total_thirteenth_month=total_gross / THIRTEENTH_MONTH_DIVISOR,
            total_ipon_pondo=total_gross * IPON_PONDO_RATE,
        )
