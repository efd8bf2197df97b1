"""Admin daily allowances and the monthly pet-service allowance."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Iterable, Mapping

from haulpay.models.base import ZERO
from haulpay.models.payroll import PayrollPeriod
from haulpay.models.records import AdminAllowance, AttendanceRecord, PetServiceRecord
from haulpay.valuation.rate_tables import PET_SERVICE_ALLOWANCE


def admin_allowance_total(
    employee_id: str,
    allowances: Iterable[AdminAllowance],
    attendance: Mapping[dt.date, AttendanceRecord],
    period: PayrollPeriod,
) -> Decimal:
    """Transportation + meal for days the employee actually reported.

    Eligibility is re-checked against attendance; a stored allowance for a
    day marked Absent, Rest Day or not marked at all pays nothing.
    """
    total = ZERO
    for allowance in allowances:
        if allowance.employee_id != employee_id or not period.contains(allowance.date):
            continue
        record = attendance.get(allowance.date)
        if record is None or not record.status.is_worked:
            continue
        total += allowance.transportation + allowance.meal
    return total


def pet_service_total(
    employee_id: str, records: Iterable[PetServiceRecord], period: PayrollPeriod
) -> Decimal:
    """One fixed allowance per qualifying calendar month the period touches."""
    qualified_months = {
        (r.year, r.month)
        for r in records
        if r.employee_id == employee_id and r.qualified
    }
    months = sum(1 for ym in period.months() if ym in qualified_months)
    return PET_SERVICE_ALLOWANCE * months
