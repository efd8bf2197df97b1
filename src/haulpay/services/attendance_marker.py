"""Toggle-style attendance marking with duplicate healing."""

from __future__ import annotations

import datetime as dt
import logging

from haulpay.core.protocols import IAttendanceStore
from haulpay.models.employee import Employee
from haulpay.models.records import AttendanceRecord, AttendanceStatus, attendance_id
from haulpay.valuation.attendance import value_attendance

logger = logging.getLogger(__name__)


class AttendanceMarker:
    """Writes at most one attendance record per (employee, date).

    Marking the status a day already has clears it. Any other mark replaces
    whatever is there with a single record under the canonical id, carrying
    the pay computed from the employee's current daily rate.
    """

    def __init__(self, *, store: IAttendanceStore) -> None:
        self._store = store

    def mark(self, employee: Employee, day: dt.date, status: AttendanceStatus) -> AttendanceRecord | None:
        existing = self._store.find_attendance(employee.id, day)

        if any(r.status == status for r in existing):
            for record in existing:
                self._store.remove_attendance(record)
            logger.info("Cleared %s attendance for %s on %s", status, employee.id, day)
            return None

        canonical = attendance_id(day, employee.id)
        for record in existing:
            if record.id != canonical:
                self._store.remove_attendance(record)

        record = AttendanceRecord(
            id=canonical,
            date=day,
            employee_id=employee.id,
            status=status,
            computed_pay=value_attendance(employee.daily_rate, status),
        )
        self._store.put_attendance(record)
        return record
