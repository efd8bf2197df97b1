"""Protocol interfaces for all HaulPay storage collaborators.

The valuation engine never touches these; services and the API layer do.
Structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

import datetime as dt
from typing import Protocol, runtime_checkable

from haulpay.core.types import EmployeeId
from haulpay.models.employee import Employee
from haulpay.models.payroll import PayrollInputs, PayrollPeriod, PayrollRecord
from haulpay.models.records import AttendanceRecord


# ---------------------------------------------------------------------------
# Payroll inputs (read side)
# ---------------------------------------------------------------------------

@runtime_checkable
class IPayrollDataSource(Protocol):
    """Read access to employees and the raw records payroll is computed from."""

    def list_employees(self) -> list[Employee]: ...

    def load_inputs(self, period: PayrollPeriod) -> PayrollInputs: ...


# ---------------------------------------------------------------------------
# Payroll records
# ---------------------------------------------------------------------------

@runtime_checkable
class IPayrollStore(Protocol):
    """Persisted payroll records, replaced one whole period at a time."""

    def find_period_records(self, period: PayrollPeriod) -> list[PayrollRecord]: ...

    def replace_period(self, period: PayrollPeriod, records: list[PayrollRecord]) -> int: ...

    def list_employee_records(self, employee_id: EmployeeId) -> list[PayrollRecord]: ...


# ---------------------------------------------------------------------------
# Attendance marks
# ---------------------------------------------------------------------------

@runtime_checkable
class IAttendanceStore(Protocol):
    """Attendance documents keyed by id, queried by (employee, date)."""

    def find_attendance(self, employee_id: EmployeeId, day: dt.date) -> list[AttendanceRecord]: ...

    def put_attendance(self, record: AttendanceRecord) -> None: ...

    def remove_attendance(self, record: AttendanceRecord) -> None: ...


# ---------------------------------------------------------------------------
# Employee master
# ---------------------------------------------------------------------------

@runtime_checkable
class IEmployeeStore(Protocol):
    """Employee master records."""

    def get_employee(self, employee_id: EmployeeId) -> Employee | None: ...

    def save_employee(self, employee: Employee) -> None: ...


# ---------------------------------------------------------------------------
# Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def ping(self) -> bool: ...
