"""Dict-backed in-memory backends for unit tests and local runs."""

from __future__ import annotations

import datetime as dt
from typing import Iterable

from haulpay.models.employee import Employee
from haulpay.models.payroll import PayrollInputs, PayrollPeriod, PayrollRecord
from haulpay.models.records import (
    AdminAllowance,
    AttendanceRecord,
    Holiday,
    OvertimeRecord,
    PetServiceRecord,
    Trip,
    TripExpense,
    UndertimeRecord,
    pet_service_id,
)


class MemoryHRStore:
    """Dict-backed IPayrollDataSource, IPayrollStore, IAttendanceStore and IEmployeeStore."""

    def __init__(self) -> None:
        self._employees: dict[str, Employee] = {}
        self._trips: dict[str, Trip] = {}
        self._trip_expenses: dict[str, TripExpense] = {}
        self._attendance: dict[str, AttendanceRecord] = {}
        self._overtime: dict[str, OvertimeRecord] = {}
        self._undertime: dict[str, UndertimeRecord] = {}
        self._admin_allowances: dict[str, AdminAllowance] = {}
        self._pet_service: dict[str, PetServiceRecord] = {}
        self._holidays: list[Holiday] = []
        self._payroll_records: dict[str, PayrollRecord] = {}

    # ---- seeding helpers ----

    def add_employees(self, employees: Iterable[Employee]) -> None:
        for e in employees:
            self._employees[e.id] = e

    def add_trips(self, trips: Iterable[Trip]) -> None:
        for t in trips:
            self._trips[t.id] = t

    def add_trip_expenses(self, expenses: Iterable[TripExpense]) -> None:
        for x in expenses:
            self._trip_expenses[x.id] = x

    def add_attendance(self, records: Iterable[AttendanceRecord]) -> None:
        for r in records:
            self._attendance[r.id] = r

    def add_overtime(self, records: Iterable[OvertimeRecord]) -> None:
        for r in records:
            self._overtime[r.id] = r

    def add_undertime(self, records: Iterable[UndertimeRecord]) -> None:
        for r in records:
            self._undertime[r.id] = r

    def add_admin_allowances(self, records: Iterable[AdminAllowance]) -> None:
        for r in records:
            self._admin_allowances[r.id] = r

    def add_pet_service(self, records: Iterable[PetServiceRecord]) -> None:
        for r in records:
            self._pet_service[pet_service_id(r.year, r.month, r.employee_id)] = r

    def add_holidays(self, holidays: Iterable[Holiday]) -> None:
        self._holidays.extend(holidays)

    def add_payroll_records(self, records: Iterable[PayrollRecord]) -> None:
        for r in records:
            self._payroll_records[r.id] = r

    # ---- IPayrollDataSource ----

    def list_employees(self) -> list[Employee]:
        return list(self._employees.values())

    def load_inputs(self, period: PayrollPeriod) -> PayrollInputs:
        trips = [t for t in self._trips.values() if period.contains(t.date)]
        trip_ids = {t.id for t in trips}
        months = set(period.months())
        return PayrollInputs(
            trips=trips,
            trip_expenses=[x for x in self._trip_expenses.values() if x.trip_id in trip_ids],
            attendance=[r for r in self._attendance.values() if period.contains(r.date)],
            overtime=[r for r in self._overtime.values() if period.contains(r.date)],
            undertime=[r for r in self._undertime.values() if period.contains(r.date)],
            admin_allowances=[r for r in self._admin_allowances.values() if period.contains(r.date)],
            pet_service=[r for r in self._pet_service.values() if (r.year, r.month) in months],
            holidays=[h for h in self._holidays if period.contains(h.date)],
        )

    # ---- IPayrollStore ----

    def find_period_records(self, period: PayrollPeriod) -> list[PayrollRecord]:
        return [r for r in self._payroll_records.values() if r.matches_period(period)]

    def replace_period(self, period: PayrollPeriod, records: list[PayrollRecord]) -> int:
        stale = [r.id for r in self.find_period_records(period)]
        for record_id in stale:
            del self._payroll_records[record_id]
        for record in records:
            self._payroll_records[record.id] = record
        return len(stale)

    def list_employee_records(self, employee_id: str) -> list[PayrollRecord]:
        return [r for r in self._payroll_records.values() if r.employee_id == employee_id]

    # ---- IAttendanceStore ----

    def find_attendance(self, employee_id: str, day: dt.date) -> list[AttendanceRecord]:
        return [
            r for r in self._attendance.values()
            if r.employee_id == employee_id and r.date == day
        ]

    def put_attendance(self, record: AttendanceRecord) -> None:
        self._attendance[record.id] = record

    def remove_attendance(self, record: AttendanceRecord) -> None:
        self._attendance.pop(record.id, None)

    # ---- IEmployeeStore ----

    def get_employee(self, employee_id: str) -> Employee | None:
        return self._employees.get(employee_id)

    def save_employee(self, employee: Employee) -> None:
        self._employees[employee.id] = employee


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def ping(self) -> bool:
        return True
