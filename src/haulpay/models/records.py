"""Raw operational records the payroll engine reads.

These are owned by the storage collaborator and arrive as documents; the
engine never writes them.
"""

from __future__ import annotations

import datetime as dt
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BeforeValidator

from haulpay.models.base import ZERO, CollaboratorModel, FlagField, MoneyField, QuantityField


class AttendanceStatus(StrEnum):
    PRESENT = "Present"
    HALF_DAY = "Half-Day"
    ABSENT = "Absent"
    REST_DAY = "Rest Day"

    @property
    def is_worked(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.HALF_DAY)


class TripStatus(StrEnum):
    DISPATCHED = "Dispatched"
    RETURNED = "Returned"
    CANCELLED = "Cancelled"
    PAID = "Paid"


class OvertimeType(StrEnum):
    REGULAR = "Regular"
    REST_DAY_SPECIAL = "RestDay/Special"
    REGULAR_HOLIDAY = "RegularHoliday"


class HolidayType(StrEnum):
    REGULAR = "Regular"
    SPECIAL_NON_WORKING = "Special Non-Working"


def _overtime_type(value: Any) -> Any:
    # blank or unrecognised types are kept as raw text and valued at 0
    if value is None:
        return ""
    try:
        return OvertimeType(value)
    except ValueError:
        return str(value)


OvertimeTypeField = Annotated[OvertimeType | str, BeforeValidator(_overtime_type)]


def attendance_id(day: dt.date, employee_id: str) -> str:
    """Canonical attendance document id for (date, employee)."""
    return f"{day.isoformat()}_{employee_id}"


def pet_service_id(year: int, month: int, employee_id: str) -> str:
    return f"{year:04d}-{month:02d}_{employee_id}"


class AttendanceRecord(CollaboratorModel):
    """Daily attendance mark with the pay snapshot taken when it was marked."""

    id: str
    date: dt.date
    employee_id: str
    status: AttendanceStatus
    computed_pay: MoneyField = ZERO


class Trip(CollaboratorModel):
    """A dispatched job and the crew paid for it."""

    id: str
    date: dt.date
    status: TripStatus = TripStatus.DISPATCHED
    trip_code: str = ""
    client: str = ""
    plate_number: str = ""
    destination: str = ""
    driver_id: str = ""
    helper_id: str = ""
    driver_rate: MoneyField = ZERO
    helper_rate: MoneyField = ZERO


class TripExpense(CollaboratorModel):
    """Expense sheet for one trip; only the crew cash advances matter to payroll."""

    id: str
    trip_id: str
    ca_driver: MoneyField = ZERO
    ca_helper: MoneyField = ZERO
    mano_charges_client: MoneyField = ZERO
    other_exp_charges_client: MoneyField = ZERO
    remarks: str = ""


class OvertimeRecord(CollaboratorModel):
    id: str
    date: dt.date
    employee_id: str
    hours: QuantityField = ZERO
    type: OvertimeTypeField = OvertimeType.REGULAR


class UndertimeRecord(CollaboratorModel):
    id: str
    date: dt.date
    employee_id: str
    minutes: QuantityField = ZERO


class Holiday(CollaboratorModel):
    id: str = ""
    date: dt.date
    type: HolidayType
    description: str = ""


class AdminAllowance(CollaboratorModel):
    """Transportation and meal allowance for an admin staffer on one day."""

    id: str
    date: dt.date
    employee_id: str
    transportation: MoneyField = ZERO
    meal: MoneyField = ZERO


class PetServiceRecord(CollaboratorModel):
    """Monthly pet-service qualification flag."""

    id: str = ""
    year: int
    month: int
    employee_id: str
    qualified: FlagField = False
